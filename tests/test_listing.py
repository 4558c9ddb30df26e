from pathlib import Path

import pytest

from diamondstats.config import SORTABLE_FIELDS
from diamondstats.ingest import import_players
from diamondstats.listing import SORT_EXPRESSIONS, list_players, resolve_sort
from diamondstats.persistence import StatsStore


@pytest.fixture
def store(tmp_path: Path) -> StatsStore:
    store = StatsStore(tmp_path / "listing.sqlite")
    import_players(
        store,
        [
            {"Player name": "Avery Contact", "Games": "100", "Hits": "150", "home run": "10", "AVG": ".310"},
            {"Player name": "Blake Bench", "Games": "0", "Hits": "0", "home run": "0"},
            {"Player name": "Casey Power", "Games": "50", "Hits": "100", "home run": "40", "AVG": ".250"},
        ],
    )
    with store.session() as repo:
        repo.upsert_player("Drew Unknown")
    return store


def _names(players) -> list[str]:
    return [player.name for player in players]


def test_sort_expressions_follow_configured_fields():
    assert tuple(SORT_EXPRESSIONS) == SORTABLE_FIELDS
    assert SORT_EXPRESSIONS["name"] == "p.name"
    assert SORT_EXPRESSIONS["rbi"] == "s.rbi"
    assert "s.games > 0" in SORT_EXPRESSIONS["hits_per_game"]


def test_resolve_sort_falls_back_silently():
    spec = resolve_sort("salary; DROP TABLE players", "ASC")
    assert spec.field == "hits"
    assert spec.direction == "asc"


@pytest.mark.parametrize("direction, expected", [("asc", "asc"), ("AsC", "asc"), ("desc", "desc"), ("up", "desc"), (None, "desc")])
def test_resolve_sort_normalizes_direction(direction, expected):
    assert resolve_sort("runs", direction).direction == expected


def test_resolve_sort_honors_configured_default():
    assert resolve_sort(None, None, default="home_runs").field == "home_runs"
    assert resolve_sort("bogus", None, default="not-a-field").field == "hits"


def test_default_listing_sorts_by_hits_descending(store: StatsStore):
    spec, players = list_players(store)
    assert (spec.field, spec.direction) == ("hits", "desc")
    assert _names(players) == ["Avery Contact", "Casey Power", "Blake Bench", "Drew Unknown"]


def test_unknown_sort_field_uses_default(store: StatsStore):
    spec, players = list_players(store, "salary", "asc")
    assert spec.field == "hits"
    assert _names(players)[:3] == ["Drew Unknown", "Blake Bench", "Casey Power"]


def test_hits_per_game_treats_zero_games_as_zero(store: StatsStore):
    _, players = list_players(store, "hits_per_game", "desc")

    assert _names(players) == ["Casey Power", "Avery Contact", "Blake Bench", "Drew Unknown"]
    by_name = {player.name: player for player in players}
    assert by_name["Casey Power"].hits_per_game == pytest.approx(2.0)
    assert by_name["Blake Bench"].hits_per_game == 0.0
    assert by_name["Drew Unknown"].hits_per_game is None


def test_hits_per_game_ascending(store: StatsStore):
    _, players = list_players(store, "hits_per_game", "asc")
    assert _names(players) == ["Blake Bench", "Drew Unknown", "Avery Contact", "Casey Power"]


def test_listing_sorts_by_name(store: StatsStore):
    _, players = list_players(store, "name", "asc")
    assert _names(players) == ["Avery Contact", "Blake Bench", "Casey Power", "Drew Unknown"]


def test_player_without_statistics_has_null_stats(store: StatsStore):
    _, players = list_players(store, "name", "desc")
    unknown = players[0]
    assert unknown.name == "Drew Unknown"
    assert not unknown.has_statistics
    assert unknown.position is None
    assert unknown.hits is None
    assert unknown.batting_average is None


def test_listing_carries_position_of_statistics(store: StatsStore):
    _, players = list_players(store, "name", "asc")
    assert players[0].position == "DH"
    assert players[0].position_name == "Designated Hitter"
    assert players[0].batting_average == pytest.approx(0.31)
