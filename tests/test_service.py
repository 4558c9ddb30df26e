from pathlib import Path

import pytest
from pydantic import ValidationError

from diamondstats.errors import PlayerNameConflictError, PlayerNotFoundError
from diamondstats.ingest import import_players
from diamondstats.models import COUNT_FIELDS, PlayerUpdate
from diamondstats.persistence import StatsStore
from diamondstats.service import get_player_detail, update_player


@pytest.fixture
def store(tmp_path: Path) -> StatsStore:
    store = StatsStore(tmp_path / "service.sqlite")
    import_players(
        store,
        [
            {"Player name": "Riley Original", "position": "CF", "Games": "900", "Hits": "850", "AVG": ".280"},
            {"Player name": "Jordan Other", "position": "C", "Games": "400"},
        ],
    )
    return store


def _player_id(store: StatsStore, name: str) -> int:
    with store.session() as repo:
        return repo.find_player(name).id


def _update(name: str = "Riley Renamed", **overrides) -> PlayerUpdate:
    payload = {"name": name, **{field: 5 for field in COUNT_FIELDS}}
    payload.update(overrides)
    return PlayerUpdate(**payload)


def test_get_player_detail(store: StatsStore):
    detail = get_player_detail(store, _player_id(store, "Riley Original"))
    assert detail.position_name == "Center Field"
    assert detail.hits == 850
    assert detail.hits_per_game == pytest.approx(850 / 900)


def test_get_player_detail_unknown(store: StatsStore):
    with pytest.raises(PlayerNotFoundError):
        get_player_detail(store, 12345)


def test_update_player_writes_name_and_every_stat(store: StatsStore):
    player_id = _player_id(store, "Riley Original")

    summary = update_player(store, player_id, _update(home_runs=44, batting_average=0.333))

    assert summary.name == "Riley Renamed"
    assert summary.home_runs == 44
    assert summary.games == 5
    assert summary.batting_average == pytest.approx(0.333)
    assert summary.on_base_percentage is None
    assert summary.position == "CF"


def test_update_player_can_clear_rate_stats(store: StatsStore):
    player_id = _player_id(store, "Riley Original")
    summary = update_player(store, player_id, _update(batting_average=None))
    assert summary.batting_average is None


def test_update_player_without_statistics_only_renames(store: StatsStore):
    with store.session() as repo:
        player_id = repo.upsert_player("Stat Less").id

    summary = update_player(store, player_id, _update("Still Stat Less"))

    assert summary.name == "Still Stat Less"
    assert summary.games is None
    with store.session() as repo:
        assert repo.counts()["player_statistics"] == 2


def test_update_player_rejects_name_of_another_player(store: StatsStore):
    player_id = _player_id(store, "Riley Original")

    with pytest.raises(PlayerNameConflictError):
        update_player(store, player_id, _update("Jordan Other"))

    assert get_player_detail(store, player_id).name == "Riley Original"
    assert get_player_detail(store, player_id).hits == 850


def test_update_player_keeping_own_name(store: StatsStore):
    player_id = _player_id(store, "Riley Original")
    assert update_player(store, player_id, _update("Riley Original")).name == "Riley Original"


def test_update_player_unknown(store: StatsStore):
    with pytest.raises(PlayerNotFoundError):
        update_player(store, 999, _update())


def test_negative_count_fails_before_any_write(store: StatsStore):
    player_id = _player_id(store, "Riley Original")

    with pytest.raises(ValidationError):
        update_player(store, player_id, _update(home_runs=-1))

    detail = get_player_detail(store, player_id)
    assert detail.name == "Riley Original"
    assert detail.home_runs == 0
