"""Fetch career batting lines from the remote API and upsert them into the store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

import httpx

from diamondstats.config import Settings
from diamondstats.errors import (
    EmptyPayloadError,
    ImportTransactionError,
    UpstreamFetchError,
)
from diamondstats.ingest.coercion import coerce_count, coerce_rate
from diamondstats.models import COUNT_FIELDS, RATE_FIELDS, StatLine
from diamondstats.persistence import StatsRepository, StatsStore


logger = logging.getLogger(__name__)

NAME_FIELD = "Player name"
POSITION_FIELD = "position"
DEFAULT_POSITION = "DH"

# Upstream labels are kept exactly as the API sends them, mislabels included:
# triples arrive under "third baseman", and several labels are singular.
SOURCE_FIELDS: dict[str, str] = {
    "games": "Games",
    "at_bat": "At-bat",
    "runs": "Runs",
    "hits": "Hits",
    "doubles": "Double (2B)",
    "triples": "third baseman",
    "home_runs": "home run",
    "rbi": "run batted in",
    "walks": "a walk",
    "strikeouts": "Strikeouts",
    "stolen_bases": "stolen base",
    "caught_stealing": "Caught stealing",
    "batting_average": "AVG",
    "on_base_percentage": "On-base Percentage",
    "slugging_percentage": "Slugging Percentage",
    "on_base_plus_slugging": "On-base Plus Slugging",
}

POSITION_NAMES: dict[str, str] = {
    "LF": "Left Field",
    "RF": "Right Field",
    "CF": "Center Field",
    "1B": "First Base",
    "2B": "Second Base",
    "3B": "Third Base",
    "SS": "Shortstop",
    "C": "Catcher",
    "P": "Pitcher",
    "DH": "Designated Hitter",
}

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class ParsedRecord:
    name: str
    position: str
    stats: StatLine


@dataclass(frozen=True)
class ImportResult:
    imported_count: int
    player_count: int
    position_count: int


def position_display_name(abbreviation: str) -> str:
    return POSITION_NAMES.get(abbreviation, abbreviation)


def parse_record(record: Mapping[str, Any]) -> ParsedRecord:
    """Map one raw API record onto internal field names."""

    if not isinstance(record, Mapping):
        raise TypeError(f"Player record must be an object, got {type(record).__name__}")

    # the name is the upsert key and is stored exactly as sent
    raw_name = record.get(NAME_FIELD)
    name = str(raw_name) if raw_name is not None else ""
    if not name.strip():
        raise ValueError(f"Player record is missing {NAME_FIELD!r}")

    raw_position = record.get(POSITION_FIELD)
    position = str(raw_position) if raw_position is not None else DEFAULT_POSITION

    values: dict[str, int | float | None] = {}
    for field in COUNT_FIELDS:
        values[field] = coerce_count(record.get(SOURCE_FIELDS[field]))
    for field in RATE_FIELDS:
        values[field] = coerce_rate(record.get(SOURCE_FIELDS[field]))
    return ParsedRecord(name=name, position=position, stats=StatLine(**values))


def fetch_players(
    url: str,
    *,
    timeout: float,
    client: Optional[httpx.Client] = None,
) -> list[dict[str, Any]]:
    """GET the player list; raise instead of returning anything unusable."""

    logger.info("Fetching baseball data from %s", url)
    try:
        if client is None:
            response = httpx.get(url, timeout=timeout)
        else:
            response = client.get(url, timeout=timeout)
    except httpx.HTTPError as exc:
        raise UpstreamFetchError(f"Failed to fetch data from API: {exc}") from exc

    if not response.is_success:
        raise UpstreamFetchError(
            f"Failed to fetch data from API. Status: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamFetchError(f"API returned invalid JSON: {exc}") from exc

    if not payload:
        raise EmptyPayloadError("No player data received from API.")
    if not isinstance(payload, list):
        raise UpstreamFetchError(
            f"API returned {type(payload).__name__}, expected a list of players"
        )
    logger.info("Received %s players from API", len(payload))
    return payload


def _clear(repo: StatsRepository) -> None:
    # children first so no foreign key is left dangling
    statistics = repo.delete_all_statistics()
    players = repo.delete_all_players()
    positions = repo.delete_all_positions()
    logger.warning(
        "Cleared %s statistics rows, %s players and %s positions",
        statistics,
        players,
        positions,
    )


def import_players(
    store: StatsStore,
    records: Sequence[Mapping[str, Any]],
    *,
    fresh: bool = False,
    progress: Optional[ProgressCallback] = None,
) -> ImportResult:
    """Upsert every record inside one transaction.

    Any failure rolls back the whole batch, including the ``fresh`` clear.
    """

    if not records:
        raise EmptyPayloadError("No player records to import.")

    total = len(records)
    try:
        with store.transaction() as repo:
            if fresh:
                _clear(repo)
            for done, record in enumerate(records, start=1):
                parsed = parse_record(record)
                position = repo.upsert_position(
                    parsed.position,
                    position_display_name(parsed.position),
                )
                player = repo.upsert_player(parsed.name)
                repo.upsert_statistic(player.id, position.id, parsed.stats)
                logger.debug("Imported %s (%s/%s)", parsed.name, done, total)
                if progress is not None:
                    progress(done, total)
            counts = repo.counts()
    except Exception as exc:
        logger.error("Import rolled back after error: %s", exc)
        raise ImportTransactionError(f"Error importing data: {exc}") from exc

    logger.info("Successfully imported %s players", total)
    return ImportResult(
        imported_count=total,
        player_count=counts["players"],
        position_count=counts["positions"],
    )


def run_import(
    store: StatsStore,
    settings: Settings,
    *,
    fresh: bool = False,
    client: Optional[httpx.Client] = None,
    progress: Optional[ProgressCallback] = None,
) -> ImportResult:
    """Fetch from the configured endpoint and import the batch."""

    records = fetch_players(settings.api_url, timeout=settings.api_timeout, client=client)
    return import_players(store, records, fresh=fresh, progress=progress)
