"""Validate listing sort parameters and run the joined, ordered read."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from diamondstats.config import DEFAULT_SORT_FIELD, SORTABLE_FIELDS
from diamondstats.models import PlayerSummary
from diamondstats.persistence import StatsStore


# players without statistics order as 0 hits per game, like games == 0
_HITS_PER_GAME_SQL = "CASE WHEN s.games > 0 THEN CAST(s.hits AS REAL) / s.games ELSE 0.0 END"

_NON_STAT_EXPRESSIONS = {
    "name": "p.name",
    "hits_per_game": _HITS_PER_GAME_SQL,
}

SORT_EXPRESSIONS: dict[str, str] = {
    field: _NON_STAT_EXPRESSIONS.get(field, f"s.{field}") for field in SORTABLE_FIELDS
}


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: Literal["asc", "desc"]

    def order_by(self) -> str:
        return f"{SORT_EXPRESSIONS[self.field]} {self.direction.upper()}, p.id ASC"


def resolve_sort(
    sort: Optional[str],
    direction: Optional[str],
    *,
    default: str = DEFAULT_SORT_FIELD,
) -> SortSpec:
    """Clamp user input to the allow-list; bad values fall back silently."""

    field = sort if sort in SORT_EXPRESSIONS else default
    if field not in SORT_EXPRESSIONS:
        field = DEFAULT_SORT_FIELD
    resolved_direction: Literal["asc", "desc"] = (
        "asc" if (direction or "").lower() == "asc" else "desc"
    )
    return SortSpec(field=field, direction=resolved_direction)


def list_players(
    store: StatsStore,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    *,
    default: str = DEFAULT_SORT_FIELD,
) -> tuple[SortSpec, List[PlayerSummary]]:
    spec = resolve_sort(sort, direction, default=default)
    with store.session() as repo:
        players = repo.fetch_summaries(spec.order_by())
    return spec, players
