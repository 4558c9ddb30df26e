"""Canonical player, position and statistics models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


COUNT_FIELDS: tuple[str, ...] = (
    "games",
    "at_bat",
    "runs",
    "hits",
    "doubles",
    "triples",
    "home_runs",
    "rbi",
    "walks",
    "strikeouts",
    "stolen_bases",
    "caught_stealing",
)

RATE_FIELDS: tuple[str, ...] = (
    "batting_average",
    "on_base_percentage",
    "slugging_percentage",
    "on_base_plus_slugging",
)

STAT_FIELDS: tuple[str, ...] = COUNT_FIELDS + RATE_FIELDS

# Natural upper bound of each rate stat; all of them start at 0.
RATE_BOUNDS: dict[str, float] = {
    "batting_average": 1.0,
    "on_base_percentage": 1.0,
    "slugging_percentage": 2.0,
    "on_base_plus_slugging": 3.0,
}


class Position(BaseModel):
    id: int
    abbreviation: str
    name: str

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class StatLine(BaseModel):
    """Career batting line: twelve counting stats and four rate stats."""

    games: int = Field(default=0, ge=0)
    at_bat: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    stolen_bases: int = Field(default=0, ge=0)
    caught_stealing: int = Field(default=0, ge=0)
    batting_average: Optional[float] = None
    on_base_percentage: Optional[float] = None
    slugging_percentage: Optional[float] = None
    on_base_plus_slugging: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    def stat_values(self) -> dict[str, int | float | None]:
        return {field: getattr(self, field) for field in STAT_FIELDS}


class PlayerStatistic(StatLine):
    id: int
    player_id: int
    position_id: int
    position: Optional[Position] = None


class PlayerSummary(BaseModel):
    """Flattened view of a player with its statistics row, if any."""

    id: int
    name: str
    description: Optional[str] = None
    position: Optional[str] = None
    position_name: Optional[str] = None
    games: Optional[int] = None
    at_bat: Optional[int] = None
    runs: Optional[int] = None
    hits: Optional[int] = None
    doubles: Optional[int] = None
    triples: Optional[int] = None
    home_runs: Optional[int] = None
    rbi: Optional[int] = None
    walks: Optional[int] = None
    strikeouts: Optional[int] = None
    stolen_bases: Optional[int] = None
    caught_stealing: Optional[int] = None
    batting_average: Optional[float] = None
    on_base_percentage: Optional[float] = None
    slugging_percentage: Optional[float] = None
    on_base_plus_slugging: Optional[float] = None
    hits_per_game: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_statistics(self) -> bool:
        return self.games is not None


class PlayerUpdate(BaseModel):
    """Validated edit of a player's name and full stat line."""

    name: str = Field(..., min_length=1, max_length=255)
    games: int = Field(..., ge=0)
    at_bat: int = Field(..., ge=0)
    runs: int = Field(..., ge=0)
    hits: int = Field(..., ge=0)
    doubles: int = Field(..., ge=0)
    triples: int = Field(..., ge=0)
    home_runs: int = Field(..., ge=0)
    rbi: int = Field(..., ge=0)
    walks: int = Field(..., ge=0)
    strikeouts: int = Field(..., ge=0)
    stolen_bases: int = Field(..., ge=0)
    caught_stealing: int = Field(..., ge=0)
    batting_average: Optional[float] = Field(default=None, ge=0.0, le=RATE_BOUNDS["batting_average"])
    on_base_percentage: Optional[float] = Field(default=None, ge=0.0, le=RATE_BOUNDS["on_base_percentage"])
    slugging_percentage: Optional[float] = Field(default=None, ge=0.0, le=RATE_BOUNDS["slugging_percentage"])
    on_base_plus_slugging: Optional[float] = Field(
        default=None, ge=0.0, le=RATE_BOUNDS["on_base_plus_slugging"]
    )

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def stat_line(self) -> StatLine:
        return StatLine(**{field: getattr(self, field) for field in STAT_FIELDS})
