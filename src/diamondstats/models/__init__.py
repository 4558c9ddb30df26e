"""Plain data structures shared by ingestion, storage and the API."""

from .player import (
    COUNT_FIELDS,
    RATE_BOUNDS,
    RATE_FIELDS,
    STAT_FIELDS,
    Player,
    PlayerStatistic,
    PlayerSummary,
    PlayerUpdate,
    Position,
    StatLine,
)

__all__ = [
    "COUNT_FIELDS",
    "RATE_BOUNDS",
    "RATE_FIELDS",
    "STAT_FIELDS",
    "Player",
    "PlayerStatistic",
    "PlayerSummary",
    "PlayerUpdate",
    "Position",
    "StatLine",
]
