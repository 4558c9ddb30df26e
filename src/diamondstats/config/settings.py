"""Environment-driven settings for the importer, the store and the API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


logger = logging.getLogger(__name__)

_API_URL_ENV = "DIAMONDSTATS_API_URL"
_API_TIMEOUT_ENV = "DIAMONDSTATS_API_TIMEOUT"
_DB_PATH_ENV = "DIAMONDSTATS_DB_PATH"
_DEFAULT_SORT_ENV = "DIAMONDSTATS_DEFAULT_SORT"

DEFAULT_API_URL = "https://api.hirefraction.com/api/test/baseball"
DEFAULT_API_TIMEOUT = 30.0
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "diamondstats.sqlite"

# The only sort keys the listing accepts. ``hits_per_game`` is derived, the rest are columns.
SORTABLE_FIELDS: Tuple[str, ...] = (
    "name",
    "games",
    "runs",
    "hits",
    "home_runs",
    "rbi",
    "batting_average",
    "hits_per_game",
)
DEFAULT_SORT_FIELD = "hits"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    db_path: Path | str = DEFAULT_DB_PATH
    default_sort: str = DEFAULT_SORT_FIELD


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_sort_field(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    if value not in SORTABLE_FIELDS:
        logger.warning("Unsupported sort field for %s: %s; using default %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Build settings from ``DIAMONDSTATS_*`` environment variables."""

    db_path: Path | str
    env_db = os.getenv(_DB_PATH_ENV)
    if env_db:
        db_path = env_db if env_db.startswith("file:") else Path(env_db)
    else:
        db_path = DEFAULT_DB_PATH
    return Settings(
        api_url=os.getenv(_API_URL_ENV) or DEFAULT_API_URL,
        api_timeout=_env_float(_API_TIMEOUT_ENV, DEFAULT_API_TIMEOUT, clamp_min=1.0),
        db_path=db_path,
        default_sort=_env_sort_field(_DEFAULT_SORT_ENV, DEFAULT_SORT_FIELD),
    )
