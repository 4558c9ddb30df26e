"""Input adapters that fetch and normalize raw player statistics."""

from .baseball import (
    POSITION_NAMES,
    SOURCE_FIELDS,
    ImportResult,
    ParsedRecord,
    fetch_players,
    import_players,
    parse_record,
    position_display_name,
    run_import,
)
from .coercion import coerce_count, coerce_rate

__all__ = [
    "POSITION_NAMES",
    "SOURCE_FIELDS",
    "ImportResult",
    "ParsedRecord",
    "coerce_count",
    "coerce_rate",
    "fetch_players",
    "import_players",
    "parse_record",
    "position_display_name",
    "run_import",
]
