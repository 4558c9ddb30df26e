"""Runtime configuration: upstream endpoint, storage path and listing rules."""

from .settings import (
    DEFAULT_API_URL,
    DEFAULT_SORT_FIELD,
    SORTABLE_FIELDS,
    Settings,
    load_settings,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_SORT_FIELD",
    "SORTABLE_FIELDS",
    "Settings",
    "load_settings",
]
