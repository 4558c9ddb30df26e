"""Sorted player listings."""

from .query import SORT_EXPRESSIONS, SortSpec, list_players, resolve_sort

__all__ = [
    "SORT_EXPRESSIONS",
    "SortSpec",
    "list_players",
    "resolve_sort",
]
