"""Lenient conversion of upstream stat values into integers and rates."""

from __future__ import annotations

import math
import re
from typing import Any


_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)


def _as_number(raw: Any) -> float | int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else None
    if isinstance(raw, str) and _NUMERIC_RE.match(raw):
        text = raw.strip()
        if text.lstrip("+-").isdigit():
            return int(text)
        value = float(text)
        return value if math.isfinite(value) else None
    return None


def coerce_count(raw: Any) -> int:
    """Truncate a numeric value to ``int``; anything non-numeric becomes 0."""

    value = _as_number(raw)
    if value is None:
        return 0
    return int(value)


def coerce_rate(raw: Any) -> float | None:
    """Parse a numeric value as ``float``; anything non-numeric becomes ``None``.

    A rate of ``0.0`` is a real value, so missing data must not collapse into it.
    """

    value = _as_number(raw)
    if value is None:
        return None
    return float(value)
