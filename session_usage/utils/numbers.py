"""Lenient numeric coercion for loosely typed JSON values."""

from __future__ import annotations

import math
from typing import Any, Optional


def coerce_int(raw: Any, allow_strings: bool = True) -> Optional[int]:
    """Return raw as an int, or None if it is not a number.

    Floats are truncated. Integer strings are accepted when allow_strings is
    set. Booleans are never numbers here.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw)
    if allow_strings and isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
