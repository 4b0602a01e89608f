"""Shared utilities used across the customer simulation."""

import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp(value: int, low: int, high: int) -> int:
    """Bound ``value`` to the closed range [low, high].

    Examples:
        >>> clamp(120, 0, 100)
        100
        >>> clamp(-5, 0, 100)
        0
    """
    return max(low, min(high, value))


def coerce_optional_int(value: Any) -> Optional[int]:
    """Best-effort integer conversion; None when nothing numeric is found.

    Strings yield their leading signed integer, floats truncate, and
    booleans are not treated as numbers.

    Examples:
        >>> coerce_optional_int("-20")
        -20
        >>> coerce_optional_int("+10 points")
        10
        >>> coerce_optional_int("lots") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def coerce_int(value: Any, default: int = 0) -> int:
    """Like :func:`coerce_optional_int` but falls back to ``default``."""
    result = coerce_optional_int(value)
    return default if result is None else result
