"""Value coercion helpers shared by the resolvers."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def pick_number(value: Any) -> Optional[float]:
    """Return a finite number from a number or numeric string, else ``None``."""
    if is_finite_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() and "." not in text else parsed
    return None


def coerce_number(value: Any) -> Optional[float]:
    return pick_number(value)


def coerce_positive_number(value: Any, fallback: float) -> float:
    """Return ``value`` as a positive number, or ``fallback`` when it is not one."""
    number = pick_number(value)
    if number is None or number <= 0:
        return fallback
    return number


def to_boolean(value: Any) -> Optional[bool]:
    """Coerce booleans, 0/1 and 'true'/'false'/'1'/'0' strings."""
    if isinstance(value, bool):
        return value
    if is_finite_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
    return None


def coerce_boolean(value: Any) -> Optional[bool]:
    """Like :func:`to_boolean` but also accepts yes/no and on/off."""
    if isinstance(value, bool):
        return value
    if is_finite_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def to_ooxml_boolean(value: Any) -> Optional[bool]:
    """
    Interpret an OOXML on/off value.

    ``None`` means unset. Recognized true/false spellings are matched
    case-insensitively; any other string (including ``""``) is ``False``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if is_finite_number(value):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        return lowered in ("true", "1", "on")
    return None


def to_box_spacing(value: Any) -> Optional[Dict[str, float]]:
    """Extract numeric top/right/bottom/left entries from a spacing dict."""
    if not isinstance(value, dict):
        return None
    result: Dict[str, float] = {}
    for side in ("top", "right", "bottom", "left"):
        number = pick_number(value.get(side))
        if number is not None:
            result[side] = number
    return result or None


def normalize_color(value: Any) -> Optional[str]:
    """Return a ``#``-prefixed hex color, or ``None`` for empty/auto values."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.lower() == "auto":
        return None
    return text if text.startswith("#") else f"#{text}"
