"""
Normalizers for raw property values.

Each normalizer turns the loosely typed values found in property bags
(strings, ``{"val": ...}`` wrappers, half-points, eighths of a point) into the
canonical values used by the flow blocks.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .utils.coerce import normalize_color, pick_number
from .utils.units import pt_to_px

logger = logging.getLogger(__name__)

BORDER_SIDES = ("top", "right", "bottom", "left", "between", "bar")
CELL_BORDER_SIDES = ("top", "right", "bottom", "left", "insideH", "insideV")


class AlignmentNormalizer:
    """Maps justification spellings onto left/center/right/justify."""

    VALID = ("left", "center", "right", "justify")
    SYNONYMS = {
        "both": "justify",
        "distribute": "justify",
        "start": "left",
        "end": "right",
    }

    @classmethod
    def normalize(cls, value: Any) -> Optional[str]:
        """Return the canonical alignment, or ``None`` for invalid input."""
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        if not lowered:
            return None
        lowered = cls.SYNONYMS.get(lowered, lowered)
        return lowered if lowered in cls.VALID else None


class BooleanNormalizer:
    """Normalizes run-level on/off toggles."""

    FALSE_VALUES = ("0", "false", "off", "none")
    TRUE_VALUES = ("1", "true", "on", "")

    @classmethod
    def normalize(cls, value: Any) -> Optional[bool]:
        if value is None:
            return None
        if isinstance(value, dict):
            if not value:
                return True
            for key in ("val", "w:val"):
                if key in value:
                    return cls.normalize(value[key])
            return True
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in cls.FALSE_VALUES:
                return False
            if lowered in cls.TRUE_VALUES:
                return True
        return None


class FontNormalizer:
    """Normalizes font family references."""

    FAMILY_KEYS = ("ascii", "hAnsi", "eastAsia", "cs", "w:ascii", "w:hAnsi")

    @classmethod
    def normalize_family(cls, value: Any) -> Optional[str]:
        if isinstance(value, str):
            text = value.strip()
            return text or None
        if isinstance(value, dict):
            for key in cls.FAMILY_KEYS:
                candidate = value.get(key)
                if isinstance(candidate, str) and candidate.strip():
                    return candidate.strip()
        return None


class UnderlineNormalizer:
    """Normalizes underline values to a style name."""

    @staticmethod
    def normalize(value: Any) -> Optional[str]:
        if value is None or value is False:
            return None
        if value is True:
            return "single"
        if isinstance(value, dict):
            for key in ("w:val", "type", "val"):
                if key in value:
                    return UnderlineNormalizer.normalize(value[key])
            return None
        if isinstance(value, str):
            text = value.strip()
            if not text or text.lower() == "none":
                return None
            return text
        return None


class ColorNormalizer:
    """Normalizes color wrappers to ``#RRGGBB``."""

    @staticmethod
    def normalize(value: Any) -> Optional[str]:
        if isinstance(value, dict):
            value = value.get("val", value.get("w:val"))
        return normalize_color(value)


class BorderNormalizer:
    """Converts border specs (size in eighths of a point, space in points) to pixels."""

    @staticmethod
    def normalize_side(spec: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(spec, dict):
            return None
        style = spec.get("val") or spec.get("style")
        if isinstance(style, str) and style.lower() in ("nil", "none"):
            return {"style": "none", "width": 0}
        result: Dict[str, Any] = {"style": style if isinstance(style, str) and style else "single"}
        size = pick_number(spec.get("size"))
        width = pick_number(spec.get("width"))
        if width is not None:
            result["width"] = width
        elif size is not None:
            result["width"] = pt_to_px(size / 8)
        color = ColorNormalizer.normalize(spec.get("color"))
        if color:
            result["color"] = color
        space = pick_number(spec.get("space"))
        if space is not None:
            result["space"] = pt_to_px(space)
        return result

    @classmethod
    def normalize(cls, borders: Any, sides=BORDER_SIDES) -> Optional[Dict[str, Dict[str, Any]]]:
        if not isinstance(borders, dict):
            return None
        result: Dict[str, Dict[str, Any]] = {}
        for side in sides:
            normalized = cls.normalize_side(borders.get(side))
            if normalized is not None:
                result[side] = normalized
        return result or None


class ShadingNormalizer:
    """Normalizes shading to ``{fill, color, val}``."""

    @staticmethod
    def normalize(shading: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(shading, dict):
            return None
        result: Dict[str, Any] = {}
        fill = normalize_color(shading.get("fill"))
        if fill:
            result["fill"] = fill
        color = normalize_color(shading.get("color"))
        if color:
            result["color"] = color
        val = shading.get("val")
        if isinstance(val, str) and val:
            result["val"] = val
        return result or None


def normalize_paragraph_borders(borders: Any) -> Optional[Dict[str, Dict[str, Any]]]:
    return BorderNormalizer.normalize(borders, BORDER_SIDES)


def normalize_paragraph_shading(shading: Any) -> Optional[Dict[str, Any]]:
    return ShadingNormalizer.normalize(shading)
