"""
Units converter for flow blocks.

Converts twips, EMU, half-points and points into CSS pixels at 96 DPI.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from ..exceptions import GeometryError

logger = logging.getLogger(__name__)

PX_PER_INCH = 96
TWIPS_PER_INCH = 1440
EMU_PER_INCH = 914400
POINTS_PER_INCH = 72
EMU_PER_PIXEL = EMU_PER_INCH / PX_PER_INCH


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def twips_to_px(value: float) -> float:
    return value / TWIPS_PER_INCH * PX_PER_INCH


def px_to_twips(value: float) -> float:
    return value / PX_PER_INCH * TWIPS_PER_INCH


def emu_to_px(value: float) -> float:
    return value / EMU_PER_INCH * PX_PER_INCH


def half_points_to_pt(value: float) -> float:
    return value / 2


def pt_to_px(value: float) -> float:
    return value * PX_PER_INCH / POINTS_PER_INCH


def px_to_pt(value: float) -> float:
    return value * POINTS_PER_INCH / PX_PER_INCH


def half_points_to_px(value: float) -> float:
    return pt_to_px(half_points_to_pt(value))


def inches_to_px(value: float) -> float:
    return value * PX_PER_INCH


def safe_twips_to_px(value: Any) -> Optional[float]:
    """Convert twips to pixels, returning ``None`` for non-numeric input."""
    return twips_to_px(value) if _is_number(value) else None


def safe_emu_to_px(value: Any) -> Optional[float]:
    """Convert EMU to pixels, returning ``None`` for non-numeric input."""
    return emu_to_px(value) if _is_number(value) else None


def safe_half_points_to_px(value: Any) -> Optional[float]:
    """Convert half-points to pixels, returning ``None`` for non-numeric input."""
    return half_points_to_px(value) if _is_number(value) else None


class UnitsConverter:
    """
    Converts between the units used in office documents and pixels.

    Module-level functions assume 96 DPI; this class supports other
    resolutions for consumers rendering at a different scale.
    """

    def __init__(self, dpi: int = PX_PER_INCH):
        """
        Initialize units converter.

        Args:
            dpi: Dots per inch for pixel conversions
        """
        if not _is_number(dpi) or dpi <= 0:
            raise GeometryError("DPI must be a positive number", {"dpi": dpi})
        self.dpi = dpi
        logger.debug(f"Units converter initialized with DPI: {dpi}")

    def _require_number(self, value: Any, label: str) -> float:
        if not _is_number(value):
            raise GeometryError(f"{label} value must be a number", {"value": value})
        return value

    def twips_to_pixels(self, twip_value: float) -> float:
        """
        Convert twips to pixels.

        Args:
            twip_value: TWIP value to convert

        Returns:
            Pixels value
        """
        self._require_number(twip_value, "TWIP")
        pixels = twip_value / TWIPS_PER_INCH * self.dpi
        logger.debug(f"TWIP to pixels: {twip_value} -> {pixels} (DPI: {self.dpi})")
        return pixels

    def pixels_to_twips(self, pixel_value: float) -> float:
        self._require_number(pixel_value, "Pixel")
        return pixel_value / self.dpi * TWIPS_PER_INCH

    def emu_to_pixels(self, emu_value: float) -> float:
        """
        Convert EMU to pixels.

        Args:
            emu_value: EMU value to convert

        Returns:
            Pixels value
        """
        self._require_number(emu_value, "EMU")
        pixels = emu_value / EMU_PER_INCH * self.dpi
        logger.debug(f"EMU to pixels: {emu_value} -> {pixels} (DPI: {self.dpi})")
        return pixels

    def points_to_pixels(self, point_value: float) -> float:
        self._require_number(point_value, "Point")
        return point_value * self.dpi / POINTS_PER_INCH

    def half_points_to_pixels(self, half_point_value: float) -> float:
        self._require_number(half_point_value, "Half-point")
        return self.points_to_pixels(half_point_value / 2)
