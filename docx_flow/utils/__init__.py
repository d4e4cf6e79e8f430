"""Utility helpers for docx-flow."""

from .cache import MetadataCache
from .logger import configure_logging, get_logger, set_log_level
from .units import (
    UnitsConverter,
    emu_to_px,
    half_points_to_pt,
    half_points_to_px,
    inches_to_px,
    pt_to_px,
    px_to_pt,
    px_to_twips,
    twips_to_px,
)

__all__ = [
    "MetadataCache",
    "UnitsConverter",
    "configure_logging",
    "emu_to_px",
    "get_logger",
    "half_points_to_pt",
    "half_points_to_px",
    "inches_to_px",
    "pt_to_px",
    "px_to_pt",
    "px_to_twips",
    "set_log_level",
    "twips_to_px",
]
