"""List numbering: counters, paths and level definitions."""

from .counters import MAX_LIST_LEVEL, ListCounterContext, ListCounterStore, advance_list_counter
from .definitions import (
    LevelDefinition,
    NumberingDefinitions,
    format_counter,
    format_marker_text,
    is_valid_numbering_id,
)
from .path import build_numbering_path

__all__ = [
    "MAX_LIST_LEVEL",
    "LevelDefinition",
    "ListCounterContext",
    "ListCounterStore",
    "NumberingDefinitions",
    "advance_list_counter",
    "build_numbering_path",
    "format_counter",
    "format_marker_text",
    "is_valid_numbering_id",
]
