"""Section geometry and page boundary classification."""

from .breaks import (
    create_section_break_block,
    get_sect_pr_from_node,
    has_sect_pr,
    is_section_break_block,
    shallow_object_equals,
    should_require_page_boundary,
    signatures_equal,
)
from .extraction import extract_section_data, parse_column_count, parse_column_gap
from .ranges import SECTION_CONTAINER_TYPES, analyze_section_ranges, iter_section_paragraphs

__all__ = [
    "SECTION_CONTAINER_TYPES",
    "analyze_section_ranges",
    "create_section_break_block",
    "extract_section_data",
    "get_sect_pr_from_node",
    "has_sect_pr",
    "is_section_break_block",
    "iter_section_paragraphs",
    "parse_column_count",
    "parse_column_gap",
    "shallow_object_equals",
    "should_require_page_boundary",
    "signatures_equal",
]
