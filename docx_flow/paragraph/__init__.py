"""Paragraph attribute resolution."""

from .alignment import AlignmentResult, resolve_alignment
from .attributes import (
    compute_paragraph_attrs,
    convert_list_paragraph_attrs,
    has_page_break_before,
    merge_paragraph_attrs,
    resolve_numbering_properties,
    resolve_paragraph_boolean_attr,
)
from .frame import build_drop_cap_descriptor, extract_frame
from .indent import resolve_paragraph_indent
from .list_rendering import normalize_list_rendering_attrs, synthesize_numbering_from_list_rendering
from .runs import marks_to_run_props, paragraph_to_runs
from .spacing import resolve_contextual_spacing, resolve_paragraph_spacing
from .tabs import normalize_tab_entries, resolve_tab_stops
from .word_layout import compute_word_layout

__all__ = [
    "AlignmentResult",
    "build_drop_cap_descriptor",
    "compute_paragraph_attrs",
    "compute_word_layout",
    "convert_list_paragraph_attrs",
    "extract_frame",
    "has_page_break_before",
    "merge_paragraph_attrs",
    "normalize_list_rendering_attrs",
    "marks_to_run_props",
    "normalize_tab_entries",
    "paragraph_to_runs",
    "resolve_alignment",
    "resolve_contextual_spacing",
    "resolve_numbering_properties",
    "resolve_paragraph_boolean_attr",
    "resolve_paragraph_indent",
    "resolve_paragraph_spacing",
    "resolve_tab_stops",
    "synthesize_numbering_from_list_rendering",
]
