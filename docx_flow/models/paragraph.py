"""
Resolved paragraph attributes.

Lengths are CSS pixels except tab stop positions, which stay in twips for
round-tripping to the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .base import WireModel

Alignment = Literal["left", "center", "right", "justify"]
MarkerJustification = Literal["left", "center", "right"]
MarkerSuffix = Literal["tab", "space", "nothing"]


@dataclass(frozen=True, slots=True)
class ParagraphIndent(WireModel):
    left: Optional[float] = None
    right: Optional[float] = None
    first_line: Optional[float] = None
    hanging: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ParagraphSpacing(WireModel):
    before: Optional[float] = None
    after: Optional[float] = None
    line: Optional[float] = None
    line_rule: Optional[str] = None
    before_autospacing: Optional[bool] = None
    after_autospacing: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class TabStop(WireModel):
    """Tab stop; ``pos`` is in twips."""

    val: str
    pos: float
    leader: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NumberingProperties(WireModel):
    num_id: Any
    ilvl: int = 0
    path: Optional[Tuple[int, ...]] = None
    counter_value: Optional[int] = None
    marker_text: Optional[str] = None
    format: Optional[str] = None
    lvl_text: Optional[str] = None
    start: Optional[int] = None
    lvl_jc: Optional[str] = None
    suffix: Optional[str] = None
    resolved_level_indent: Optional[Dict[str, float]] = None
    resolved_marker_rpr: Optional[Dict[str, Any]] = None


@dataclass(frozen=True, slots=True)
class MarkerRun(WireModel):
    font_family: str
    font_size: float
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    color: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ListMarker(WireModel):
    marker_text: str
    justification: MarkerJustification = "left"
    suffix: MarkerSuffix = "tab"
    text_start_x: float = 0
    run: Optional[MarkerRun] = None


@dataclass(frozen=True, slots=True)
class WordLayout(WireModel):
    """List layout in pixels derived from the paragraph and level indents."""

    indent_left_px: float = 0
    first_line_px: Optional[float] = None
    hanging_px: Optional[float] = None
    first_line_indent_mode: bool = False
    text_start_px: float = 0
    default_tab_interval_px: Optional[float] = None
    marker: Optional[ListMarker] = None


@dataclass(frozen=True, slots=True)
class FrameProperties(WireModel):
    wrap: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    x_align: Optional[str] = None
    y_align: Optional[str] = None
    h_anchor: Optional[str] = None
    v_anchor: Optional[str] = None
    drop_cap: Optional[str] = None
    lines: Optional[int] = None


@dataclass(frozen=True, slots=True)
class DropCapRun(WireModel):
    text: str
    font_family: str
    font_size: float
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    color: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DropCapDescriptor(WireModel):
    mode: str
    lines: int
    run: DropCapRun
    wrap: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ResolvedParagraphAttributes(WireModel):
    """Authoritative formatting for one paragraph."""

    style_id: Optional[str] = None
    alignment: Optional[Alignment] = None
    indent: Optional[ParagraphIndent] = None
    spacing: Optional[ParagraphSpacing] = None
    contextual_spacing: Optional[bool] = None
    borders: Optional[Dict[str, Any]] = None
    shading: Optional[Dict[str, Any]] = None
    tabs: Optional[Tuple[TabStop, ...]] = None
    numbering_properties: Optional[NumberingProperties] = None
    word_layout: Optional[WordLayout] = None
    direction: Optional[str] = None
    rtl: Optional[bool] = None
    float_alignment: Optional[str] = None
    frame: Optional[FrameProperties] = None
    drop_cap: Optional[str] = None
    drop_cap_descriptor: Optional[DropCapDescriptor] = None
    decimal_separator: Optional[str] = None
    default_tab_interval_twips: Optional[int] = None
    keep_lines: Optional[bool] = None
    keep_next: Optional[bool] = None
    page_break_before: Optional[bool] = None
    sdt: Optional[Dict[str, Any]] = None
