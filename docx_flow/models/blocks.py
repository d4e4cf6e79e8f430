"""
Flow block variants.

Every block carries ``attrs``, an opaque copy of its source node attributes
kept for round-tripping, and optional ``pm_start``/``pm_end`` positions of
the source node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from .base import WireModel
from .paragraph import ResolvedParagraphAttributes

###############################################################################
# Runs
###############################################################################


@dataclass(slots=True)
class TextRun(WireModel):
    text: str
    font_family: str
    font_size: float
    kind: Literal["text"] = "text"
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    strike: Optional[bool] = None
    underline: Optional[str] = None
    color: Optional[str] = None
    highlight: Optional[str] = None
    letter_spacing: Optional[float] = None
    vert_align: Optional[str] = None
    link: Optional[Dict[str, Any]] = None
    comments: Optional[List[Dict[str, Any]]] = None
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


@dataclass(slots=True)
class TabRun(WireModel):
    font_family: str
    font_size: float
    kind: Literal["tab"] = "tab"
    text: str = "\t"
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


@dataclass(slots=True)
class LineBreakRun(WireModel):
    kind: Literal["lineBreak"] = "lineBreak"
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


Run = Union[TextRun, TabRun, LineBreakRun]

###############################################################################
# Paragraphs
###############################################################################


@dataclass(slots=True)
class ParagraphBlock(WireModel):
    id: str
    runs: List[Run]
    attrs: ResolvedParagraphAttributes
    kind: Literal["paragraph"] = "paragraph"
    source_attrs: Dict[str, Any] = field(default_factory=dict)
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs if isinstance(run, (TextRun, TabRun)))


###############################################################################
# Drawings
###############################################################################


@dataclass(frozen=True, slots=True)
class DrawingGeometry(WireModel):
    width: float = 1
    height: float = 1
    rotation: float = 0
    flip_h: bool = False
    flip_v: bool = False


@dataclass(frozen=True, slots=True)
class WrapConfig(WireModel):
    type: str
    wrap_text: Optional[str] = None
    dist_top: Optional[float] = None
    dist_bottom: Optional[float] = None
    dist_left: Optional[float] = None
    dist_right: Optional[float] = None
    polygon: Optional[Tuple[Tuple[float, float], ...]] = None
    behind_doc: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class AnchorConfig(WireModel):
    is_anchored: bool = False
    h_relative_from: Optional[str] = None
    v_relative_from: Optional[str] = None
    align_h: Optional[str] = None
    align_v: Optional[str] = None
    offset_h: Optional[float] = None
    offset_v: Optional[float] = None
    behind_doc: Optional[bool] = None


@dataclass(slots=True)
class DrawingBlock(WireModel):
    """Vector shape or shape group."""

    id: str
    drawing_kind: Literal["vectorShape", "shapeGroup"]
    geometry: DrawingGeometry
    kind: Literal["drawing"] = "drawing"
    anchor: Optional[AnchorConfig] = None
    wrap: Optional[WrapConfig] = None
    z_index: Optional[int] = None
    padding: Optional[Dict[str, float]] = None
    margin: Optional[Dict[str, float]] = None
    shape_kind: Optional[str] = None
    fill_color: Optional[Any] = None
    stroke_color: Optional[Any] = None
    stroke_width: Optional[float] = None
    text_content: Optional[Any] = None
    text_align: Optional[str] = None
    text_vertical_align: Optional[str] = None
    text_insets: Optional[Dict[str, float]] = None
    line_ends: Optional[Dict[str, Any]] = None
    effect_extent: Optional[Dict[str, float]] = None
    drawing_content: Optional[Dict[str, Any]] = None
    shapes: Optional[List[Dict[str, Any]]] = None
    group_transform: Optional[Dict[str, Any]] = None
    source_attrs: Dict[str, Any] = field(default_factory=dict)
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


@dataclass(slots=True)
class ImageBlock(WireModel):
    id: str
    src: str
    width: Optional[float] = None
    height: Optional[float] = None
    kind: Literal["image"] = "image"
    display: Literal["inline", "block"] = "block"
    object_fit: str = "contain"
    alt: Optional[str] = None
    title: Optional[str] = None
    anchor: Optional[AnchorConfig] = None
    wrap: Optional[WrapConfig] = None
    z_index: Optional[int] = None
    padding: Optional[Dict[str, float]] = None
    margin: Optional[Dict[str, float]] = None
    gain: Optional[Any] = None
    blacklevel: Optional[Any] = None
    source_attrs: Dict[str, Any] = field(default_factory=dict)
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


###############################################################################
# Tables
###############################################################################


@dataclass(slots=True)
class TableCell(WireModel):
    id: str
    blocks: List["FlowBlock"]
    row_span: int = 1
    col_span: int = 1
    borders: Optional[Dict[str, Any]] = None
    padding: Optional[Dict[str, float]] = None
    vertical_align: Optional[str] = None
    background: Optional[str] = None
    width: Optional[float] = None
    source_attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def paragraph(self) -> Optional[ParagraphBlock]:
        for block in self.blocks:
            if isinstance(block, ParagraphBlock):
                return block
        return None


@dataclass(frozen=True, slots=True)
class RowHeight(WireModel):
    value: float
    rule: Literal["exact", "atLeast", "auto"] = "atLeast"


@dataclass(slots=True)
class TableRow(WireModel):
    id: str
    cells: List[TableCell]
    height: Optional[RowHeight] = None
    repeat_header: Optional[bool] = None
    cant_split: Optional[bool] = None
    source_attrs: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TableBlock(WireModel):
    id: str
    rows: List[TableRow]
    kind: Literal["table"] = "table"
    column_widths: Optional[List[float]] = None
    borders: Optional[Dict[str, Any]] = None
    border_collapse: Optional[str] = None
    cell_spacing: Optional[float] = None
    cell_padding: Optional[Dict[str, float]] = None
    justification: Optional[str] = None
    table_width: Optional[Dict[str, Any]] = None
    style_id: Optional[str] = None
    sdt: Optional[Dict[str, Any]] = None
    source_attrs: Dict[str, Any] = field(default_factory=dict)
    pm_start: Optional[int] = None
    pm_end: Optional[int] = None


###############################################################################
# Sections
###############################################################################


@dataclass(slots=True)
class SectionBreakBlock(WireModel):
    id: str
    kind: Literal["sectionBreak"] = "sectionBreak"
    type: Optional[str] = None
    margins: Dict[str, Optional[float]] = field(default_factory=lambda: {"header": 0, "footer": 0})
    page_size: Optional[Dict[str, float]] = None
    orientation: Optional[str] = None
    columns: Optional[Dict[str, float]] = None
    numbering: Optional[Dict[str, Any]] = None
    header_refs: Optional[Dict[str, str]] = None
    footer_refs: Optional[Dict[str, str]] = None
    v_align: Optional[str] = None
    title_pg: Optional[bool] = None
    require_page_boundary: Optional[bool] = None
    attrs: Dict[str, Any] = field(default_factory=dict)


FlowBlock = Union[ParagraphBlock, TableBlock, DrawingBlock, ImageBlock, SectionBreakBlock]


@dataclass(slots=True)
class FlowBlocksResult(WireModel):
    blocks: List[FlowBlock]
    bookmarks: Dict[str, int] = field(default_factory=dict)
