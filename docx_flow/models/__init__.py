"""Typed flow models."""

from .base import WireModel, to_wire
from .blocks import (
    AnchorConfig,
    DrawingBlock,
    DrawingGeometry,
    FlowBlock,
    FlowBlocksResult,
    ImageBlock,
    LineBreakRun,
    ParagraphBlock,
    RowHeight,
    Run,
    SectionBreakBlock,
    TableBlock,
    TableCell,
    TableRow,
    TabRun,
    TextRun,
    WrapConfig,
)
from .paragraph import (
    DropCapDescriptor,
    DropCapRun,
    FrameProperties,
    ListMarker,
    MarkerRun,
    NumberingProperties,
    ParagraphIndent,
    ParagraphSpacing,
    ResolvedParagraphAttributes,
    TabStop,
    WordLayout,
)
from .section import ColumnLayout, PageNumbering, PageSize, SectionData, SectionMargins, SectionRange

__all__ = [
    "AnchorConfig",
    "ColumnLayout",
    "DrawingBlock",
    "DrawingGeometry",
    "DropCapDescriptor",
    "DropCapRun",
    "FlowBlock",
    "FlowBlocksResult",
    "FrameProperties",
    "ImageBlock",
    "LineBreakRun",
    "ListMarker",
    "MarkerRun",
    "NumberingProperties",
    "PageNumbering",
    "PageSize",
    "ParagraphBlock",
    "ParagraphIndent",
    "ParagraphSpacing",
    "ResolvedParagraphAttributes",
    "RowHeight",
    "Run",
    "SectionBreakBlock",
    "SectionData",
    "SectionMargins",
    "SectionRange",
    "TabRun",
    "TabStop",
    "TableBlock",
    "TableCell",
    "TableRow",
    "TextRun",
    "WireModel",
    "WordLayout",
    "WrapConfig",
    "to_wire",
]
