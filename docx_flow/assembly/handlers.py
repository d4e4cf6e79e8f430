"""
Node handlers for block assembly.

Each handler receives one source node and the :class:`ConversionState` of
the running pass and appends the blocks it produces. ``NODE_HANDLERS`` maps
node types to handlers; unknown types are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..context import ConverterContext
from ..drawings.image import image_node_to_block
from ..drawings.shapes import (
    shape_container_node_to_drawing_block,
    shape_group_node_to_drawing_block,
    shape_textbox_node_to_drawing_block,
    vector_shape_node_to_drawing_block,
)
from ..models.blocks import FlowBlock, ParagraphBlock
from ..models.section import SectionRange
from ..paragraph.attributes import compute_paragraph_attrs
from ..paragraph.runs import INLINE_CONTAINER_TYPES, paragraph_to_runs
from ..sdt import apply_sdt_metadata, resolve_node_sdt_metadata
from ..sections.breaks import create_section_break_block, should_require_page_boundary
from ..table.converter import table_node_to_block
from .ids import BlockIdGenerator
from .positions import PositionMap

logger = logging.getLogger(__name__)

DrawingConverter = Callable[[Any, BlockIdGenerator, Optional[PositionMap]], Optional[FlowBlock]]

DRAWING_CONVERTERS: Dict[str, DrawingConverter] = {
    "image": image_node_to_block,
    "vectorShape": vector_shape_node_to_drawing_block,
    "shapeGroup": shape_group_node_to_drawing_block,
    "shapeContainer": shape_container_node_to_drawing_block,
    "shapeTextbox": shape_textbox_node_to_drawing_block,
}

SDT_CONTAINER_METADATA_TYPES = {
    "structuredContentBlock": "structuredContentBlock",
    "documentSection": "documentSection",
    "documentPartObject": "docPartObject",
}


@dataclass
class SectionState:
    ranges: List[SectionRange] = field(default_factory=list)
    current_section_index: int = 0
    current_paragraph_index: int = 0


@dataclass
class ConversionState:
    """Mutable state of one conversion pass."""

    context: ConverterContext
    next_id: BlockIdGenerator
    positions: Optional[PositionMap] = None
    blocks: List[FlowBlock] = field(default_factory=list)
    bookmarks: Dict[str, int] = field(default_factory=dict)
    sections: Optional[SectionState] = None
    block_counts: Dict[str, int] = field(default_factory=dict)

    def emit(self, block: FlowBlock) -> None:
        self.blocks.append(block)
        self.block_counts[block.kind] = self.block_counts.get(block.kind, 0) + 1

    def nested(self, context: ConverterContext) -> "ConversionState":
        """State for content converted outside the body flow (table cells)."""
        return ConversionState(
            context=context,
            next_id=self.next_id,
            positions=self.positions,
            bookmarks=self.bookmarks,
            block_counts=self.block_counts,
        )


def _iter_inline(nodes: Any) -> Iterator[Dict[str, Any]]:
    for node in nodes or []:
        if not isinstance(node, dict):
            continue
        yield node
        if node.get("type") in INLINE_CONTAINER_TYPES:
            yield from _iter_inline(node.get("content"))


def _record_bookmarks(para: Dict[str, Any], state: ConversionState) -> None:
    for node in _iter_inline(para.get("content")):
        if node.get("type") != "bookmarkStart":
            continue
        name = (node.get("attrs") or {}).get("name")
        span = state.positions(node) if state.positions else None
        if isinstance(name, str) and name and span:
            state.bookmarks[name] = span[0]


def _advance_section(state: ConversionState) -> None:
    sections = state.sections
    if sections is None or not sections.ranges:
        return
    next_index = sections.current_section_index + 1
    if next_index >= len(sections.ranges):
        return
    next_section = sections.ranges[next_index]
    if sections.current_paragraph_index != next_section.start_paragraph_index:
        return
    current = sections.ranges[sections.current_section_index]
    extra = {"requirePageBoundary": True} if should_require_page_boundary(current, next_section) else None
    block = create_section_break_block(next_section, state.next_id, extra)
    state.emit(block)
    sections.current_section_index = next_index


def paragraph_to_flow_blocks(para: Dict[str, Any], state: ConversionState) -> List[FlowBlock]:
    """
    Convert a paragraph into its paragraph block plus inline drawings.

    A paragraph whose only content is drawings yields just the drawing blocks.
    """
    context = state.context
    attrs = compute_paragraph_attrs(
        para,
        list_counter_context=context.list_counters,
        converter_context=context,
    )
    runs = paragraph_to_runs(para, context, state.positions)
    _record_bookmarks(para, state)

    drawings: List[FlowBlock] = []
    for node in _iter_inline(para.get("content")):
        converter = DRAWING_CONVERTERS.get(node.get("type"))
        if converter is None:
            continue
        drawing = converter(node, state.next_id, state.positions)
        if drawing is not None:
            drawings.append(drawing)

    if drawings and not runs:
        return drawings

    span = state.positions(para) if state.positions else None
    block = ParagraphBlock(
        id=state.next_id("paragraph"),
        runs=runs,
        attrs=attrs,
        source_attrs=dict(para.get("attrs") or {}),
        pm_start=span[0] if span else None,
        pm_end=span[1] if span else None,
    )
    return [block, *drawings]


def handle_paragraph(node: Dict[str, Any], state: ConversionState) -> None:
    _advance_section(state)
    for block in paragraph_to_flow_blocks(node, state):
        state.emit(block)
    if state.sections is not None:
        state.sections.current_paragraph_index += 1


def convert_nodes(nodes: List[Dict[str, Any]], state: ConversionState) -> List[FlowBlock]:
    """Run the handler table over ``nodes`` and return what they produced."""
    start = len(state.blocks)
    for node in nodes:
        if not isinstance(node, dict):
            continue
        handler = NODE_HANDLERS.get(node.get("type"))
        if handler is None:
            logger.debug(f"No handler for node type {node.get('type')!r}")
            continue
        handler(node, state)
    return state.blocks[start:]


def handle_table(node: Dict[str, Any], state: ConversionState) -> None:
    def convert_cell_content(nodes: List[Dict[str, Any]], context: ConverterContext) -> List[FlowBlock]:
        return convert_nodes(nodes, state.nested(context))

    block = table_node_to_block(node, state.context, state.next_id, convert_cell_content, state.positions)
    if block is not None:
        state.emit(block)


def handle_drawing(node: Dict[str, Any], state: ConversionState) -> None:
    converter = DRAWING_CONVERTERS[node["type"]]
    block = converter(node, state.next_id, state.positions)
    if block is not None:
        state.emit(block)


def handle_sdt_container(node: Dict[str, Any], state: ConversionState) -> None:
    """Convert the children of a structured content container and tag them with its metadata."""
    children = node.get("content")
    if not isinstance(children, list) or not children:
        return
    metadata = resolve_node_sdt_metadata(
        node,
        SDT_CONTAINER_METADATA_TYPES[node["type"]],
        state.context.metadata_cache,
    )
    produced = convert_nodes(children, state)
    apply_sdt_metadata(produced, metadata)


NodeHandler = Callable[[Dict[str, Any], ConversionState], None]

NODE_HANDLERS: Dict[str, NodeHandler] = {
    "paragraph": handle_paragraph,
    "table": handle_table,
    "image": handle_drawing,
    "vectorShape": handle_drawing,
    "shapeGroup": handle_drawing,
    "shapeContainer": handle_drawing,
    "shapeTextbox": handle_drawing,
    "structuredContentBlock": handle_sdt_container,
    "documentSection": handle_sdt_container,
    "documentPartObject": handle_sdt_container,
}
