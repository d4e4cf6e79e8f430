"""
Document to flow block conversion.

``to_flow_blocks`` walks a document tree depth-first in document order and
returns typed flow blocks ready for pagination, together with the bookmark
positions found along the way.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..config import ConversionOptions
from ..context import ConverterContext
from ..drawings.image import hydrate_image_blocks
from ..exceptions import DocumentStructureError
from ..models.blocks import FlowBlock, FlowBlocksResult, ParagraphBlock
from ..sections.breaks import create_section_break_block
from ..sections.ranges import analyze_section_ranges
from ..styles.context import StyleContext
from ..utils.coerce import pick_number
from ..utils.logger import set_log_level
from .handlers import ConversionState, SectionState, convert_nodes
from .ids import create_block_id_generator
from .positions import PositionMap, build_position_map

logger = logging.getLogger(__name__)


def _document_options(doc: Dict[str, Any], options: ConversionOptions) -> ConversionOptions:
    """Fold document-level defaults into the options where the caller left them unset."""
    attrs = doc.get("attrs") if isinstance(doc.get("attrs"), dict) else {}
    changes: Dict[str, Any] = {}

    separator = attrs.get("decimalSeparator")
    if options.decimal_separator is None and isinstance(separator, str) and len(separator) == 1:
        changes["decimal_separator"] = separator

    interval = pick_number(attrs.get("defaultTabIntervalTwips", attrs.get("tabIntervalTwips")))
    if interval is None:
        interval_px = pick_number(attrs.get("defaultTabIntervalPx", attrs.get("tabIntervalPx")))
        interval = round(interval_px * 15) if interval_px is not None else None
    if interval is not None and interval > 0:
        changes["default_tab_interval_twips"] = int(interval)

    return replace(options, **changes) if changes else options


def merge_drop_cap_paragraphs(blocks: List[FlowBlock]) -> List[FlowBlock]:
    """
    Fold drop-cap paragraphs into the paragraph that follows them.

    The merged block keeps the following paragraph's id, runs and attributes,
    takes the drop-cap descriptor and clears the ``drop_cap`` flag. A drop-cap
    paragraph not followed by a paragraph is kept as is.
    """
    merged: List[FlowBlock] = []
    index = 0
    while index < len(blocks):
        block = blocks[index]
        following = blocks[index + 1] if index + 1 < len(blocks) else None
        if (
            isinstance(block, ParagraphBlock)
            and block.attrs is not None
            and block.attrs.drop_cap_descriptor is not None
            and isinstance(following, ParagraphBlock)
        ):
            following.attrs = replace(
                following.attrs,
                drop_cap_descriptor=block.attrs.drop_cap_descriptor,
                drop_cap=None,
            )
            merged.append(following)
            index += 2
            continue
        merged.append(block)
        index += 1
    return merged


def to_flow_blocks(
    doc: Any,
    style_context: Optional[StyleContext] = None,
    options: Optional[ConversionOptions] = None,
    converter_context: Optional[ConverterContext] = None,
    positions: Optional[PositionMap] = None,
    strict: bool = False,
) -> FlowBlocksResult:
    """
    Convert a document tree into flow blocks.

    Args:
        doc: Document node (``{"type": "doc", "content": [...]}``)
        style_context: Style sheet; ignored when ``converter_context`` is given
        options: Conversion options
        converter_context: Prepared pass state to reuse (numbering, table styles)
        positions: Precomputed node positions
        strict: Raise on a malformed document root instead of returning no blocks

    Returns:
        FlowBlocksResult with the blocks and bookmark positions
    """
    if not isinstance(doc, dict):
        if strict:
            raise DocumentStructureError("Document root must be a mapping", {"type": type(doc).__name__})
        logger.debug("Document root is not a mapping; nothing to convert")
        return FlowBlocksResult(blocks=[])

    options = options or (converter_context.options if converter_context else ConversionOptions())
    options.validate()
    if options.log_level:
        set_log_level(options.log_level)
    options = _document_options(doc, options)

    content = doc.get("content")
    if not isinstance(content, list) or not content:
        if strict and not isinstance(content, list):
            raise DocumentStructureError("Document content must be a list", {"type": type(content).__name__})
        return FlowBlocksResult(blocks=[])

    if converter_context is not None:
        context = ConverterContext(
            style_context=converter_context.style_context,
            options=options,
            numbering=converter_context.numbering,
            table_style_paragraph_props=converter_context.table_style_paragraph_props,
        )
    else:
        context = ConverterContext.create(style_context, options)

    state = ConversionState(
        context=context,
        next_id=create_block_id_generator(options.block_id_prefix),
        positions=positions if positions is not None else build_position_map(doc),
    )

    if options.emit_section_breaks:
        doc_attrs = doc.get("attrs") if isinstance(doc.get("attrs"), dict) else {}
        body_sect_pr = doc_attrs.get("bodySectPr") or doc_attrs.get("sectPr")
        state.sections = SectionState(ranges=analyze_section_ranges(doc, body_sect_pr, strict=strict))
        if state.sections.ranges:
            first = create_section_break_block(
                state.sections.ranges[0], state.next_id, {"isFirstSection": True}
            )
            state.emit(first)

    convert_nodes(content, state)

    sections = state.sections
    if sections is not None and sections.ranges:
        last_index = len(sections.ranges) - 1
        if sections.current_section_index < last_index:
            state.emit(create_section_break_block(sections.ranges[last_index], state.next_id))

    logger.info(
        f"Converted document into {len(state.blocks)} blocks "
        f"({', '.join(f'{kind}={count}' for kind, count in sorted(state.block_counts.items()))}); "
        f"{len(state.bookmarks)} bookmarks"
    )

    blocks = hydrate_image_blocks(state.blocks, options.media_files)
    return FlowBlocksResult(blocks=merge_drop_cap_paragraphs(blocks), bookmarks=state.bookmarks)


def to_flow_blocks_map(
    documents: Optional[Mapping[str, Any]],
    style_context: Optional[StyleContext] = None,
    options: Optional[ConversionOptions] = None,
    block_id_prefix_factory: Optional[Callable[[str], str]] = None,
) -> Dict[str, List[FlowBlock]]:
    """
    Convert several documents (headers, footers, ...) keyed by name.

    Each document gets its own id prefix: the factory's result, else the
    configured prefix, else ``"{key}-"``.
    """
    result: Dict[str, List[FlowBlock]] = {}
    if not documents:
        return result

    base = options or ConversionOptions()
    for key, doc in documents.items():
        if not doc:
            continue
        prefix = (block_id_prefix_factory(key) if block_id_prefix_factory else None) or base.block_id_prefix or f"{key}-"
        result[key] = to_flow_blocks(doc, style_context, replace(base, block_id_prefix=prefix)).blocks
    return result
