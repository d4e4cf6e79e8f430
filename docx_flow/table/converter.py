"""Table node to :class:`TableBlock` conversion."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..context import ConverterContext
from ..models.blocks import FlowBlock, TableBlock, TableCell, TableRow
from ..normalize import CELL_BORDER_SIDES, BorderNormalizer
from .cells import (
    resolve_cell_background,
    resolve_cell_borders,
    resolve_cell_padding,
    resolve_cell_width,
    resolve_row_flags,
    resolve_row_height,
    resolve_span,
    resolve_vertical_align,
)
from .styles import hydrate_table_style_attrs, measurement_to_px
from .widths import resolve_column_widths

logger = logging.getLogger(__name__)

TABLE_ROW_TYPES = ("tableRow", "table_row")
TABLE_CELL_TYPES = ("tableCell", "tableHeader", "table_cell", "table_header")

BlockIdGenerator = Callable[[str], str]
CellContentConverter = Callable[[List[Dict[str, Any]], ConverterContext], List[FlowBlock]]
PositionLookup = Callable[[Dict[str, Any]], Optional[Tuple[int, int]]]


def _resolve_cell_spacing(attrs: Dict[str, Any]) -> Optional[float]:
    raw = attrs.get("tableCellSpacing")
    if raw is None:
        table_props = attrs.get("tableProperties") or {}
        raw = table_props.get("tableCellSpacing") if isinstance(table_props, dict) else None
    return measurement_to_px(raw)


def _convert_cell(
    cell: Dict[str, Any],
    context: ConverterContext,
    next_id: BlockIdGenerator,
    convert_cell_content: CellContentConverter,
    table_padding: Optional[Dict[str, float]],
) -> Optional[TableCell]:
    content = cell.get("content")
    blocks = convert_cell_content(content if isinstance(content, list) else [], context)
    if not blocks:
        logger.debug("Dropping table cell without paragraph content")
        return None
    return TableCell(
        id=next_id("cell"),
        blocks=blocks,
        row_span=resolve_span(cell, "rowspan"),
        col_span=resolve_span(cell, "colspan"),
        borders=resolve_cell_borders(cell),
        padding=resolve_cell_padding(cell, table_padding),
        vertical_align=resolve_vertical_align(cell),
        background=resolve_cell_background(cell),
        width=resolve_cell_width(cell),
        source_attrs=dict(cell.get("attrs") or {}),
    )


def table_node_to_block(
    node: Any,
    context: ConverterContext,
    next_id: BlockIdGenerator,
    convert_cell_content: CellContentConverter,
    positions: Optional[PositionLookup] = None,
) -> Optional[TableBlock]:
    """
    Convert a table node.

    Cells without convertible content are dropped, rows left without cells
    are dropped, and a table without rows yields ``None``.
    """
    if not isinstance(node, dict) or not isinstance(node.get("content"), list) or not node["content"]:
        return None

    attrs = node.get("attrs") or {}
    hydration = hydrate_table_style_attrs(node, context.style_context)
    cell_context = context.with_table_style(hydration.paragraph_props if hydration else None)
    table_padding = hydration.cell_padding if hydration else None

    rows: List[TableRow] = []
    for row in node["content"]:
        if not isinstance(row, dict) or row.get("type") not in TABLE_ROW_TYPES:
            continue
        cells: List[TableCell] = []
        for cell in row.get("content") or []:
            if not isinstance(cell, dict) or cell.get("type") not in TABLE_CELL_TYPES:
                continue
            converted = _convert_cell(cell, cell_context, next_id, convert_cell_content, table_padding)
            if converted is not None:
                cells.append(converted)
        if not cells:
            continue
        flags = resolve_row_flags(row)
        rows.append(
            TableRow(
                id=next_id("row"),
                cells=cells,
                height=resolve_row_height(row),
                repeat_header=flags["repeat_header"],
                cant_split=flags["cant_split"],
                source_attrs=dict(row.get("attrs") or {}),
            )
        )

    if not rows:
        logger.debug("Dropping table without rows")
        return None

    span = positions(node) if positions else None
    border_collapse = attrs.get("borderCollapse")
    return TableBlock(
        id=next_id("table"),
        rows=rows,
        column_widths=resolve_column_widths(node),
        borders=BorderNormalizer.normalize(
            attrs.get("borders") if isinstance(attrs.get("borders"), dict) else (hydration.borders if hydration else None),
            CELL_BORDER_SIDES,
        ),
        border_collapse=border_collapse if isinstance(border_collapse, str) else None,
        cell_spacing=_resolve_cell_spacing(attrs),
        cell_padding=table_padding,
        justification=hydration.justification if hydration else None,
        table_width=hydration.table_width if hydration else None,
        style_id=attrs.get("tableStyleId") if isinstance(attrs.get("tableStyleId"), str) else None,
        source_attrs=dict(attrs),
        pm_start=span[0] if span else None,
        pm_end=span[1] if span else None,
    )
