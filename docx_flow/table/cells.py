"""Row heights and cell decoration."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models.blocks import RowHeight
from ..normalize import CELL_BORDER_SIDES, BorderNormalizer, BooleanNormalizer
from ..utils.coerce import normalize_color, pick_number
from ..utils.units import twips_to_px
from .styles import convert_cell_margins_to_px

ROW_HEIGHT_RULES = ("exact", "atLeast", "auto")
VERTICAL_ALIGNMENTS = ("top", "center", "bottom")


def _row_props(row: Dict[str, Any]) -> Dict[str, Any]:
    props = (row.get("attrs") or {}).get("tableRowProperties")
    return props if isinstance(props, dict) else {}


def _cell_props(cell: Dict[str, Any]) -> Dict[str, Any]:
    props = (cell.get("attrs") or {}).get("tableCellProperties")
    return props if isinstance(props, dict) else {}


def resolve_row_height(row: Dict[str, Any]) -> Optional[RowHeight]:
    """
    Read ``tableRowProperties.rowHeight`` as pixels.

    The value is converted from twips for every rule (zero is kept); an
    unknown rule becomes ``atLeast``.
    """
    raw = _row_props(row).get("rowHeight")
    if not isinstance(raw, dict):
        return None
    value = pick_number(raw.get("value"))
    if value is None:
        return None
    rule = raw.get("rule")
    if rule not in ROW_HEIGHT_RULES:
        rule = "atLeast"
    return RowHeight(value=twips_to_px(value), rule=rule)


def resolve_row_flags(row: Dict[str, Any]) -> Dict[str, Optional[bool]]:
    props = _row_props(row)
    repeat = props.get("repeatHeader")
    if repeat is None:
        repeat = props.get("tblHeader")
    return {
        "repeat_header": BooleanNormalizer.normalize(repeat),
        "cant_split": BooleanNormalizer.normalize(props.get("cantSplit")),
    }


def resolve_vertical_align(cell: Dict[str, Any]) -> Optional[str]:
    attrs = cell.get("attrs") or {}
    value = attrs.get("verticalAlign") or _cell_props(cell).get("vAlign")
    if not isinstance(value, str):
        return None
    value = "center" if value == "middle" else value
    return value if value in VERTICAL_ALIGNMENTS else None


def resolve_cell_background(cell: Dict[str, Any]) -> Optional[str]:
    attrs = cell.get("attrs") or {}
    background = attrs.get("background")
    if isinstance(background, dict):
        background = background.get("color")
    color = normalize_color(background)
    if color:
        return color
    shading = _cell_props(cell).get("shading")
    if isinstance(shading, dict):
        return normalize_color(shading.get("fill"))
    return None


def resolve_cell_borders(cell: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    attrs = cell.get("attrs") or {}
    borders = attrs.get("borders")
    if not isinstance(borders, dict):
        borders = _cell_props(cell).get("borders")
    return BorderNormalizer.normalize(borders, CELL_BORDER_SIDES)


def resolve_cell_padding(
    cell: Dict[str, Any],
    table_padding: Optional[Dict[str, float]] = None,
) -> Optional[Dict[str, float]]:
    attrs = cell.get("attrs") or {}
    padding = convert_cell_margins_to_px(attrs.get("cellMargins")) or convert_cell_margins_to_px(
        _cell_props(cell).get("cellMargins")
    )
    if padding and table_padding:
        return {**table_padding, **padding}
    return padding or (dict(table_padding) if table_padding else None)


def resolve_cell_width(cell: Dict[str, Any]) -> Optional[float]:
    raw = (cell.get("attrs") or {}).get("colwidth")
    values = raw if isinstance(raw, list) else [raw]
    numbers = [pick_number(value) for value in values]
    numbers = [number for number in numbers if number is not None and number > 0]
    return sum(numbers) if numbers else None


def resolve_span(cell: Dict[str, Any], key: str) -> int:
    value = pick_number((cell.get("attrs") or {}).get(key))
    return int(value) if value is not None and value > 0 else 1
