"""Table-level attributes from table properties and the referenced table style."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..styles.cascade import combine_properties
from ..styles.context import StyleContext
from ..utils.coerce import is_finite_number
from ..utils.units import twips_to_px

logger = logging.getLogger(__name__)

_MARGIN_KEYS = {
    "top": "top",
    "bottom": "bottom",
    "left": "left",
    "right": "right",
    "start": "left",
    "end": "right",
    "marginTop": "top",
    "marginBottom": "bottom",
    "marginLeft": "left",
    "marginRight": "right",
}


@dataclass(slots=True)
class TableStyleHydration:
    borders: Optional[Dict[str, Any]] = None
    cell_padding: Optional[Dict[str, float]] = None
    justification: Optional[str] = None
    table_width: Optional[Dict[str, Any]] = None
    paragraph_props: Optional[Dict[str, Any]] = None


def measurement_to_px(value: Any) -> Optional[float]:
    """Convert a number (px) or ``{value, type}`` measurement (px or dxa) to pixels."""
    if is_finite_number(value):
        return value
    if not isinstance(value, dict):
        return None
    raw = value.get("value", value.get("w"))
    if not is_finite_number(raw):
        return None
    unit = value.get("type")
    if not unit or unit in ("px", "pixel"):
        return raw
    if unit == "dxa":
        return twips_to_px(raw)
    return None


def convert_cell_margins_to_px(margins: Any) -> Optional[Dict[str, float]]:
    if not isinstance(margins, dict):
        return None
    spacing: Dict[str, float] = {}
    for key, value in margins.items():
        side = _MARGIN_KEYS.get(key)
        if side is None:
            continue
        px = measurement_to_px(value)
        if px is not None:
            spacing[side] = px
    return spacing or None


def normalize_table_width(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        return None
    raw = value.get("width") if is_finite_number(value.get("width")) else value.get("value")
    if not is_finite_number(raw):
        return None
    unit = value.get("type")
    if not unit or unit in ("px", "pixel"):
        return {"width": raw, "type": unit or "px"}
    if unit == "dxa":
        return {"width": twips_to_px(raw), "type": "px"}
    return {"width": raw, "type": unit}


def _referenced_table_style(style_id: str, style_context: StyleContext) -> Dict[str, Any]:
    chain = style_context.resolve_style_chain(style_id)
    return {
        "tableProps": combine_properties(style.get("tableProps") for style in chain),
        "paragraphProps": combine_properties(style.get("paragraphProps") for style in chain),
    }


def hydrate_table_style_attrs(
    table_node: Dict[str, Any],
    style_context: Optional[StyleContext] = None,
) -> Optional[TableStyleHydration]:
    """
    Collect table borders, padding, justification and width.

    Inline ``tableProperties`` win; the referenced table style fills gaps and
    contributes its paragraph properties. The node is never mutated.
    """
    attrs = table_node.get("attrs") or {}
    table_props = attrs.get("tableProperties")
    hydration = TableStyleHydration()

    if isinstance(table_props, dict):
        hydration.cell_padding = convert_cell_margins_to_px(table_props.get("cellMargins"))
        if isinstance(table_props.get("borders"), dict):
            hydration.borders = dict(table_props["borders"])
        if isinstance(table_props.get("justification"), str):
            hydration.justification = table_props["justification"]
        hydration.table_width = normalize_table_width(table_props.get("tableWidth"))

    style_id = attrs.get("tableStyleId")
    if isinstance(style_id, str) and style_id and style_context is not None:
        referenced = _referenced_table_style(style_id, style_context)
        style_props = referenced["tableProps"]
        if hydration.borders is None and isinstance(style_props.get("borders"), dict):
            hydration.borders = dict(style_props["borders"])
        if hydration.cell_padding is None:
            hydration.cell_padding = convert_cell_margins_to_px(style_props.get("cellMargins"))
        if hydration.justification is None and isinstance(style_props.get("justification"), str):
            hydration.justification = style_props["justification"]
        if referenced["paragraphProps"]:
            hydration.paragraph_props = referenced["paragraphProps"]

    if all(
        value is None
        for value in (
            hydration.borders,
            hydration.cell_padding,
            hydration.justification,
            hydration.table_width,
            hydration.paragraph_props,
        )
    ):
        return None
    return hydration
