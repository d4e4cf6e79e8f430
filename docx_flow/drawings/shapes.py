"""Vector shape and shape group conversion."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models.blocks import DrawingBlock, DrawingGeometry
from ..utils.coerce import coerce_boolean, coerce_number, coerce_positive_number, pick_number, to_box_spacing
from .placement import get_attrs, is_hidden_drawing, normalize_anchor, normalize_wrap, resolve_z_index

logger = logging.getLogger(__name__)

BlockIdGenerator = Callable[[str], str]
PositionLookup = Callable[[Dict[str, Any]], Optional[Tuple[int, int]]]

TEXT_VERTICAL_ALIGNMENTS = ("top", "center", "bottom")
LINE_END_KEYS = ("head", "tail")


def normalize_effect_extent(value: Any) -> Optional[Dict[str, float]]:
    """Keep the numeric sides of an ``effectExtent``; ``None`` when none are set."""
    return to_box_spacing(value)


def normalize_shape_size(value: Any) -> Optional[Dict[str, float]]:
    if not isinstance(value, dict):
        return None
    size: Dict[str, float] = {}
    for key in ("width", "height"):
        number = pick_number(value.get(key))
        if number is not None and number > 0:
            size[key] = number
    return size or None


def normalize_paint(value: Any) -> Optional[Any]:
    """Fill or stroke paint: a color string or a gradient/pattern description."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        return copy.deepcopy(value)
    return None


def normalize_line_ends(value: Any) -> Optional[Dict[str, Dict[str, Any]]]:
    if not isinstance(value, dict):
        return None
    ends = {}
    for key in LINE_END_KEYS:
        end = value.get(key)
        if isinstance(end, dict) and isinstance(end.get("type"), str):
            ends[key] = dict(end)
    return ends or None


def normalize_text_content(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict) or not isinstance(value.get("parts"), list):
        return None
    return copy.deepcopy(value)


def normalize_text_vertical_align(value: Any) -> Optional[str]:
    return value if value in TEXT_VERTICAL_ALIGNMENTS else None


def normalize_shape_group_children(value: Any) -> Optional[List[Dict[str, Any]]]:
    """Children of a shape group; entries without a string ``shapeType`` are dropped."""
    if not isinstance(value, list):
        return None
    children = [dict(child) for child in value if isinstance(child, dict) and isinstance(child.get("shapeType"), str)]
    return children


def _geometry(attrs: Dict[str, Any], width: Any, height: Any) -> DrawingGeometry:
    return DrawingGeometry(
        width=coerce_positive_number(width, 1),
        height=coerce_positive_number(height, 1),
        rotation=coerce_number(attrs.get("rotation")) or 0,
        flip_h=coerce_boolean(attrs.get("flipH")) or False,
        flip_v=coerce_boolean(attrs.get("flipV")) or False,
    )


def build_drawing_block(
    attrs: Dict[str, Any],
    node: Dict[str, Any],
    geometry: DrawingGeometry,
    drawing_kind: str,
    next_id: BlockIdGenerator,
    positions: Optional[PositionLookup] = None,
    **extra: Any,
) -> DrawingBlock:
    """Assemble the fields every shape drawing shares."""
    wrap = normalize_wrap(attrs.get("wrap"), allow_inline=False)
    anchor = normalize_anchor(attrs.get("anchorData"), attrs, wrap.behind_doc if wrap else None)
    span = positions(node) if positions else None
    text_align = attrs.get("textAlign")
    shape_kind = attrs.get("kind")
    drawing_content = attrs.get("drawingContent")
    return DrawingBlock(
        id=next_id("drawing"),
        drawing_kind=drawing_kind,
        geometry=geometry,
        anchor=anchor,
        wrap=wrap,
        z_index=resolve_z_index(attrs),
        padding=to_box_spacing(attrs.get("padding")),
        margin=to_box_spacing(attrs.get("marginOffset")) or to_box_spacing(attrs.get("margin")),
        shape_kind=shape_kind if isinstance(shape_kind, str) else None,
        fill_color=normalize_paint(attrs.get("fillColor")),
        stroke_color=normalize_paint(attrs.get("strokeColor")),
        stroke_width=coerce_number(attrs.get("strokeWidth")),
        text_content=normalize_text_content(attrs.get("textContent")),
        text_align=text_align if isinstance(text_align, str) else None,
        text_vertical_align=normalize_text_vertical_align(attrs.get("textVerticalAlign")),
        text_insets=to_box_spacing(attrs.get("textInsets")),
        drawing_content=copy.deepcopy(drawing_content) if isinstance(drawing_content, dict) else None,
        source_attrs=dict(attrs),
        pm_start=span[0] if span else None,
        pm_end=span[1] if span else None,
        **extra,
    )


def vector_shape_node_to_drawing_block(
    node: Any,
    next_id: BlockIdGenerator,
    positions: Optional[PositionLookup] = None,
) -> Optional[DrawingBlock]:
    """
    Convert a ``vectorShape`` node.

    The effect extent is added to the drawn size so that shadows and glows
    get room in layout.
    """
    attrs = get_attrs(node)
    if is_hidden_drawing(attrs):
        logger.debug("Skipping hidden vector shape")
        return None
    effect_extent = normalize_effect_extent(attrs.get("effectExtent"))
    extent = effect_extent or {}
    width = coerce_positive_number(attrs.get("width"), 1) + extent.get("left", 0) + extent.get("right", 0)
    height = coerce_positive_number(attrs.get("height"), 1) + extent.get("top", 0) + extent.get("bottom", 0)
    return build_drawing_block(
        attrs,
        node,
        _geometry(attrs, width, height),
        "vectorShape",
        next_id,
        positions,
        line_ends=normalize_line_ends(attrs.get("lineEnds")),
        effect_extent=effect_extent,
    )


def shape_group_node_to_drawing_block(
    node: Any,
    next_id: BlockIdGenerator,
    positions: Optional[PositionLookup] = None,
) -> Optional[DrawingBlock]:
    attrs = get_attrs(node)
    if is_hidden_drawing(attrs):
        logger.debug("Skipping hidden shape group")
        return None
    group_transform = dict(attrs["groupTransform"]) if isinstance(attrs.get("groupTransform"), dict) else None
    size = normalize_shape_size(attrs.get("size")) or {}
    transform = group_transform or {}
    width = size.get("width", transform.get("width", 1))
    height = size.get("height", transform.get("height", 1))
    return build_drawing_block(
        attrs,
        node,
        _geometry(attrs, width, height),
        "shapeGroup",
        next_id,
        positions,
        group_transform=group_transform,
        shapes=normalize_shape_group_children(attrs.get("shapes")),
    )


def shape_container_node_to_drawing_block(
    node: Any,
    next_id: BlockIdGenerator,
    positions: Optional[PositionLookup] = None,
) -> Optional[DrawingBlock]:
    """Convert ``shapeContainer`` and ``shapeTextbox`` nodes as plain vector shapes."""
    attrs = get_attrs(node)
    if is_hidden_drawing(attrs):
        return None
    return build_drawing_block(
        attrs,
        node,
        _geometry(attrs, attrs.get("width"), attrs.get("height")),
        "vectorShape",
        next_id,
        positions,
    )


shape_textbox_node_to_drawing_block = shape_container_node_to_drawing_block
