"""Wrap, anchor and stacking attributes shared by images and shapes."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

from ..models.blocks import AnchorConfig, WrapConfig
from ..utils.coerce import coerce_number, pick_number, to_boolean

WRAP_TYPES = frozenset({"None", "Square", "Tight", "Through", "TopAndBottom", "Inline"})
WRAP_TEXT_VALUES = frozenset({"bothSides", "left", "right", "largest"})
H_RELATIVE_VALUES = frozenset({"column", "page", "margin"})
V_RELATIVE_VALUES = frozenset({"paragraph", "page", "margin"})
H_ALIGN_VALUES = frozenset({"left", "center", "right"})
V_ALIGN_VALUES = frozenset({"top", "center", "bottom"})

# relativeHeight values are large (around 251659318); scaled into a usable range.
Z_INDEX_SCALE_FACTOR = 1_000_000


def get_attrs(node: Any) -> Dict[str, Any]:
    attrs = node.get("attrs") if isinstance(node, dict) else None
    return attrs if isinstance(attrs, dict) else {}


def is_hidden_drawing(attrs: Dict[str, Any]) -> bool:
    if to_boolean(attrs.get("hidden")) is True:
        return True
    visibility = attrs.get("visibility")
    return isinstance(visibility, str) and visibility.lower() == "hidden"


def normalize_polygon(value: Any) -> Optional[Tuple[Tuple[float, float], ...]]:
    if not isinstance(value, list):
        return None
    points = []
    for point in value:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            continue
        x = pick_number(point[0])
        y = pick_number(point[1])
        if x is None or y is None:
            continue
        points.append((x, y))
    return tuple(points) or None


def _first_number(*values: Any) -> Optional[float]:
    for value in values:
        if value is not None:
            return pick_number(value)
    return None


def normalize_wrap(value: Any, allow_inline: bool = True) -> Optional[WrapConfig]:
    """
    Normalize a ``{type, attrs}`` wrap description.

    Unknown wrap types are discarded; shapes pass ``allow_inline=False`` to
    discard ``Inline`` as well.
    """
    if not isinstance(value, dict):
        return None
    wrap_type = value.get("type")
    if not isinstance(wrap_type, str) or wrap_type not in WRAP_TYPES:
        return None
    if wrap_type == "Inline" and not allow_inline:
        return None

    attrs = value.get("attrs") if isinstance(value.get("attrs"), dict) else {}
    wrap_text = attrs.get("wrapText")
    return WrapConfig(
        type=wrap_type,
        wrap_text=wrap_text if wrap_text in WRAP_TEXT_VALUES else None,
        dist_top=_first_number(attrs.get("distTop"), attrs.get("distT")),
        dist_bottom=_first_number(attrs.get("distBottom"), attrs.get("distB")),
        dist_left=_first_number(attrs.get("distLeft"), attrs.get("distL")),
        dist_right=_first_number(attrs.get("distRight"), attrs.get("distR")),
        polygon=normalize_polygon(attrs.get("polygon")),
        behind_doc=to_boolean(attrs.get("behindDoc")),
    )


def _allowed(value: Any, allowed: frozenset) -> Optional[str]:
    return value if isinstance(value, str) and value in allowed else None


def normalize_anchor(
    anchor_data: Any,
    attrs: Dict[str, Any],
    wrap_behind_doc: Optional[bool] = None,
) -> Optional[AnchorConfig]:
    """
    Build the anchor description of a floating drawing.

    Offsets prefer ``marginOffset``, then ``anchorData``, then ``simplePos``.
    Returns ``None`` when nothing anchor-related is present.
    """
    raw = anchor_data if isinstance(anchor_data, dict) else {}
    margin_offset = attrs.get("marginOffset") if isinstance(attrs.get("marginOffset"), dict) else {}
    simple_pos = attrs.get("simplePos") if isinstance(attrs.get("simplePos"), dict) else {}
    original = attrs.get("originalAttributes") if isinstance(attrs.get("originalAttributes"), dict) else {}

    behind_doc_source = raw.get("behindDoc")
    if behind_doc_source is None:
        behind_doc_source = wrap_behind_doc
    if behind_doc_source is None:
        behind_doc_source = original.get("behindDoc")

    anchor = AnchorConfig(
        is_anchored=attrs.get("isAnchor") is True or isinstance(anchor_data, dict),
        h_relative_from=_allowed(raw.get("hRelativeFrom"), H_RELATIVE_VALUES),
        v_relative_from=_allowed(raw.get("vRelativeFrom"), V_RELATIVE_VALUES),
        align_h=_allowed(raw.get("alignH"), H_ALIGN_VALUES),
        align_v=_allowed(raw.get("alignV"), V_ALIGN_VALUES),
        offset_h=_first_number(
            margin_offset.get("horizontal"), margin_offset.get("left"), raw.get("offsetH"), simple_pos.get("x")
        ),
        offset_v=_first_number(
            margin_offset.get("top"), margin_offset.get("vertical"), raw.get("offsetV"), simple_pos.get("y")
        ),
        behind_doc=to_boolean(behind_doc_source),
    )
    has_data = anchor.is_anchored or any(
        value is not None
        for value in (
            anchor.h_relative_from,
            anchor.v_relative_from,
            anchor.align_h,
            anchor.align_v,
            anchor.offset_h,
            anchor.offset_v,
            anchor.behind_doc,
        )
    )
    return anchor if has_data else None


def normalize_z_index(original_attributes: Any) -> Optional[int]:
    if not isinstance(original_attributes, dict):
        return None
    relative_height = pick_number(original_attributes.get("relativeHeight"))
    if relative_height is None:
        return None
    return int(math.floor(relative_height / Z_INDEX_SCALE_FACTOR))


def resolve_z_index(attrs: Dict[str, Any]) -> Optional[int]:
    """Stacking order from ``originalAttributes.relativeHeight``, falling back to ``zIndex``."""
    z_index = normalize_z_index(attrs.get("originalAttributes"))
    if z_index is not None:
        return z_index
    fallback = coerce_number(attrs.get("zIndex"))
    return int(fallback) if fallback is not None else None
