"""Frame (framePr) extraction and drop-cap descriptors."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from ..models.paragraph import DropCapDescriptor, DropCapRun, FrameProperties
from ..normalize import BooleanNormalizer, ColorNormalizer, FontNormalizer
from ..utils.coerce import pick_number
from ..utils.units import half_points_to_px, pt_to_px, twips_to_px

logger = logging.getLogger(__name__)

FLOAT_ALIGNMENTS = ("left", "right", "center")
DROP_CAP_MODES = ("drop", "margin")
DEFAULT_DROP_CAP_LINES = 3
_FONT_SIZE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px|pt)?\s*$", re.IGNORECASE)


def _raw_frame_sources(attrs: Dict[str, Any], paragraph_props: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    for candidate in (attrs.get("framePr"), paragraph_props.get("framePr")):
        if isinstance(candidate, dict):
            yield candidate
    elements = paragraph_props.get("elements")
    if isinstance(elements, list):
        for element in elements:
            if isinstance(element, dict) and element.get("name") == "w:framePr":
                yield element.get("attributes") or {}


def _frame_value(raw: Dict[str, Any], key: str) -> Any:
    wrapped = raw.get("attributes") if isinstance(raw.get("attributes"), dict) else {}
    for source in (raw, wrapped):
        prefixed = source.get(f"w:{key}")
        if prefixed is not None:
            return prefixed
    for source in (raw, wrapped):
        value = source.get(key)
        if value is not None:
            return value
    return None


def extract_frame(attrs: Dict[str, Any], paragraph_props: Dict[str, Any]) -> Optional[FrameProperties]:
    """
    Read frame positioning hints from the first available ``framePr`` source.

    ``xAlign`` is lowercased but not validated; ``x``/``y`` are converted from
    twips and dropped when non-numeric.
    """
    raw = next(_raw_frame_sources(attrs, paragraph_props), None)
    if not raw:
        return None

    x_align = _frame_value(raw, "xAlign")
    x = pick_number(_frame_value(raw, "x"))
    y = pick_number(_frame_value(raw, "y"))
    lines = pick_number(_frame_value(raw, "lines"))
    values = {
        "wrap": _frame_value(raw, "wrap"),
        "x": twips_to_px(x) if x is not None else None,
        "y": twips_to_px(y) if y is not None else None,
        "x_align": x_align.lower() if isinstance(x_align, str) else None,
        "y_align": _frame_value(raw, "yAlign"),
        "h_anchor": _frame_value(raw, "hAnchor"),
        "v_anchor": _frame_value(raw, "vAnchor"),
        "drop_cap": _frame_value(raw, "dropCap"),
        "lines": int(lines) if lines is not None else None,
    }
    values = {key: value for key, value in values.items() if value is not None and value != ""}
    if not values:
        return None
    return FrameProperties(**values)


def float_alignment_for(frame: Optional[FrameProperties]) -> Optional[str]:
    if frame is None or frame.x_align not in FLOAT_ALIGNMENTS:
        return None
    return frame.x_align


def parse_font_size_px(value: Any) -> Optional[float]:
    """Parse ``"156px"``, ``"117pt"`` or a bare pixel number."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value if value > 0 else None
    if not isinstance(value, str):
        return None
    match = _FONT_SIZE_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    size = pt_to_px(number) if unit == "pt" else number
    return size if size > 0 else None


def _iter_text_nodes(nodes: Optional[List[Any]]) -> Iterator[Dict[str, Any]]:
    for node in nodes or []:
        if not isinstance(node, dict):
            continue
        if node.get("type") == "text" and isinstance(node.get("text"), str):
            yield node
        elif isinstance(node.get("content"), list):
            yield from _iter_text_nodes(node["content"])


def find_first_text_run(para: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for node in _iter_text_nodes(para.get("content")):
        if node["text"]:
            return node
    return None


def _run_style(node: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten marks and run properties of a text node into one dict."""
    style: Dict[str, Any] = {}
    run_props = (node.get("attrs") or {}).get("runProperties") or {}
    if isinstance(run_props, dict):
        sz = pick_number(run_props.get("sz") if run_props.get("sz") is not None else run_props.get("fontSize"))
        if sz is not None:
            style["fontSizePx"] = half_points_to_px(sz)
        family = FontNormalizer.normalize_family(run_props.get("rFonts") or run_props.get("fontFamily"))
        if family:
            style["fontFamily"] = family
        for key, target in (("b", "bold"), ("bold", "bold"), ("i", "italic"), ("italic", "italic")):
            flag = BooleanNormalizer.normalize(run_props.get(key))
            if flag is not None:
                style[target] = flag
        color = ColorNormalizer.normalize(run_props.get("color"))
        if color:
            style["color"] = color

    for mark in node.get("marks") or []:
        if not isinstance(mark, dict):
            continue
        mark_type = mark.get("type")
        mark_attrs = mark.get("attrs") or {}
        if mark_type in ("bold", "italic"):
            flag = BooleanNormalizer.normalize(mark_attrs.get("value"))
            style[mark_type] = True if flag is None else flag
        elif mark_type == "textStyle":
            size = parse_font_size_px(mark_attrs.get("fontSize"))
            if size is not None:
                style["fontSizePx"] = size
            family = FontNormalizer.normalize_family(mark_attrs.get("fontFamily"))
            if family:
                style["fontFamily"] = family.split(",")[0].strip()
            color = ColorNormalizer.normalize(mark_attrs.get("color"))
            if color:
                style["color"] = color
    return style


def build_drop_cap_descriptor(
    para: Dict[str, Any],
    frame: Optional[FrameProperties],
    default_font: str = "Arial",
    default_size: float = 16,
) -> Optional[DropCapDescriptor]:
    """
    Describe the drop cap of ``para``.

    Requires a ``drop``/``margin`` frame and a first text run; without content
    there is nothing to anchor the drop cap to.
    """
    if frame is None or frame.drop_cap not in DROP_CAP_MODES:
        return None
    first_run = find_first_text_run(para)
    if first_run is None:
        logger.debug("Drop cap frame without text content; descriptor omitted")
        return None

    style = _run_style(first_run)
    run = DropCapRun(
        text=first_run["text"],
        font_family=style.get("fontFamily") or default_font,
        font_size=style.get("fontSizePx") or default_size,
        bold=style.get("bold"),
        italic=style.get("italic"),
        color=style.get("color"),
    )
    return DropCapDescriptor(
        mode=frame.drop_cap,
        lines=frame.lines if frame.lines and frame.lines > 0 else DEFAULT_DROP_CAP_LINES,
        run=run,
        wrap=frame.wrap,
    )
