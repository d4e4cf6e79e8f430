"""Conversion of paragraph content into flow runs."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..context import ConverterContext
from ..models.blocks import LineBreakRun, Run, TabRun, TextRun
from ..normalize import BooleanNormalizer, ColorNormalizer, FontNormalizer, UnderlineNormalizer
from ..styles.hydration import CharacterStyleProperties, hydrate_character_style_attrs
from ..utils.coerce import pick_number
from ..utils.units import half_points_to_px
from .frame import parse_font_size_px

logger = logging.getLogger(__name__)

INLINE_CONTAINER_TYPES = ("run", "link", "structuredContent", "fieldAnnotation", "bookmarkStart")
LINE_BREAK_TYPES = ("lineBreak", "hardBreak")

COMMENT_MARK_TYPES = ("comment", "commentMark")

PositionLookup = Callable[[Dict[str, Any]], Optional[Tuple[int, int]]]


def _add_comment(comments: List[Dict[str, Any]], attrs: Dict[str, Any]) -> None:
    comment_id = attrs.get("commentId") if isinstance(attrs.get("commentId"), str) else None
    imported_id = attrs.get("importedId") if isinstance(attrs.get("importedId"), str) else None
    if not comment_id and not imported_id:
        return
    key = (comment_id or "", imported_id or "")
    if any((c.get("commentId") or "", c.get("importedId") or "") == key for c in comments):
        return
    comments.append({
        "commentId": comment_id or imported_id,
        "importedId": imported_id,
        "internal": attrs.get("internal") is True,
        "trackedChange": attrs.get("trackedChange") is True,
    })


def marks_to_run_props(marks: Any) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Split text marks into run properties (wire units) and pixel overrides.

    Returns ``(run_props, overrides)``; ``overrides`` holds values already in
    pixels (``fontSizePx``), link data and comment annotations.
    """
    run_props: Dict[str, Any] = {}
    overrides: Dict[str, Any] = {}
    comments: List[Dict[str, Any]] = []
    for mark in marks or []:
        if not isinstance(mark, dict):
            continue
        mark_type = mark.get("type")
        mark_attrs = mark.get("attrs") or {}
        if mark_type in ("bold", "italic", "strike"):
            flag = BooleanNormalizer.normalize(mark_attrs.get("value"))
            run_props[mark_type] = True if flag is None else flag
        elif mark_type == "underline":
            run_props["underline"] = mark_attrs.get("underlineType") or "single"
        elif mark_type == "highlight":
            run_props["highlight"] = mark_attrs.get("color")
        elif mark_type == "link":
            overrides["link"] = {key: value for key, value in mark_attrs.items() if value is not None}
        elif mark_type in COMMENT_MARK_TYPES:
            _add_comment(comments, mark_attrs)
        elif mark_type == "textStyle":
            family = FontNormalizer.normalize_family(mark_attrs.get("fontFamily"))
            if family:
                run_props["fontFamily"] = family.split(",")[0].strip()
            size = parse_font_size_px(mark_attrs.get("fontSize"))
            if size is not None:
                overrides["fontSizePx"] = size
            color = ColorNormalizer.normalize(mark_attrs.get("color"))
            if color:
                run_props["color"] = color
            spacing = pick_number(mark_attrs.get("letterSpacing"))
            if spacing is not None:
                run_props["letterSpacing"] = spacing
            if isinstance(mark_attrs.get("vertAlign"), str):
                run_props["vertAlign"] = mark_attrs["vertAlign"]
    if comments:
        overrides["comments"] = comments
    return run_props, overrides


def _node_run_props(node: Dict[str, Any]) -> Dict[str, Any]:
    props = (node.get("attrs") or {}).get("runProperties")
    return dict(props) if isinstance(props, dict) else {}


def _resolve_run_style(
    para: Dict[str, Any],
    node: Dict[str, Any],
    context: ConverterContext,
    inherited_props: Dict[str, Any],
) -> Tuple[CharacterStyleProperties, Dict[str, Any]]:
    mark_props, overrides = marks_to_run_props(node.get("marks"))
    run_props = {**inherited_props, **_node_run_props(node), **mark_props}
    style_id = run_props.pop("styleId", None)
    style = hydrate_character_style_attrs(para, context.style_context, run_props, style_id)
    if style is None:
        style = CharacterStyleProperties(
            font_family=FontNormalizer.normalize_family(run_props.get("fontFamily")),
            font_size=pick_number(run_props.get("fontSize")) or 0,
            bold=BooleanNormalizer.normalize(run_props.get("bold")),
            italic=BooleanNormalizer.normalize(run_props.get("italic")),
            strike=BooleanNormalizer.normalize(run_props.get("strike")),
            underline=UnderlineNormalizer.normalize(run_props.get("underline")),
            color=ColorNormalizer.normalize(run_props.get("color")),
            letter_spacing=pick_number(run_props.get("letterSpacing")),
            highlight=run_props.get("highlight") if isinstance(run_props.get("highlight"), str) else None,
            vert_align=run_props.get("vertAlign") if isinstance(run_props.get("vertAlign"), str) else None,
        )
    return style, overrides


def _font_size_px(style: CharacterStyleProperties, overrides: Dict[str, Any], default_size: float) -> float:
    if overrides.get("fontSizePx"):
        return overrides["fontSizePx"]
    if style.font_size and style.font_size > 0:
        return half_points_to_px(style.font_size)
    return default_size


def _walk_inline(nodes: Any, inherited: Dict[str, Any]) -> Iterator[Tuple[Dict[str, Any], Dict[str, Any]]]:
    for node in nodes or []:
        if not isinstance(node, dict):
            continue
        if node.get("type") in INLINE_CONTAINER_TYPES and isinstance(node.get("content"), list):
            props = {**inherited, **_node_run_props(node)}
            yield from _walk_inline(node["content"], props)
        else:
            yield node, inherited


def paragraph_to_runs(
    para: Dict[str, Any],
    context: ConverterContext,
    positions: Optional[PositionLookup] = None,
) -> List[Run]:
    """Convert the inline content of ``para`` into text, tab and line-break runs."""
    options = context.options
    runs: List[Run] = []
    for node, inherited in _walk_inline(para.get("content"), {}):
        node_type = node.get("type")
        span = positions(node) if positions else None
        pm_start, pm_end = span if span else (None, None)

        if node_type == "text":
            text = node.get("text")
            if not isinstance(text, str) or not text:
                continue
            style, overrides = _resolve_run_style(para, node, context, inherited)
            runs.append(
                TextRun(
                    text=text,
                    font_family=style.font_family or options.default_font,
                    font_size=_font_size_px(style, overrides, options.default_size),
                    bold=style.bold,
                    italic=style.italic,
                    strike=style.strike,
                    underline=style.underline,
                    color=style.color,
                    highlight=style.highlight,
                    letter_spacing=style.letter_spacing,
                    vert_align=style.vert_align,
                    link=overrides.get("link"),
                    comments=overrides.get("comments") if options.enable_comments else None,
                    pm_start=pm_start,
                    pm_end=pm_end,
                )
            )
        elif node_type == "tab":
            style, overrides = _resolve_run_style(para, node, context, inherited)
            runs.append(
                TabRun(
                    font_family=style.font_family or options.default_font,
                    font_size=_font_size_px(style, overrides, options.default_size),
                    pm_start=pm_start,
                    pm_end=pm_end,
                )
            )
        elif node_type in LINE_BREAK_TYPES:
            runs.append(LineBreakRun(pm_start=pm_start, pm_end=pm_end))
        else:
            logger.debug(f"Skipping inline node of type {node_type!r}")
    return runs
