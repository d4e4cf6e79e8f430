"""
Style hydration for paragraphs and runs.

Hydration walks document defaults, the Normal style, the named style chain,
the numbering level and the paragraph's inline properties, and returns the
cascaded values in twips/half-points. Direct node attributes are applied
later by the paragraph resolver.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..normalize import (
    AlignmentNormalizer,
    BooleanNormalizer,
    ColorNormalizer,
    FontNormalizer,
    UnderlineNormalizer,
)
from ..numbering.definitions import NumberingDefinitions, is_valid_numbering_id
from ..utils.coerce import is_finite_number, pick_number
from .cascade import (
    apply_inline_overrides,
    combine_indent_properties,
    combine_properties,
    combine_run_properties,
    merge_tab_stop_sources,
    order_defaults_and_normal,
    resolve_font_size_with_fallback,
)
from .context import StyleContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParagraphStyleProperties:
    """Cascaded paragraph properties before direct attributes (twips)."""

    style_id: Optional[str] = None
    spacing: Dict[str, Any] = field(default_factory=dict)
    indent: Dict[str, Any] = field(default_factory=dict)
    borders: Optional[Dict[str, Any]] = None
    shading: Optional[Dict[str, Any]] = None
    alignment: Optional[str] = None
    tab_stops: Optional[List[Dict[str, Any]]] = None
    keep_lines: Optional[bool] = None
    keep_next: Optional[bool] = None
    page_break_before: Optional[bool] = None
    numbering_properties: Optional[Dict[str, Any]] = None
    contextual_spacing: Optional[bool] = None
    outline_level: Optional[int] = None
    is_heading: bool = False


@dataclass(slots=True)
class CharacterStyleProperties:
    """Cascaded run properties (font size in half-points)."""

    font_family: Optional[str] = None
    font_size: float = 20
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    strike: Optional[bool] = None
    underline: Optional[str] = None
    color: Optional[str] = None
    letter_spacing: Optional[float] = None
    highlight: Optional[str] = None
    vert_align: Optional[str] = None


def _string_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def get_paragraph_style_id(para: Dict[str, Any]) -> Optional[str]:
    attrs = para.get("attrs") or {}
    style_id = _string_or_none(attrs.get("styleId"))
    if style_id:
        return style_id
    pprops = attrs.get("paragraphProperties") or {}
    return _string_or_none(pprops.get("styleId")) if isinstance(pprops, dict) else None


def get_inline_numbering_properties(para: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    attrs = para.get("attrs") or {}
    numbering = attrs.get("numberingProperties")
    if isinstance(numbering, dict):
        return numbering
    pprops = attrs.get("paragraphProperties") or {}
    numbering = pprops.get("numberingProperties") if isinstance(pprops, dict) else None
    return numbering if isinstance(numbering, dict) else None


def _base_paragraph_sources(style_context: StyleContext, chain: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    defaults = style_context.defaults.get("paragraphProps") or {}
    normal = style_context.normal_style()
    normal_props: Dict[str, Any] = {}
    if normal is not None and not any(style is normal for style in chain):
        normal_props = normal.get("paragraphProps") or {}
    return order_defaults_and_normal(defaults, normal_props, style_context.is_normal_default())


def _is_heading(style_id: Optional[str], outline_level: Any) -> bool:
    if is_finite_number(outline_level):
        return True
    return bool(style_id and style_id.lower().startswith("heading"))


def _apply_heading_indent_reset(indent: Dict[str, Any]) -> Dict[str, Any]:
    """Headings never inherit a lone body-text first-line indent."""
    populated = {key for key, value in indent.items() if value is not None}
    if populated and populated != {"firstLine"}:
        return indent
    reset: Dict[str, Any] = {"firstLine": 0, "hanging": 0}
    for key in ("left", "right"):
        if indent.get(key) is not None:
            reset[key] = indent[key]
    return reset


def _merge_table_style_spacing(
    resolved: Dict[str, Any],
    table_spacing: Optional[Dict[str, Any]],
    has_explicit_spacing: bool,
) -> Dict[str, Any]:
    if not isinstance(table_spacing, dict) or not table_spacing:
        return resolved
    if has_explicit_spacing:
        return {**table_spacing, **resolved}
    return {**resolved, **table_spacing}


def hydrate_paragraph_style_attrs(
    para: Dict[str, Any],
    style_context: Optional[StyleContext],
    numbering: Optional[NumberingDefinitions] = None,
    table_style_paragraph_props: Optional[Dict[str, Any]] = None,
) -> Optional[ParagraphStyleProperties]:
    """
    Resolve the paragraph style cascade for ``para``.

    Args:
        para: Paragraph node
        style_context: Style sheet; ``None`` skips hydration
        numbering: Numbering definitions supplying level paragraph properties
        table_style_paragraph_props: Paragraph properties of the enclosing table style

    Returns:
        Cascaded properties, or ``None`` without a style context
    """
    if style_context is None:
        return None

    attrs = para.get("attrs") or {}
    pprops = attrs.get("paragraphProperties")
    if not isinstance(pprops, dict):
        pprops = {}

    style_id = get_paragraph_style_id(para)
    chain = style_context.resolve_style_chain(style_id or style_context.default_style_id("paragraph"))
    style_sources = [style.get("paragraphProps") or {} for style in chain]
    sources: List[Dict[str, Any]] = _base_paragraph_sources(style_context, chain) + style_sources

    style_merged = combine_properties(sources)
    numbering_properties = get_inline_numbering_properties(para) or style_merged.get("numberingProperties")

    if numbering and isinstance(numbering_properties, dict) and is_valid_numbering_id(numbering_properties.get("numId")):
        level = numbering.resolve_level(numbering_properties.get("numId"), numbering_properties.get("ilvl", 0))
        if level is not None:
            level_source = dict(level.paragraph_props)
            if level.indent:
                level_source["indent"] = dict(level.indent)
            sources.append(level_source)

    sources.append(pprops)
    merged = combine_properties(sources)

    indent = combine_indent_properties(source.get("indent") for source in sources)
    outline_level = merged.get("outlineLvl")
    is_heading = _is_heading(style_id, outline_level)
    if is_heading and not isinstance(pprops.get("indent"), dict):
        indent = _apply_heading_indent_reset(indent)

    spacing = combine_properties(source.get("spacing") for source in sources)
    table_spacing = (table_style_paragraph_props or {}).get("spacing")
    has_explicit_spacing = isinstance(pprops.get("spacing"), dict) or isinstance(attrs.get("spacing"), dict)
    spacing = _merge_table_style_spacing(spacing, table_spacing, has_explicit_spacing)

    return ParagraphStyleProperties(
        style_id=style_id,
        spacing=spacing,
        indent=indent,
        borders=merged.get("borders") if isinstance(merged.get("borders"), dict) else None,
        shading=merged.get("shading") if isinstance(merged.get("shading"), dict) else None,
        alignment=AlignmentNormalizer.normalize(merged.get("justification")),
        tab_stops=merge_tab_stop_sources(*(source.get("tabStops") for source in sources)),
        keep_lines=BooleanNormalizer.normalize(merged.get("keepLines")),
        keep_next=BooleanNormalizer.normalize(merged.get("keepNext")),
        page_break_before=BooleanNormalizer.normalize(merged.get("pageBreakBefore")),
        numbering_properties=dict(numbering_properties) if isinstance(numbering_properties, dict) else None,
        contextual_spacing=BooleanNormalizer.normalize(merged.get("contextualSpacing")),
        outline_level=int(outline_level) if is_finite_number(outline_level) else None,
        is_heading=is_heading,
    )


def hydrate_character_style_attrs(
    para: Optional[Dict[str, Any]],
    style_context: Optional[StyleContext],
    run_props: Optional[Dict[str, Any]] = None,
    run_style_id: Optional[str] = None,
) -> Optional[CharacterStyleProperties]:
    """
    Resolve run properties from defaults, paragraph style, character style and inline props.
    """
    if style_context is None:
        return None

    defaults = style_context.defaults.get("runProps") or {}
    normal = style_context.normal_style()
    normal_props = (normal or {}).get("runProps") or {}

    paragraph_chain = style_context.resolve_style_chain(
        get_paragraph_style_id(para or {}) or style_context.default_style_id("paragraph")
    )
    character_chain = style_context.resolve_style_chain(run_style_id) if run_style_id else []

    base = order_defaults_and_normal(
        defaults,
        {} if any(style is normal for style in paragraph_chain) else normal_props,
        style_context.is_normal_default(),
    )
    inline = run_props or {}
    chain = (
        base
        + [style.get("runProps") or {} for style in paragraph_chain]
        + [style.get("runProps") or {} for style in character_chain]
        + [inline]
    )
    resolved = apply_inline_overrides(combine_run_properties(chain), inline)

    font_size = resolve_font_size_with_fallback(pick_number(resolved.get("fontSize")), defaults, normal_props)
    letter_spacing = pick_number(resolved.get("letterSpacing"))
    highlight = resolved.get("highlight")
    if isinstance(highlight, dict):
        highlight = highlight.get("val") or highlight.get("w:val")
    return CharacterStyleProperties(
        font_family=FontNormalizer.normalize_family(resolved.get("fontFamily")),
        font_size=font_size,
        bold=BooleanNormalizer.normalize(resolved.get("bold")),
        italic=BooleanNormalizer.normalize(resolved.get("italic")),
        strike=BooleanNormalizer.normalize(resolved.get("strike")),
        underline=UnderlineNormalizer.normalize(resolved.get("underline")),
        color=ColorNormalizer.normalize(resolved.get("color")),
        letter_spacing=letter_spacing,
        highlight=highlight if isinstance(highlight, str) and highlight != "none" else None,
        vert_align=resolved.get("vertAlign") if isinstance(resolved.get("vertAlign"), str) else None,
    )
