"""Paragraph spacing and contextual spacing."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models.paragraph import ParagraphSpacing
from ..styles.cascade import merge_spacing_sources
from ..utils.coerce import pick_number, to_ooxml_boolean
from ..utils.units import twips_to_px

AUTO_LINE_DIVISOR = 240


def _line_rule(*sources: Any) -> Optional[str]:
    rule = None
    for source in sources:
        if isinstance(source, dict) and isinstance(source.get("lineRule"), str):
            rule = source["lineRule"]
    return rule


def spacing_twips_to_px(spacing: Any, fallback_line_rule: Optional[str] = None) -> Dict[str, Any]:
    """
    Convert a twips spacing dict to pixels.

    ``line`` with an ``auto`` rule is a multiple of 240ths and becomes a
    plain multiplier instead.
    """
    if not isinstance(spacing, dict):
        return {}
    result: Dict[str, Any] = {}
    rule = spacing.get("lineRule") if isinstance(spacing.get("lineRule"), str) else fallback_line_rule
    for key in ("before", "after"):
        number = pick_number(spacing.get(key))
        if number is not None:
            result[key] = twips_to_px(number)
    line = pick_number(spacing.get("line"))
    if line is not None:
        result["line"] = line / AUTO_LINE_DIVISOR if rule == "auto" else twips_to_px(line)
    if isinstance(spacing.get("lineRule"), str):
        result["lineRule"] = spacing["lineRule"]
    for key in ("beforeAutospacing", "afterAutospacing"):
        flag = to_ooxml_boolean(spacing.get(key))
        if flag is not None:
            result[key] = flag
    return result


def _direct_spacing(spacing: Any) -> Dict[str, Any]:
    if not isinstance(spacing, dict):
        return {}
    result: Dict[str, Any] = {}
    for key in ("before", "after", "line"):
        number = pick_number(spacing.get(key))
        if number is not None:
            result[key] = number
    if isinstance(spacing.get("lineRule"), str):
        result["lineRule"] = spacing["lineRule"]
    for key in ("beforeAutospacing", "afterAutospacing"):
        flag = to_ooxml_boolean(spacing.get(key))
        if flag is not None:
            result[key] = flag
    return result


def resolve_paragraph_spacing(
    hydrated_spacing: Optional[Dict[str, Any]],
    paragraph_props: Dict[str, Any],
    attrs: Dict[str, Any],
) -> Optional[ParagraphSpacing]:
    """Merge hydrated (twips), inline (twips) and direct (px) spacing; zeros are kept."""
    inline = paragraph_props.get("spacing")
    rule = _line_rule(hydrated_spacing, inline, attrs.get("spacing"))
    merged = merge_spacing_sources(
        spacing_twips_to_px(hydrated_spacing, rule),
        spacing_twips_to_px(inline, rule),
        _direct_spacing(attrs.get("spacing")),
    )
    if not merged:
        return None
    return ParagraphSpacing(
        before=merged.get("before"),
        after=merged.get("after"),
        line=merged.get("line"),
        line_rule=merged.get("lineRule"),
        before_autospacing=merged.get("beforeAutospacing"),
        after_autospacing=merged.get("afterAutospacing"),
    )


def resolve_contextual_spacing(
    attrs: Dict[str, Any],
    paragraph_props: Dict[str, Any],
    hydrated_value: Optional[bool],
) -> Optional[bool]:
    """
    First defined value of: ``attrs.spacing.contextualSpacing``,
    ``paragraphProperties.contextualSpacing``, ``attrs.contextualSpacing``,
    then the style value.
    """
    spacing = attrs.get("spacing")
    candidates = (
        spacing.get("contextualSpacing") if isinstance(spacing, dict) else None,
        paragraph_props.get("contextualSpacing"),
        attrs.get("contextualSpacing"),
    )
    for candidate in candidates:
        flag = to_ooxml_boolean(candidate)
        if flag is not None:
            return flag
    return hydrated_value
