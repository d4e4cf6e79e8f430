"""Paragraph indent resolution."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models.paragraph import ParagraphIndent
from ..styles.cascade import combine_indent_properties, drop_zero_horizontal_indent
from ..utils.coerce import pick_number
from ..utils.units import twips_to_px

INDENT_KEYS = ("left", "right", "firstLine", "hanging")
_KEY_ALIASES = {"start": "left", "end": "right"}


def normalize_indent(value: Any, convert_twips: bool = False) -> Dict[str, float]:
    """Return the numeric indent fields of ``value``, converted to px when asked."""
    if not isinstance(value, dict):
        return {}
    result: Dict[str, float] = {}
    for raw_key, raw_value in value.items():
        key = _KEY_ALIASES.get(raw_key, raw_key)
        if key not in INDENT_KEYS:
            continue
        number = pick_number(raw_value)
        if number is None:
            continue
        result[key] = twips_to_px(number) if convert_twips else number
    return result


def _text_indent_source(value: Any) -> Dict[str, float]:
    if isinstance(value, dict):
        return normalize_indent(value, convert_twips=True)
    number = pick_number(value)
    if number is None:
        return {}
    return {"firstLine": twips_to_px(number)}


def resolve_paragraph_indent(
    hydrated_indent: Optional[Dict[str, Any]],
    paragraph_props: Dict[str, Any],
    attrs: Dict[str, Any],
) -> Optional[ParagraphIndent]:
    """
    Merge indent sources, lowest precedence first.

    Hydrated style indent (twips), ``paragraphProperties.indent`` (twips),
    ``attrs.textIndent`` (twips) and ``attrs.indent`` (px). A higher source
    setting ``firstLine`` clears a lower ``hanging`` and vice versa; zero
    ``left``/``right`` values are dropped from the result.
    """
    merged = combine_indent_properties(
        [
            normalize_indent(hydrated_indent, convert_twips=True),
            normalize_indent(paragraph_props.get("indent"), convert_twips=True),
            _text_indent_source(attrs.get("textIndent")),
            normalize_indent(attrs.get("indent")),
        ]
    )
    merged = drop_zero_horizontal_indent({key: value for key, value in merged.items() if value is not None})
    if not merged:
        return None
    return ParagraphIndent(
        left=merged.get("left"),
        right=merged.get("right"),
        first_line=merged.get("firstLine"),
        hanging=merged.get("hanging"),
    )
