"""
Priority-ordered merging of partial property dicts.

Sources are ordered from lowest to highest precedence. Inputs are never
mutated; every merge works on copies.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from ..utils.coerce import is_finite_number, pick_number

logger = logging.getLogger(__name__)

SpecialHandler = Callable[[Dict[str, Any], Dict[str, Any]], Any]

INLINE_OVERRIDE_PROPERTIES = ("fontSize", "bold", "italic", "strike", "underline", "letterSpacing")
DEFAULT_FONT_SIZE_HALF_POINTS = 20
RUN_FULL_OVERRIDE_PROPERTIES = ("fontFamily", "color")


def _merge_into(
    target: Dict[str, Any],
    source: Dict[str, Any],
    full_override_props: Sequence[str],
    special_handling: Dict[str, SpecialHandler],
) -> Dict[str, Any]:
    for key, value in source.items():
        if key in full_override_props:
            target[key] = copy.deepcopy(value)
        elif key in special_handling:
            target[key] = special_handling[key](target, source)
        elif isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = _merge_into(dict(target[key]), value, full_override_props, special_handling)
        else:
            target[key] = copy.deepcopy(value)
    return target


def combine_properties(
    sources: Iterable[Optional[Dict[str, Any]]],
    full_override_props: Sequence[str] = (),
    special_handling: Optional[Dict[str, SpecialHandler]] = None,
) -> Dict[str, Any]:
    """
    Deep-merge property dicts, lowest precedence first.

    Args:
        sources: Property dicts; ``None`` and non-dict entries count as empty
        full_override_props: Keys replaced wholesale instead of deep-merged
        special_handling: Per-key handlers ``(target, source) -> value``;
            they apply at every nesting level and may delete target keys

    Returns:
        The merged dict (empty when every source is empty)
    """
    handlers = special_handling or {}
    result: Dict[str, Any] = {}
    for source in sources:
        if not isinstance(source, dict):
            continue
        result = _merge_into(result, source, full_override_props, handlers)
    return result


def combine_run_properties(sources: Iterable[Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    return combine_properties(sources, full_override_props=RUN_FULL_OVERRIDE_PROPERTIES)


def first_line_indent_handler(target: Dict[str, Any], source: Dict[str, Any]) -> Any:
    if target.get("hanging") is not None and source.get("firstLine") is not None:
        del target["hanging"]
    return source.get("firstLine")


def hanging_indent_handler(target: Dict[str, Any], source: Dict[str, Any]) -> Any:
    if target.get("firstLine") is not None and source.get("hanging") is not None:
        del target["firstLine"]
    return source.get("hanging")


INDENT_HANDLERS: Dict[str, SpecialHandler] = {
    "firstLine": first_line_indent_handler,
    "hanging": hanging_indent_handler,
}


def combine_indent_properties(chain: Iterable[Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    """
    Merge the ``indent`` members of a paragraph property chain.

    A higher source setting ``firstLine`` removes a lower ``hanging`` and
    vice versa, so at most one of the two survives.
    """
    wrapped = [{"indent": entry} for entry in chain if isinstance(entry, dict)]
    merged = combine_properties(wrapped, special_handling=INDENT_HANDLERS)
    return dict(merged.get("indent") or {})


def drop_zero_horizontal_indent(indent: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Remove ``left``/``right`` zeros; ``firstLine``/``hanging`` zeros are kept."""
    if not indent:
        return {}
    return {key: value for key, value in indent.items() if not (key in ("left", "right") and value == 0)}


def apply_inline_overrides(
    final_props: Dict[str, Any],
    inline_props: Optional[Dict[str, Any]],
    override_keys: Sequence[str] = INLINE_OVERRIDE_PROPERTIES,
) -> Dict[str, Any]:
    """Copy non-null inline run values over the cascaded result."""
    result = dict(final_props)
    if not inline_props:
        return result
    for key in override_keys:
        value = inline_props.get(key)
        if value is not None:
            result[key] = value
    return result


def is_valid_font_size(value: Any) -> bool:
    return is_finite_number(value) and value > 0


def resolve_font_size_with_fallback(
    value: Any,
    defaults: Optional[Dict[str, Any]],
    normal: Optional[Dict[str, Any]],
) -> float:
    """Return the first valid half-point size from value, defaults, Normal, then 20."""
    if is_valid_font_size(value):
        return value
    for source in (defaults, normal):
        candidate = (source or {}).get("fontSize")
        if is_valid_font_size(candidate):
            return candidate
    return DEFAULT_FONT_SIZE_HALF_POINTS


def order_defaults_and_normal(
    defaults: Optional[Dict[str, Any]],
    normal: Optional[Dict[str, Any]],
    is_normal_default: bool,
) -> List[Dict[str, Any]]:
    """
    Order document defaults and the Normal style for cascading.

    When Normal is flagged as the default paragraph style it overrides the
    document defaults; otherwise the defaults override Normal.
    """
    defaults = defaults or {}
    normal = normal or {}
    return [defaults, normal] if is_normal_default else [normal, defaults]


# ----------------------------------------------------------------------
# Spacing and tab stops
# ----------------------------------------------------------------------
def merge_spacing_sources(*sources: Any) -> Optional[Dict[str, Any]]:
    """Field-by-field spacing override; zeros are kept, ``None`` when all empty."""
    merged: Dict[str, Any] = {}
    for source in sources:
        if not isinstance(source, dict):
            continue
        for key, value in source.items():
            if value is not None:
                merged[key] = value
    return merged or None


def normalize_tab_position(tab: Dict[str, Any]) -> Optional[float]:
    for key in ("originalPos", "pos", "position", "offset"):
        number = pick_number(tab.get(key))
        if number is not None:
            return number
    return None


def merge_tab_stop_sources(*sources: Any) -> Optional[List[Dict[str, Any]]]:
    """
    Merge tab stop lists keyed by normalized position.

    Later sources overwrite earlier entries at the same position. The
    result is sorted ascending, or ``None`` when nothing remains.
    """
    by_position: Dict[float, Dict[str, Any]] = {}
    for source in sources:
        if not isinstance(source, (list, tuple)):
            continue
        for tab in source:
            if not isinstance(tab, dict):
                continue
            position = normalize_tab_position(tab)
            if position is None or (isinstance(position, float) and math.isnan(position)):
                continue
            by_position[position] = dict(tab)
    if not by_position:
        return None
    return [by_position[position] for position in sorted(by_position)]
