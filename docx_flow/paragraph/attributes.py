"""
Paragraph attribute resolution.

:func:`compute_paragraph_attrs` merges, in ascending precedence, document
defaults, table-style paragraph properties, the named style chain, the
numbering level, inline ``paragraphProperties`` and direct node attributes
into one :class:`ResolvedParagraphAttributes`.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from ..context import ConverterContext
from ..models.paragraph import NumberingProperties, ResolvedParagraphAttributes
from ..normalize import (
    AlignmentNormalizer,
    BooleanNormalizer,
    ColorNormalizer,
    FontNormalizer,
    normalize_paragraph_borders,
    normalize_paragraph_shading,
)
from ..numbering.counters import ListCounterContext, advance_list_counter
from ..numbering.definitions import (
    LevelDefinition,
    NumberingDefinitions,
    format_marker_text,
    is_valid_numbering_id,
)
from ..numbering.path import build_numbering_path
from ..styles.cascade import combine_properties
from ..styles.context import StyleContext
from ..styles.hydration import ParagraphStyleProperties, hydrate_paragraph_style_attrs
from ..utils.coerce import pick_number, to_ooxml_boolean
from .alignment import resolve_alignment
from .frame import build_drop_cap_descriptor, extract_frame, float_alignment_for
from .indent import resolve_paragraph_indent
from .list_rendering import (
    SYNTHETIC_NUM_ID,
    normalize_list_rendering_attrs,
    synthesize_numbering_from_list_rendering,
)
from .spacing import resolve_contextual_spacing, resolve_paragraph_spacing, spacing_twips_to_px
from .tabs import resolve_tab_stops
from .word_layout import compute_word_layout

logger = logging.getLogger(__name__)


def _paragraph_props(attrs: Dict[str, Any]) -> Dict[str, Any]:
    pprops = attrs.get("paragraphProperties")
    return pprops if isinstance(pprops, dict) else {}


def _find_element(paragraph_props: Dict[str, Any], names: Sequence[str]) -> Optional[Dict[str, Any]]:
    elements = paragraph_props.get("elements")
    if not isinstance(elements, list):
        return None
    for element in elements:
        if isinstance(element, dict) and element.get("name") in names:
            return element
    return None


def resolve_paragraph_boolean_attr(
    para: Dict[str, Any],
    key: str,
    element_names: Sequence[str] = (),
) -> Optional[bool]:
    """
    Resolve an on/off paragraph flag.

    Direct attribute, then ``paragraphProperties``, then a raw element whose
    missing ``w:val`` means ``True``.
    """
    attrs = para.get("attrs") or {}
    for source in (attrs, _paragraph_props(attrs)):
        flag = to_ooxml_boolean(source.get(key))
        if flag is not None:
            return flag
    element = _find_element(_paragraph_props(attrs), element_names)
    if element is not None:
        value = (element.get("attributes") or {}).get("w:val")
        return True if value is None else bool(to_ooxml_boolean(value))
    return None


def has_page_break_before(para: Dict[str, Any]) -> bool:
    return bool(resolve_paragraph_boolean_attr(para, "pageBreakBefore", ("w:pageBreakBefore",)))


def _explicit_numbering(attrs: Dict[str, Any], paragraph_props: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for candidate in (attrs.get("numberingProperties"), paragraph_props.get("numberingProperties")):
        if isinstance(candidate, dict):
            return candidate
    return None


def _level_index(value: Any) -> int:
    number = pick_number(value)
    if number is None:
        return 0
    return max(int(math.floor(number)), 0)


def _resolve_marker_rpr(level: Optional[LevelDefinition]) -> Optional[Dict[str, Any]]:
    if level is None or not level.marker_run:
        return None
    run = level.marker_run
    rpr: Dict[str, Any] = {}
    family = FontNormalizer.normalize_family(run.get("fontFamily") or run.get("rFonts"))
    if family:
        rpr["fontFamily"] = family
    size = pick_number(run.get("fontSize") if run.get("fontSize") is not None else run.get("sz"))
    if size is not None:
        rpr["fontSize"] = size
    color = ColorNormalizer.normalize(run.get("color"))
    if color:
        rpr["color"] = color
    for key in ("bold", "italic"):
        flag = BooleanNormalizer.normalize(run.get(key))
        if flag is not None:
            rpr[key] = flag
    return rpr or None


def _numbering_path(
    num_id: Any,
    ilvl: int,
    counter_value: int,
    counter_context: Optional[ListCounterContext],
    numbering: Optional[NumberingDefinitions],
) -> List[int]:
    path = build_numbering_path(num_id, ilvl, counter_value, counter_context)
    if counter_context is None or numbering is None:
        return path
    for parent_level in range(ilvl):
        if counter_context.get(num_id, parent_level) > 0:
            parent = numbering.resolve_level(num_id, parent_level)
            if parent is not None:
                path[parent_level] += parent.start - 1
    return path


def resolve_numbering_properties(
    reference: Dict[str, Any],
    numbering: Optional[NumberingDefinitions],
    counter_context: Optional[ListCounterContext],
) -> NumberingProperties:
    """
    Resolve a valid numbering reference into marker data.

    Explicit fields on the reference win over the level definition. The
    counter context is advanced at the paragraph level and reset below it.
    """
    num_id = reference.get("numId")
    ilvl = _level_index(reference.get("ilvl"))
    synthetic = num_id == SYNTHETIC_NUM_ID and isinstance(reference.get("path"), list)
    level = None if synthetic or numbering is None else numbering.resolve_level(num_id, ilvl)
    start = level.start if level else 1

    if counter_context is not None:
        counter_value = advance_list_counter(counter_context, num_id, ilvl) + start - 1
    else:
        counter_value = start

    if synthetic:
        path = list(reference["path"])
        counter_value = reference.get("counterValue", path[-1])
    else:
        explicit_counter = pick_number(reference.get("counterValue"))
        if counter_context is None and explicit_counter is not None:
            counter_value = int(explicit_counter)
        path = _numbering_path(num_id, ilvl, counter_value, counter_context, numbering)

    fmt = reference.get("format") or (level.format if level else None)
    lvl_text = reference.get("lvlText") or (level.lvl_text if level else None)
    marker_text = reference.get("markerText")
    if marker_text is None and (level is not None or lvl_text is not None):
        formats = numbering.level_formats(num_id, ilvl) if numbering is not None else []
        if formats:
            formats[-1] = fmt
        else:
            formats = [None] * ilvl + [fmt]
        marker_text = format_marker_text(lvl_text, path, formats)

    indent = reference.get("resolvedLevelIndent") or (dict(level.indent) if level and level.indent else None)
    return NumberingProperties(
        num_id=num_id,
        ilvl=ilvl,
        path=tuple(path),
        counter_value=counter_value,
        marker_text=marker_text,
        format=fmt,
        lvl_text=lvl_text,
        start=start if level else reference.get("start"),
        lvl_jc=reference.get("lvlJc") or (level.lvl_jc if level else None),
        suffix=reference.get("suffix") or (level.suffix if level else None),
        resolved_level_indent=indent,
        resolved_marker_rpr=reference.get("resolvedMarkerRpr") or _resolve_marker_rpr(level),
    )


def _merged_decoration(
    hydrated_value: Optional[Dict[str, Any]],
    paragraph_props: Dict[str, Any],
    attrs: Dict[str, Any],
    key: str,
) -> Optional[Dict[str, Any]]:
    merged = combine_properties([hydrated_value, paragraph_props.get(key), attrs.get(key)])
    return merged or None


def compute_paragraph_attrs(
    para: Any,
    style_context: Optional[StyleContext] = None,
    list_counter_context: Optional[ListCounterContext] = None,
    converter_context: Optional[ConverterContext] = None,
    hydration_override: Optional[ParagraphStyleProperties] = None,
) -> Optional[ResolvedParagraphAttributes]:
    """
    Resolve the final attributes of one paragraph.

    Args:
        para: Paragraph node
        style_context: Style sheet used for hydration
        list_counter_context: Counter store advanced for numbered paragraphs
        converter_context: Pass state (numbering definitions, table style, options)
        hydration_override: Precomputed style cascade replacing hydration

    Returns:
        Resolved attributes, or ``None`` when ``para`` is not a node
    """
    if not isinstance(para, dict):
        return None

    attrs = para.get("attrs") or {}
    paragraph_props = _paragraph_props(attrs)
    context = converter_context
    if style_context is None and context is not None:
        style_context = context.style_context
    numbering = context.numbering if context is not None else (
        NumberingDefinitions(style_context.numbering) if style_context else None
    )
    options = context.options if context is not None else None

    hydrated = hydration_override
    if hydrated is None:
        hydrated = hydrate_paragraph_style_attrs(
            para,
            style_context,
            numbering=numbering,
            table_style_paragraph_props=context.table_style_paragraph_props if context else None,
        )
    if hydrated is None:
        hydrated = ParagraphStyleProperties(style_id=attrs.get("styleId") if isinstance(attrs.get("styleId"), str) else None)
        table_props = context.table_style_paragraph_props if context else None
        if table_props and isinstance(table_props.get("spacing"), dict):
            hydrated.spacing = dict(table_props["spacing"])

    alignment = resolve_alignment(attrs, paragraph_props, hydrated.alignment)
    indent = resolve_paragraph_indent(hydrated.indent, paragraph_props, attrs)
    spacing = resolve_paragraph_spacing(hydrated.spacing, paragraph_props, attrs)
    contextual_spacing = resolve_contextual_spacing(attrs, paragraph_props, hydrated.contextual_spacing)
    tabs = resolve_tab_stops(hydrated.tab_stops, paragraph_props, attrs)

    reference = _explicit_numbering(attrs, paragraph_props) or hydrated.numbering_properties
    if reference is None:
        reference = synthesize_numbering_from_list_rendering(
            normalize_list_rendering_attrs(attrs.get("listRendering"))
        )

    default_font = options.default_font if options else "Arial"
    default_size = options.default_size if options else 16
    default_tab_interval = (style_context.default_tab_interval_twips if style_context else None) or (
        options.default_tab_interval_twips if options else None
    )

    numbering_properties = None
    word_layout = None
    if reference is not None and is_valid_numbering_id(reference.get("numId")):
        numbering_properties = resolve_numbering_properties(reference, numbering, list_counter_context)
        word_layout = compute_word_layout(
            indent,
            numbering_properties,
            default_font=default_font,
            default_size=default_size,
            default_tab_interval_twips=default_tab_interval,
        )
    elif reference is not None:
        logger.debug(f"Numbering disabled for paragraph (numId={reference.get('numId')!r})")

    frame = extract_frame(attrs, paragraph_props)
    drop_cap_descriptor = build_drop_cap_descriptor(para, frame, default_font, default_size)

    decimal_separator = (options.decimal_separator if options else None) or (
        style_context.decimal_separator if style_context else None
    )

    keep_lines = resolve_paragraph_boolean_attr(para, "keepLines", ("w:keepLines",))
    keep_next = resolve_paragraph_boolean_attr(para, "keepNext", ("w:keepNext",))
    page_break_before = resolve_paragraph_boolean_attr(para, "pageBreakBefore", ("w:pageBreakBefore",))

    return ResolvedParagraphAttributes(
        style_id=hydrated.style_id,
        alignment=alignment.alignment,
        indent=indent,
        spacing=spacing,
        contextual_spacing=contextual_spacing,
        borders=normalize_paragraph_borders(
            _merged_decoration(hydrated.borders, paragraph_props, attrs, "borders")
        ),
        shading=normalize_paragraph_shading(
            _merged_decoration(hydrated.shading, paragraph_props, attrs, "shading")
        ),
        tabs=tabs,
        numbering_properties=numbering_properties,
        word_layout=word_layout,
        direction=alignment.direction,
        rtl=alignment.rtl,
        float_alignment=float_alignment_for(frame),
        frame=frame,
        drop_cap=frame.drop_cap if frame else None,
        drop_cap_descriptor=drop_cap_descriptor,
        decimal_separator=decimal_separator,
        default_tab_interval_twips=default_tab_interval,
        keep_lines=keep_lines if keep_lines is not None else hydrated.keep_lines,
        keep_next=keep_next if keep_next is not None else hydrated.keep_next,
        page_break_before=page_break_before if page_break_before is not None else hydrated.page_break_before,
    )


# ----------------------------------------------------------------------
# Attribute merging helpers
# ----------------------------------------------------------------------
_DEEP_MERGE_KEYS = ("spacing", "indent", "borders", "shading")


def merge_paragraph_attrs(
    base: Optional[Dict[str, Any]],
    override: Optional[Dict[str, Any]],
) -> Optional[Dict[str, Any]]:
    """
    Overlay ``override`` on ``base`` without mutating either.

    ``spacing``, ``indent``, ``borders`` and ``shading`` are merged key by
    key; everything else is replaced.
    """
    if base is None:
        return copy.deepcopy(override) if override is not None else None
    if override is None:
        return copy.deepcopy(base)
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if key in _DEEP_MERGE_KEYS and isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **copy.deepcopy(value)}
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def convert_list_paragraph_attrs(attrs: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert list-level paragraph properties (twips) into flow paragraph attrs."""
    if not isinstance(attrs, dict):
        return None
    result: Dict[str, Any] = {}
    alignment = AlignmentNormalizer.normalize(attrs.get("justification") or attrs.get("alignment")) \
        or AlignmentNormalizer.normalize(attrs.get("lvlJc"))
    if alignment:
        result["alignment"] = alignment
    spacing = spacing_twips_to_px(attrs.get("spacing"))
    if spacing:
        result["spacing"] = spacing
    shading = normalize_paragraph_shading(attrs.get("shading"))
    if shading:
        result["shading"] = shading
    return result or None

