"""
Section geometry extraction.

Reads the ``sectPr`` element list carried in a paragraph's
``paragraphProperties`` (lengths in twips) and the normalized
``attrs.sectionMargins`` (inches) into a :class:`SectionData`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models.section import ColumnLayout, PageNumbering, PageSize, SectionData, SectionMargins
from ..utils.coerce import pick_number
from ..utils.units import PX_PER_INCH, TWIPS_PER_INCH, inches_to_px, twips_to_px

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_GAP_INCHES = 0.5

SECTION_TYPES = ("continuous", "nextPage", "evenPage", "oddPage")
VERTICAL_ALIGNMENTS = ("top", "center", "bottom", "both")
HEADER_FOOTER_REF_TYPES = ("default", "first", "even", "odd")
PAGE_NUMBER_FORMATS = (
    "decimal",
    "lowerLetter",
    "upperLetter",
    "lowerRoman",
    "upperRoman",
    "numberInDash",
)


def parse_column_count(raw_value: Any) -> int:
    """Column count from ``w:num``; missing, invalid or non-positive means one column."""
    if raw_value is None:
        return 1
    count = pick_number(raw_value)
    return int(count) if count is not None and count > 0 else 1


def parse_column_gap(gap_twips: Any) -> float:
    """Column gap from ``w:space`` in inches, defaulting to half an inch."""
    if gap_twips is None:
        return DEFAULT_COLUMN_GAP_INCHES
    gap = pick_number(gap_twips)
    return gap / TWIPS_PER_INCH if gap is not None else DEFAULT_COLUMN_GAP_INCHES


def get_sect_pr_elements(para: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(para, dict):
        return None
    attrs = para.get("attrs") or {}
    paragraph_props = attrs.get("paragraphProperties")
    if not isinstance(paragraph_props, dict):
        return None
    sect_pr = paragraph_props.get("sectPr")
    if not isinstance(sect_pr, dict) or not isinstance(sect_pr.get("elements"), list):
        return None
    return [element for element in sect_pr["elements"] if isinstance(element, dict)]


def _find(elements: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    for element in elements:
        if element.get("name") == name:
            return element
    return None


def _attributes(element: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if element is None:
        return {}
    attributes = element.get("attributes")
    return attributes if isinstance(attributes, dict) else {}


def _twips_attr(attributes: Dict[str, Any], key: str) -> Optional[float]:
    value = pick_number(attributes.get(key))
    return twips_to_px(value) if value is not None else None


def _normalized_margins(attrs: Dict[str, Any]) -> Tuple[Optional[float], Optional[float]]:
    section_margins = attrs.get("sectionMargins")
    if not isinstance(section_margins, dict):
        return None, None
    header = section_margins.get("header")
    footer = section_margins.get("footer")
    return (
        inches_to_px(header) if isinstance(header, (int, float)) and not isinstance(header, bool) else None,
        inches_to_px(footer) if isinstance(footer, (int, float)) and not isinstance(footer, bool) else None,
    )


def _section_type(elements: List[Dict[str, Any]]) -> str:
    value = _attributes(_find(elements, "w:type")).get("w:val")
    return value if value in SECTION_TYPES else "nextPage"


def _page_size_and_orientation(
    elements: List[Dict[str, Any]],
) -> Tuple[Optional[PageSize], Optional[str]]:
    attributes = _attributes(_find(elements, "w:pgSz"))
    if not attributes:
        return None, None

    width = _twips_attr(attributes, "w:w")
    height = _twips_attr(attributes, "w:h")
    page_size = PageSize(w=width, h=height) if width is not None and height is not None else None

    orientation = attributes.get("w:orient")
    if orientation not in ("portrait", "landscape"):
        orientation = None
        if width is not None and height is not None:
            orientation = "portrait" if height > width else "landscape"
    return page_size, orientation


def _margins(
    elements: List[Dict[str, Any]],
    header: Optional[float],
    footer: Optional[float],
) -> SectionMargins:
    attributes = _attributes(_find(elements, "w:pgMar"))
    return SectionMargins(
        header=header if header is not None else _twips_attr(attributes, "w:header"),
        footer=footer if footer is not None else _twips_attr(attributes, "w:footer"),
        top=_twips_attr(attributes, "w:top"),
        right=_twips_attr(attributes, "w:right"),
        bottom=_twips_attr(attributes, "w:bottom"),
        left=_twips_attr(attributes, "w:left"),
        gutter=_twips_attr(attributes, "w:gutter"),
    )


def _header_footer_refs(elements: List[Dict[str, Any]], ref_name: str) -> Optional[Dict[str, str]]:
    refs: Dict[str, str] = {}
    for element in elements:
        if element.get("name") != ref_name:
            continue
        attributes = _attributes(element)
        ref_type = attributes.get("w:type")
        key = ref_type if ref_type in HEADER_FOOTER_REF_TYPES else "default"
        rel_id = attributes.get("r:id")
        if isinstance(rel_id, (str, int, float)) and not isinstance(rel_id, bool):
            refs[key] = str(rel_id)
    return refs or None


def _page_numbering(elements: List[Dict[str, Any]]) -> Optional[PageNumbering]:
    attributes = _attributes(_find(elements, "w:pgNumType"))
    if not attributes:
        return None
    fmt = attributes.get("w:fmt")
    fmt = fmt if fmt in PAGE_NUMBER_FORMATS else None
    start = pick_number(attributes.get("w:start"))
    if fmt is None and start is not None:
        fmt = "decimal"
    return PageNumbering(format=fmt, start=int(start) if start is not None else None)


def _columns(elements: List[Dict[str, Any]]) -> Optional[ColumnLayout]:
    attributes = _attributes(_find(elements, "w:cols"))
    if not attributes:
        return None
    return ColumnLayout(
        count=parse_column_count(attributes.get("w:num")),
        gap=parse_column_gap(attributes.get("w:space")) * PX_PER_INCH,
    )


def _vertical_align(elements: List[Dict[str, Any]]) -> Optional[str]:
    value = _attributes(_find(elements, "w:vAlign")).get("w:val")
    return value if value in VERTICAL_ALIGNMENTS else None


def extract_section_data(para: Any) -> Optional[SectionData]:
    """
    Extract section geometry from a paragraph node.

    Normalized ``sectionMargins`` win for header/footer distances, with
    ``w:pgMar`` as the fallback. Without ``sectPr`` elements only the
    header/footer margins are returned, or ``None`` when there are none.
    """
    if not isinstance(para, dict):
        return None
    attrs = para.get("attrs") or {}
    header, footer = _normalized_margins(attrs)

    elements = get_sect_pr_elements(para)
    if elements is None:
        if header is None and footer is None:
            return None
        return SectionData(margins=SectionMargins(header=header, footer=footer))

    page_size, orientation = _page_size_and_orientation(elements)
    data = SectionData(
        type=_section_type(elements),
        margins=_margins(elements, header, footer),
        page_size=page_size,
        orientation=orientation,
        columns=_columns(elements),
        numbering=_page_numbering(elements),
        header_refs=_header_footer_refs(elements, "w:headerReference"),
        footer_refs=_header_footer_refs(elements, "w:footerReference"),
        v_align=_vertical_align(elements),
        title_pg=_find(elements, "w:titlePg") is not None,
    )
    logger.debug(f"Extracted section data: type={data.type}, orientation={data.orientation}")
    return data
