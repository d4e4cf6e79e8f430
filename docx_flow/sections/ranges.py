"""Section range analysis over a whole document."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..exceptions import SectionError
from ..models.section import SectionData, SectionRange
from .breaks import get_sect_pr_from_node, has_sect_pr
from .extraction import extract_section_data

logger = logging.getLogger(__name__)

# Block containers whose paragraphs take part in section numbering.
SECTION_CONTAINER_TYPES = ("structuredContentBlock", "documentSection", "documentPartObject")


def iter_section_paragraphs(doc: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """Yield body-level paragraphs in document order, descending into block containers."""
    for node in doc.get("content") or []:
        if not isinstance(node, dict):
            continue
        if node.get("type") == "paragraph":
            yield node
        elif node.get("type") in SECTION_CONTAINER_TYPES:
            yield from iter_section_paragraphs(node)


def _body_section_data(body_sect_pr: Any) -> Optional[SectionData]:
    if not isinstance(body_sect_pr, dict) or not isinstance(body_sect_pr.get("elements"), list):
        return None
    elements = body_sect_pr["elements"]
    holder = {"type": "paragraph", "attrs": {"paragraphProperties": {"sectPr": body_sect_pr}}}
    data = extract_section_data(holder)
    if data is None:
        return None
    has_type = any(isinstance(element, dict) and element.get("name") == "w:type" for element in elements)
    if not has_type:
        return SectionData(
            type="continuous",
            margins=data.margins,
            page_size=data.page_size,
            orientation=data.orientation,
            columns=data.columns,
            numbering=data.numbering,
            header_refs=data.header_refs,
            footer_refs=data.footer_refs,
            v_align=data.v_align,
            title_pg=data.title_pg,
        )
    return data


def analyze_section_ranges(doc: Any, body_sect_pr: Any = None, strict: bool = False) -> List[SectionRange]:
    """
    Split the document's paragraphs into ordered section ranges.

    A paragraph carrying ``sectPr`` closes the range it belongs to. Paragraphs
    after the last such marker form the final range, described by the body
    section properties (type ``continuous`` unless stated).
    With ``strict`` a body section that is not a mapping raises
    :class:`SectionError`.
    """
    if not isinstance(doc, dict):
        return []
    if strict and body_sect_pr is not None and not isinstance(body_sect_pr, dict):
        raise SectionError("Body section properties must be a mapping", {"type": type(body_sect_pr).__name__})

    ranges: List[SectionRange] = []
    start = 0
    index = -1
    for index, para in enumerate(iter_section_paragraphs(doc)):
        if not has_sect_pr(para):
            continue
        data = extract_section_data(para) or SectionData(type="nextPage")
        ranges.append(
            SectionRange(
                section_index=len(ranges),
                start_paragraph_index=start,
                end_paragraph_index=index,
                data=data,
                sect_pr=get_sect_pr_from_node(para),
            )
        )
        start = index + 1

    body_data = _body_section_data(body_sect_pr)
    trailing = index >= start
    if body_data is not None or (ranges and trailing):
        ranges.append(
            SectionRange(
                section_index=len(ranges),
                start_paragraph_index=start,
                end_paragraph_index=max(index, start),
                data=body_data or SectionData(type="continuous"),
                sect_pr=body_sect_pr if isinstance(body_sect_pr, dict) else None,
            )
        )

    logger.debug(f"Analyzed {len(ranges)} section range(s)")
    return ranges
