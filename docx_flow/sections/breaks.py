"""Section break blocks and page boundary classification."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..models.blocks import SectionBreakBlock
from ..models.section import SectionData, SectionRange

BlockIdGenerator = Callable[[str], str]


def is_sect_pr_element(value: Any) -> bool:
    return isinstance(value, dict) and value.get("type") == "element" and value.get("name") == "w:sectPr"


def has_sect_pr(node: Any) -> bool:
    """True for a paragraph whose ``paragraphProperties.sectPr`` carries elements."""
    if not isinstance(node, dict) or node.get("type") != "paragraph":
        return False
    paragraph_props = (node.get("attrs") or {}).get("paragraphProperties")
    if not isinstance(paragraph_props, dict):
        return False
    sect_pr = paragraph_props.get("sectPr")
    return is_sect_pr_element(sect_pr) or (isinstance(sect_pr, dict) and isinstance(sect_pr.get("elements"), list))


def get_sect_pr_from_node(node: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(node, dict):
        return None
    paragraph_props = (node.get("attrs") or {}).get("paragraphProperties")
    if not isinstance(paragraph_props, dict):
        return None
    sect_pr = paragraph_props.get("sectPr")
    return sect_pr if isinstance(sect_pr, dict) else None


def is_section_break_block(block: Any) -> bool:
    return isinstance(block, SectionBreakBlock) or (isinstance(block, dict) and block.get("kind") == "sectionBreak")


def shallow_object_equals(x: Optional[Dict[str, Any]], y: Optional[Dict[str, Any]]) -> bool:
    if not x and not y:
        return True
    if not x or not y:
        return False
    if len(x) != len(y):
        return False
    return all(key in y and x[key] == y[key] for key in x)


def signatures_equal(a: Optional[SectionData], b: Optional[SectionData]) -> bool:
    """Compare two section geometries on the fields that affect page setup."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False

    numbering_equal = (a.numbering is None and b.numbering is None) or (
        a.numbering is not None
        and b.numbering is not None
        and a.numbering.format == b.numbering.format
        and a.numbering.start == b.numbering.start
    )
    return (
        bool(a.title_pg) == bool(b.title_pg)
        and a.margins.header == b.margins.header
        and a.margins.footer == b.margins.footer
        and a.page_size == b.page_size
        and a.orientation == b.orientation
        and shallow_object_equals(a.header_refs or {}, b.header_refs or {})
        and shallow_object_equals(a.footer_refs or {}, b.footer_refs or {})
        and a.columns == b.columns
        and numbering_equal
    )


def should_require_page_boundary(current: SectionRange, next_section: Optional[SectionRange]) -> bool:
    """
    True when moving to ``next_section`` must start a new page.

    Only an orientation change or a page size change forces a boundary; both
    override a ``continuous`` section type.
    """
    if next_section is None:
        return False
    if current.orientation and next_section.orientation and current.orientation != next_section.orientation:
        return True
    if current.page_size and next_section.page_size:
        if current.page_size.w != next_section.page_size.w or current.page_size.h != next_section.page_size.h:
            return True
    return False


def create_section_break_block(
    section: SectionRange,
    next_id: BlockIdGenerator,
    extra_attrs: Optional[Dict[str, Any]] = None,
) -> SectionBreakBlock:
    data = section.data
    return SectionBreakBlock(
        id=next_id("sectionBreak"),
        type=data.type,
        margins=section.margins,
        page_size=data.page_size.to_dict() if data.page_size else None,
        orientation=data.orientation,
        columns=data.columns.to_dict() if data.columns else None,
        numbering=data.numbering.to_dict() if data.numbering else None,
        header_refs=dict(data.header_refs) if data.header_refs else None,
        footer_refs=dict(data.footer_refs) if data.footer_refs else None,
        v_align=data.v_align,
        title_pg=data.title_pg or None,
        require_page_boundary=True if (extra_attrs or {}).get("requirePageBoundary") else None,
        attrs={"source": "sectPr", "sectionIndex": section.section_index, **(extra_attrs or {})},
    )
