"""
Tests for structured content metadata.
"""

from docx_flow.models.blocks import ParagraphBlock, TableBlock, TableCell, TableRow
from docx_flow.models.paragraph import ResolvedParagraphAttributes
from docx_flow.sdt import (
    apply_sdt_metadata,
    build_sdt_cache_key,
    resolve_node_sdt_metadata,
    resolve_sdt_metadata,
)
from docx_flow.utils.cache import MetadataCache


def paragraph_block(block_id="0-paragraph"):
    return ParagraphBlock(id=block_id, runs=[], attrs=ResolvedParagraphAttributes(alignment="left"))


class TestResolveSdtMetadata:
    """Test cases for resolve_sdt_metadata."""

    def test_field_annotation_defaults(self):
        metadata = resolve_sdt_metadata("fieldAnnotation", {})
        assert metadata["type"] == "fieldAnnotation"
        assert metadata["fieldId"] == ""
        assert metadata["highlighted"] is True
        assert metadata["hidden"] is False
        assert metadata["isLocked"] is False
        assert metadata["formatting"] is None

    def test_field_annotation_values(self):
        metadata = resolve_sdt_metadata("fieldAnnotation", {
            "fieldId": " f-1 ",
            "type": "Image",
            "displayLabel": "Photo",
            "fieldColor": "none",
            "borderColor": "#ff0000",
            "highlighted": "false",
            "fontSize": "12pt",
            "size": {"width": "100", "height": None},
            "generatorIndex": "2",
            "visibility": "Hidden",
            "bold": True,
            "underline": "true",
        })
        assert metadata["fieldId"] == "f-1"
        assert metadata["variant"] == "image"
        assert metadata["displayLabel"] == "Photo"
        assert metadata["fieldColor"] is None
        assert metadata["borderColor"] == "#ff0000"
        assert metadata["highlighted"] is False
        assert metadata["fontSize"] == "12pt"
        assert metadata["size"] == {"width": 100.0}
        assert metadata["generatorIndex"] == 2.0
        assert metadata["visibility"] == "hidden"
        assert metadata["formatting"] == {"bold": True, "underline": True}

    def test_structured_content_scope(self):
        inline = resolve_sdt_metadata("structuredContent", {"id": 12, "tag": "customer", "alias": "Customer"})
        block = resolve_sdt_metadata("structuredContentBlock", {"id": "12"})
        assert inline == {
            "type": "structuredContent",
            "scope": "inline",
            "id": "12",
            "tag": "customer",
            "alias": "Customer",
            "sdtPr": None,
        }
        assert block["scope"] == "block"

    def test_document_section(self):
        metadata = resolve_sdt_metadata("documentSection", {"id": "s1", "title": "Terms", "isLocked": "true"})
        assert metadata["title"] == "Terms"
        assert metadata["isLocked"] is True

    def test_doc_part_object(self):
        metadata = resolve_sdt_metadata("docPartObject", {"docPartGallery": "Table of Contents", "id": "99"})
        assert metadata["gallery"] == "Table of Contents"
        assert metadata["uniqueId"] == "99"
        fallback = resolve_sdt_metadata("docPartObject", {"gallery": "Cover Pages", "uniqueId": "u"})
        assert (fallback["gallery"], fallback["uniqueId"]) == ("Cover Pages", "u")

    def test_unsupported_type(self):
        assert resolve_sdt_metadata("paragraph", {}) is None
        assert resolve_sdt_metadata(None, {}) is None

    def test_cache(self):
        cache = MetadataCache()
        first = resolve_sdt_metadata("structuredContent", {"id": "a", "tag": "one"}, cache=cache)
        second = resolve_sdt_metadata("structuredContent", {"id": "a", "tag": "two"}, cache=cache)
        assert second is first
        assert "structuredContent:a" in cache
        assert cache.hits == 1

    def test_cache_key(self):
        assert build_sdt_cache_key("fieldAnnotation", {"hash": "h", "id": "i"}, "explicit") == "fieldAnnotation:explicit"
        assert build_sdt_cache_key("fieldAnnotation", {"hash": "h", "id": "i"}) == "fieldAnnotation:h"
        assert build_sdt_cache_key("fieldAnnotation", {"id": 5}) == "fieldAnnotation:5"
        assert build_sdt_cache_key("fieldAnnotation", {}) is None

    def test_node_metadata(self):
        node = {"type": "structuredContentBlock", "attrs": {"id": "x"}}
        assert resolve_node_sdt_metadata(node)["scope"] == "block"
        assert resolve_node_sdt_metadata(node, override_type="documentSection")["type"] == "documentSection"
        assert resolve_node_sdt_metadata({"type": "structuredContent"}) is None


class TestApplySdtMetadata:
    """Test cases for apply_sdt_metadata."""

    def test_paragraphs_and_tables(self):
        metadata = {"type": "documentSection", "id": "s1"}
        cell_paragraph = paragraph_block("1-paragraph")
        table = TableBlock(id="4-table", rows=[
            TableRow(id="3-row", cells=[TableCell(id="2-cell", blocks=[cell_paragraph])]),
        ])
        blocks = apply_sdt_metadata([paragraph_block(), table], metadata)

        assert blocks[0].attrs.sdt == metadata
        assert blocks[0].attrs.alignment == "left"
        assert blocks[1].sdt == metadata
        assert blocks[1].rows[0].cells[0].blocks[0].attrs.sdt == metadata

    def test_no_metadata(self):
        blocks = [paragraph_block()]
        assert apply_sdt_metadata(blocks, None) is blocks
        assert blocks[0].attrs.sdt is None
