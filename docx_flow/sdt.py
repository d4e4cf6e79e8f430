"""
Structured content (SDT) metadata.

Normalizes the attributes of field annotations, structured content
containers, document sections and document part objects into stable
camelCase dictionaries, and attaches them to the blocks produced inside
such containers.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .models.blocks import FlowBlock, ParagraphBlock, TableBlock
from .utils.cache import MetadataCache

logger = logging.getLogger(__name__)

FIELD_ANNOTATION_VARIANTS = ("text", "image", "signature", "checkbox", "html", "link")


def _optional_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value)


def _flag(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    if value is None:
        return fallback
    return bool(value)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _color(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.lower() == "none":
        return None
    return text


def _font_size(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip() or None
    return None


def _size(value: Any) -> Optional[Dict[str, float]]:
    if not isinstance(value, dict):
        return None
    size = {key: _number(value.get(key)) for key in ("width", "height")}
    size = {key: number for key, number in size.items() if number is not None}
    return size or None


def _variant(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    lowered = value.lower()
    return lowered if lowered in FIELD_ANNOTATION_VARIANTS else None


def _visibility(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    lowered = value.lower()
    return lowered if lowered in ("visible", "hidden") else None


def _formatting(attrs: Dict[str, Any]) -> Optional[Dict[str, bool]]:
    formatting = {key: True for key in ("bold", "italic", "underline") if _flag(attrs.get(key), False)}
    return formatting or None


def _field_annotation(attrs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "fieldAnnotation",
        "fieldId": _optional_string(attrs.get("fieldId")) or "",
        "variant": _variant(attrs.get("type")),
        "fieldType": _optional_string(attrs.get("fieldType")),
        "displayLabel": _optional_string(attrs.get("displayLabel")),
        "defaultDisplayLabel": _optional_string(attrs.get("defaultDisplayLabel")),
        "alias": _optional_string(attrs.get("alias")),
        "fieldColor": _color(attrs.get("fieldColor")),
        "borderColor": _color(attrs.get("borderColor")),
        "highlighted": _flag(attrs.get("highlighted"), True),
        "fontFamily": _optional_string(attrs.get("fontFamily")),
        "fontSize": _font_size(attrs.get("fontSize")),
        "textColor": _color(attrs.get("textColor")),
        "textHighlight": _color(attrs.get("textHighlight")),
        "linkUrl": _optional_string(attrs.get("linkUrl")),
        "imageSrc": _optional_string(attrs.get("imageSrc")),
        "rawHtml": attrs.get("rawHtml"),
        "size": _size(attrs.get("size")),
        "extras": attrs.get("extras") if isinstance(attrs.get("extras"), dict) else None,
        "multipleImage": _flag(attrs.get("multipleImage"), False),
        "hash": _optional_string(attrs.get("hash")),
        "generatorIndex": _number(attrs.get("generatorIndex")),
        "sdtId": _optional_string(attrs.get("sdtId")),
        "hidden": _flag(attrs.get("hidden"), False),
        "visibility": _visibility(attrs.get("visibility")),
        "isLocked": _flag(attrs.get("isLocked"), False),
        "formatting": _formatting(attrs),
        "marks": attrs.get("marks") if isinstance(attrs.get("marks"), dict) else None,
    }


def _structured_content(node_type: str, attrs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "structuredContent",
        "scope": "block" if node_type == "structuredContentBlock" else "inline",
        "id": _optional_string(attrs.get("id")),
        "tag": _optional_string(attrs.get("tag")),
        "alias": _optional_string(attrs.get("alias")),
        "sdtPr": attrs.get("sdtPr"),
    }


def _document_section(attrs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "documentSection",
        "id": _optional_string(attrs.get("id")),
        "title": _optional_string(attrs.get("title")),
        "description": _optional_string(attrs.get("description")),
        "sectionType": _optional_string(attrs.get("sectionType")),
        "isLocked": _flag(attrs.get("isLocked"), False),
        "sdBlockId": _optional_string(attrs.get("sdBlockId")),
    }


def _doc_part(attrs: Dict[str, Any]) -> Dict[str, Any]:
    gallery = attrs.get("docPartGallery")
    unique_id = attrs.get("id")
    return {
        "type": "docPartObject",
        "gallery": _optional_string(gallery if gallery is not None else attrs.get("gallery")),
        "uniqueId": _optional_string(unique_id if unique_id is not None else attrs.get("uniqueId")),
        "alias": _optional_string(attrs.get("alias")),
        "instruction": _optional_string(attrs.get("instruction")),
    }


def build_sdt_cache_key(node_type: str, attrs: Dict[str, Any], explicit_key: Any = None) -> Optional[str]:
    for candidate in (explicit_key, attrs.get("hash"), attrs.get("id")):
        key = _optional_string(candidate)
        if key:
            return f"{node_type}:{key}"
    return None


def resolve_sdt_metadata(
    node_type: Optional[str],
    attrs: Any,
    cache_key: Any = None,
    cache: Optional[MetadataCache] = None,
) -> Optional[Dict[str, Any]]:
    """
    Normalize SDT attributes for ``node_type``.

    Results are stored in ``cache`` under ``"{node_type}:{key}"`` where the
    key is the explicit key, else the ``hash`` attribute, else ``id``.
    Unsupported node types give ``None``.
    """
    if not node_type:
        return None
    attrs = attrs if isinstance(attrs, dict) else {}
    key = build_sdt_cache_key(node_type, attrs, cache_key)

    if cache is not None and key and key in cache:
        return cache.get(key)

    if node_type == "fieldAnnotation":
        metadata = _field_annotation(attrs)
    elif node_type in ("structuredContent", "structuredContentBlock"):
        metadata = _structured_content(node_type, attrs)
    elif node_type == "documentSection":
        metadata = _document_section(attrs)
    elif node_type == "docPartObject":
        metadata = _doc_part(attrs)
    else:
        logger.debug(f"No SDT metadata for node type {node_type}")
        return None

    if cache is not None and key:
        cache.set(key, metadata)
    return metadata


def resolve_node_sdt_metadata(
    node: Dict[str, Any],
    override_type: Optional[str] = None,
    cache: Optional[MetadataCache] = None,
) -> Optional[Dict[str, Any]]:
    attrs = node.get("attrs")
    if not isinstance(attrs, dict):
        return None
    explicit = None
    for name in ("hash", "id", "fieldId"):
        if isinstance(attrs.get(name), str):
            explicit = attrs[name]
            break
    return resolve_sdt_metadata(override_type or node.get("type"), attrs, explicit, cache)


def apply_sdt_metadata(blocks: List[FlowBlock], metadata: Optional[Dict[str, Any]]) -> List[FlowBlock]:
    """Attach ``metadata`` to paragraphs and tables (and their cell paragraphs)."""
    if not metadata:
        return blocks
    result: List[FlowBlock] = []
    for block in blocks:
        if isinstance(block, ParagraphBlock):
            block.attrs = replace(block.attrs, sdt=metadata)
        elif isinstance(block, TableBlock):
            block.sdt = metadata
            for row in block.rows:
                for cell in row.cells:
                    cell.blocks = apply_sdt_metadata(cell.blocks, metadata)
        result.append(block)
    return result
