"""Image node conversion and media hydration."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import mimetypes
import posixpath
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..models.blocks import AnchorConfig, FlowBlock, ImageBlock, TableBlock
from ..utils.coerce import is_finite_number, to_box_spacing
from .placement import get_attrs, is_hidden_drawing, normalize_anchor, normalize_wrap

logger = logging.getLogger(__name__)

BlockIdGenerator = Callable[[str], str]
PositionLookup = Callable[[Dict[str, Any]], Optional[Tuple[int, int]]]
MediaData = Union[bytes, str]

OBJECT_FIT_VALUES = ("contain", "cover", "fill", "scale-down")
PASSTHROUGH_SCHEMES = ("data:", "http://", "https://", "blob:")


def _resolve_display(attrs: Dict[str, Any], inline_wrap: bool) -> str:
    explicit = attrs.get("display")
    if explicit in ("inline", "block"):
        return explicit
    if inline_wrap or attrs.get("inline") is True:
        return "inline"
    return "block"


def _resolve_object_fit(attrs: Dict[str, Any], display: str) -> str:
    explicit = attrs.get("objectFit")
    if explicit in OBJECT_FIT_VALUES:
        return explicit
    if attrs.get("shouldCover") is True:
        return "cover"
    if display == "inline":
        return "scale-down"
    return "contain"


def _adjustment(value: Any) -> Optional[Any]:
    if isinstance(value, str) or is_finite_number(value):
        return value
    return None


def image_node_to_block(
    node: Any,
    next_id: BlockIdGenerator,
    positions: Optional[PositionLookup] = None,
) -> Optional[ImageBlock]:
    """
    Convert an ``image`` node.

    Hidden images and images without a string ``src`` yield ``None``. When a
    wrap is present but no anchor fields resolve, the image is still marked
    anchored. A wrap-level ``behindDoc`` already counts as an anchor field.
    """
    attrs = get_attrs(node)
    if is_hidden_drawing(attrs):
        logger.debug("Skipping hidden image")
        return None
    src = attrs.get("src")
    if not isinstance(src, str) or not src:
        logger.debug("Skipping image without src")
        return None

    size = attrs.get("size") if isinstance(attrs.get("size"), dict) else {}
    width = size.get("width") if is_finite_number(size.get("width")) else None
    height = size.get("height") if is_finite_number(size.get("height")) else None

    wrap = normalize_wrap(attrs.get("wrap"))
    anchor = normalize_anchor(attrs.get("anchorData"), attrs, wrap.behind_doc if wrap else None)
    if anchor is None and wrap is not None:
        anchor = AnchorConfig(is_anchored=True, behind_doc=wrap.behind_doc)

    display = _resolve_display(attrs, wrap is not None and wrap.type == "Inline")
    span = positions(node) if positions else None
    alt = attrs.get("alt")
    title = attrs.get("title")

    return ImageBlock(
        id=next_id("image"),
        src=src,
        width=width,
        height=height,
        display=display,
        object_fit=_resolve_object_fit(attrs, display),
        alt=alt if isinstance(alt, str) else None,
        title=title if isinstance(title, str) else None,
        anchor=anchor,
        wrap=wrap,
        padding=to_box_spacing(attrs.get("padding")),
        margin=to_box_spacing(attrs.get("marginOffset")),
        gain=_adjustment(attrs.get("gain")),
        blacklevel=_adjustment(attrs.get("blacklevel")),
        source_attrs=dict(attrs),
        pm_start=span[0] if span else None,
        pm_end=span[1] if span else None,
    )


def _media_candidates(src: str) -> List[str]:
    trimmed = src[2:] if src.startswith("./") else src
    candidates = [src, trimmed]
    if not trimmed.startswith("word/"):
        candidates.append(posixpath.join("word", trimmed))
    candidates.append(posixpath.join("word/media", posixpath.basename(trimmed)))
    return list(dict.fromkeys(candidates))


def _media_bytes(data: MediaData) -> Optional[bytes]:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        payload = data.split(",", 1)[1] if data.startswith("data:") else data
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Media entry is not valid base64")
            return None
    return None


def read_image_size(data: bytes) -> Optional[Tuple[int, int]]:
    """Intrinsic pixel size of an encoded image, or ``None`` when Pillow cannot read it."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.width, img.height
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug(f"Could not read image size: {exc}")
        return None


def _mime_type(path: str, data: bytes) -> str:
    guessed, _ = mimetypes.guess_type(path)
    if guessed:
        return guessed
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None
    return mime or "application/octet-stream"


def _hydrate_image(block: ImageBlock, media_files: Mapping[str, MediaData]) -> ImageBlock:
    if block.src.startswith(PASSTHROUGH_SCHEMES):
        return block
    for candidate in _media_candidates(block.src):
        if candidate not in media_files:
            continue
        data = _media_bytes(media_files[candidate])
        if data is None:
            return block
        encoded = base64.b64encode(data).decode("ascii")
        changes: Dict[str, Any] = {"src": f"data:{_mime_type(candidate, data)};base64,{encoded}"}
        if block.width is None or block.height is None:
            intrinsic = read_image_size(data)
            if intrinsic is not None:
                changes["width"] = block.width if block.width is not None else intrinsic[0]
                changes["height"] = block.height if block.height is not None else intrinsic[1]
        return replace(block, **changes)
    logger.debug(f"No media entry for image src {block.src}")
    return block


def hydrate_image_blocks(
    blocks: List[FlowBlock],
    media_files: Optional[Mapping[str, MediaData]] = None,
) -> List[FlowBlock]:
    """
    Resolve image sources against the package media map.

    Matching images get a base64 data URI as ``src``; when the block has no
    explicit size the intrinsic pixel size is read with Pillow. Images nested
    in table cells are hydrated too. Returns a new list.
    """
    if not media_files:
        return list(blocks)

    hydrated: List[FlowBlock] = []
    for block in blocks:
        if isinstance(block, ImageBlock):
            hydrated.append(_hydrate_image(block, media_files))
        elif isinstance(block, TableBlock):
            for row in block.rows:
                for cell in row.cells:
                    cell.blocks = hydrate_image_blocks(cell.blocks, media_files)
            hydrated.append(block)
        else:
            hydrated.append(block)
    return hydrated
