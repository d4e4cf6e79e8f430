"""
Tests for image conversion and media hydration.
"""

import base64
import io

import pytest
from PIL import Image

from docx_flow.assembly.ids import create_block_id_generator
from docx_flow.drawings import hydrate_image_blocks, image_node_to_block, read_image_size
from docx_flow.models.blocks import ImageBlock, TableBlock, TableCell, TableRow


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (40, 30), color=(255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def image(**attrs):
    return {"type": "image", "attrs": attrs}


def image_block(src, **kwargs):
    return ImageBlock(id="0-image", src=src, **kwargs)


class TestImageNodeToBlock:
    """Test cases for image_node_to_block."""

    def test_block_image(self):
        node = image(src="word/media/image1.png", size={"width": 120, "height": "x"}, alt="Logo", title=5)
        block = image_node_to_block(node, create_block_id_generator("img-"))
        assert block.id == "img-0-image"
        assert block.kind == "image"
        assert block.width == 120
        assert block.height is None
        assert block.display == "block"
        assert block.object_fit == "contain"
        assert block.alt == "Logo"
        assert block.title is None
        assert block.anchor is None

    def test_inline_image(self):
        block = image_node_to_block(image(src="a.png", inline=True), create_block_id_generator())
        assert block.display == "inline"
        assert block.object_fit == "scale-down"

    def test_inline_wrap(self):
        block = image_node_to_block(image(src="a.png", wrap={"type": "Inline"}), create_block_id_generator())
        assert block.display == "inline"
        assert block.wrap.type == "Inline"

    def test_wrap_behind_doc_is_kept_on_anchor(self):
        node = image(src="a.png", wrap={"type": "Square", "attrs": {"behindDoc": True}})
        block = image_node_to_block(node, create_block_id_generator())
        assert block.anchor.is_anchored is False
        assert block.anchor.behind_doc is True

    def test_wrap_without_anchor_is_anchored(self):
        node = image(src="a.png", wrap={"type": "Square", "attrs": {"wrapText": "bothSides"}})
        block = image_node_to_block(node, create_block_id_generator())
        assert block.wrap.type == "Square"
        assert block.anchor.is_anchored is True
        assert block.anchor.behind_doc is None

    def test_explicit_display_and_fit(self):
        node = image(src="a.png", display="block", inline=True, objectFit="fill", shouldCover=True)
        block = image_node_to_block(node, create_block_id_generator())
        assert block.display == "block"
        assert block.object_fit == "fill"
        block = image_node_to_block(image(src="a.png", shouldCover=True), create_block_id_generator())
        assert block.object_fit == "cover"

    def test_adjustments_and_spacing(self):
        node = image(src="a.png", gain="19661f", blacklevel=0.5, padding={"left": 4}, marginOffset={"top": 8})
        block = image_node_to_block(node, create_block_id_generator(), lambda n: (7, 8))
        assert block.gain == "19661f"
        assert block.blacklevel == 0.5
        assert block.padding == {"left": 4}
        assert block.margin == {"top": 8}
        assert (block.pm_start, block.pm_end) == (7, 8)

    def test_skipped_images(self):
        assert image_node_to_block(image(src="a.png", hidden=True), create_block_id_generator()) is None
        assert image_node_to_block(image(src=""), create_block_id_generator()) is None
        assert image_node_to_block(image(), create_block_id_generator()) is None


class TestHydrateImageBlocks:
    """Test cases for hydrate_image_blocks."""

    def test_read_image_size(self, png_bytes):
        assert read_image_size(png_bytes) == (40, 30)
        assert read_image_size(b"not an image") is None

    def test_bytes_become_data_uri(self, png_bytes):
        [block] = hydrate_image_blocks([image_block("word/media/pic.png")], {"word/media/pic.png": png_bytes})
        assert block.src.startswith("data:image/png;base64,")
        assert base64.b64decode(block.src.split(",", 1)[1]) == png_bytes
        assert (block.width, block.height) == (40, 30)

    def test_explicit_size_is_kept(self, png_bytes):
        [block] = hydrate_image_blocks([image_block("media/pic.png", width=10)], {"word/media/pic.png": png_bytes})
        assert (block.width, block.height) == (10, 30)

    def test_base64_entry_and_basename_lookup(self, png_bytes):
        encoded = base64.b64encode(png_bytes).decode("ascii")
        [block] = hydrate_image_blocks([image_block("./images/blob")], {"word/media/blob": encoded})
        assert block.src.startswith("data:image/png;base64,")

    def test_passthrough_sources(self, png_bytes):
        blocks = [image_block("https://example.com/a.png"), image_block("data:image/png;base64,AAAA")]
        result = hydrate_image_blocks(blocks, {"https://example.com/a.png": png_bytes})
        assert [b.src for b in result] == ["https://example.com/a.png", "data:image/png;base64,AAAA"]

    def test_missing_media(self, png_bytes):
        original = image_block("word/media/missing.png")
        [block] = hydrate_image_blocks([original], {"word/media/other.png": png_bytes})
        assert block is original

    def test_invalid_base64_leaves_block(self):
        original = image_block("word/media/pic.png")
        [block] = hydrate_image_blocks([original], {"word/media/pic.png": "***"})
        assert block is original

    def test_table_cells_are_hydrated(self, png_bytes):
        table = TableBlock(id="2-table", rows=[
            TableRow(id="1-row", cells=[TableCell(id="0-cell", blocks=[image_block("word/media/pic.png")])]),
        ])
        [result] = hydrate_image_blocks([table], {"word/media/pic.png": png_bytes})
        assert result.rows[0].cells[0].blocks[0].src.startswith("data:image/png")

    def test_no_media_returns_copy(self):
        blocks = [image_block("a.png")]
        result = hydrate_image_blocks(blocks)
        assert result == blocks
        assert result is not blocks
