"""Drawing, shape and image geometry."""

from .image import hydrate_image_blocks, image_node_to_block, read_image_size
from .placement import (
    is_hidden_drawing,
    normalize_anchor,
    normalize_polygon,
    normalize_wrap,
    normalize_z_index,
    resolve_z_index,
)
from .shapes import (
    build_drawing_block,
    shape_container_node_to_drawing_block,
    shape_group_node_to_drawing_block,
    shape_textbox_node_to_drawing_block,
    vector_shape_node_to_drawing_block,
)

__all__ = [
    "build_drawing_block",
    "hydrate_image_blocks",
    "image_node_to_block",
    "is_hidden_drawing",
    "normalize_anchor",
    "normalize_polygon",
    "normalize_wrap",
    "normalize_z_index",
    "read_image_size",
    "resolve_z_index",
    "shape_container_node_to_drawing_block",
    "shape_group_node_to_drawing_block",
    "shape_textbox_node_to_drawing_block",
    "vector_shape_node_to_drawing_block",
]
