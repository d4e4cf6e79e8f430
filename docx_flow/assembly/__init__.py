"""Block assembly over a whole document."""

from .converter import merge_drop_cap_paragraphs, to_flow_blocks, to_flow_blocks_map
from .handlers import NODE_HANDLERS, ConversionState, convert_nodes, paragraph_to_flow_blocks
from .ids import create_block_id_generator
from .positions import PositionMap, build_position_map

__all__ = [
    "NODE_HANDLERS",
    "ConversionState",
    "PositionMap",
    "build_position_map",
    "convert_nodes",
    "create_block_id_generator",
    "merge_drop_cap_paragraphs",
    "paragraph_to_flow_blocks",
    "to_flow_blocks",
    "to_flow_blocks_map",
]
