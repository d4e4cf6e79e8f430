"""Table structure resolution."""

from .cells import resolve_row_height, resolve_vertical_align
from .converter import table_node_to_block
from .styles import TableStyleHydration, hydrate_table_style_attrs
from .vertical_merge import (
    find_cell_covering_column,
    find_insertion_index_for_column,
    get_cell_start_column,
    get_colspan,
    pre_process_vertical_merge_cells,
    resolve_grid_before,
)
from .widths import resolve_column_widths

__all__ = [
    "TableStyleHydration",
    "find_cell_covering_column",
    "find_insertion_index_for_column",
    "get_cell_start_column",
    "get_colspan",
    "hydrate_table_style_attrs",
    "pre_process_vertical_merge_cells",
    "resolve_column_widths",
    "resolve_grid_before",
    "resolve_row_height",
    "resolve_vertical_align",
    "table_node_to_block",
]
