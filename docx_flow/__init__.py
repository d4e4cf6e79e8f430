"""
docx-flow: office document trees to pixel-based flow blocks.

Resolves the paragraph, numbering, table, section and drawing attribute
cascades of a document tree and produces typed flow blocks for pagination.
"""

from .assembly import to_flow_blocks, to_flow_blocks_map
from .config import ConversionOptions
from .context import ConverterContext
from .exceptions import (
    ConfigurationError,
    DocumentStructureError,
    DocxFlowError,
    GeometryError,
    NumberingError,
    SectionError,
    StyleResolutionError,
    TableStructureError,
)
from .models import FlowBlock, FlowBlocksResult, ResolvedParagraphAttributes
from .numbering import ListCounterStore, build_numbering_path
from .paragraph import compute_paragraph_attrs
from .sections import analyze_section_ranges, extract_section_data, should_require_page_boundary
from .styles import StyleContext, combine_properties
from .table import pre_process_vertical_merge_cells, resolve_column_widths
from .utils.logger import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConversionOptions",
    "ConverterContext",
    "DocumentStructureError",
    "DocxFlowError",
    "FlowBlock",
    "FlowBlocksResult",
    "GeometryError",
    "ListCounterStore",
    "NumberingError",
    "ResolvedParagraphAttributes",
    "SectionError",
    "StyleContext",
    "StyleResolutionError",
    "TableStructureError",
    "analyze_section_ranges",
    "build_numbering_path",
    "combine_properties",
    "compute_paragraph_attrs",
    "configure_logging",
    "extract_section_data",
    "get_logger",
    "pre_process_vertical_merge_cells",
    "resolve_column_widths",
    "should_require_page_boundary",
    "to_flow_blocks",
    "to_flow_blocks_map",
]
