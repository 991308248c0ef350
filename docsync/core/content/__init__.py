"""Content-graph resolution and cross-view correspondence."""

from .assembler import DEFAULT_HEADING_LABELS, assemble_blocks
from .coordinates import map_item, scale_factor, to_screen_rect
from .correspondence import CorrespondenceIndex
from .geometry import PageDimensionTable, index_positions, items_on_page
from .processing import DocumentProcessor, ProcessedDocument, process_document
from .registry import CONTENT_VIEW, DOCUMENT_VIEW, ElementRegistry
from .resolver import resolve_reading_order
from .selection import ScrollRequest, SelectionController
from .table_layout import PlacedCell, layout_table

__all__ = [
    "CONTENT_VIEW",
    "DEFAULT_HEADING_LABELS",
    "DOCUMENT_VIEW",
    "CorrespondenceIndex",
    "DocumentProcessor",
    "ElementRegistry",
    "PageDimensionTable",
    "PlacedCell",
    "ProcessedDocument",
    "ScrollRequest",
    "SelectionController",
    "assemble_blocks",
    "index_positions",
    "items_on_page",
    "layout_table",
    "map_item",
    "process_document",
    "resolve_reading_order",
    "scale_factor",
    "to_screen_rect",
]
