"""Loaders for the two document sources a viewing session needs."""

from .content_loader import ContentLoadError, load_content_graph, read_content_json
from .pdf_source import PdfOpenError, PdfSource, open_pdf

__all__ = [
    "ContentLoadError",
    "PdfOpenError",
    "PdfSource",
    "load_content_graph",
    "open_pdf",
    "read_content_json",
]
