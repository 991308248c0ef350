from __future__ import annotations

from typing import Optional

from qtpy import QtCore, QtWidgets

from docsync.core.content.assembler import DEFAULT_HEADING_LABELS
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.geometry import PageDimensionTable
from docsync.core.content.processing import DocumentProcessor, ProcessedDocument
from docsync.core.content.registry import CONTENT_VIEW, DOCUMENT_VIEW, ElementRegistry
from docsync.core.content.selection import ScrollRequest, SelectionController
from docsync.core.types.document import DocumentGraph
from docsync.core.types.geometry import PositionedItem
from docsync.gui.widgets.content_view import ContentView
from docsync.gui.widgets.pdf_view import PdfView
from docsync.utils.logger import logger


class PdfJsonViewer(QtWidgets.QWidget):
    """Side-by-side page view and content view kept in sync."""

    active_block_changed = QtCore.Signal(str)

    def __init__(
        self,
        config: Optional[dict] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        config = dict(config or {})
        self._processor = DocumentProcessor(
            heading_labels=config.get("heading_labels") or DEFAULT_HEADING_LABELS
        )
        self._processed: Optional[ProcessedDocument] = None
        self._pages = PageDimensionTable()
        self._registry: ElementRegistry = ElementRegistry()
        self._selection = SelectionController(
            CorrespondenceIndex(()),
            self._pages,
            padding=float(config.get("overlay_padding", 4)),
            hover_prefix=str(config.get("hover_prefix") or "hover-"),
            on_scroll=self._on_scroll_request,
            on_change=self._sync_selection,
        )

        self.pdf_view = PdfView(
            self._pages,
            self._registry,
            padding=float(config.get("overlay_padding", 4)),
            page_spacing=int(config.get("page_spacing", 16)),
            resize_debounce_ms=int(config.get("resize_debounce_ms", 120)),
            render_max_width=int(config.get("render_max_width", 2400)),
            parent=self,
        )
        self.content_view = ContentView(self._registry, parent=self)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal, self)
        splitter.addWidget(self.pdf_view)
        splitter.addWidget(self.content_view)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(splitter)

        self.pdf_view.item_hovered.connect(self._on_item_hovered)
        self.pdf_view.item_left.connect(self._selection.hover_leave)
        self.pdf_view.item_clicked.connect(self._selection.click)
        self.pdf_view.display_width_changed.connect(self._selection.refresh_hover)
        self.content_view.block_clicked.connect(self._selection.click)

    @property
    def selection(self) -> SelectionController:
        return self._selection

    @property
    def processed(self) -> Optional[ProcessedDocument]:
        return self._processed

    def set_document(self, pdf_source, graph: DocumentGraph) -> None:
        processed = self._processor.process(graph)
        if processed is not self._processed:
            self._processed = processed
            self.content_view.set_blocks(processed.blocks)
        self._selection.set_index(processed.index)
        self.pdf_view.set_document(pdf_source, processed.positioned_items, processed.index)

    def _on_item_hovered(self, item: PositionedItem) -> None:
        self._selection.hover_enter(item, self.pdf_view.display_width())

    def _sync_selection(self) -> None:
        active = self._selection.active_block_id
        self.content_view.set_active_block(active)
        self.pdf_view.set_active_block(active)
        self.pdf_view.set_hover_highlight(self._selection.hover_highlight)
        self.active_block_changed.emit(active or "")

    def _on_scroll_request(self, request: ScrollRequest) -> None:
        if request.view == DOCUMENT_VIEW:
            self.pdf_view.scroll_to(request.target_id)
        elif request.view == CONTENT_VIEW:
            self.content_view.scroll_to(request.target_id)
        else:
            logger.debug("Ignoring scroll request for view %r", request.view)
