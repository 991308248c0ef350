"""Page view: rendered PDF pages with hover/click overlays.

Pages are rendered lazily, one per event-loop turn. The first render of a
page records its true size; overlays for that page appear only once the
size and a nonzero display width are both known.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from qtpy import QtCore, QtGui, QtWidgets

from docsync.core.content.coordinates import map_item
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.geometry import PageDimensionTable, items_on_page
from docsync.core.content.registry import DOCUMENT_VIEW, ElementRegistry
from docsync.core.types.geometry import Highlight, PositionedItem, ScreenRect
from docsync.utils.logger import logger

PAGE_MARGIN = 12


def pixmap_to_qimage(pix) -> QtGui.QImage:
    fmt = QtGui.QImage.Format_RGBA8888 if pix.alpha else QtGui.QImage.Format_RGB888
    return QtGui.QImage(pix.samples, pix.width, pix.height, pix.stride, fmt).copy()


def _qrect(rect: ScreenRect) -> QtCore.QRect:
    return QtCore.QRect(
        int(round(rect.left)),
        int(round(rect.top)),
        max(1, int(round(rect.width))),
        max(1, int(round(rect.height))),
    )


class PageRenderer(QtCore.QObject):
    """Renders queued pages cooperatively on the GUI thread."""

    page_loaded = QtCore.Signal(int, float, float)
    page_rendered = QtCore.Signal(int, QtGui.QImage)

    def __init__(self, source, max_width: int = 2400, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._source = source
        self._max_width = int(max_width)
        self._queue: Deque[Tuple[int, int]] = deque()
        self._scheduled = False

    def request(self, page_index: int, target_width: int) -> None:
        self._queue = deque(item for item in self._queue if item[0] != page_index)
        self._queue.append((page_index, max(1, min(int(target_width), self._max_width))))
        if not self._scheduled:
            self._scheduled = True
            QtCore.QTimer.singleShot(0, self._render_next)

    def _render_next(self) -> None:
        self._scheduled = False
        if not self._queue or self._source is None:
            return
        page_index, width = self._queue.popleft()
        try:
            page_w, page_h = self._source.page_size(page_index)
            image = pixmap_to_qimage(self._source.render(page_index, width))
        except Exception as exc:
            logger.warning("Failed to render page %d: %s", page_index + 1, exc)
        else:
            self.page_loaded.emit(page_index, float(page_w), float(page_h))
            self.page_rendered.emit(page_index, image)
        if self._queue:
            self._scheduled = True
            QtCore.QTimer.singleShot(0, self._render_next)

    def stop(self) -> None:
        self._queue.clear()
        self._source = None


class _OverlayItem(QtWidgets.QWidget):
    hovered = QtCore.Signal(object)
    left = QtCore.Signal()
    clicked = QtCore.Signal(str)

    def __init__(self, item: PositionedItem, parent: QtWidgets.QWidget) -> None:
        super().__init__(parent)
        self.item = item
        self._active = False
        self.setCursor(QtCore.Qt.PointingHandCursor)
        self.setAttribute(QtCore.Qt.WA_Hover, True)
        if item.text:
            self.setToolTip(item.text[:200])

    def set_active(self, active: bool) -> None:
        if active != self._active:
            self._active = active
            self.update()

    def is_active(self) -> bool:
        return self._active

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        if not self._active:
            return
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor(59, 130, 246, 77))
        painter.setPen(QtGui.QPen(QtGui.QColor(37, 99, 235), 1))
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))
        painter.end()

    def enterEvent(self, event) -> None:  # noqa: N802
        self.hovered.emit(self.item)
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802
        self.left.emit()
        super().leaveEvent(event)

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton:
            self.clicked.emit(self.item.id)
        super().mousePressEvent(event)


class _HighlightOverlay(QtWidgets.QWidget):
    def __init__(self, parent: QtWidgets.QWidget) -> None:
        super().__init__(parent)
        self.setAttribute(QtCore.Qt.WA_TransparentForMouseEvents, True)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor(250, 204, 21, 90))
        painter.end()


class _PageWidget(QtWidgets.QLabel):
    def __init__(self, page_index: int, parent: QtWidgets.QWidget) -> None:
        super().__init__(parent)
        self.page_index = page_index
        self.overlays: List[_OverlayItem] = []
        self.highlights: List[_HighlightOverlay] = []
        self.setAlignment(QtCore.Qt.AlignTop | QtCore.Qt.AlignLeft)
        self.setStyleSheet("background: white;")
        self.setText(f"Loading page {page_index + 1}…")

    @property
    def page_number(self) -> int:
        return self.page_index + 1


class PdfView(QtWidgets.QScrollArea):
    """Document view with one rendered page per row."""

    item_hovered = QtCore.Signal(object)
    item_left = QtCore.Signal()
    item_clicked = QtCore.Signal(str)
    page_count_changed = QtCore.Signal(int)
    display_width_changed = QtCore.Signal(float)

    def __init__(
        self,
        pages: PageDimensionTable,
        registry: ElementRegistry,
        *,
        padding: float = 4.0,
        page_spacing: int = 16,
        resize_debounce_ms: int = 120,
        render_max_width: int = 2400,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._pages = pages
        self._registry = registry
        self._padding = float(padding)
        self._render_max_width = int(render_max_width)
        self._renderer: Optional[PageRenderer] = None
        self._page_widgets: List[_PageWidget] = []
        self._items: Tuple[PositionedItem, ...] = ()
        self._index: Optional[CorrespondenceIndex] = None
        self._active_block_id: Optional[str] = None
        self._highlight: Optional[Highlight] = None
        self._display_width = 0

        self.setWidgetResizable(True)
        self.setFrameShape(QtWidgets.QFrame.NoFrame)
        container = QtWidgets.QWidget(self)
        container.setStyleSheet("background: #f3f4f6;")
        self._layout = QtWidgets.QVBoxLayout(container)
        self._layout.setContentsMargins(PAGE_MARGIN, PAGE_MARGIN, PAGE_MARGIN, PAGE_MARGIN)
        self._layout.setSpacing(int(page_spacing))
        self._layout.setAlignment(QtCore.Qt.AlignHCenter | QtCore.Qt.AlignTop)
        self.setWidget(container)

        self._resize_timer = QtCore.QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(int(resize_debounce_ms))
        self._resize_timer.timeout.connect(self._apply_display_width)

    # ------------------------------------------------------------- document
    def set_document(
        self,
        source,
        items: Sequence[PositionedItem],
        index: CorrespondenceIndex,
    ) -> None:
        self._clear_pages()
        self._pages.clear()
        self._index = index
        self._items = tuple(items)

        if self._renderer is not None:
            self._renderer.stop()
            self._renderer.deleteLater()
        self._renderer = PageRenderer(source, max_width=self._render_max_width, parent=self)
        self._renderer.page_loaded.connect(self._on_page_loaded)
        self._renderer.page_rendered.connect(self._on_page_rendered)

        count = int(getattr(source, "page_count", 0) or 0)
        container = self.widget()
        for page_index in range(count):
            widget = _PageWidget(page_index, container)
            self._page_widgets.append(widget)
            self._layout.addWidget(widget)
        self.page_count_changed.emit(count)

        self._display_width = self._measure_display_width()
        for page_index in range(count):
            self._renderer.request(page_index, self.display_width() or 1)

    def _clear_pages(self) -> None:
        for widget in self._page_widgets:
            self._layout.removeWidget(widget)
            widget.deleteLater()
        self._page_widgets = []
        self._registry.clear(DOCUMENT_VIEW)
        self._highlight = None

    def page_count(self) -> int:
        return len(self._page_widgets)

    def page_widget(self, page_index: int) -> Optional[_PageWidget]:
        if 0 <= page_index < len(self._page_widgets):
            return self._page_widgets[page_index]
        return None

    def display_width(self) -> int:
        """Width pages are drawn at: the viewport width, capped by the render limit."""
        return min(self._display_width, self._render_max_width)

    def _measure_display_width(self) -> int:
        viewport = self.viewport()
        width = int(viewport.width()) if viewport is not None else 0
        return max(0, width - 2 * PAGE_MARGIN)

    # -------------------------------------------------------------- rendering
    def _on_page_loaded(self, page_index: int, width: float, height: float) -> None:
        if self._pages.record(page_index, width, height):
            logger.debug("Page %d true size %.1fx%.1f", page_index + 1, width, height)

    def _on_page_rendered(self, page_index: int, image: QtGui.QImage) -> None:
        widget = self.page_widget(page_index)
        if widget is None:
            return
        widget.setText("")
        widget.setPixmap(QtGui.QPixmap.fromImage(image))
        widget.setFixedSize(image.width(), image.height())
        self._layout_page(widget)

    def _layout_page(self, widget: _PageWidget) -> None:
        dims = self._pages.get(widget.page_index)
        width = self.display_width()
        if dims is None or width <= 0:
            return
        if not widget.overlays:
            for item in items_on_page(self._items, widget.page_number):
                overlay = _OverlayItem(item, widget)
                overlay.hovered.connect(self.item_hovered.emit)
                overlay.left.connect(self.item_left.emit)
                overlay.clicked.connect(self.item_clicked.emit)
                self._registry.register(DOCUMENT_VIEW, item.id, overlay)
                widget.overlays.append(overlay)
        for overlay in widget.overlays:
            rect = map_item(overlay.item, dims, width, padding=self._padding)
            if rect is None:
                overlay.hide()
                continue
            overlay.setGeometry(_qrect(rect))
            overlay.set_active(self._is_item_active(overlay.item))
            overlay.show()
        self._place_highlight(widget)

    # ---------------------------------------------------------------- resize
    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._resize_timer.start()

    def _apply_display_width(self) -> None:
        previous = self.display_width()
        self._display_width = self._measure_display_width()
        width = self.display_width()
        if width == previous:
            return
        if self._renderer is not None:
            for widget in self._page_widgets:
                self._renderer.request(widget.page_index, width)
        self.display_width_changed.emit(float(width))

    # ------------------------------------------------------------- selection
    def _is_item_active(self, item: PositionedItem) -> bool:
        if self._active_block_id is None or self._index is None:
            return False
        return self._index.resolve(item.id) == self._active_block_id

    def set_active_block(self, block_id: Optional[str]) -> None:
        self._active_block_id = block_id
        for widget in self._page_widgets:
            for overlay in widget.overlays:
                overlay.set_active(self._is_item_active(overlay.item))

    def set_hover_highlight(self, highlight: Optional[Highlight]) -> None:
        if highlight == self._highlight:
            return
        self._highlight = highlight
        for widget in self._page_widgets:
            self._place_highlight(widget)

    def _place_highlight(self, widget: _PageWidget) -> None:
        highlight = self._highlight
        rects: Sequence[ScreenRect] = ()
        if highlight is not None and highlight.position.page_number == widget.page_number:
            rects = highlight.position.rects
        while len(widget.highlights) < len(rects):
            widget.highlights.append(_HighlightOverlay(widget))
        for i, overlay in enumerate(widget.highlights):
            if i < len(rects):
                overlay.setGeometry(_qrect(rects[i]))
                overlay.raise_()
                overlay.show()
            else:
                overlay.hide()

    def scroll_to(self, item_id: str) -> None:
        """Center the overlay of ``item_id`` in the viewport."""
        overlay = self._registry.get(DOCUMENT_VIEW, item_id)
        if overlay is None:
            return
        center = overlay.mapTo(self.widget(), overlay.rect().center())
        bar = self.verticalScrollBar()
        bar.setValue(int(center.y() - self.viewport().height() / 2))
