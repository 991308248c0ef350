from __future__ import annotations

import base64
import binascii
from typing import Dict, Optional, Sequence

from qtpy import QtCore, QtGui, QtWidgets

from docsync.core.content.registry import CONTENT_VIEW, ElementRegistry
from docsync.core.types.blocks import DisplayBlock
from docsync.core.types.nodes import ImageRef
from docsync.gui.widgets.table_view import TableView
from docsync.utils.logger import logger

ACTIVE_BACKGROUND = "#fef08a"
IMAGE_MISSING_TEXT = "[Image not available]"

_HEADING_POINT_SIZES = {1: 18, 2: 16, 3: 14}


def decode_image_uri(image: Optional[ImageRef]) -> Optional[QtGui.QImage]:
    """Decode a base64 ``data:`` URI (or local file URI) into a QImage."""
    if image is None or not image.uri:
        return None
    uri = image.uri
    if uri.startswith("data:"):
        _, _, encoded = uri.partition(",")
        try:
            raw = base64.b64decode(encoded, validate=False)
        except (binascii.Error, ValueError) as exc:
            logger.debug("Undecodable image data URI: %s", exc)
            return None
        qimage = QtGui.QImage.fromData(raw)
    else:
        qimage = QtGui.QImage(QtCore.QUrl(uri).toLocalFile() or uri)
    return None if qimage.isNull() else qimage


class _BlockWidget(QtWidgets.QFrame):
    clicked = QtCore.Signal(str)

    def __init__(self, block: DisplayBlock, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.block = block
        self._active = False
        self.setCursor(QtCore.Qt.PointingHandCursor)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.addWidget(self._build_body())
        self._apply_style()

    def _build_body(self) -> QtWidgets.QWidget:
        block = self.block
        if block.type == "table":
            return TableView(block.data.data, self)

        label = QtWidgets.QLabel(self)
        label.setWordWrap(True)
        label.setTextInteractionFlags(QtCore.Qt.NoTextInteraction)
        label.setAttribute(QtCore.Qt.WA_TransparentForMouseEvents, True)
        font = label.font()

        if block.type == "heading":
            label.setText(block.content)
            font.setBold(True)
            font.setPointSize(_HEADING_POINT_SIZES.get(block.level or 0, 15))
        elif block.type == "paragraph":
            label.setText(block.content)
            if block.is_footnote:
                font.setItalic(True)
                font.setPointSize(max(7, font.pointSize() - 2))
        elif block.type == "picture":
            qimage = decode_image_uri(block.data.image)
            if qimage is None:
                label.setText(IMAGE_MISSING_TEXT)
                font.setItalic(True)
            else:
                label.setPixmap(QtGui.QPixmap.fromImage(qimage))
                label.setAlignment(QtCore.Qt.AlignHCenter)
                label.setToolTip(block.data.label or f"Image {block.id}")
        else:
            label.setText(block.content)
            font.setFamily("monospace")
        label.setFont(font)
        return label

    def set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        self._apply_style()

    def is_active(self) -> bool:
        return self._active

    def _apply_style(self) -> None:
        if self._active:
            background = ACTIVE_BACKGROUND
        elif self.block.type in ("table", "picture"):
            background = "#f9fafb"
        else:
            background = "transparent"
        self.setStyleSheet(
            f"_BlockWidget {{ background: {background}; border-radius: 3px; }}"
        )

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton:
            self.clicked.emit(self.block.id)
        super().mousePressEvent(event)


class ContentView(QtWidgets.QScrollArea):
    """Structured view: one widget per display block, top to bottom."""

    block_clicked = QtCore.Signal(str)

    def __init__(
        self,
        registry: ElementRegistry,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._registry = registry
        self._widgets: Dict[str, _BlockWidget] = {}
        self._active_id: Optional[str] = None

        self.setWidgetResizable(True)
        self.setFrameShape(QtWidgets.QFrame.NoFrame)
        container = QtWidgets.QWidget(self)
        container.setStyleSheet("background: white;")
        self._layout = QtWidgets.QVBoxLayout(container)
        self._layout.setContentsMargins(16, 12, 16, 12)
        self._layout.setSpacing(4)

        title = QtWidgets.QLabel("Json Content", container)
        title_font = title.font()
        title_font.setPointSize(title_font.pointSize() + 6)
        title_font.setBold(True)
        title.setFont(title_font)
        self._layout.addWidget(title)
        self._layout.addStretch(1)
        self.setWidget(container)

    def set_blocks(self, blocks: Sequence[DisplayBlock]) -> None:
        for widget in self._widgets.values():
            self._layout.removeWidget(widget)
            widget.deleteLater()
        self._widgets.clear()
        self._registry.clear(CONTENT_VIEW)
        self._active_id = None

        container = self.widget()
        insert_at = self._layout.count() - 1
        for block in blocks:
            widget = _BlockWidget(block, container)
            widget.clicked.connect(self.block_clicked.emit)
            if not self._registry.register(CONTENT_VIEW, block.id, widget):
                logger.debug("Duplicate block id %s; keeping first widget", block.id)
            self._widgets.setdefault(block.id, widget)
            self._layout.insertWidget(insert_at, widget)
            insert_at += 1

    def block_widget(self, block_id: str) -> Optional[_BlockWidget]:
        return self._registry.get(CONTENT_VIEW, block_id)

    def set_active_block(self, block_id: Optional[str]) -> None:
        if block_id == self._active_id:
            return
        previous = self._widgets.get(self._active_id) if self._active_id else None
        if previous is not None:
            previous.set_active(False)
        current = self._widgets.get(block_id) if block_id else None
        if current is not None:
            current.set_active(True)
        self._active_id = block_id

    def active_block_id(self) -> Optional[str]:
        return self._active_id

    def scroll_to(self, block_id: str) -> None:
        """Scroll just enough to show the block (nearest edge)."""
        widget = self.block_widget(block_id)
        if widget is None:
            return
        self.ensureWidgetVisible(widget, 0, 0)
