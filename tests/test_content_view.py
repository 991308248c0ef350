import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "minimal")
QtWidgets = pytest.importorskip("qtpy.QtWidgets")

from graph_factory import ref, sample_document, text

from docsync.core.content.processing import process_document
from docsync.core.content.registry import CONTENT_VIEW, ElementRegistry
from docsync.core.types.document import DocumentGraph
from docsync.core.types.nodes import TableData
from docsync.gui.widgets.content_view import IMAGE_MISSING_TEXT, ContentView
from docsync.gui.widgets.table_view import EMPTY_TABLE_TEXT, table_to_html


_QAPP = None


def _ensure_qapp():
    global _QAPP
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    _QAPP = app
    return _QAPP


def test_content_view_registers_one_widget_per_block():
    _ensure_qapp()
    registry = ElementRegistry()
    view = ContentView(registry)
    blocks = process_document(DocumentGraph.from_dict(sample_document())).blocks

    view.set_blocks(blocks)

    for block in blocks:
        widget = registry.get(CONTENT_VIEW, block.id)
        assert widget is not None
        assert widget.block is block
    assert len(registry) == len(blocks)


def test_content_view_tracks_single_active_block():
    _ensure_qapp()
    view = ContentView(ElementRegistry())
    blocks = process_document(DocumentGraph.from_dict(sample_document())).blocks
    view.set_blocks(blocks)

    view.set_active_block("#/texts/0")
    view.set_active_block("#/texts/2")
    assert view.active_block_id() == "#/texts/2"
    assert view.block_widget("#/texts/2").is_active()
    assert not view.block_widget("#/texts/0").is_active()

    view.set_active_block(None)
    assert not view.block_widget("#/texts/2").is_active()


def test_block_click_emits_block_id():
    _ensure_qapp()
    view = ContentView(ElementRegistry())
    blocks = process_document(DocumentGraph.from_dict(sample_document())).blocks
    view.set_blocks(blocks)
    clicked = []
    view.block_clicked.connect(clicked.append)

    view.block_widget("#/pictures/0").clicked.emit("#/pictures/0")
    assert clicked == ["#/pictures/0"]


def test_undecodable_picture_shows_placeholder():
    _ensure_qapp()
    view = ContentView(ElementRegistry())
    blocks = process_document(DocumentGraph.from_dict(sample_document())).blocks
    view.set_blocks(blocks)

    picture = view.block_widget("#/pictures/0")
    labels = picture.findChildren(QtWidgets.QLabel)
    assert any(label.text() == IMAGE_MISSING_TEXT for label in labels)


def test_rebuild_replaces_registered_widgets():
    _ensure_qapp()
    registry = ElementRegistry()
    view = ContentView(registry)
    view.set_blocks(process_document(DocumentGraph.from_dict(sample_document())).blocks)
    other = DocumentGraph.from_dict(
        {"body": {"children": [ref("#/texts/0")]}, "texts": [text(0, "Solo")]}
    )
    view.set_blocks(process_document(other).blocks)

    assert len(registry) == 1
    assert view.block_widget("#/texts/0").block.content == "Solo"


def test_table_html_marks_headers_and_escapes_text():
    data = TableData.from_dict(
        {
            "num_rows": 2,
            "num_cols": 2,
            "grid": [
                [{"text": "A&B", "column_header": True, "col_span": 2}, None],
                [{"text": "<1>"}, {"text": "2"}],
            ],
        }
    )
    html = table_to_html(data)
    assert "<th colspan='2'" in html
    assert "A&amp;B" in html
    assert "&lt;1&gt;" in html
    assert EMPTY_TABLE_TEXT in table_to_html(TableData())
