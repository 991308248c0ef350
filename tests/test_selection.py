from __future__ import annotations

from typing import List

import pytest
from graph_factory import ref, text

from docsync.core.content.assembler import assemble_blocks
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.geometry import PageDimensionTable, index_positions
from docsync.core.content.resolver import resolve_reading_order
from docsync.core.content.selection import (
    ACTIVE,
    ALIGN_CENTER,
    ALIGN_NEAREST,
    HOVERING,
    IDLE,
    ScrollRequest,
    SelectionController,
)
from docsync.core.types.document import DocumentGraph


@pytest.fixture
def graph() -> DocumentGraph:
    return DocumentGraph.from_dict(
        {
            "body": {
                "children": [
                    ref("#/texts/0"),
                    ref("#/texts/1"),
                    ref("#/texts/2"),
                    ref("#/texts/3"),
                ]
            },
            "texts": [
                text(0, "Title", label="section_header"),
                text(1, "Hello"),
                text(2, "world."),
                text(3, "Next", label="section_header"),
            ],
        }
    )


@pytest.fixture
def scrolls() -> List[ScrollRequest]:
    return []


@pytest.fixture
def pages() -> PageDimensionTable:
    table = PageDimensionTable()
    table.record(0, 612, 792)
    return table


@pytest.fixture
def controller(graph, pages, scrolls) -> SelectionController:
    index = CorrespondenceIndex(assemble_blocks(resolve_reading_order(graph)))
    return SelectionController(index, pages, padding=4, on_scroll=scrolls.append)


def _item(graph: DocumentGraph, item_id: str):
    return next(item for item in index_positions(graph) if item.id == item_id)


def test_click_on_source_activates_owning_block(controller, scrolls) -> None:
    assert controller.state == IDLE
    block_id = controller.click("#/texts/2")

    assert block_id == "#/texts/1"
    assert controller.active_block_id == "#/texts/1"
    assert controller.state == ACTIVE
    assert scrolls == [
        ScrollRequest("document", "#/texts/1", ALIGN_CENTER),
        ScrollRequest("content", "#/texts/1", ALIGN_NEAREST),
    ]


def test_click_on_block_id_is_idempotent(controller) -> None:
    assert controller.click("#/texts/1") == "#/texts/1"
    assert controller.click("#/texts/1") == "#/texts/1"


def test_click_on_unknown_id_falls_back_to_itself(controller) -> None:
    assert controller.click("#/texts/99") == "#/texts/99"
    assert controller.active_block_id == "#/texts/99"


def test_hover_shows_transient_highlight(controller, graph, scrolls) -> None:
    highlight = controller.hover_enter(_item(graph, "#/texts/2"), display_width=612)

    assert highlight is not None
    assert highlight.id == "hover-#/texts/2"
    assert highlight.content == "world."
    assert highlight.position.page_number == 1
    (rect,) = highlight.position.rects
    # text(2) box is [100, 660, 300, 650] on a 792pt page at scale 1
    assert rect.left == pytest.approx(96)
    assert rect.top == pytest.approx(792 - 664)
    assert rect.width == pytest.approx(208)
    assert rect.height == pytest.approx(18)
    assert controller.state == HOVERING
    assert controller.active_block_id == "#/texts/1"
    assert controller.is_hover_highlight(highlight.id)
    assert scrolls[-1] == ScrollRequest("content", "#/texts/1", ALIGN_NEAREST)


def test_hover_leave_restores_click_selection(controller, graph) -> None:
    controller.click("#/texts/0")
    controller.hover_enter(_item(graph, "#/texts/2"), display_width=612)
    assert controller.active_block_id == "#/texts/1"
    assert controller.clicked_block_id == "#/texts/0"

    controller.hover_leave()
    assert controller.hover_highlight is None
    assert controller.active_block_id == "#/texts/0"
    assert controller.state == ACTIVE


def test_hover_is_noop_without_page_size(graph, scrolls) -> None:
    index = CorrespondenceIndex(assemble_blocks(resolve_reading_order(graph)))
    changes: List[None] = []
    controller = SelectionController(
        index,
        PageDimensionTable(),
        on_scroll=scrolls.append,
        on_change=lambda: changes.append(None),
    )
    assert controller.hover_enter(_item(graph, "#/texts/1"), display_width=612) is None
    assert controller.state == IDLE
    assert scrolls == []
    assert changes == []


def test_hover_is_noop_without_display_width(controller, graph) -> None:
    assert controller.hover_enter(_item(graph, "#/texts/1"), display_width=0) is None
    assert controller.hover_highlight is None


def test_refresh_hover_rescales_rects(controller, graph) -> None:
    controller.hover_enter(_item(graph, "#/texts/1"), display_width=612)
    before = controller.hover_highlight.position.rects[0]

    controller.refresh_hover(1224)
    after = controller.hover_highlight.position.rects[0]
    assert after.width == pytest.approx(before.width * 2)
    assert controller.hover_highlight.id == "hover-#/texts/1"

    controller.refresh_hover(0)
    assert controller.hover_highlight is None


def test_set_index_drops_selection(controller, graph) -> None:
    controller.click("#/texts/1")
    controller.hover_enter(_item(graph, "#/texts/2"), display_width=612)
    controller.set_index(CorrespondenceIndex(()))
    assert controller.state == IDLE
    assert controller.active_block_id is None
