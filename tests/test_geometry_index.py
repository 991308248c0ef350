from __future__ import annotations

from graph_factory import sample_document, text

from docsync.core.content.geometry import PageDimensionTable, index_positions, items_on_page
from docsync.core.types.document import DocumentGraph


def test_index_positions_uses_first_provenance_only() -> None:
    node = text(0, "two boxes")
    node["prov"].append(
        {
            "page_no": 5,
            "bbox": {"l": 0, "t": 10, "r": 10, "b": 0, "coord_origin": "BOTTOMLEFT"},
        }
    )
    graph = DocumentGraph.from_dict({"texts": [node]})
    (item,) = index_positions(graph)
    assert item.id == "#/texts/0"
    assert item.page_number == 1
    assert item.bbox == (100.0, 700.0, 300.0, 690.0)
    assert item.text == "two boxes"


def test_index_positions_covers_unreferenced_nodes_and_skips_unboxed() -> None:
    graph = DocumentGraph.from_dict(sample_document())
    ids = [item.id for item in index_positions(graph)]
    # texts/1 is not reachable from the body but still has a box;
    # tables/0 has no provenance at all.
    assert ids == ["#/texts/0", "#/texts/1", "#/texts/2", "#/pictures/0", "#/tables/1"]


def test_only_text_items_carry_preview_text() -> None:
    graph = DocumentGraph.from_dict(sample_document())
    by_id = {item.id: item for item in index_positions(graph)}
    assert by_id["#/texts/2"].text == "Body text."
    assert by_id["#/pictures/0"].text is None
    assert by_id["#/tables/1"].text is None
    assert "text" not in by_id["#/tables/1"].to_dict()


def test_pictures_without_image_resource_are_excluded() -> None:
    payload = sample_document()
    del payload["pictures"][0]["image"]
    graph = DocumentGraph.from_dict(payload)
    assert "#/pictures/0" not in {item.id for item in index_positions(graph)}


def test_items_on_page_filters_by_page_number() -> None:
    graph = DocumentGraph.from_dict(sample_document())
    items = index_positions(graph)
    assert [i.id for i in items_on_page(items, 2)] == ["#/tables/1"]
    assert items_on_page(items, 9) == []


def test_page_dimension_table_first_write_wins() -> None:
    pages = PageDimensionTable()
    assert pages.record(0, 612, 792)
    assert not pages.record(0, 100, 100)
    assert pages.get(0).width == 612.0
    assert pages.get(0).height == 792.0
    assert pages.for_page_number(1) == pages.get(0)
    assert pages.get(1) is None
    assert 0 in pages
    assert len(pages) == 1

    pages.clear()
    assert len(pages) == 0
    assert pages.record(0, 100, 100)


def test_index_positions_skips_slots_that_are_not_objects() -> None:
    graph = DocumentGraph.from_dict({"texts": [None, text(1, "kept")], "tables": ["x"]})
    assert [item.id for item in index_positions(graph)] == ["#/texts/1"]
