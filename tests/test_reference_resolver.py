from __future__ import annotations

from graph_factory import ref, sample_document, text

from docsync.core.content.resolver import resolve_reading_order
from docsync.core.types.document import DocumentGraph


def _graph(children, **collections) -> DocumentGraph:
    payload = {"body": {"children": children}}
    payload.update(collections)
    return DocumentGraph.from_dict(payload)


def test_resolver_flattens_groups_in_reading_order() -> None:
    graph = DocumentGraph.from_dict(sample_document())
    items = resolve_reading_order(graph)

    assert [item.id for item in items] == [
        "#/texts/0",
        "#/pictures/0",
        "#/texts/2",
        "#/tables/1",
    ]
    assert [item.type for item in items] == ["text", "picture", "text", "table"]
    assert items[3].data is graph.tables[1]


def test_resolver_recurses_through_nested_groups() -> None:
    graph = _graph(
        [ref("#/groups/0"), ref("#/texts/2")],
        texts=[text(0, "a"), text(1, "b"), text(2, "c")],
        groups=[
            {"children": [ref("#/texts/0"), ref("#/groups/1")]},
            {"children": [ref("#/texts/1")]},
        ],
    )
    assert [item.data.text for item in resolve_reading_order(graph)] == ["a", "b", "c"]


def test_resolver_skips_malformed_and_dangling_references() -> None:
    graph = _graph(
        [
            ref("#/texts/abc"),
            ref("#/texts"),
            ref("#/texts/7"),
            ref("#/texts/-1"),
            ref("#/groups/3"),
            ref("#/key_value_items/0"),
            {"unexpected": "shape"},
            ref("#/texts/0"),
        ],
        texts=[text(0, "only")],
    )
    items = resolve_reading_order(graph)
    assert [item.id for item in items] == ["#/texts/0"]


def test_resolver_synthesizes_missing_ids() -> None:
    node = text(0, "anonymous")
    node["self_ref"] = ""
    graph = _graph([ref("#/texts/0")], texts=[node])
    assert resolve_reading_order(graph)[0].id == "texts-0"


def test_resolver_emits_repeated_references_twice() -> None:
    graph = _graph([ref("#/texts/0"), ref("#/texts/0")], texts=[text(0, "twice")])
    assert len(resolve_reading_order(graph)) == 2


def test_resolver_skips_cyclic_groups() -> None:
    graph = _graph(
        [ref("#/groups/0")],
        texts=[text(0, "inside")],
        groups=[
            {"children": [ref("#/texts/0"), ref("#/groups/1")]},
            {"children": [ref("#/groups/0"), ref("#/groups/1")]},
        ],
    )
    items = resolve_reading_order(graph)
    assert [item.id for item in items] == ["#/texts/0"]


def test_resolver_handles_empty_document() -> None:
    assert resolve_reading_order(DocumentGraph.from_dict({})) == []


def test_resolver_skips_slots_that_are_not_objects() -> None:
    graph = _graph(
        [ref("#/texts/0"), ref("#/texts/1"), ref("#/pictures/0"), ref("#/texts/2")],
        texts=[text(0, "Hello"), None, "stray"],
        pictures=[42],
    )
    assert graph.node_at("texts", 1) is None
    assert [item.id for item in resolve_reading_order(graph)] == ["#/texts/0"]
