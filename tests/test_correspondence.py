from __future__ import annotations

from graph_factory import ref, sample_document, text

from docsync.core.content.assembler import assemble_blocks
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.resolver import resolve_reading_order
from docsync.core.types.document import DocumentGraph


def _index(payload: dict) -> CorrespondenceIndex:
    graph = DocumentGraph.from_dict(payload)
    return CorrespondenceIndex(assemble_blocks(resolve_reading_order(graph)))


def test_every_source_id_maps_back_to_its_block() -> None:
    graph = DocumentGraph.from_dict(
        {
            "body": {"children": [ref("#/texts/0"), ref("#/texts/1"), ref("#/texts/2")]},
            "texts": [text(0, "a"), text(1, "b"), text(2, "H", label="section_header")],
        }
    )
    blocks = assemble_blocks(resolve_reading_order(graph))
    index = CorrespondenceIndex(blocks)
    for block in blocks:
        for source_id in block.source_ids:
            assert index.resolve(source_id) == block.id
    assert index.resolve("#/texts/1") == "#/texts/0"
    assert len(index) == 3


def test_unknown_source_id_resolves_to_itself() -> None:
    index = _index(sample_document())
    # texts/1 has a box but is not in the reading order
    assert "#/texts/1" not in index
    assert index.get("#/texts/1") is None
    assert index.resolve("#/texts/1") == "#/texts/1"


def test_anchor_id_is_the_first_source_id() -> None:
    index = _index(
        {
            "body": {"children": [ref("#/texts/0"), ref("#/texts/1")]},
            "texts": [text(0, "a"), text(1, "b")],
        }
    )
    assert index.source_ids("#/texts/0") == ("#/texts/0", "#/texts/1")
    assert index.anchor_id("#/texts/0") == "#/texts/0"
    assert index.anchor_id("missing") == "missing"
    assert index.block("#/texts/0").content == "a b"


def test_repeated_source_id_keeps_first_owner() -> None:
    index = _index(
        {
            "body": {
                "children": [
                    ref("#/texts/0"),
                    ref("#/tables/0"),
                    ref("#/texts/0"),
                ]
            },
            "texts": [text(0, "again")],
            "tables": [{"self_ref": "#/tables/0", "label": "table"}],
        }
    )
    assert index.resolve("#/texts/0") == "#/texts/0"
    assert index.block("#/texts/0").source_ids == ("#/texts/0",)
