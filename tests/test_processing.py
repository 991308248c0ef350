from __future__ import annotations

from graph_factory import sample_document

from docsync.core.content.processing import DocumentProcessor, process_document
from docsync.core.types.document import DocumentGraph


def test_process_document_derives_all_views() -> None:
    processed = process_document(DocumentGraph.from_dict(sample_document()))
    assert len(processed.ordered_items) == 4
    assert [b.type for b in processed.blocks] == ["heading", "picture", "paragraph", "table"]
    assert len(processed.positioned_items) == 5
    assert processed.index.resolve("#/texts/2") == "#/texts/2"


def test_processor_memoizes_on_graph_identity() -> None:
    processor = DocumentProcessor()
    graph = DocumentGraph.from_dict(sample_document())

    first = processor.process(graph)
    assert processor.process(graph) is first

    same_content = DocumentGraph.from_dict(sample_document())
    second = processor.process(same_content)
    assert second is not first
    assert [b.id for b in second.blocks] == [b.id for b in first.blocks]


def test_processor_heading_labels() -> None:
    processor = DocumentProcessor(heading_labels=("title",))
    processed = processor.process(DocumentGraph.from_dict(sample_document()))
    assert processed.blocks[0].type == "paragraph"
