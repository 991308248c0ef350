from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from docsync.core.content.assembler import DEFAULT_HEADING_LABELS, assemble_blocks
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.geometry import index_positions
from docsync.core.content.resolver import resolve_reading_order
from docsync.core.types.blocks import DisplayBlock, OrderedContentItem, block_summary
from docsync.core.types.document import DocumentGraph
from docsync.core.types.geometry import PositionedItem
from docsync.utils.logger import logger


@dataclass(frozen=True)
class ProcessedDocument:
    """Everything derived from one document graph."""

    ordered_items: Tuple[OrderedContentItem, ...]
    blocks: Tuple[DisplayBlock, ...]
    positioned_items: Tuple[PositionedItem, ...]
    index: CorrespondenceIndex


def process_document(
    graph: DocumentGraph,
    heading_labels: Sequence[str] = DEFAULT_HEADING_LABELS,
) -> ProcessedDocument:
    items = resolve_reading_order(graph)
    blocks = assemble_blocks(items, heading_labels=heading_labels)
    positioned = index_positions(graph)
    for block in blocks:
        logger.debug("Block %s", block_summary(block))
    logger.info(
        "Processed %r: %d items, %d blocks, %d positioned",
        graph.name,
        len(items),
        len(blocks),
        len(positioned),
    )
    return ProcessedDocument(
        ordered_items=tuple(items),
        blocks=tuple(blocks),
        positioned_items=tuple(positioned),
        index=CorrespondenceIndex(blocks),
    )


class DocumentProcessor:
    """Memoizes :func:`process_document` on the identity of the graph.

    Interaction state never reaches this object, so derived data is rebuilt
    only when a different graph object is passed in.
    """

    def __init__(self, heading_labels: Sequence[str] = DEFAULT_HEADING_LABELS) -> None:
        self._heading_labels = tuple(heading_labels)
        self._graph: Optional[DocumentGraph] = None
        self._result: Optional[ProcessedDocument] = None

    def process(self, graph: DocumentGraph) -> ProcessedDocument:
        if self._result is None or graph is not self._graph:
            self._result = process_document(graph, heading_labels=self._heading_labels)
            self._graph = graph
        return self._result
