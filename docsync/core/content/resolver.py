"""Flatten the content graph's reference tree into reading order."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List

from docsync.core.types.blocks import OrderedContentItem
from docsync.core.types.document import DocumentGraph
from docsync.core.types.nodes import GROUPS, PICTURES, TABLES, TEXTS, Reference
from docsync.utils.logger import logger

_ITEM_TYPES = {
    TEXTS: "text",
    PICTURES: "picture",
    TABLES: "table",
}


def resolve_reading_order(graph: DocumentGraph) -> List[OrderedContentItem]:
    """Return every reachable leaf node of ``graph.body`` in reading order.

    Groups are traversed in place and never emitted. Malformed or dangling
    references are skipped. A group that references one of its own
    ancestors is skipped as well, so cyclic graphs terminate.
    """
    items: List[OrderedContentItem] = []
    _resolve(graph, graph.body_children, items, frozenset())
    return items


def _resolve(
    graph: DocumentGraph,
    paths: Iterable[str],
    out: List[OrderedContentItem],
    ancestors: FrozenSet[int],
) -> None:
    for path in paths:
        ref = Reference.parse(path)
        if ref is None:
            logger.debug("Skipping malformed reference %r", path)
            continue

        if ref.collection == GROUPS:
            if ref.index in ancestors:
                logger.warning(
                    "Skipping cyclic group reference %s", ref.to_path()
                )
                continue
            group = graph.node_at(GROUPS, ref.index)
            if group is None:
                logger.debug("Skipping dangling reference %s", ref.to_path())
                continue
            _resolve(graph, group.children, out, ancestors | {ref.index})
            continue

        item_type = _ITEM_TYPES.get(ref.collection)
        if item_type is None:
            logger.debug("Skipping unsupported collection in %s", ref.to_path())
            continue
        node = graph.node_at(ref.collection, ref.index)
        if node is None:
            logger.debug("Skipping dangling reference %s", ref.to_path())
            continue
        out.append(
            OrderedContentItem(
                id=node.self_ref or f"{ref.collection}-{ref.index}",
                type=item_type,
                data=node,
            )
        )
