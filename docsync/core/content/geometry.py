from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from docsync.core.types.document import DocumentGraph
from docsync.core.types.geometry import PageDimension, PositionedItem
from docsync.core.types.nodes import PICTURES, TABLES, TEXTS, ContentNode, PictureNode, TextNode
from docsync.utils.logger import logger


def index_positions(graph: DocumentGraph) -> List[PositionedItem]:
    """Collect one positioned item per leaf node that carries a box.

    Only the first provenance entry of a node is used. Pictures without an
    image resource are left out, and only text nodes carry preview text.
    """
    items: List[PositionedItem] = []
    for name in (TEXTS, PICTURES, TABLES):
        items.extend(_positions(graph.collection(name), name))
    return items


def _positions(
    nodes: Sequence[Optional[ContentNode]], collection: str
) -> Iterator[PositionedItem]:
    for index, node in enumerate(nodes):
        if node is None:
            continue
        prov = getattr(node, "prov", ())
        if not prov or prov[0].bbox is None:
            continue
        if isinstance(node, PictureNode) and (node.image is None or not node.image.uri):
            continue
        first = prov[0]
        box = first.bbox
        yield PositionedItem(
            id=node.self_ref or f"{collection}-{index}",
            page_number=first.page_no,
            bbox=(box.l, box.t, box.r, box.b),
            text=node.text if isinstance(node, TextNode) else None,
            coord_origin=box.coord_origin,
        )


def items_on_page(items: Sequence[PositionedItem], page_number: int) -> List[PositionedItem]:
    return [item for item in items if item.page_number == page_number]


class PageDimensionTable:
    """True page sizes keyed by zero-based page index; first write wins."""

    def __init__(self) -> None:
        self._pages: Dict[int, PageDimension] = {}

    def record(self, page_index: int, width: float, height: float) -> bool:
        """Store the size of ``page_index`` unless already known.

        Returns True when the entry was written by this call.
        """
        if page_index in self._pages:
            existing = self._pages[page_index]
            if (existing.width, existing.height) != (width, height):
                logger.debug(
                    "Ignoring new size %sx%s for page %d; keeping %sx%s",
                    width,
                    height,
                    page_index,
                    existing.width,
                    existing.height,
                )
            return False
        self._pages[page_index] = PageDimension(width=float(width), height=float(height))
        return True

    def get(self, page_index: int) -> Optional[PageDimension]:
        return self._pages.get(page_index)

    def for_page_number(self, page_number: int) -> Optional[PageDimension]:
        return self._pages.get(page_number - 1)

    def clear(self) -> None:
        self._pages.clear()

    def __contains__(self, page_index: object) -> bool:
        return page_index in self._pages

    def __len__(self) -> int:
        return len(self._pages)
