"""Click and hover selection shared by the page view and the content view.

Click selection is sticky and tracked as a block id. Hover selection is
transient: it owns a synthetic :class:`Highlight` and a hover-derived
active block, both dropped on hover leave. Leaving never touches the
click selection, so the active block falls back to the last clicked one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from docsync.core.content.coordinates import map_item
from docsync.core.content.correspondence import CorrespondenceIndex
from docsync.core.content.geometry import PageDimensionTable
from docsync.core.content.registry import CONTENT_VIEW, DOCUMENT_VIEW
from docsync.core.types.geometry import Highlight, PositionedItem
from docsync.utils.logger import logger

IDLE = "idle"
ACTIVE = "active"
HOVERING = "hovering"

ALIGN_CENTER = "center"
ALIGN_NEAREST = "nearest"


@dataclass(frozen=True)
class ScrollRequest:
    view: str
    target_id: str
    align: str


class SelectionController:
    def __init__(
        self,
        index: CorrespondenceIndex,
        pages: PageDimensionTable,
        *,
        padding: float = 0.0,
        hover_prefix: str = "hover-",
        on_scroll: Optional[Callable[[ScrollRequest], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._index = index
        self._pages = pages
        self._padding = float(padding)
        self._hover_prefix = hover_prefix
        self._on_scroll = on_scroll
        self._on_change = on_change
        self._clicked_block_id: Optional[str] = None
        self._hover_block_id: Optional[str] = None
        self._hover_item: Optional[PositionedItem] = None
        self._hover_highlight: Optional[Highlight] = None

    # ------------------------------------------------------------------ state
    @property
    def state(self) -> str:
        if self._hover_highlight is not None:
            return HOVERING
        if self._clicked_block_id is not None:
            return ACTIVE
        return IDLE

    @property
    def active_block_id(self) -> Optional[str]:
        if self._hover_block_id is not None:
            return self._hover_block_id
        return self._clicked_block_id

    @property
    def clicked_block_id(self) -> Optional[str]:
        return self._clicked_block_id

    @property
    def hover_highlight(self) -> Optional[Highlight]:
        return self._hover_highlight

    def set_index(self, index: CorrespondenceIndex) -> None:
        """Swap in the index of a new document and drop all selection."""
        self._index = index
        self.reset()

    def reset(self) -> None:
        self._clicked_block_id = None
        self._clear_hover()
        self._changed()

    # ------------------------------------------------------------ transitions
    def click(self, source_id: str) -> str:
        """Activate the block owning ``source_id`` and bring both views to it."""
        block_id = self._index.resolve(source_id)
        self._clicked_block_id = block_id
        anchor = self._index.anchor_id(block_id)
        logger.debug("Click %s -> block %s (anchor %s)", source_id, block_id, anchor)
        self._changed()
        self._scroll(ScrollRequest(DOCUMENT_VIEW, anchor, ALIGN_CENTER))
        self._scroll(ScrollRequest(CONTENT_VIEW, block_id, ALIGN_NEAREST))
        return block_id

    def hover_enter(
        self, item: PositionedItem, display_width: float
    ) -> Optional[Highlight]:
        """Show a transient highlight over ``item``.

        No-op while the item's page size or the display width is unknown.
        """
        rect = map_item(
            item,
            self._pages.for_page_number(item.page_number),
            display_width,
            padding=self._padding,
        )
        if rect is None:
            return None
        self._hover_item = item
        self._hover_highlight = Highlight.single(
            f"{self._hover_prefix}{item.id}",
            item.text or "",
            item.page_number,
            [rect],
        )
        self._hover_block_id = self._index.resolve(item.id)
        self._changed()
        self._scroll(ScrollRequest(CONTENT_VIEW, self._hover_block_id, ALIGN_NEAREST))
        return self._hover_highlight

    def hover_leave(self) -> None:
        if self._hover_highlight is None and self._hover_block_id is None:
            return
        self._clear_hover()
        self._changed()

    def refresh_hover(self, display_width: float) -> None:
        """Re-map the hover highlight after the display width changed."""
        item = self._hover_item
        if item is None or self._hover_highlight is None:
            return
        rect = map_item(
            item,
            self._pages.for_page_number(item.page_number),
            display_width,
            padding=self._padding,
        )
        if rect is None:
            self._clear_hover()
        else:
            self._hover_highlight = Highlight.single(
                self._hover_highlight.id,
                self._hover_highlight.content,
                item.page_number,
                [rect],
            )
        self._changed()

    def is_hover_highlight(self, highlight_id: str) -> bool:
        return highlight_id.startswith(self._hover_prefix)

    # ---------------------------------------------------------------- helpers
    def _clear_hover(self) -> None:
        self._hover_item = None
        self._hover_highlight = None
        self._hover_block_id = None

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _scroll(self, request: ScrollRequest) -> None:
        if self._on_scroll is not None:
            self._on_scroll(request)
