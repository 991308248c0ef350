"""Document-space boxes to screen-space rectangles.

Document boxes are ``[left, top, right, bottom]`` with the origin at the
page's bottom-left corner, so ``top > bottom``. Screen rectangles have
their origin at the top-left of the rendered page and are scaled by
``display_width / page_width``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from docsync.core.types.geometry import PageDimension, PositionedItem, ScreenRect
from docsync.core.types.nodes import TOPLEFT


def scale_factor(display_width: float, page_width: float) -> Optional[float]:
    """Return the display scale, or None while either width is unknown."""
    if not display_width or not page_width or display_width <= 0 or page_width <= 0:
        return None
    return float(display_width) / float(page_width)


def to_screen_rect(
    bbox: Sequence[float],
    page_height: float,
    scale: float,
    padding: float = 0.0,
    coord_origin: str = "BOTTOMLEFT",
) -> ScreenRect:
    left, top, right, bottom = (float(v) for v in bbox)
    if coord_origin == TOPLEFT:
        # Already top-down: ``top`` is the smaller coordinate.
        return ScreenRect(
            left=(left - padding) * scale,
            top=(top - padding) * scale,
            width=(right - left + 2 * padding) * scale,
            height=(bottom - top + 2 * padding) * scale,
        )
    return ScreenRect(
        left=(left - padding) * scale,
        top=(page_height - (top + padding)) * scale,
        width=(right - left + 2 * padding) * scale,
        height=(top - bottom + 2 * padding) * scale,
    )


def map_item(
    item: PositionedItem,
    page: Optional[PageDimension],
    display_width: float,
    padding: float = 0.0,
) -> Optional[ScreenRect]:
    """Map ``item`` onto its rendered page; None until the page size is known."""
    if page is None:
        return None
    scale = scale_factor(display_width, page.width)
    if scale is None:
        return None
    return to_screen_rect(
        item.bbox,
        page.height,
        scale,
        padding=padding,
        coord_origin=item.coord_origin,
    )
