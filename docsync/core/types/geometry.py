from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .nodes import BOTTOMLEFT


@dataclass(frozen=True)
class PositionedItem:
    """A content node's first provenance box, in document coordinates."""

    id: str
    page_number: int
    bbox: Tuple[float, float, float, float]  # left, top, right, bottom
    text: Optional[str] = None
    coord_origin: str = BOTTOMLEFT

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "id": self.id,
            "pageNumber": int(self.page_number),
            "bbox": [float(v) for v in self.bbox],
        }
        if self.text is not None:
            payload["text"] = self.text
        return payload


@dataclass(frozen=True)
class PageDimension:
    width: float
    height: float


@dataclass(frozen=True)
class ScreenRect:
    left: float
    top: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "left": float(self.left),
            "top": float(self.top),
            "width": float(self.width),
            "height": float(self.height),
        }


@dataclass(frozen=True)
class HighlightPosition:
    page_number: int
    rects: Tuple[ScreenRect, ...]


@dataclass(frozen=True)
class Highlight:
    id: str
    content: str
    position: HighlightPosition

    @classmethod
    def single(
        cls, id: str, content: str, page_number: int, rects: Sequence[ScreenRect]
    ) -> "Highlight":
        return cls(
            id=id,
            content=content,
            position=HighlightPosition(page_number=page_number, rects=tuple(rects)),
        )
