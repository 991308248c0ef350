from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple, Union

from .nodes import ContentNode, PictureNode, TableNode


@dataclass(frozen=True)
class OrderedContentItem:
    """One reachable leaf node, in reading order."""

    id: str
    type: str  # "text" | "picture" | "table"
    data: ContentNode


@dataclass(frozen=True)
class HeadingBlock:
    type: Literal["heading"]
    id: str
    source_ids: Tuple[str, ...]
    content: str
    page: Optional[int] = None
    level: Optional[int] = None


@dataclass(frozen=True)
class ParagraphBlock:
    type: Literal["paragraph"]
    id: str
    source_ids: Tuple[str, ...]
    content: str
    page: Optional[int] = None

    @property
    def is_footnote(self) -> bool:
        return self.content.lstrip().startswith("*")


@dataclass(frozen=True)
class TableBlock:
    type: Literal["table"]
    id: str
    source_ids: Tuple[str, ...]
    data: TableNode
    page: Optional[int] = None


@dataclass(frozen=True)
class PictureBlock:
    type: Literal["picture"]
    id: str
    source_ids: Tuple[str, ...]
    data: PictureNode
    page: Optional[int] = None


@dataclass(frozen=True)
class UnknownBlock:
    """Fallback for item types the assembler does not recognize."""

    type: Literal["unknown"]
    id: str
    source_ids: Tuple[str, ...]
    content: str
    data: object = None
    page: Optional[int] = None


DisplayBlock = Union[HeadingBlock, ParagraphBlock, TableBlock, PictureBlock, UnknownBlock]


def block_summary(block: DisplayBlock) -> Dict[str, object]:
    """Short JSON-friendly description used in logs and diagnostics."""
    payload: Dict[str, object] = {
        "type": block.type,
        "id": block.id,
        "source_ids": list(block.source_ids),
    }
    if block.page is not None:
        payload["page"] = int(block.page)
    content = getattr(block, "content", None)
    if isinstance(content, str):
        payload["content"] = content[:80]
    return payload
