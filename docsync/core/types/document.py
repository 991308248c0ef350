from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .nodes import (
    GROUPS,
    PICTURES,
    TABLES,
    TEXTS,
    ContentNode,
    GroupNode,
    PictureNode,
    TableNode,
    TextNode,
    node_from_dict,
    ref_path,
)


@dataclass(frozen=True)
class PageInfo:
    """Page size advertised by the extraction pipeline (advisory only)."""

    page_no: int
    width: float
    height: float


@dataclass(frozen=True, eq=False)
class DocumentGraph:
    """Immutable content graph for one document session.

    Compared by identity: derived data is cached per graph object.
    """

    name: str = ""
    body_children: Tuple[str, ...] = ()
    texts: Tuple[Optional[TextNode], ...] = ()
    pictures: Tuple[Optional[PictureNode], ...] = ()
    tables: Tuple[Optional[TableNode], ...] = ()
    groups: Tuple[Optional[GroupNode], ...] = ()
    pages: Dict[int, PageInfo] = field(default_factory=dict)

    def collection(self, name: str) -> Tuple[Optional[ContentNode], ...]:
        """Nodes of one collection; slots that were not JSON objects are None."""
        if name == TEXTS:
            return self.texts
        if name == PICTURES:
            return self.pictures
        if name == TABLES:
            return self.tables
        if name == GROUPS:
            return self.groups
        return ()

    def node_at(self, name: str, index: int) -> Optional[ContentNode]:
        nodes = self.collection(name)
        if 0 <= index < len(nodes):
            return nodes[index]
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "DocumentGraph":
        if not isinstance(payload, Mapping):
            raise ValueError("Content document must be a JSON object.")

        body = payload.get("body")
        children = body.get("children") if isinstance(body, Mapping) else None
        body_children = tuple(
            path
            for path in (ref_path(c) for c in (children if isinstance(children, list) else []))
            if path is not None
        )

        def _nodes(name: str) -> tuple:
            raw = payload.get(name)
            if not isinstance(raw, list):
                return ()
            return tuple(
                node_from_dict(name, item) if isinstance(item, Mapping) else None
                for item in raw
            )

        pages: Dict[int, PageInfo] = {}
        raw_pages = payload.get("pages")
        if isinstance(raw_pages, Mapping):
            for key, value in raw_pages.items():
                if not isinstance(value, Mapping):
                    continue
                size = value.get("size")
                if not isinstance(size, Mapping):
                    continue
                try:
                    page_no = int(value.get("page_no", key))
                    pages[page_no] = PageInfo(
                        page_no=page_no,
                        width=float(size["width"]),
                        height=float(size["height"]),
                    )
                except (KeyError, TypeError, ValueError):
                    continue

        return cls(
            name=str(payload.get("name") or ""),
            body_children=body_children,
            texts=_nodes(TEXTS),
            pictures=_nodes(PICTURES),
            tables=_nodes(TABLES),
            groups=_nodes(GROUPS),
            pages=pages,
        )
