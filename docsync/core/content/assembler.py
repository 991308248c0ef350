"""Coalesce ordered content items into display blocks."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Iterable, List, Optional, Sequence

from docsync.core.types.blocks import (
    DisplayBlock,
    HeadingBlock,
    OrderedContentItem,
    ParagraphBlock,
    PictureBlock,
    TableBlock,
    UnknownBlock,
)
from docsync.core.types.nodes import first_page

DEFAULT_HEADING_LABELS = ("section_header",)


class _ParagraphRun:
    def __init__(self, item: OrderedContentItem) -> None:
        self.id = item.id
        self.page = first_page(item.data)
        self.source_ids: List[str] = []
        self.parts: List[str] = []

    def add(self, item: OrderedContentItem) -> None:
        self.source_ids.append(item.id)
        text = (getattr(item.data, "text", "") or "").strip()
        if text:
            self.parts.append(text)

    def to_block(self) -> ParagraphBlock:
        return ParagraphBlock(
            "paragraph",
            id=self.id,
            source_ids=tuple(self.source_ids),
            content=" ".join(self.parts),
            page=self.page,
        )


def assemble_blocks(
    items: Iterable[OrderedContentItem],
    heading_labels: Sequence[str] = DEFAULT_HEADING_LABELS,
) -> List[DisplayBlock]:
    """Merge runs of adjacent plain-text items into paragraphs.

    Headings, tables and pictures end the current run and are emitted as
    standalone blocks. Each block records every source id folded into it;
    the block id and page come from its first source node.
    """
    headings = frozenset(heading_labels)
    blocks: List[DisplayBlock] = []
    run: Optional[_ParagraphRun] = None

    def flush() -> None:
        nonlocal run
        if run is not None:
            blocks.append(run.to_block())
            run = None

    for item in items:
        node = item.data
        page = first_page(node)

        if item.type == "group":
            continue

        if item.type == "text":
            if node.label in headings:
                flush()
                blocks.append(
                    HeadingBlock(
                        "heading",
                        id=item.id,
                        source_ids=(item.id,),
                        content=node.text,
                        page=page,
                        level=node.level,
                    )
                )
            else:
                if run is None:
                    run = _ParagraphRun(item)
                run.add(item)
            continue

        flush()
        if item.type == "table":
            blocks.append(
                TableBlock("table", id=item.id, source_ids=(item.id,), data=node, page=page)
            )
        elif item.type == "picture":
            blocks.append(
                PictureBlock(
                    "picture", id=item.id, source_ids=(item.id,), data=node, page=page
                )
            )
        else:
            blocks.append(
                UnknownBlock(
                    "unknown",
                    id=item.id,
                    source_ids=(item.id,),
                    content=_describe_unknown(item),
                    data=node,
                    page=page,
                )
            )

    flush()
    return blocks


def _describe_unknown(item: OrderedContentItem) -> str:
    text = getattr(item.data, "text", None)
    if text:
        return str(text)
    try:
        raw = asdict(item.data) if is_dataclass(item.data) else item.data
        return json.dumps(raw, default=str)
    except (TypeError, ValueError):
        return f"Unknown type: {item.type}"
