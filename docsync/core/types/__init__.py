from .blocks import (
    DisplayBlock,
    HeadingBlock,
    OrderedContentItem,
    ParagraphBlock,
    PictureBlock,
    TableBlock,
    UnknownBlock,
)
from .document import DocumentGraph, PageInfo
from .geometry import (
    Highlight,
    HighlightPosition,
    PageDimension,
    PositionedItem,
    ScreenRect,
)
from .nodes import (
    BoundingBox,
    ContentNode,
    GroupNode,
    ImageRef,
    PictureNode,
    Provenance,
    Reference,
    TableCell,
    TableData,
    TableNode,
    TextNode,
    node_from_dict,
)

__all__ = [
    "BoundingBox",
    "ContentNode",
    "DisplayBlock",
    "DocumentGraph",
    "GroupNode",
    "HeadingBlock",
    "Highlight",
    "HighlightPosition",
    "ImageRef",
    "OrderedContentItem",
    "PageDimension",
    "PageInfo",
    "ParagraphBlock",
    "PictureBlock",
    "PictureNode",
    "PositionedItem",
    "Provenance",
    "Reference",
    "ScreenRect",
    "TableBlock",
    "TableCell",
    "TableData",
    "TableNode",
    "TextNode",
    "UnknownBlock",
    "node_from_dict",
]
