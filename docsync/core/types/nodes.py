from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping, Optional, Tuple, Union

BOTTOMLEFT = "BOTTOMLEFT"
TOPLEFT = "TOPLEFT"

TEXTS = "texts"
PICTURES = "pictures"
TABLES = "tables"
GROUPS = "groups"
COLLECTIONS: Tuple[str, ...] = (TEXTS, PICTURES, TABLES, GROUPS)


@dataclass(frozen=True)
class BoundingBox:
    """Box edges in document coordinates (origin bottom-left by default)."""

    l: float  # noqa: E741
    t: float
    r: float
    b: float
    coord_origin: str = BOTTOMLEFT

    def as_list(self) -> List[float]:
        return [self.l, self.t, self.r, self.b]

    @classmethod
    def from_dict(cls, payload: object) -> Optional["BoundingBox"]:
        if not isinstance(payload, Mapping):
            return None
        try:
            return cls(
                l=float(payload["l"]),
                t=float(payload["t"]),
                r=float(payload["r"]),
                b=float(payload["b"]),
                coord_origin=str(payload.get("coord_origin") or BOTTOMLEFT).upper(),
            )
        except (KeyError, TypeError, ValueError):
            return None


@dataclass(frozen=True)
class Provenance:
    page_no: int
    bbox: Optional[BoundingBox] = None
    charspan: Tuple[int, ...] = ()

    @classmethod
    def from_dict(cls, payload: object) -> Optional["Provenance"]:
        if not isinstance(payload, Mapping):
            return None
        try:
            page_no = int(payload["page_no"])
        except (KeyError, TypeError, ValueError):
            return None
        charspan = payload.get("charspan") or ()
        try:
            span = tuple(int(v) for v in charspan)
        except (TypeError, ValueError):
            span = ()
        return cls(
            page_no=page_no,
            bbox=BoundingBox.from_dict(payload.get("bbox")),
            charspan=span,
        )


@dataclass(frozen=True)
class Reference:
    """Typed pointer into one of the document's node collections."""

    collection: str
    index: int

    def to_path(self) -> str:
        return f"#/{self.collection}/{self.index}"

    @classmethod
    def parse(cls, path: object) -> Optional["Reference"]:
        """Parse ``"#/texts/3"``; return None for malformed paths."""
        if not isinstance(path, str):
            return None
        parts = path.split("/")
        if len(parts) < 3:
            return None
        if not (parts[2].isascii() and parts[2].isdigit()):
            return None
        return cls(collection=parts[1], index=int(parts[2]))


def ref_path(payload: object) -> Optional[str]:
    """Extract the path string from a ``{"$ref": ...}`` object."""
    if isinstance(payload, Mapping):
        value = payload.get("$ref")
        return value if isinstance(value, str) else None
    if isinstance(payload, str):
        return payload
    return None


@dataclass(frozen=True)
class ImageRef:
    mimetype: str = ""
    dpi: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    uri: str = ""

    @classmethod
    def from_dict(cls, payload: object) -> Optional["ImageRef"]:
        if not isinstance(payload, Mapping):
            return None
        size = payload.get("size") or {}
        if not isinstance(size, Mapping):
            size = {}
        return cls(
            mimetype=str(payload.get("mimetype") or ""),
            dpi=_opt_float(payload.get("dpi")),
            width=_opt_float(size.get("width")),
            height=_opt_float(size.get("height")),
            uri=str(payload.get("uri") or ""),
        )


@dataclass(frozen=True)
class TableCell:
    text: str = ""
    row_span: int = 1
    col_span: int = 1
    start_row_offset_idx: int = 0
    end_row_offset_idx: int = 0
    start_col_offset_idx: int = 0
    end_col_offset_idx: int = 0
    column_header: bool = False
    row_header: bool = False
    row_section: bool = False

    @property
    def is_header(self) -> bool:
        return self.column_header or self.row_header

    @classmethod
    def from_dict(cls, payload: object) -> Optional["TableCell"]:
        if not isinstance(payload, Mapping):
            return None
        return cls(
            text=str(payload.get("text") or ""),
            row_span=max(1, _int(payload.get("row_span"), 1)),
            col_span=max(1, _int(payload.get("col_span"), 1)),
            start_row_offset_idx=_int(payload.get("start_row_offset_idx"), 0),
            end_row_offset_idx=_int(payload.get("end_row_offset_idx"), 0),
            start_col_offset_idx=_int(payload.get("start_col_offset_idx"), 0),
            end_col_offset_idx=_int(payload.get("end_col_offset_idx"), 0),
            column_header=bool(payload.get("column_header", False)),
            row_header=bool(payload.get("row_header", False)),
            row_section=bool(payload.get("row_section", False)),
        )


@dataclass(frozen=True)
class TableData:
    num_rows: int = 0
    num_cols: int = 0
    grid: Tuple[Tuple[Optional[TableCell], ...], ...] = ()

    @classmethod
    def from_dict(cls, payload: object) -> "TableData":
        if not isinstance(payload, Mapping):
            return cls()
        rows = payload.get("grid") or []
        grid = tuple(
            tuple(TableCell.from_dict(cell) for cell in row)
            for row in rows
            if isinstance(row, list)
        )
        return cls(
            num_rows=_int(payload.get("num_rows"), len(grid)),
            num_cols=_int(
                payload.get("num_cols"), max((len(r) for r in grid), default=0)
            ),
            grid=grid,
        )


@dataclass(frozen=True)
class TextNode:
    type: Literal["text"]
    self_ref: str
    label: str
    text: str
    prov: Tuple[Provenance, ...] = ()
    orig: str = ""
    level: Optional[int] = None
    enumerated: Optional[bool] = None
    marker: Optional[str] = None


@dataclass(frozen=True)
class PictureNode:
    type: Literal["picture"]
    self_ref: str
    label: str
    prov: Tuple[Provenance, ...] = ()
    image: Optional[ImageRef] = None
    captions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TableNode:
    type: Literal["table"]
    self_ref: str
    label: str
    prov: Tuple[Provenance, ...] = ()
    data: TableData = field(default_factory=TableData)
    captions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GroupNode:
    type: Literal["group"]
    self_ref: str
    label: str
    name: str = ""
    children: Tuple[str, ...] = ()


ContentNode = Union[TextNode, PictureNode, TableNode, GroupNode]
LeafNode = Union[TextNode, PictureNode, TableNode]


def first_page(node: ContentNode) -> Optional[int]:
    prov = getattr(node, "prov", ())
    return prov[0].page_no if prov else None


def node_from_dict(collection: str, payload: Dict[str, object]) -> ContentNode:
    """Build the node variant stored in ``collection`` from raw JSON."""

    self_ref = str(payload.get("self_ref") or "")
    label = str(payload.get("label") or "")

    if collection == GROUPS:
        children = tuple(
            path
            for path in (ref_path(child) for child in _list(payload.get("children")))
            if path is not None
        )
        return GroupNode(
            "group",
            self_ref=self_ref,
            label=label,
            name=str(payload.get("name") or ""),
            children=children,
        )

    prov = tuple(
        p
        for p in (Provenance.from_dict(raw) for raw in _list(payload.get("prov")))
        if p is not None
    )
    captions = tuple(
        path
        for path in (ref_path(c) for c in _list(payload.get("captions")))
        if path is not None
    )

    if collection == TEXTS:
        level = payload.get("level")
        marker = payload.get("marker")
        enumerated = payload.get("enumerated")
        return TextNode(
            "text",
            self_ref=self_ref,
            label=label,
            text=str(payload.get("text") or ""),
            prov=prov,
            orig=str(payload.get("orig") or ""),
            level=_int(level, 0) if level is not None else None,
            enumerated=bool(enumerated) if enumerated is not None else None,
            marker=str(marker) if marker is not None else None,
        )

    if collection == PICTURES:
        return PictureNode(
            "picture",
            self_ref=self_ref,
            label=label,
            prov=prov,
            image=ImageRef.from_dict(payload.get("image")),
            captions=captions,
        )

    if collection == TABLES:
        return TableNode(
            "table",
            self_ref=self_ref,
            label=label,
            prov=prov,
            data=TableData.from_dict(payload.get("data")),
            captions=captions,
        )

    raise ValueError(f"Unknown node collection: {collection!r}")


def _list(value: object) -> list:
    return value if isinstance(value, list) else []


def _int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _opt_float(value: object) -> Optional[float]:
    try:
        return float(value) if value is not None else None  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
