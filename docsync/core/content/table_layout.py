from __future__ import annotations

from dataclasses import dataclass
from typing import List

from docsync.core.types.nodes import TableData


@dataclass(frozen=True)
class PlacedCell:
    row: int
    col: int
    text: str
    row_span: int = 1
    col_span: int = 1
    header: bool = False


def layout_table(data: TableData) -> List[List[PlacedCell]]:
    """Place grid cells into rows, skipping positions covered by a span."""
    if not data.grid:
        return []

    num_rows = max(0, data.num_rows)
    num_cols = max(0, data.num_cols)
    occupied = [[False] * num_cols for _ in range(num_rows)]
    rows: List[List[PlacedCell]] = []

    for r in range(num_rows):
        cells: List[PlacedCell] = []
        grid_row = data.grid[r] if r < len(data.grid) else ()
        for c in range(num_cols):
            if occupied[r][c]:
                continue
            cell = grid_row[c] if c < len(grid_row) else None
            if cell is None:
                continue

            occupied[r][c] = True
            if cell.row_span > 1 or cell.col_span > 1:
                for ri in range(cell.row_span):
                    for ci in range(cell.col_span):
                        if r + ri < num_rows and c + ci < num_cols:
                            occupied[r + ri][c + ci] = True

            cells.append(
                PlacedCell(
                    row=r,
                    col=c,
                    text=cell.text,
                    row_span=cell.row_span,
                    col_span=cell.col_span,
                    header=cell.is_header,
                )
            )
        rows.append(cells)
    return rows
