from __future__ import annotations

from html import escape

from qtpy import QtCore, QtWidgets

from docsync.core.content.table_layout import layout_table
from docsync.core.types.nodes import TableData

EMPTY_TABLE_TEXT = "No table data available."


def table_to_html(data: TableData) -> str:
    rows = layout_table(data)
    if not rows:
        return f"<p style='color:#6b7280;font-size:11px'>{EMPTY_TABLE_TEXT}</p>"

    parts = [
        "<table width='100%' cellspacing='0' cellpadding='3' "
        "style='border-collapse:collapse;font-size:11px'>"
    ]
    for cells in rows:
        parts.append("<tr>")
        for cell in cells:
            tag = "th" if cell.header else "td"
            attrs = ""
            if cell.row_span > 1:
                attrs += f" rowspan='{cell.row_span}'"
            if cell.col_span > 1:
                attrs += f" colspan='{cell.col_span}'"
            style = "border:1px solid #e5e7eb;text-align:left;vertical-align:top"
            if cell.header:
                style += ";font-weight:bold;background:#f9fafb"
            parts.append(f"<{tag}{attrs} style='{style}'>{escape(cell.text)}</{tag}>")
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


class TableView(QtWidgets.QLabel):
    """Read-only rendering of an extracted table grid."""

    def __init__(self, data: TableData, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setTextFormat(QtCore.Qt.RichText)
        self.setWordWrap(True)
        self.setAttribute(QtCore.Qt.WA_TransparentForMouseEvents, True)
        self.setStyleSheet("border: 1px solid #d1d5db; background: white;")
        self.setText(table_to_html(data))
