from docsync.gui.widgets.content_view import ContentView
from docsync.gui.widgets.pdf_json_viewer import PdfJsonViewer
from docsync.gui.widgets.pdf_view import PdfView
from docsync.gui.widgets.table_view import TableView
