import sys
from typing import Optional

from qtpy import QtCore, QtWidgets

from docsync.core.io.content_loader import ContentLoadError, load_content_graph
from docsync.core.io.pdf_source import PdfOpenError, PdfSource, open_pdf
from docsync.gui.application import create_qapp
from docsync.gui.cli import parse_cli
from docsync.gui.widgets.pdf_json_viewer import PdfJsonViewer
from docsync.utils.logger import __appname__, logger, set_log_level
from docsync.version import get_version

LOADING_TEXT = "Loading document..."


class DocSyncWindow(QtWidgets.QMainWindow):
    def __init__(self, config: Optional[dict] = None) -> None:
        super().__init__()
        self._config = dict(config or {})
        self._pdf_source: Optional[PdfSource] = None
        self.setWindowTitle(__appname__)
        self.resize(1400, 900)

        self._stack = QtWidgets.QStackedWidget(self)
        self.status_label = QtWidgets.QLabel(LOADING_TEXT, self)
        self.status_label.setAlignment(QtCore.Qt.AlignCenter)
        self.status_label.setWordWrap(True)
        self.viewer = PdfJsonViewer(self._config, self)
        self._stack.addWidget(self.status_label)
        self._stack.addWidget(self.viewer)
        self.setCentralWidget(self._stack)

    def open_sources(self, pdf: str, content: str) -> bool:
        """Load both sources; on failure show the error and keep it shown."""
        self.status_label.setText(LOADING_TEXT)
        self._stack.setCurrentWidget(self.status_label)
        timeout = float(self._config.get("fetch_timeout", 30))
        try:
            graph = load_content_graph(content, timeout=timeout)
            source = open_pdf(pdf, timeout=timeout)
        except (ContentLoadError, PdfOpenError) as exc:
            logger.error("Failed to open document: %s", exc)
            self.show_error(str(exc))
            return False

        if self._pdf_source is not None:
            self._pdf_source.close()
        self._pdf_source = source
        self.setWindowTitle(f"{__appname__} - {source.name or graph.name}")
        self._stack.setCurrentWidget(self.viewer)
        self.viewer.set_document(source, graph)
        return True

    def show_error(self, message: str) -> None:
        self.status_label.setText(f"Error: {message}")
        self._stack.setCurrentWidget(self.status_label)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        if self._pdf_source is not None:
            self._pdf_source.close()
            self._pdf_source = None
        super().closeEvent(event)


def main(argv=None):
    config, _, version_requested = parse_cli(argv)
    if version_requested:
        print(get_version())
        return 0
    set_log_level(config.get("log_level") or "INFO")

    qt_args = sys.argv if argv is None else [sys.argv[0], *argv]
    app = create_qapp(qt_args)
    app.setApplicationName(__appname__)

    win = DocSyncWindow(config=config)
    pdf, content = config.get("pdf"), config.get("content")
    if pdf and content:
        QtCore.QTimer.singleShot(0, lambda: win.open_sources(str(pdf), str(content)))
    else:
        win.show_error("Both a PDF and a content JSON source are required.")

    win.show()
    win.raise_()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
