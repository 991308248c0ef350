from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import requests

from docsync.core.io.content_loader import is_url
from docsync.utils.logger import logger


class PdfOpenError(RuntimeError):
    """The paginated document could not be opened."""


class PdfSource:
    """Paginated document backed by PyMuPDF."""

    def __init__(self, doc, name: str = "") -> None:
        self._doc = doc
        self.name = name

    @property
    def page_count(self) -> int:
        return int(self._doc.page_count) if self._doc is not None else 0

    def page_size(self, page_index: int) -> Tuple[float, float]:
        """True page size in document units (points)."""
        rect = self._doc.load_page(page_index).rect
        return float(rect.width), float(rect.height)

    def render(self, page_index: int, target_width: float):
        """Render ``page_index`` scaled to ``target_width`` pixels.

        Returns a ``fitz.Pixmap``.
        """
        import fitz  # type: ignore[import]

        page = self._doc.load_page(page_index)
        page_w = float(page.rect.width)
        zoom = float(target_width) / page_w if page_w > 0 else 1.0
        return page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None


def open_pdf(source: Union[str, Path], timeout: float = 30) -> PdfSource:
    """Open a local path or http(s) URL as a :class:`PdfSource`."""
    try:
        import fitz  # type: ignore[import]
    except ImportError as exc:  # pragma: no cover - dependency missing
        raise RuntimeError(
            "PyMuPDF (pymupdf) is required to view PDF files."
        ) from exc

    try:
        if is_url(source):
            response = requests.get(str(source), timeout=timeout)
            response.raise_for_status()
            doc = fitz.open(stream=response.content, filetype="pdf")
            name = str(source).rsplit("/", 1)[-1]
        else:
            path = Path(source).expanduser()
            if not path.is_file():
                raise PdfOpenError(f"PDF not found: {path}")
            doc = fitz.open(str(path))
            name = path.name
    except PdfOpenError:
        raise
    except requests.RequestException as exc:
        raise PdfOpenError(f"Failed to fetch {source}: {exc}") from exc
    except Exception as exc:
        raise PdfOpenError(f"Failed to open {source}: {exc}") from exc

    if doc.page_count == 0:
        doc.close()
        raise PdfOpenError("The selected PDF does not contain any pages.")
    logger.info("Opened %s (%d pages)", name or source, doc.page_count)
    return PdfSource(doc, name=name)
