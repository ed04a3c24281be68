"""Read-only access to a parsed PDF document."""

from __future__ import annotations

import os
from types import TracebackType
from typing import Protocol

import fitz  # PyMuPDF

from imagify.config import DEFAULT_DPI
from imagify.errors import DocumentReadError


class DocumentHandle(Protocol):
    """Parsed document shared by every page task of a run."""

    @property
    def path(self) -> str: ...

    def close(self) -> None: ...


class DocumentProvider(Protocol):
    """Capability interface the pipeline uses to read pages.

    ``thread_safe_extraction`` tells the pipeline whether ``extract_page`` may
    be called from several threads at once on the same handle.
    """

    thread_safe_extraction: bool

    def read_document(self, path: str | os.PathLike[str]) -> DocumentHandle: ...

    def page_count(self, handle: DocumentHandle) -> int: ...

    def extract_page(self, handle: DocumentHandle, page_number: int) -> bytes: ...


class PdfDocument:
    """Handle over an open ``fitz.Document``."""

    def __init__(self, path: str, document: fitz.Document) -> None:
        self._path = path
        self._document = document

    @property
    def path(self) -> str:
        return self._path

    @property
    def document(self) -> fitz.Document:
        return self._document

    def close(self) -> None:
        self._document.close()

    def __enter__(self) -> PdfDocument:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class PyMuPdfProvider:
    """Render pages with PyMuPDF.

    PyMuPDF documents must not be used from several threads concurrently, so
    extraction is reported as not thread safe.
    """

    thread_safe_extraction = False

    def __init__(self, dpi: int = DEFAULT_DPI) -> None:
        if dpi < 1:
            raise ValueError("dpi must be >= 1")
        self._zoom = dpi / 72.0

    def read_document(self, path: str | os.PathLike[str]) -> PdfDocument:
        source = os.fspath(path)
        try:
            document = fitz.open(source)
        except Exception as exc:
            raise DocumentReadError(f"Failed to read the PDF document ({source}): {exc}") from exc
        if not document.is_pdf:
            document.close()
            raise DocumentReadError(f"Not a PDF document ({source}).")
        return PdfDocument(source, document)

    def page_count(self, handle: PdfDocument) -> int:
        return handle.document.page_count

    def extract_page(self, handle: PdfDocument, page_number: int) -> bytes:
        document = handle.document
        if not 1 <= page_number <= document.page_count:
            raise IndexError(
                f"page {page_number} is out of range (document has {document.page_count} pages)"
            )
        page = document[page_number - 1]
        matrix = fitz.Matrix(self._zoom, self._zoom)
        pix = page.get_pixmap(matrix=matrix)  # type: ignore[attr-defined]
        return pix.tobytes("png")


__all__ = ["DocumentHandle", "DocumentProvider", "PdfDocument", "PyMuPdfProvider"]
