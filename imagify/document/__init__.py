"""Document access for the page pipeline."""

from .provider import DocumentHandle, DocumentProvider, PdfDocument, PyMuPdfProvider


__all__ = ["DocumentHandle", "DocumentProvider", "PdfDocument", "PyMuPdfProvider"]
