"""Exception hierarchy for imagify.

Two families exist:

* ``RunError`` subclasses are fatal. They are raised before any page is
  scheduled and abort the run without producing output.
* ``PageTaskError`` subclasses belong to a single page. They are recorded in
  the run outcome while sibling pages keep processing.
"""

from __future__ import annotations


class ImagifyError(Exception):
    """Base class for all imagify errors."""


class RunError(ImagifyError):
    """Fatal error that prevents a conversion run from starting."""


class InputError(RunError):
    """Source document path is missing or does not exist."""


class DocumentReadError(RunError):
    """Source document exists but could not be parsed."""


class DirectoryError(RunError):
    """Output directory could not be created or is not a directory."""


class UnsupportedFormatError(RunError):
    """Requested output file type is not recognised."""


class PageCountUnavailable(RunError):
    """Total page count could not be read from the document."""


class EmptyDocument(RunError):
    """Document has no pages to convert."""


class InvalidPageError(RunError):
    """Requested page list contains a value that is not a positive integer."""


class PageTaskError(ImagifyError):
    """Failure confined to the conversion of one page."""

    kind = "PageTaskError"

    def __init__(self, page_number: int, message: str) -> None:
        super().__init__(f"page {page_number}: {message}")
        self.page_number = page_number
        self.message = message


class ExtractionError(PageTaskError):
    kind = "ExtractionError"


class DecodeError(PageTaskError):
    kind = "DecodeError"


class ResizeError(PageTaskError):
    kind = "ResizeError"


class EncodeError(PageTaskError):
    kind = "EncodeError"


class PersistError(PageTaskError):
    kind = "PersistError"


__all__ = [
    "DecodeError",
    "DirectoryError",
    "DocumentReadError",
    "EmptyDocument",
    "EncodeError",
    "ExtractionError",
    "ImagifyError",
    "InputError",
    "InvalidPageError",
    "PageCountUnavailable",
    "PageTaskError",
    "PersistError",
    "ResizeError",
    "RunError",
    "UnsupportedFormatError",
]
