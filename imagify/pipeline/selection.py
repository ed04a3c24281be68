"""Resolve which page numbers a run converts."""

from __future__ import annotations

from collections.abc import Sequence

from imagify.document.provider import DocumentHandle, DocumentProvider
from imagify.errors import EmptyDocument, InvalidPageError, PageCountUnavailable
from imagify.utils.log_utils import logger


def parse_pages(raw: str | None) -> list[int]:
    """Parse a page list such as ``"1,3,5"`` or ``"[1, 3, 5]"``.

    An empty value means "all pages" and yields an empty list.
    """
    if raw is None:
        return []
    value = raw.strip().strip("[]").strip()
    if not value:
        return []

    pages: list[int] = []
    for token in value.split(","):
        token = token.strip()
        try:
            pages.append(int(token))
        except ValueError:
            raise InvalidPageError(f"Invalid page number '{token}' in '{raw}'.") from None
    return pages


def resolve_pages(
    provider: DocumentProvider,
    handle: DocumentHandle,
    requested: Sequence[int],
) -> list[int]:
    """Return the page numbers to convert.

    Requested pages are validated and kept as given, duplicates included.
    Without a request every page of the document is selected.
    """
    if requested:
        for page_number in requested:
            if isinstance(page_number, bool) or not isinstance(page_number, int):
                raise InvalidPageError(f"Page number must be an integer, got {page_number!r}.")
            if page_number < 1:
                raise InvalidPageError(f"Page number must be positive, got {page_number}.")
        return list(requested)

    try:
        page_count = provider.page_count(handle)
    except Exception as exc:
        raise PageCountUnavailable(
            f"Could not retrieve the page count from the PDF file ({handle.path})."
        ) from exc

    if page_count <= 0:
        raise EmptyDocument(f"The PDF file has no pages ({handle.path}).")

    logger.warning(f"No pages specified. Defaulting to all {page_count} pages.")
    return list(range(1, page_count + 1))


__all__ = ["parse_pages", "resolve_pages"]
