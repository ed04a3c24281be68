"""Per-page conversion: extract, decode, resize, encode, persist."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor
import contextlib
from typing import TypeVar

from PIL import Image

from imagify.document.provider import DocumentHandle, DocumentProvider
from imagify.errors import (
    DecodeError,
    EncodeError,
    ExtractionError,
    PageTaskError,
    PersistError,
    ResizeError,
)
from imagify.image.codec import PillowCodec
from imagify.pipeline.models import OutputArtifact, PageTask
from imagify.utils.log_utils import logger


_R = TypeVar("_R")


class PageProcessor:
    """Convert one page of a shared document into an image file.

    Blocking stages run on ``executor``; ``None`` selects the loop's default
    executor. When ``extraction_lock`` is given, only the extract stage is
    serialised through it.
    """

    def __init__(
        self,
        provider: DocumentProvider,
        codec: PillowCodec,
        *,
        executor: Executor | None = None,
        extraction_lock: asyncio.Lock | None = None,
    ) -> None:
        self._provider = provider
        self._codec = codec
        self._executor = executor
        self._extraction_lock = extraction_lock

    async def _run_blocking(self, fn: Callable[..., _R], *args: object) -> _R:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, fn, *args)

    async def _extract(self, handle: DocumentHandle, page_number: int) -> bytes:
        guard = self._extraction_lock or contextlib.nullcontext()
        async with guard:
            return await self._run_blocking(self._provider.extract_page, handle, page_number)

    async def process(self, handle: DocumentHandle, task: PageTask) -> OutputArtifact:
        """Run every stage for ``task`` and return the written artifact.

        Raises:
            PageTaskError: one subclass per failing stage, carrying the page
                number. The underlying exception is chained as ``__cause__``.
        """
        page = task.page_number
        logger.debug(f"-- Processing page {page} --")

        try:
            raw = await self._extract(handle, page)
        except Exception as exc:
            raise ExtractionError(page, f"unable to extract page: {exc}") from exc

        try:
            image: Image.Image = await self._run_blocking(self._codec.decode, raw)
        except Exception as exc:
            raise DecodeError(page, f"failed to decode page: {exc}") from exc

        try:
            image = await self._run_blocking(self._codec.resize, image, task.resize)
        except Exception as exc:
            raise ResizeError(page, f"failed to resize page: {exc}") from exc

        try:
            data = await self._run_blocking(self._codec.encode, image, task.output_format)
        except Exception as exc:
            raise EncodeError(
                page, f"failed to encode page as {task.output_format.value}: {exc}"
            ) from exc

        path = task.output_path
        try:
            await self._codec.save(path, data)
        except Exception as exc:
            raise PersistError(page, f"could not save page to file ({path}): {exc}") from exc

        logger.debug(f"Saved page {page} to {path} ({image.width}x{image.height}).")
        return OutputArtifact(path=path, data=data)


def describe_failure(exc: BaseException) -> tuple[str, str]:
    """Return ``(kind, message)`` for a failed page."""
    if isinstance(exc, PageTaskError):
        return exc.kind, exc.message
    return type(exc).__name__, str(exc)


__all__ = ["PageProcessor", "describe_failure"]
