"""Bounded fan-out of page tasks over a shared document."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
import os

from imagify.document.provider import DocumentHandle, DocumentProvider
from imagify.image.codec import PillowCodec
from imagify.pipeline.models import SKIPPED_KIND, OutputArtifact, PageTask, RunOutcome
from imagify.pipeline.processor import PageProcessor, describe_failure
from imagify.utils.concurrency import CancellationToken, ParallelExecutor, ProgressReporter
from imagify.utils.log_utils import logger


def degree_of_parallelism(available: int | None, task_count: int) -> int:
    """``max(1, min(available, task_count))``; ``None`` means the CPU count."""
    if available is None:
        available = os.cpu_count() or 1
    return max(1, min(available, task_count))


class ConcurrencyController:
    """Schedule one ``PageProcessor`` run per task with bounded parallelism.

    ``run_all`` returns only once every task is terminal. Failures are
    recorded in the outcome and never cancel sibling tasks unless ``strict``
    is set, in which case the first failure stops new admissions while
    in-flight pages finish.
    """

    def __init__(
        self,
        provider: DocumentProvider,
        codec: PillowCodec | None = None,
        *,
        max_workers: int | None = None,
        strict: bool = False,
        progress_reporter: ProgressReporter | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._provider = provider
        self._codec = codec or PillowCodec()
        self._max_workers = max_workers
        self._strict = strict
        self._progress = progress_reporter
        self._cancellation = cancellation or CancellationToken()

    @property
    def cancellation(self) -> CancellationToken:
        return self._cancellation

    async def run_all(self, handle: DocumentHandle, tasks: Sequence[PageTask]) -> RunOutcome:
        outcome = RunOutcome(requested=len(tasks))
        if not tasks:
            return outcome

        workers = degree_of_parallelism(self._max_workers, len(tasks))
        extraction_lock = None if self._provider.thread_safe_extraction else asyncio.Lock()
        logger.debug(
            f"Converting {len(tasks)} page(s) with {workers} worker(s); "
            f"serialised extraction: {extraction_lock is not None}."
        )

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="imagify-page") as pool:
            processor = PageProcessor(
                self._provider,
                self._codec,
                executor=pool,
                extraction_lock=extraction_lock,
            )

            async def convert(task: PageTask) -> OutputArtifact:
                try:
                    artifact = await processor.process(handle, task)
                except Exception as exc:
                    kind, message = describe_failure(exc)
                    logger.error(f"Page {task.page_number} failed ({kind}).")
                    logger.debug(message)
                    outcome.record_failure(task.page_number, kind, message)
                    raise
                outcome.record_success(task.page_number)
                return artifact

            executor = ParallelExecutor(
                max_concurrency=workers,
                progress_reporter=self._progress,
                cancellation=self._cancellation,
                cancel_on_error=self._strict,
            )
            results = await executor.map(convert, tasks)

        for task, result in zip(tasks, results, strict=True):
            if not result.started:
                outcome.record_failure(
                    task.page_number, SKIPPED_KIND, "not started because the run was stopped"
                )
        return outcome


__all__ = ["ConcurrencyController", "degree_of_parallelism"]
