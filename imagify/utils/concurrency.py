"""Structured concurrency helpers for running async workloads in parallel."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
import threading
from typing import Generic, Protocol, TypeVar

from tqdm import tqdm

from .log_utils import logger


class ProgressReporter(Protocol):
    """Lightweight progress reporter abstraction."""

    def start(self, total: int) -> None: ...

    def increment(self) -> None: ...

    def close(self) -> None: ...


class TqdmProgressReporter:
    """Progress reporter backed by tqdm."""

    def __init__(self, desc: str, unit: str = "page") -> None:
        self._desc = desc
        self._unit = unit
        self._pbar: tqdm | None = None

    def start(self, total: int) -> None:
        self._pbar = tqdm(
            total=total,
            desc=self._desc,
            unit=self._unit,
            smoothing=0,
            leave=False,
        )

    def increment(self) -> None:
        if self._pbar is not None:
            self._pbar.update(1)

    def close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None


class CancellationToken:
    """Cooperative stop signal.

    Once cancelled, an executor admits no new jobs; jobs already running are
    left to finish. Safe to trigger from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


T = TypeVar("T")


@dataclass(slots=True)
class JobResult(Generic[T]):
    """Terminal state of one job submitted to ``ParallelExecutor.map``."""

    value: T | None = None
    error: BaseException | None = None
    started: bool = False

    @property
    def ok(self) -> bool:
        return self.started and self.error is None


class ParallelExecutor:
    """Run async callables with at most ``max_concurrency`` in flight.

    A fixed set of workers drains a shared job queue, so a slot freed by a
    finished job is reused immediately. ``map`` returns only after every job
    has reached a terminal state.
    """

    def __init__(
        self,
        *,
        max_concurrency: int,
        progress_reporter: ProgressReporter | None = None,
        cancellation: CancellationToken | None = None,
        cancel_on_error: bool = False,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._max_concurrency = max_concurrency
        self._progress = progress_reporter
        self._cancellation = cancellation or CancellationToken()
        self._cancel_on_error = cancel_on_error

    @property
    def cancellation(self) -> CancellationToken:
        return self._cancellation

    async def map(
        self,
        fn: Callable[[T], Awaitable[object]],
        items: Sequence[T],
    ) -> list[JobResult]:
        """Execute ``fn`` for every item with bounded concurrency."""
        total = len(items)
        results: list[JobResult] = [JobResult() for _ in range(total)]
        if not total:
            return results

        queue: asyncio.Queue[int] = asyncio.Queue()
        for index in range(total):
            queue.put_nowait(index)

        if self._progress:
            self._progress.start(total)

        async def worker() -> None:
            while not self._cancellation.cancelled:
                try:
                    index = queue.get_nowait()
                except asyncio.QueueEmpty:
                    break

                result = results[index]
                result.started = True
                try:
                    result.value = await fn(items[index])
                except Exception as exc:
                    result.error = exc
                    logger.debug(f"Parallel executor job {index} failed: {exc!r}")
                    if self._cancel_on_error:
                        self._cancellation.cancel()
                finally:
                    queue.task_done()
                    if self._progress:
                        self._progress.increment()

        try:
            async with asyncio.TaskGroup() as tg:
                for _ in range(min(self._max_concurrency, total)):
                    tg.create_task(worker())
        finally:
            if self._progress:
                self._progress.close()

        skipped = sum(1 for result in results if not result.started)
        if skipped:
            logger.warning(f"Parallel executor stopped early; {skipped} job(s) were not started.")
        return results


__all__ = [
    "CancellationToken",
    "JobResult",
    "ParallelExecutor",
    "ProgressReporter",
    "TqdmProgressReporter",
]
