"""Value types shared by the page pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import threading

from imagify.config import DEFAULT_DPI
from imagify.image.codec import OutputFormat
from imagify.image.resize import ResizeSpec


SKIPPED_KIND = "Skipped"


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """Immutable run configuration built once from CLI flags and settings."""

    pdf_path: Path | None
    output_path: Path | None = None
    scale: float = 100.0
    width: int = 0
    height: int = 0
    file_type: str = "png"
    pages: tuple[int, ...] = ()
    dpi: int = DEFAULT_DPI
    workers: int | None = None
    strict: bool = False
    show_progress: bool = True


@dataclass(frozen=True, slots=True)
class PageTask:
    page_number: int
    resize: ResizeSpec
    output_format: OutputFormat
    extension: str
    output_dir: Path

    @property
    def output_path(self) -> Path:
        return self.output_dir / f"{self.page_number}.{self.extension}"


@dataclass(frozen=True, slots=True)
class OutputArtifact:
    path: Path
    data: bytes


@dataclass(frozen=True, slots=True)
class PageFailure:
    page_number: int
    kind: str
    message: str


@dataclass(slots=True)
class RunOutcome:
    """Aggregate result of a conversion run.

    Pages report here as they finish; recording is lock-guarded so concurrent
    completions each count exactly once.
    """

    requested: int
    succeeded: list[int] = field(default_factory=list)
    failures: list[PageFailure] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_success(self, page_number: int) -> None:
        with self._lock:
            self.succeeded.append(page_number)

    def record_failure(self, page_number: int, kind: str, message: str) -> None:
        with self._lock:
            self.failures.append(PageFailure(page_number, kind, message))

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def completed(self) -> bool:
        return self.requested == len(self.succeeded) + len(self.failures)

    @property
    def is_success(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        return (
            f"requested={self.requested} | succeeded={len(self.succeeded)} "
            f"| failed={self.failed}"
        )


__all__ = [
    "SKIPPED_KIND",
    "ConversionConfig",
    "OutputArtifact",
    "PageFailure",
    "PageTask",
    "RunOutcome",
]
