"""End-to-end conversion run: validate, open, select, schedule, report."""

from __future__ import annotations

from pathlib import Path

from imagify.document.provider import DocumentProvider, PyMuPdfProvider
from imagify.errors import InputError
from imagify.image.codec import PillowCodec, resolve_format
from imagify.image.resize import ignores_dimensions, select_resize
from imagify.pipeline.controller import ConcurrencyController
from imagify.pipeline.models import ConversionConfig, PageTask, RunOutcome
from imagify.pipeline.output import ensure_output_dir, resolve_output_dir
from imagify.pipeline.selection import resolve_pages
from imagify.utils.concurrency import CancellationToken, ProgressReporter, TqdmProgressReporter
from imagify.utils.log_utils import logger


def _check_source(pdf_path: Path | None) -> Path:
    if pdf_path is None or str(pdf_path) == "":
        raise InputError("Please provide the path to the PDF file using --pdf-path.")
    if not pdf_path.exists():
        raise InputError(f"The specified PDF file does not exist ({pdf_path}).")
    if not pdf_path.is_file():
        raise InputError(f"The specified PDF path is not a file ({pdf_path}).")
    return pdf_path


async def run_conversion(
    config: ConversionConfig,
    *,
    provider: DocumentProvider | None = None,
    codec: PillowCodec | None = None,
    progress_reporter: ProgressReporter | None = None,
    cancellation: CancellationToken | None = None,
) -> RunOutcome:
    """Convert the configured pages of a PDF into image files.

    Every run-level check happens before any page is scheduled, and the
    output directory is only created once they have all passed.

    Raises:
        RunError: a fatal problem with the input, output format, document or
            output directory. No page is converted in that case.
    """
    pdf_path = _check_source(config.pdf_path)
    output_format, extension = resolve_format(config.file_type)

    resize = select_resize(config.scale, config.width, config.height)
    if ignores_dimensions(config.scale, config.width, config.height):
        logger.warning("Both scale and width/height are specified. Only scale will be applied.")

    provider = provider or PyMuPdfProvider(dpi=config.dpi)
    handle = provider.read_document(pdf_path)
    try:
        pages = resolve_pages(provider, handle, config.pages)
        output_dir = ensure_output_dir(resolve_output_dir(config.output_path, pdf_path))

        tasks = [
            PageTask(
                page_number=page,
                resize=resize,
                output_format=output_format,
                extension=extension,
                output_dir=output_dir,
            )
            for page in pages
        ]

        if progress_reporter is None and config.show_progress:
            progress_reporter = TqdmProgressReporter("imagify")

        controller = ConcurrencyController(
            provider,
            codec,
            max_workers=config.workers,
            strict=config.strict,
            progress_reporter=progress_reporter,
            cancellation=cancellation,
        )
        logger.info(f"Converting {len(tasks)} page(s) of {pdf_path} to {output_dir}.")
        outcome = await controller.run_all(handle, tasks)
    finally:
        handle.close()

    log_outcome(outcome)
    return outcome


def log_outcome(outcome: RunOutcome) -> None:
    for failure in sorted(outcome.failures, key=lambda item: item.page_number):
        logger.error(f"Page {failure.page_number}: {failure.kind} - {failure.message}")
    if outcome.is_success:
        logger.info(f"PDF to image conversion completed successfully. {outcome.summary()}")
    else:
        logger.warning(f"PDF to image conversion finished with failures. {outcome.summary()}")


__all__ = ["log_outcome", "run_conversion"]
