from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from imagify.config import ImagifySettings, get_settings
from imagify.errors import RunError
from imagify.pipeline import ConversionConfig, RunOutcome, run_conversion
from imagify.pipeline.selection import parse_pages
from imagify.utils.log_utils import logger


DEFAULT_SCALE = 100.0
DEFAULT_FILE_TYPE = "png"

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 3


@dataclass(slots=True)
class ConvertOptions:
    pdf_path: Path | None
    output_path: Path | None
    scale: float
    width: int
    height: int
    file_type: str
    pages: list[str] | None
    dpi: int | None
    workers: int | None
    strict: bool
    show_progress: bool


def build_config(options: ConvertOptions, settings: ImagifySettings) -> ConversionConfig:
    """Freeze CLI options into the run configuration, filling gaps from settings."""
    return ConversionConfig(
        pdf_path=options.pdf_path,
        output_path=options.output_path,
        scale=options.scale,
        width=options.width,
        height=options.height,
        file_type=options.file_type,
        pages=tuple(page for raw in options.pages or () for page in parse_pages(raw)),
        dpi=options.dpi if options.dpi is not None else settings.dpi,
        workers=options.workers if options.workers is not None else settings.workers,
        strict=options.strict,
        show_progress=options.show_progress,
    )


def exit_code_for(outcome: RunOutcome) -> int:
    return EXIT_OK if outcome.is_success else EXIT_PARTIAL


async def run(options: ConvertOptions, settings: ImagifySettings | None = None) -> int:
    logger.info("Starting imagify...")
    try:
        config = build_config(options, settings or get_settings())
        outcome = await run_conversion(config)
    except RunError as err:
        logger.error(str(err))
        if err.__cause__ is not None:
            logger.debug(repr(err.__cause__))
        return EXIT_FATAL
    return exit_code_for(outcome)
