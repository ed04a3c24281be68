from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from pathlib import Path
from typing import Any, ParamSpec, TypeVar

import typer  # type: ignore[import]

from imagify.config import get_settings
from imagify.utils.log_utils import configure_logging, logger

from . import convert


app = typer.Typer(
    help="Imagify: convert PDF pages into image files",
    no_args_is_help=True,
)


_P = ParamSpec("_P")
_T = TypeVar("_T")


@app.callback()
def main() -> None:
    """Convert PDF pages into PNG, JPEG, PDF or WebP images."""


def _synchronous(handler: Callable[_P, Coroutine[Any, Any, _T]]) -> Callable[_P, _T]:
    @wraps(handler)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T:
        try:
            return asyncio.run(handler(*args, **kwargs))
        except KeyboardInterrupt as err:
            logger.info("Interrupted by user")
            raise typer.Exit(code=130) from err

    return wrapper


@app.command("convert")
@_synchronous
async def convert_command(
    pdf_path: Path | None = typer.Option(
        None,
        "--pdf-path",
        "--pdf_path",
        help="Path to the input PDF file. (Required)",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output-path",
        "--output_path",
        help="Directory where output files will be saved. Defaults to a directory named "
        "after the PDF in the current directory.",
    ),
    scale: float = typer.Option(
        convert.DEFAULT_SCALE,
        "--scale",
        help="Scaling factor for the output image as a percentage. Takes priority over "
        "--width/--height.",
        show_default=True,
    ),
    width: int = typer.Option(
        0,
        "--width",
        help="Width of the output image in pixels. Ignored if scale is provided.",
    ),
    height: int = typer.Option(
        0,
        "--height",
        help="Height of the output image in pixels. Ignored if scale is provided.",
    ),
    file_type: str = typer.Option(
        convert.DEFAULT_FILE_TYPE,
        "--file-type",
        "--file_type",
        help="Output image format: png, jpg, jpeg, pdf or webp.",
        show_default=True,
    ),
    pages: list[str] | None = typer.Option(
        None,
        "--pages",
        help="Pages to convert, e.g. 1,2,3 or [1,2,3]. Repeat to add more. Defaults to all pages.",
    ),
    dpi: int | None = typer.Option(
        None,
        "--dpi",
        min=1,
        help="Rasterization DPI. Defaults to IMAGIFY_DPI or 72 (native page size).",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        min=1,
        help="Maximum pages converted at once. Defaults to IMAGIFY_WORKERS or the CPU count.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Stop scheduling new pages after the first page failure.",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Hide the progress bar.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Print debug logs.",
    ),
) -> int:
    settings = get_settings()
    if debug or settings.log_file is not None:
        configure_logging(debug=debug, log_file=settings.log_file, force=True)

    options = convert.ConvertOptions(
        pdf_path=pdf_path,
        output_path=output_path,
        scale=scale,
        width=width,
        height=height,
        file_type=file_type,
        pages=pages,
        dpi=dpi,
        workers=workers,
        strict=strict,
        show_progress=not no_progress,
    )
    result = await convert.run(options, settings)
    if result != convert.EXIT_OK:
        raise typer.Exit(code=result)
    return result
