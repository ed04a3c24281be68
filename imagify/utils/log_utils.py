"""Logging utilities shared across the imagify package."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from loguru import logger
from rich.logging import RichHandler


_CONFIGURED: bool = False

DEFAULT_CONSOLE_LEVEL = "INFO"
DEBUG_CONSOLE_LEVEL = "DEBUG"
DEFAULT_FILE_LEVEL = "DEBUG"
DEFAULT_FILE_ROTATION = "5 MB"
DEFAULT_FILE_RETENTION = 2
LOG_FILE_ENV_VAR = "IMAGIFY_LOG_FILE"

_RICH_HANDLER_KWARGS: dict[str, Any] = {
    "markup": False,
    "show_time": True,
    "show_path": False,
}


def configure_logging(
    *,
    debug: bool = False,
    log_file: str | os.PathLike[str] | None = None,
    force: bool = False,
) -> None:
    """Configure the shared logger once per process.

    Args:
        debug: Lower the console level to DEBUG.
        log_file: Optional path of a rotating debug log. Falls back to
            ``IMAGIFY_LOG_FILE`` when omitted.
        force: Reconfigure even if logging was already set up.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    logger.remove()

    logger.add(
        RichHandler(**_RICH_HANDLER_KWARGS),  # type: ignore[arg-type]
        level=DEBUG_CONSOLE_LEVEL if debug else DEFAULT_CONSOLE_LEVEL,
        format="{message}",
    )

    file_path = log_file or os.getenv(LOG_FILE_ENV_VAR)
    if file_path:
        resolved_file_path = Path(file_path).expanduser().resolve()
        resolved_file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(resolved_file_path),
            level=DEFAULT_FILE_LEVEL,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}",
            rotation=DEFAULT_FILE_ROTATION,
            retention=DEFAULT_FILE_RETENTION,
            enqueue=True,
        )

    _CONFIGURED = True


__all__ = ["configure_logging", "logger"]

# Configure logging on import so callers only need to import `logger`.
configure_logging()
