"""Output directory naming and creation."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from imagify.errors import DirectoryError
from imagify.utils.log_utils import logger


def resolve_output_dir(
    explicit_path: str | os.PathLike[str] | None,
    source_path: str | os.PathLike[str],
) -> Path:
    """Pick the directory that receives the page images.

    An explicit path is used verbatim. Otherwise the source file name without
    its extension is used as a directory under the current working directory,
    e.g. ``docs\\report.pdf`` becomes ``./report``.
    """
    if explicit_path is not None and os.fspath(explicit_path) != "":
        return Path(explicit_path)

    normalized = os.fspath(source_path).replace("\\", "/")
    stem = PurePosixPath(normalized).stem
    output_dir = Path.cwd() / stem
    logger.warning(f"No output path specified. Defaulting to {output_dir}.")
    return output_dir


def ensure_output_dir(path: Path) -> Path:
    """Create ``path`` and its parents if missing."""
    if path.exists() and not path.is_dir():
        raise DirectoryError(f"Output path exists and is not a directory ({path}).")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryError(f"Unable to create the output directory ({path}): {exc}") from exc
    return path


__all__ = ["ensure_output_dir", "resolve_output_dir"]
