"""Centralised environment configuration for imagify.

Environment variables (optionally loaded from a `.env` file) provide the
defaults for tuning knobs that are not worth a mandatory CLI flag. Explicit
command-line values always take precedence over these settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv


_DEFAULT_ENV_NAME = ".env"

# 72 DPI renders one PDF point as one pixel, i.e. the page's native size.
DEFAULT_DPI = 72


def _coerce_int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class ImagifySettings:
    """Snapshot of environment-driven configuration values."""

    env_file: Path
    workers: int
    dpi: int
    log_file: Path | None


def _resolve_env_path(env_file: os.PathLike[str] | str | None) -> Path:
    if env_file is None:
        return Path.cwd() / _DEFAULT_ENV_NAME
    return Path(env_file).resolve()


def default_workers() -> int:
    return os.cpu_count() or 1


@lru_cache(maxsize=4)
def _load_settings(env_path: Path) -> ImagifySettings:
    # Existing environment variables take precedence over `.env` defaults.
    load_dotenv(dotenv_path=env_path, override=False)

    workers = _coerce_int(os.getenv("IMAGIFY_WORKERS"))
    dpi = _coerce_int(os.getenv("IMAGIFY_DPI"))
    log_file = os.getenv("IMAGIFY_LOG_FILE")

    return ImagifySettings(
        env_file=env_path,
        workers=workers if workers and workers > 0 else default_workers(),
        dpi=dpi if dpi and dpi > 0 else DEFAULT_DPI,
        log_file=Path(log_file).expanduser() if log_file else None,
    )


def get_settings(
    env_file: os.PathLike[str] | str | None = None,
    *,
    reload: bool = False,
) -> ImagifySettings:
    """Return the cached settings snapshot.

    Args:
        env_file: Optional explicit path to a `.env` file. When omitted the
            `.env` file of the current working directory is used.
        reload: When True the cached snapshot is cleared before loading.
    """
    env_path = _resolve_env_path(env_file)
    if reload:
        _load_settings.cache_clear()
    return _load_settings(env_path)
