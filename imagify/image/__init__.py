"""Image codec and resize policy."""

from .codec import OutputFormat, PillowCodec, resolve_format
from .resize import (
    ByExactDimensions,
    ByHeight,
    ByPercent,
    ByWidth,
    NoResize,
    ResizeSpec,
    ignores_dimensions,
    select_resize,
)


__all__ = [
    "ByExactDimensions",
    "ByHeight",
    "ByPercent",
    "ByWidth",
    "NoResize",
    "OutputFormat",
    "PillowCodec",
    "ResizeSpec",
    "ignores_dimensions",
    "resolve_format",
    "select_resize",
]
