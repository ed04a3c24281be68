"""Resize modes and the policy that picks one from run configuration."""

from __future__ import annotations

from dataclasses import dataclass
import math


DEFAULT_SCALE_PERCENT = 100.0


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, with exact halves going up (100.5 -> 101)."""
    return math.floor(value + 0.5)


def _checked(width: int, height: int) -> tuple[int, int]:
    if width < 1 or height < 1:
        raise ValueError(f"resize would produce an invalid size {width}x{height}")
    return width, height


@dataclass(frozen=True, slots=True)
class NoResize:
    def target_size(self, width: int, height: int) -> tuple[int, int]:
        return width, height


@dataclass(frozen=True, slots=True)
class ByPercent:
    percent: float

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        factor = self.percent / 100.0
        return _checked(_round_half_up(width * factor), _round_half_up(height * factor))


@dataclass(frozen=True, slots=True)
class ByExactDimensions:
    width: int
    height: int

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        return _checked(self.width, self.height)


@dataclass(frozen=True, slots=True)
class ByWidth:
    width: int

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        if width <= 0:
            raise ValueError(f"cannot preserve aspect ratio of a {width}x{height} image")
        return _checked(self.width, _round_half_up(height * self.width / width))


@dataclass(frozen=True, slots=True)
class ByHeight:
    height: int

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        if height <= 0:
            raise ValueError(f"cannot preserve aspect ratio of a {width}x{height} image")
        return _checked(_round_half_up(width * self.height / height), self.height)


ResizeSpec = NoResize | ByPercent | ByExactDimensions | ByWidth | ByHeight


def select_resize(scale_percent: float, width: int, height: int) -> ResizeSpec:
    """Choose the single resize mode that applies to every page of a run.

    A scale other than 100% wins over any explicit dimensions. Otherwise both
    dimensions give an exact size, and a single dimension gives an
    aspect-preserving resize. With nothing set, pages keep their size.
    """
    if scale_percent != DEFAULT_SCALE_PERCENT:
        return ByPercent(scale_percent)
    if width != 0 and height != 0:
        return ByExactDimensions(width, height)
    if width != 0:
        return ByWidth(width)
    if height != 0:
        return ByHeight(height)
    return NoResize()


def ignores_dimensions(scale_percent: float, width: int, height: int) -> bool:
    """True when a percent scale is active and width/height will be ignored."""
    return scale_percent != DEFAULT_SCALE_PERCENT and (width != 0 or height != 0)


__all__ = [
    "ByExactDimensions",
    "ByHeight",
    "ByPercent",
    "ByWidth",
    "NoResize",
    "ResizeSpec",
    "ignores_dimensions",
    "select_resize",
]
