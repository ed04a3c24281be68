"""Pillow-backed image codec used by the page pipeline."""

from __future__ import annotations

from contextlib import suppress
from enum import Enum
from io import BytesIO
import os
from pathlib import Path
import uuid

import aiofiles
import aiofiles.os
from PIL import Image

from imagify.errors import UnsupportedFormatError
from imagify.image.resize import NoResize, ResizeSpec


class OutputFormat(str, Enum):
    PNG = "PNG"
    JPEG = "JPEG"
    PDF = "PDF"
    WEBP = "WEBP"


FORMAT_ALIASES: dict[str, OutputFormat] = {
    "png": OutputFormat.PNG,
    "jpg": OutputFormat.JPEG,
    "jpeg": OutputFormat.JPEG,
    "pdf": OutputFormat.PDF,
    "webp": OutputFormat.WEBP,
}

# Encoders that cannot store an alpha channel or a palette.
_RGB_ONLY_FORMATS = {OutputFormat.JPEG, OutputFormat.PDF}


def resolve_format(file_type: str) -> tuple[OutputFormat, str]:
    """Map a user supplied file type to an output format and file extension.

    The extension is the lowercased token as given, so ``JPG`` yields
    ``(OutputFormat.JPEG, "jpg")``.
    """
    extension = file_type.strip().lower().lstrip(".")
    try:
        return FORMAT_ALIASES[extension], extension
    except KeyError:
        supported = ", ".join(FORMAT_ALIASES)
        raise UnsupportedFormatError(
            f"Unsupported file type '{file_type}'. Supported types: {supported}."
        ) from None


class PillowCodec:
    """Decode, resize, encode and persist page rasters with Pillow."""

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self._resample = resample

    def decode(self, data: bytes) -> Image.Image:
        image = Image.open(BytesIO(data))
        # Force the lazy decoder so corrupt streams fail here, not at encode time.
        image.load()
        return image

    def resize(self, image: Image.Image, spec: ResizeSpec) -> Image.Image:
        if isinstance(spec, NoResize):
            return image
        size = spec.target_size(*image.size)
        if size == image.size:
            return image
        return image.resize(size, resample=self._resample)

    def encode(self, image: Image.Image, output_format: OutputFormat) -> bytes:
        if output_format in _RGB_ONLY_FORMATS and image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        buffer = BytesIO()
        image.save(buffer, format=output_format.value)
        return buffer.getvalue()

    async def save(self, path: str | os.PathLike[str], data: bytes) -> None:
        """Write ``data`` to ``path`` without exposing a partial file.

        Bytes go to a hidden sibling file first, which then atomically
        replaces the final name.
        """
        final_path = Path(path)
        temp_path = final_path.with_name(f".{final_path.name}.{uuid.uuid4().hex}.part")
        try:
            async with aiofiles.open(temp_path, "wb") as file_obj:
                await file_obj.write(data)
            await aiofiles.os.replace(temp_path, final_path)
        except BaseException:
            with suppress(OSError):
                await aiofiles.os.remove(temp_path)
            raise


__all__ = ["FORMAT_ALIASES", "OutputFormat", "PillowCodec", "resolve_format"]
