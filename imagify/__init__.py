"""Convert PDF pages into image files."""

__version__ = "0.1.0"
