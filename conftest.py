# Test configuration utilities.
# Ensures the repository root is on sys.path so that 'imagify' can be imported
# when running pytest without installing the package, and provides PDF fixtures.
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import sys

import fitz  # PyMuPDF
import pytest


ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


PAGE_WIDTH = 200
PAGE_HEIGHT = 300


def write_pdf(
    path: Path, page_count: int, width: int = PAGE_WIDTH, height: int = PAGE_HEIGHT
) -> Path:
    document = fitz.open()
    try:
        for index in range(page_count):
            page = document.new_page(width=width, height=height)
            page.insert_text((20, 40), f"Page {index + 1}", fontsize=18)
        document.save(str(path))
    finally:
        document.close()
    return path


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Build a PDF with numbered pages inside ``tmp_path``."""

    def _make(name: str = "report.pdf", page_count: int = 3, **kwargs: int) -> Path:
        return write_pdf(tmp_path / name, page_count, **kwargs)

    return _make
