"""Page conversion pipeline.

``run_conversion`` is the public entry point. It validates the run, opens the
source PDF once, and fans page work out through a bounded pool:

  1. ``selection`` picks the pages.
  2. ``output`` names and creates the destination directory.
  3. ``controller`` admits at most ``P`` pages at a time.
  4. ``processor`` extracts, decodes, resizes, encodes and writes each page.

The parsed document is shared by all pages. PyMuPDF is not thread safe, so
only the extract stage is serialised.
"""

from .controller import ConcurrencyController
from .models import ConversionConfig, OutputArtifact, PageFailure, PageTask, RunOutcome
from .processor import PageProcessor
from .runner import run_conversion


__all__ = [
    "ConcurrencyController",
    "ConversionConfig",
    "OutputArtifact",
    "PageFailure",
    "PageProcessor",
    "PageTask",
    "RunOutcome",
    "run_conversion",
]
