from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from lined_paper_pdf.types import CmykDef, PaperSize  # noqa: E402

LINE_DEFS_DIR = Path(__file__).resolve().parents[1] / "line_defs"


@pytest.fixture
def letter_portrait() -> PaperSize:
    return PaperSize(width=215.9, height=279.4)


@pytest.fixture
def letter_landscape() -> PaperSize:
    return PaperSize(width=279.4, height=215.9)


@pytest.fixture
def black() -> CmykDef:
    return CmykDef(0.0, 0.0, 0.0, 1.0)


@pytest.fixture
def line_defs_dir() -> Path:
    return LINE_DEFS_DIR
