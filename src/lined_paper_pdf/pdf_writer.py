from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

import fitz
import numpy as np

from .errors import PageCountError, RenderError
from .geom import resolve_line
from .metrics import Timer
from .types import CmykDef, DashPatternDef, LineDef, PaperSize

log = logging.getLogger(__name__)

MM_TO_PT = 72.0 / 25.4

MIN_PAGES = 1
DEFAULT_MAX_PAGES = 10000
DEFAULT_TITLE = "Lined paper"

LINE_CAPS = {"butt": 0, "round": 1, "square": 2}

# Smallest stroke width written. PyMuPDF emits neither width nor stroke color
# for a zero-width line.
HAIRLINE_PT = 0.05


def validate_page_count(page_count: int, max_pages: int = DEFAULT_MAX_PAGES) -> None:
    if not MIN_PAGES <= page_count <= max_pages:
        raise PageCountError(page_count, MIN_PAGES, max_pages)


def dash_array(pattern: Optional[DashPatternDef]) -> Optional[str]:
    """PDF dash array for *pattern*, or ``None`` for a solid stroke.

    A missing gap repeats the dash length. A zero dash with a positive gap is
    kept: with round caps it draws a row of dots. Patterns with negative
    values or without any positive length are drawn solid.
    """

    if pattern is None:
        return None
    gap = pattern.dash if pattern.gap is None else pattern.gap
    if pattern.dash < 0 or gap < 0 or (pattern.dash == 0 and gap == 0):
        return None
    return f"[{pattern.dash} {gap}] 0"


def stroke_width(thickness: float) -> float:
    return max(thickness, HAIRLINE_PT)


def _stroke_colors(lines: Sequence[LineDef]) -> Dict[CmykDef, Tuple[float, float, float, float]]:
    """Stroke tuple per distinct color, with channels clamped to ``[0, 1]``."""

    colors: Dict[CmykDef, Tuple[float, float, float, float]] = {}
    for line in lines:
        if line.color in colors:
            continue
        raw = line.color.as_tuple()
        clamped = tuple(np.clip(raw, 0.0, 1.0).tolist())
        if clamped != raw:
            log.warning("CMYK color %s is outside [0, 1], drawing it as %s", raw, clamped)
        colors[line.color] = clamped
    return colors


def _page_points(
    line: LineDef, paper: PaperSize, page_height_pt: float
) -> Tuple[fitz.Point, fitz.Point]:
    # Geometry has its origin at the bottom left, PyMuPDF page space at the top left.
    x1, y1, x2, y2 = resolve_line(line, paper)
    start = fitz.Point(x1 * MM_TO_PT, page_height_pt - y1 * MM_TO_PT)
    end = fitz.Point(x2 * MM_TO_PT, page_height_pt - y2 * MM_TO_PT)
    return start, end


def _draw_lines(
    page: fitz.Page,
    paper: PaperSize,
    lines: Sequence[LineDef],
    colors: Dict[CmykDef, Tuple[float, float, float, float]],
    line_cap: int,
) -> None:
    shape = page.new_shape()
    page_height_pt = paper.height * MM_TO_PT
    for line in lines:
        start, end = _page_points(line, paper, page_height_pt)
        shape.draw_line(start, end)
        # stroke state is set for every segment on its own
        shape.finish(
            color=colors[line.color],
            width=stroke_width(line.thickness),
            lineCap=line_cap,
            dashes=dash_array(line.dash_pattern),
            closePath=False,
        )
    shape.commit()


def render_document(
    paper: PaperSize,
    lines: Sequence[LineDef],
    page_count: int,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
    title: str = DEFAULT_TITLE,
    line_cap: str = "round",
) -> bytes:
    """Render *lines* identically onto ``page_count`` pages and return the PDF bytes."""

    validate_page_count(page_count, max_pages)
    if line_cap not in LINE_CAPS:
        raise ValueError(f"Unknown line cap '{line_cap}', expected one of {sorted(LINE_CAPS)}")

    width_pt = paper.width * MM_TO_PT
    height_pt = paper.height * MM_TO_PT
    colors = _stroke_colors(lines)
    doc = fitz.open()
    try:
        with Timer("render", logger=log):
            for _ in range(page_count):
                page = doc.new_page(width=width_pt, height=height_pt)
                _draw_lines(page, paper, lines, colors, LINE_CAPS[line_cap])
            doc.set_metadata({"title": title})
            data = doc.tobytes(deflate=True)
    except (RuntimeError, ValueError) as exc:
        raise RenderError(f"Could not build the PDF document: {exc}") from exc
    finally:
        doc.close()
    log.info("Rendered %d segments on %d pages", len(lines), page_count)
    return data


def write_document(
    path: str | Path,
    paper: PaperSize,
    lines: Sequence[LineDef],
    page_count: int,
    **render_opts,
) -> Path:
    out = Path(path)
    data = render_document(paper, lines, page_count, **render_opts)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
    except OSError as exc:
        raise RenderError(f"Could not write {out}: {exc}") from exc
    log.info("Wrote %s (%d bytes)", out, len(data))
    return out


__all__ = [
    "DEFAULT_MAX_PAGES",
    "HAIRLINE_PT",
    "LINE_CAPS",
    "MM_TO_PT",
    "dash_array",
    "render_document",
    "stroke_width",
    "validate_page_count",
    "write_document",
]
