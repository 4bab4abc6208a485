"""French-ruled ("seyes") paper.

Every fourth line is a heavier base line; the three lines between are thin
auxiliary lines. The page starts with two auxiliary lines below the top margin,
then repeats the motif ``aux, base, aux, aux`` one ``y_spacing`` apart.
"""
from __future__ import annotations

import logging
import math
from typing import List

import numpy as np

from .geom import require_positive, require_positive_paper
from .types import CmykDef, Coord, LineDef, PaperSize, PointDef, SeyesLineSet

log = logging.getLogger(__name__)

MOTIF_LINES = 4
# Position of the base line inside one motif block, counted from 1.
_BASE_LINE_SLOT = 2


def _full_width_line(y: float, thickness: float, color: CmykDef) -> LineDef:
    return LineDef(
        start=PointDef(Coord.off_zero(0.0), Coord.off_zero(y)),
        end=PointDef(Coord.off_far_edge(0.0), Coord.off_zero(y)),
        thickness=thickness,
        color=color,
    )


def _motif_block_count(y: float, spacing: float, bottom_margin: float) -> int:
    # A block is started whenever ``y + 4 * spacing >= bottom_margin`` holds
    # before it, with ``y`` lowered by ``4 * spacing`` after each block.
    block_height = MOTIF_LINES * spacing
    head = y + block_height
    if not head >= bottom_margin:
        return 0
    return int(math.floor((head - bottom_margin) / block_height + 1e-9)) + 1


def create_seyes_lines(line_set: SeyesLineSet, paper: PaperSize) -> List[LineDef]:
    require_positive_paper(paper)
    require_positive("y spacing", line_set.y_spacing)
    require_positive("top margin", line_set.top_margin)
    require_positive("bottom margin", line_set.bottom_margin)

    spacing = line_set.y_spacing
    bottom = line_set.bottom_margin
    aux = (line_set.aux_thickness, line_set.aux_color)
    base = (line_set.base_thickness, line_set.base_color)

    lines: List[LineDef] = []
    y0 = paper.height - line_set.top_margin
    for y in (y0, y0 - spacing):
        if y >= bottom:
            lines.append(_full_width_line(y, *aux))

    blocks = _motif_block_count(y0 - spacing, spacing, bottom)
    # Steps below y0 for every motif line: 2, 3, ..., 1 + 4 * blocks
    steps = np.arange(2, 2 + MOTIF_LINES * blocks, dtype=float)
    for offset, step in enumerate(steps.tolist()):
        style = base if offset % MOTIF_LINES == _BASE_LINE_SLOT - 1 else aux
        lines.append(_full_width_line(y0 - step * spacing, *style))

    log.debug("seyes lines: %d segments in %d motif blocks", len(lines), blocks)
    return lines
