"""Parallel slanted guide lines covering the whole page.

Lines lean to the right by ``slant_angle`` degrees measured from the
horizontal. Start points first advance along the top edge by ``x_spacing``;
once they run past the right edge they continue down the right edge by the
vertical step that keeps the same horizontal distance between neighbours.
Each line runs down-left until it leaves the page through the bottom edge or,
for lines starting close to the left, through the left edge.
"""
from __future__ import annotations

import logging
import math
from typing import List, Tuple

import numpy as np

from .errors import SlantAngleOutOfRangeError
from .geom import require_positive, require_positive_paper, walk_down, walk_up
from .types import LineDef, PaperSize, PointDef, SlantLineSet

log = logging.getLogger(__name__)

MIN_SLANT_DEG = 45.0
MAX_SLANT_DEG = 90.0


def _clip(x1: np.ndarray, y1: np.ndarray, paper: PaperSize) -> Tuple[np.ndarray, np.ndarray]:
    return np.clip(x1, 0.0, paper.width), np.clip(y1, 0.0, paper.height)


def _exits_from_top_edge(
    x0: np.ndarray, tan_a: float, paper: PaperSize
) -> Tuple[np.ndarray, np.ndarray]:
    x1 = x0 - paper.height / tan_a
    through_left = x1 < 0.0
    y1 = np.where(through_left, paper.height - x0 * tan_a, 0.0)
    x1 = np.where(through_left, 0.0, x1)
    return _clip(x1, y1, paper)


def _exits_from_right_edge(
    y0: np.ndarray, tan_a: float, paper: PaperSize
) -> Tuple[np.ndarray, np.ndarray]:
    x1 = paper.width - y0 / tan_a
    through_left = x1 < 0.0
    y1 = np.where(through_left, y0 - paper.width * tan_a, 0.0)
    x1 = np.where(through_left, 0.0, x1)
    return _clip(x1, y1, paper)


def slant_start_points(
    x_spacing: float, tan_a: float, paper: PaperSize
) -> Tuple[np.ndarray, np.ndarray]:
    """Start x on the top edge (left to right) and start y on the right edge (top to bottom)."""

    top_x = walk_up(x_spacing, paper.width, x_spacing)
    # First start point past the right edge, slid back onto it along the line.
    overshoot = x_spacing * (len(top_x) + 1) - paper.width
    right_y = walk_down(paper.height - overshoot * tan_a, 0.0, x_spacing * tan_a)
    return top_x, right_y


def create_slant_lines(line_set: SlantLineSet, paper: PaperSize) -> List[LineDef]:
    if not MIN_SLANT_DEG <= line_set.slant_angle <= MAX_SLANT_DEG:
        raise SlantAngleOutOfRangeError(line_set.slant_angle, MIN_SLANT_DEG, MAX_SLANT_DEG)
    require_positive("x spacing", line_set.x_spacing)
    require_positive_paper(paper)

    tan_a = math.tan(math.radians(line_set.slant_angle))
    top_x, right_y = slant_start_points(line_set.x_spacing, tan_a, paper)

    top_x1, top_y1 = _exits_from_top_edge(top_x, tan_a, paper)
    right_x1, right_y1 = _exits_from_right_edge(right_y, tan_a, paper)

    x0 = np.concatenate([top_x, np.full(len(right_y), paper.width)])
    y0 = np.concatenate([np.full(len(top_x), paper.height), right_y])
    x1 = np.concatenate([top_x1, right_x1])
    y1 = np.concatenate([top_y1, right_y1])

    lines = [
        LineDef(
            start=PointDef.absolute(sx, sy),
            end=PointDef.absolute(ex, ey),
            thickness=line_set.thickness,
            color=line_set.color,
        )
        for sx, sy, ex, ey in zip(x0.tolist(), y0.tolist(), x1.tolist(), y1.tolist())
    ]
    log.debug(
        "slant lines at %.1f deg: %d segments (%d from top edge)",
        line_set.slant_angle,
        len(lines),
        len(top_x),
    )
    return lines
