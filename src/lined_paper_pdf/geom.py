from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .errors import NotFiniteError, NotPositiveError
from .types import LineDef, PaperSize, PointDef

# Tolerance in units of one spacing step when counting boundary walk positions.
_COUNT_EPS = 1e-9

ResolvedSegment = Tuple[float, float, float, float]


def resolve_x(point: PointDef, paper: PaperSize) -> float:
    return point.x.resolve(paper.width)


def resolve_y(point: PointDef, paper: PaperSize) -> float:
    return point.y.resolve(paper.height)


def resolve_point(point: PointDef, paper: PaperSize) -> Tuple[float, float]:
    return resolve_x(point, paper), resolve_y(point, paper)


def resolve_line(line: LineDef, paper: PaperSize) -> ResolvedSegment:
    """Absolute ``(x1, y1, x2, y2)`` in millimeters, origin at the bottom left."""

    x1, y1 = resolve_point(line.start, paper)
    x2, y2 = resolve_point(line.end, paper)
    return x1, y1, x2, y2


def require_positive(parameter: str, value: float) -> None:
    # ``not value > 0`` also rejects NaN
    if not value > 0.0:
        raise NotPositiveError(parameter, value)
    if not math.isfinite(value):
        raise NotFiniteError(parameter, value)


def require_positive_paper(paper: PaperSize) -> None:
    require_positive("paper width", paper.width)
    require_positive("paper height", paper.height)


def walk_down(start: float, lower_bound: float, spacing: float) -> np.ndarray:
    """Positions ``start - k * spacing`` for every ``k >= 0`` that stay ``>= lower_bound``.

    Equivalent to repeatedly subtracting ``spacing`` while the value is still
    within bounds, but each position is computed by multiplication so long walks
    do not accumulate rounding drift.
    """

    if not start >= lower_bound:
        return np.empty(0, dtype=float)
    count = int(math.floor((start - lower_bound) / spacing + _COUNT_EPS)) + 1
    positions = start - spacing * np.arange(count, dtype=float)
    return np.maximum(positions, lower_bound)


def walk_up(start: float, upper_bound: float, spacing: float) -> np.ndarray:
    """Positions ``start + k * spacing`` for every ``k >= 0`` that stay ``<= upper_bound``."""

    if not start <= upper_bound:
        return np.empty(0, dtype=float)
    count = int(math.floor((upper_bound - start) / spacing + _COUNT_EPS)) + 1
    positions = start + spacing * np.arange(count, dtype=float)
    return np.minimum(positions, upper_bound)


__all__ = [
    "ResolvedSegment",
    "require_positive",
    "require_positive_paper",
    "resolve_line",
    "resolve_point",
    "resolve_x",
    "resolve_y",
    "walk_down",
    "walk_up",
]
