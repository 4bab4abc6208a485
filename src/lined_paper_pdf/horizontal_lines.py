from __future__ import annotations

import logging
from typing import List

from .geom import require_positive, require_positive_paper, walk_down
from .types import Coord, HorizontalLineSet, LineDef, PaperSize, PointDef

log = logging.getLogger(__name__)


def create_horizontal_lines(line_set: HorizontalLineSet, paper: PaperSize) -> List[LineDef]:
    """Full-width lines from ``height - top_margin`` down to ``bottom_margin``, top first."""

    require_positive_paper(paper)
    require_positive("y spacing", line_set.y_spacing)
    require_positive("top margin", line_set.top_margin)
    require_positive("bottom margin", line_set.bottom_margin)

    ys = walk_down(paper.height - line_set.top_margin, line_set.bottom_margin, line_set.y_spacing)
    lines = [
        LineDef(
            start=PointDef(Coord.off_zero(0.0), Coord.off_zero(y)),
            end=PointDef(Coord.off_far_edge(0.0), Coord.off_zero(y)),
            thickness=line_set.thickness,
            color=line_set.color,
            dash_pattern=line_set.dash_pattern,
        )
        for y in ys.tolist()
    ]
    log.debug("horizontal lines: %d segments", len(lines))
    return lines
