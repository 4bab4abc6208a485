from __future__ import annotations

import logging
from typing import List

from .geom import require_positive, require_positive_paper, walk_up
from .types import Coord, LineDef, PaperSize, PointDef, VerticalLineSet

log = logging.getLogger(__name__)


def create_vertical_lines(line_set: VerticalLineSet, paper: PaperSize) -> List[LineDef]:
    require_positive_paper(paper)
    require_positive("x spacing", line_set.x_spacing)
    require_positive("left margin", line_set.left_margin)
    require_positive("right margin", line_set.right_margin)

    xs = walk_up(line_set.left_margin, paper.width - line_set.right_margin, line_set.x_spacing)
    lines = [
        LineDef(
            start=PointDef(Coord.off_zero(x), Coord.off_zero(0.0)),
            end=PointDef(Coord.off_zero(x), Coord.off_far_edge(0.0)),
            thickness=line_set.thickness,
            color=line_set.color,
            dash_pattern=line_set.dash_pattern,
        )
        for x in xs.tolist()
    ]
    log.debug("vertical lines: %d segments", len(lines))
    return lines
