"""Expand a geometry definition into the flat, ordered list of line segments."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Type

from .horizontal_lines import create_horizontal_lines
from .metrics import Timer, count
from .seyes_lines import create_seyes_lines
from .slant_lines import create_slant_lines
from .types import (
    GeometryDef,
    HorizontalLineSet,
    LineDef,
    LineSet,
    PaperSize,
    SeyesLineSet,
    SlantLineSet,
    VerticalLineSet,
)
from .vertical_lines import create_vertical_lines

log = logging.getLogger(__name__)

Generator = Callable[[LineSet, PaperSize], List[LineDef]]


def _single_line(line: LineDef, paper: PaperSize) -> List[LineDef]:
    del paper
    return [line]


GENERATORS: Dict[Type, Generator] = {
    SlantLineSet: create_slant_lines,
    SeyesLineSet: create_seyes_lines,
    HorizontalLineSet: create_horizontal_lines,
    VerticalLineSet: create_vertical_lines,
    LineDef: _single_line,
}

KIND_LABELS: Dict[Type, str] = {
    SlantLineSet: "slant",
    SeyesLineSet: "seyes",
    HorizontalLineSet: "horizontal lines",
    VerticalLineSet: "vertical lines",
    LineDef: "single line",
}


def expand_line_set(line_set: LineSet, paper: PaperSize) -> List[LineDef]:
    generator = GENERATORS.get(type(line_set))
    if generator is None:
        raise TypeError(f"Unsupported line set type: {type(line_set).__name__}")
    return generator(line_set, paper)


def generate_lines(geometry: GeometryDef) -> List[LineDef]:
    """All segments of all line sets, in declaration order.

    Fails on the first line set whose parameters are rejected by its generator.
    """

    lines: List[LineDef] = []
    with Timer("generate", logger=log):
        for idx, line_set in enumerate(geometry.line_sets):
            produced = expand_line_set(line_set, geometry.paper_size)
            kind = KIND_LABELS[type(line_set)]
            count(f"segments.{kind}", len(produced))
            log.debug("line set %d (%s): %d segments", idx, kind, len(produced))
            lines.extend(produced)
    log.info("Generated %d segments from %d line sets", len(lines), len(geometry.line_sets))
    return lines


__all__ = ["GENERATORS", "KIND_LABELS", "expand_line_set", "generate_lines"]
