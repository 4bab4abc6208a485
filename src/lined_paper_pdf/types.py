from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple, Union

Anchor = Literal["zero", "far_edge"]


@dataclass(frozen=True)
class PaperSize:
    width: float; height: float


@dataclass(frozen=True)
class Coord:
    """A position along one axis, measured from the origin or from the far edge."""

    value: float
    anchor: Anchor = "zero"

    @classmethod
    def off_zero(cls, value: float) -> "Coord":
        return cls(float(value), "zero")

    @classmethod
    def off_far_edge(cls, value: float) -> "Coord":
        return cls(float(value), "far_edge")

    def resolve(self, dimension: float) -> float:
        if self.anchor == "far_edge":
            return dimension - self.value
        return self.value


@dataclass(frozen=True)
class PointDef:
    x: Coord
    y: Coord

    @classmethod
    def absolute(cls, x: float, y: float) -> "PointDef":
        return cls(Coord.off_zero(x), Coord.off_zero(y))


@dataclass(frozen=True)
class CmykDef:
    c: float; m: float; y: float; k: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.c, self.m, self.y, self.k)


@dataclass(frozen=True)
class DashPatternDef:
    dash: int
    gap: Optional[int] = None


@dataclass(frozen=True)
class LineDef:
    start: PointDef
    end: PointDef
    thickness: float
    color: CmykDef
    dash_pattern: Optional[DashPatternDef] = None


@dataclass(frozen=True)
class SlantLineSet:
    x_spacing: float
    slant_angle: float
    thickness: float
    color: CmykDef


@dataclass(frozen=True)
class SeyesLineSet:
    y_spacing: float
    top_margin: float
    bottom_margin: float
    base_thickness: float
    base_color: CmykDef
    aux_thickness: float
    aux_color: CmykDef


@dataclass(frozen=True)
class HorizontalLineSet:
    y_spacing: float
    top_margin: float
    bottom_margin: float
    thickness: float
    color: CmykDef
    dash_pattern: Optional[DashPatternDef] = None


@dataclass(frozen=True)
class VerticalLineSet:
    x_spacing: float
    left_margin: float
    right_margin: float
    thickness: float
    color: CmykDef
    dash_pattern: Optional[DashPatternDef] = None


# A single LineDef entry is used verbatim as one output segment.
LineSet = Union[SlantLineSet, SeyesLineSet, HorizontalLineSet, VerticalLineSet, LineDef]


@dataclass(frozen=True)
class GeometryDef:
    paper_size: PaperSize
    line_sets: Tuple[LineSet, ...]
