"""Decode a paper & line set definition YAML document into typed records."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import GeometryDefError
from .types import (
    CmykDef,
    Coord,
    DashPatternDef,
    GeometryDef,
    HorizontalLineSet,
    LineDef,
    LineSet,
    PaperSize,
    PointDef,
    SeyesLineSet,
    SlantLineSet,
    VerticalLineSet,
)

log = logging.getLogger(__name__)

KeyPath = Tuple[str, ...]

OFF_FAR_EDGE_KEY = "off far edge"


def _mapping(value: Any, path: KeyPath) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise GeometryDefError(path, f"expected a mapping, got {type(value).__name__}")
    return value


def _field(data: Mapping[str, Any], key: str, path: KeyPath) -> Any:
    if key not in data:
        raise GeometryDefError(path, f"missing key '{key}'")
    return data[key]


def _warn_unknown(data: Mapping[str, Any], known: Sequence[str], path: KeyPath) -> None:
    for key in data:
        if key not in known:
            log.warning("%s: ignoring unknown key '%s'", ".".join(path) or "<root>", key)


def _number(value: Any, path: KeyPath) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GeometryDefError(path, f"expected a number, got {value!r}")
    return float(value)


def _integer(value: Any, path: KeyPath) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise GeometryDefError(path, f"expected an integer, got {value!r}")
    return value


def _coord(value: Any, path: KeyPath) -> Coord:
    if isinstance(value, Mapping):
        if set(value) != {OFF_FAR_EDGE_KEY}:
            raise GeometryDefError(
                path, f"expected a number or a map {{{OFF_FAR_EDGE_KEY}: <number>}}"
            )
        return Coord.off_far_edge(_number(value[OFF_FAR_EDGE_KEY], path + (OFF_FAR_EDGE_KEY,)))
    return Coord.off_zero(_number(value, path))


def _point(value: Any, path: KeyPath) -> PointDef:
    data = _mapping(value, path)
    _warn_unknown(data, ("x mm", "y mm"), path)
    return PointDef(
        x=_coord(_field(data, "x mm", path), path + ("x mm",)),
        y=_coord(_field(data, "y mm", path), path + ("y mm",)),
    )


def _cmyk(value: Any, path: KeyPath) -> CmykDef:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 4:
        raise GeometryDefError(path, f"expected four CMYK channels, got {value!r}")
    c, m, y, k = (_number(channel, path + (str(idx),)) for idx, channel in enumerate(value))
    return CmykDef(c, m, y, k)


def _dash_pattern(value: Any, path: KeyPath) -> Optional[DashPatternDef]:
    if value is None:
        return None
    data = _mapping(value, path)
    _warn_unknown(data, ("dash", "gap"), path)
    dash = _integer(_field(data, "dash", path), path + ("dash",))
    gap_raw = data.get("gap")
    gap = None if gap_raw is None else _integer(gap_raw, path + ("gap",))
    if dash < 0:
        raise GeometryDefError(path + ("dash",), f"dash length {dash} must not be negative")
    if gap is not None and gap < 0:
        raise GeometryDefError(path + ("gap",), f"gap length {gap} must not be negative")
    return DashPatternDef(dash=dash, gap=gap)


class _Fields:
    """Typed access to the keys of one line set mapping."""

    def __init__(self, value: Any, path: KeyPath, known: Sequence[str]) -> None:
        self.data = _mapping(value, path)
        self.path = path
        _warn_unknown(self.data, known, path)

    def number(self, key: str) -> float:
        return _number(_field(self.data, key, self.path), self.path + (key,))

    def color(self, key: str) -> CmykDef:
        return _cmyk(_field(self.data, key, self.path), self.path + (key,))

    def point(self, key: str) -> PointDef:
        return _point(_field(self.data, key, self.path), self.path + (key,))

    def dash_pattern(self) -> Optional[DashPatternDef]:
        return _dash_pattern(self.data.get("dash pattern"), self.path + ("dash pattern",))


def _slant(value: Any, path: KeyPath) -> SlantLineSet:
    f = _Fields(value, path, ("x spacing mm", "slant angle deg", "thickness pt", "color cmyk"))
    return SlantLineSet(
        x_spacing=f.number("x spacing mm"),
        slant_angle=f.number("slant angle deg"),
        thickness=f.number("thickness pt"),
        color=f.color("color cmyk"),
    )


def _seyes(value: Any, path: KeyPath) -> SeyesLineSet:
    f = _Fields(
        value,
        path,
        (
            "y spacing mm",
            "top margin mm",
            "bottom margin mm",
            "base thickness pt",
            "base color cmyk",
            "aux thickness pt",
            "aux color cmyk",
        ),
    )
    return SeyesLineSet(
        y_spacing=f.number("y spacing mm"),
        top_margin=f.number("top margin mm"),
        bottom_margin=f.number("bottom margin mm"),
        base_thickness=f.number("base thickness pt"),
        base_color=f.color("base color cmyk"),
        aux_thickness=f.number("aux thickness pt"),
        aux_color=f.color("aux color cmyk"),
    )


def _horizontal(value: Any, path: KeyPath) -> HorizontalLineSet:
    f = _Fields(
        value,
        path,
        ("y spacing mm", "top margin mm", "bottom margin mm", "thickness pt", "color cmyk", "dash pattern"),
    )
    return HorizontalLineSet(
        y_spacing=f.number("y spacing mm"),
        top_margin=f.number("top margin mm"),
        bottom_margin=f.number("bottom margin mm"),
        thickness=f.number("thickness pt"),
        color=f.color("color cmyk"),
        dash_pattern=f.dash_pattern(),
    )


def _vertical(value: Any, path: KeyPath) -> VerticalLineSet:
    f = _Fields(
        value,
        path,
        ("x spacing mm", "left margin mm", "right margin mm", "thickness pt", "color cmyk", "dash pattern"),
    )
    return VerticalLineSet(
        x_spacing=f.number("x spacing mm"),
        left_margin=f.number("left margin mm"),
        right_margin=f.number("right margin mm"),
        thickness=f.number("thickness pt"),
        color=f.color("color cmyk"),
        dash_pattern=f.dash_pattern(),
    )


def _single_line(value: Any, path: KeyPath) -> LineDef:
    f = _Fields(value, path, ("start", "end", "thickness pt", "color cmyk", "dash pattern"))
    return LineDef(
        start=f.point("start"),
        end=f.point("end"),
        thickness=f.number("thickness pt"),
        color=f.color("color cmyk"),
        dash_pattern=f.dash_pattern(),
    )


LINE_SET_DECODERS: Dict[str, Callable[[Any, KeyPath], LineSet]] = {
    "slant": _slant,
    "seyes": _seyes,
    "horizontal lines": _horizontal,
    "vertical lines": _vertical,
    "single line": _single_line,
}


def _line_set(value: Any, path: KeyPath) -> LineSet:
    data = _mapping(value, path)
    if len(data) != 1:
        raise GeometryDefError(
            path, f"a line set must have exactly one key out of {sorted(LINE_SET_DECODERS)}"
        )
    (kind, body), = data.items()
    decoder = LINE_SET_DECODERS.get(kind)
    if decoder is None:
        raise GeometryDefError(
            path, f"unknown line set '{kind}', expected one of {sorted(LINE_SET_DECODERS)}"
        )
    return decoder(body, path + (kind,))


def parse_geometry_def(data: Any) -> GeometryDef:
    root = _mapping(data, ())
    _warn_unknown(root, ("paper size", "line sets"), ())

    paper_path: KeyPath = ("paper size",)
    paper_raw = _mapping(_field(root, "paper size", ()), paper_path)
    _warn_unknown(paper_raw, ("width mm", "height mm"), paper_path)
    paper = PaperSize(
        width=_number(_field(paper_raw, "width mm", paper_path), paper_path + ("width mm",)),
        height=_number(_field(paper_raw, "height mm", paper_path), paper_path + ("height mm",)),
    )

    sets_raw = _field(root, "line sets", ())
    if isinstance(sets_raw, (str, bytes, Mapping)) or not isinstance(sets_raw, Sequence):
        raise GeometryDefError(("line sets",), "expected a list of line sets")
    line_sets = tuple(
        _line_set(entry, ("line sets", str(idx))) for idx, entry in enumerate(sets_raw)
    )
    return GeometryDef(paper_size=paper, line_sets=line_sets)


def load_geometry_def(path: str | Path) -> GeometryDef:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Line set definition not found: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise GeometryDefError((), f"could not parse YAML ({exc})") from exc
    geometry = parse_geometry_def(data)
    log.info(
        "Loaded %s: paper %.1f x %.1f mm, %d line sets",
        p.name,
        geometry.paper_size.width,
        geometry.paper_size.height,
        len(geometry.line_sets),
    )
    return geometry


__all__ = ["LINE_SET_DECODERS", "load_geometry_def", "parse_geometry_def"]
