from __future__ import annotations

import csv
import os
from typing import Optional, Sequence

from .geom import resolve_line
from .types import LineDef, PaperSize

FIELDNAMES = [
    "index",
    "x1_mm",
    "y1_mm",
    "x2_mm",
    "y2_mm",
    "thickness_pt",
    "c",
    "m",
    "y",
    "k",
    "dash",
    "gap",
]


def _format_float(value: Optional[float], precision: int) -> str:
    if value is None:
        return ""
    fmt = f"{{:.{precision}f}}"
    return fmt.format(value)


def write_segments_csv(
    csv_path: str,
    paper: PaperSize,
    lines: Sequence[LineDef],
    float_digits: int = 3,
) -> str:
    """One row per segment with coordinates resolved against *paper*."""

    outdir = os.path.dirname(csv_path)
    if outdir:
        os.makedirs(outdir, exist_ok=True)

    with open(csv_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
        writer.writeheader()
        for idx, line in enumerate(lines):
            x1, y1, x2, y2 = resolve_line(line, paper)
            dash = line.dash_pattern
            writer.writerow(
                {
                    "index": idx,
                    "x1_mm": _format_float(x1, float_digits),
                    "y1_mm": _format_float(y1, float_digits),
                    "x2_mm": _format_float(x2, float_digits),
                    "y2_mm": _format_float(y2, float_digits),
                    "thickness_pt": _format_float(line.thickness, float_digits),
                    "c": _format_float(line.color.c, float_digits),
                    "m": _format_float(line.color.m, float_digits),
                    "y": _format_float(line.color.y, float_digits),
                    "k": _format_float(line.color.k, float_digits),
                    "dash": "" if dash is None else dash.dash,
                    "gap": "" if dash is None or dash.gap is None else dash.gap,
                }
            )
    return csv_path
