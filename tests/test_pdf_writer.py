import logging
import re

import fitz
import pytest

from lined_paper_pdf.errors import PageCountError, RenderError
from lined_paper_pdf.pdf_writer import (
    HAIRLINE_PT,
    MM_TO_PT,
    dash_array,
    render_document,
    validate_page_count,
    write_document,
)
from lined_paper_pdf.types import CmykDef, Coord, DashPatternDef, LineDef, PaperSize, PointDef

PAPER = PaperSize(100.0, 150.0)


def _line(y: float, thickness: float = 0.5, dash=None, color=None) -> LineDef:
    return LineDef(
        start=PointDef.absolute(0.0, y),
        end=PointDef(Coord.off_far_edge(0.0), Coord.off_zero(y)),
        thickness=thickness,
        color=color or CmykDef(0.02, 0.34, 0.0, 0.12),
        dash_pattern=dash,
    )


@pytest.mark.parametrize("count", [1, 2, 10000])
def test_page_count_accepted(count: int) -> None:
    validate_page_count(count)


@pytest.mark.parametrize("count", [0, -1, 10001])
def test_page_count_rejected(count: int) -> None:
    with pytest.raises(PageCountError) as exc_info:
        validate_page_count(count)
    assert exc_info.value.value == count
    assert (exc_info.value.minimum, exc_info.value.maximum) == (1, 10000)
    assert "between 1 and 10000" in str(exc_info.value)


def test_page_count_maximum_is_configurable() -> None:
    validate_page_count(20000, max_pages=20000)
    with pytest.raises(PageCountError):
        validate_page_count(3, max_pages=2)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        (None, None),
        (DashPatternDef(dash=2, gap=2), "[2 2] 0"),
        (DashPatternDef(dash=3), "[3 3] 0"),
        (DashPatternDef(dash=0, gap=4), "[0 4] 0"),
        (DashPatternDef(dash=0), None),
        (DashPatternDef(dash=0, gap=0), None),
        (DashPatternDef(dash=-1, gap=3), None),
        (DashPatternDef(dash=2, gap=-3), None),
    ],
)
def test_dash_array(pattern, expected) -> None:
    assert dash_array(pattern) == expected


def test_render_draws_every_segment_on_every_page() -> None:
    lines = [_line(10.0), _line(20.0, thickness=1.0), _line(30.0, dash=DashPatternDef(2, 2))]

    data = render_document(PAPER, lines, 3)

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        assert doc.page_count == 3
        for page in doc:
            assert page.rect.width == pytest.approx(100.0 * MM_TO_PT, abs=0.01)
            assert page.rect.height == pytest.approx(150.0 * MM_TO_PT, abs=0.01)
            drawings = page.get_drawings()
            assert len(drawings) == len(lines)
            widths = sorted(d["width"] for d in drawings)
            assert widths == pytest.approx([0.5, 0.5, 1.0])
    finally:
        doc.close()


def test_render_flips_to_bottom_left_origin() -> None:
    data = render_document(PAPER, [_line(10.0)], 1)

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        (drawing,) = doc[0].get_drawings()
        kind, start, end = drawing["items"][0]
        assert kind == "l"
        expected_y = (150.0 - 10.0) * MM_TO_PT
        assert start.y == pytest.approx(expected_y, abs=0.01)
        assert end.y == pytest.approx(expected_y, abs=0.01)
        assert sorted([start.x, end.x]) == pytest.approx([0.0, 100.0 * MM_TO_PT], abs=0.01)
    finally:
        doc.close()


def test_render_rejects_page_count_before_drawing() -> None:
    with pytest.raises(PageCountError):
        render_document(PAPER, [_line(10.0)], 0)


def test_render_rejects_unknown_line_cap() -> None:
    with pytest.raises(ValueError, match="line cap"):
        render_document(PAPER, [_line(10.0)], 1, line_cap="pointy")


def test_write_document_creates_parent_directories(tmp_path) -> None:
    out = write_document(tmp_path / "nested" / "paper.pdf", PAPER, [_line(10.0)], 2)

    assert out.exists()
    doc = fitz.open(str(out))
    try:
        assert doc.page_count == 2
        assert doc.metadata["title"] == "Lined paper"
    finally:
        doc.close()


def test_write_document_leaves_no_file_on_invalid_page_count(tmp_path) -> None:
    out = tmp_path / "paper.pdf"
    with pytest.raises(PageCountError):
        write_document(out, PAPER, [_line(10.0)], 10001)
    assert not out.exists()


def _content_stream(data: bytes) -> bytes:
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        return doc[0].read_contents()
    finally:
        doc.close()


def test_zero_thickness_is_stroked_as_colored_hairline() -> None:
    data = render_document(PAPER, [_line(10.0, thickness=0.0)], 1)

    stream = _content_stream(data)
    assert re.search(rb"[\d.]+ w\b", stream)
    assert re.search(rb"[\d.]+ [\d.]+ [\d.]+ [\d.]+ K\b", stream)

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        (drawing,) = doc[0].get_drawings()
        assert drawing["width"] == pytest.approx(HAIRLINE_PT, abs=1e-3)
        assert drawing["color"] is not None
        assert max(drawing["color"]) > 0.1
    finally:
        doc.close()


def test_out_of_range_color_is_clamped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    lines = [
        _line(10.0, color=CmykDef(1.02, 0.34, -0.1, 0.12)),
        _line(20.0, color=CmykDef(1.02, 0.34, -0.1, 0.12)),
    ]

    with caplog.at_level(logging.WARNING, logger="lined_paper_pdf"):
        data = render_document(PAPER, lines, 1)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "outside [0, 1]" in warnings[0].getMessage()
    match = re.search(rb"(\S+) (\S+) (\S+) (\S+) K\b", _content_stream(data))
    assert match is not None
    assert [float(v) for v in match.groups()] == pytest.approx([1.0, 0.34, 0.0, 0.12])


def test_write_document_wraps_io_errors(tmp_path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")

    with pytest.raises(RenderError, match="Could not write") as exc_info:
        write_document(blocker / "paper.pdf", PAPER, [_line(10.0)], 1)
    assert isinstance(exc_info.value.__cause__, OSError)
