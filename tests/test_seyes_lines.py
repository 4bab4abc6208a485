import pytest

from lined_paper_pdf.errors import NotPositiveError
from lined_paper_pdf.geom import resolve_line
from lined_paper_pdf.seyes_lines import create_seyes_lines
from lined_paper_pdf.types import CmykDef, PaperSize, SeyesLineSet

BASE_COLOR = CmykDef(0.02, 0.34, 0.0, 0.12)
AUX_COLOR = CmykDef(0.0, 0.2, 0.0, 0.05)


def _seyes(**overrides) -> SeyesLineSet:
    params = dict(
        y_spacing=2.0,
        top_margin=30.0,
        bottom_margin=20.0,
        base_thickness=0.4,
        base_color=BASE_COLOR,
        aux_thickness=0.1,
        aux_color=AUX_COLOR,
    )
    params.update(overrides)
    return SeyesLineSet(**params)


def _is_base(line) -> bool:
    return line.thickness == 0.4 and line.color == BASE_COLOR


def test_seyes_reference_layout(letter_portrait: PaperSize) -> None:
    lines = create_seyes_lines(_seyes(), letter_portrait)
    ys = [resolve_line(line, letter_portrait)[1] for line in lines]

    expected = [
        (249.4, False),
        (247.4, False),
        (245.4, False),
        (243.4, True),
        (241.4, False),
        (239.4, False),
    ]
    for line, y, (expected_y, base) in zip(lines, ys, expected):
        assert y == pytest.approx(expected_y)
        assert _is_base(line) is base


def test_seyes_motif_repeats_every_fourth_line(letter_portrait: PaperSize) -> None:
    lines = create_seyes_lines(_seyes(), letter_portrait)

    # two leading aux lines plus 30 full motif blocks
    assert len(lines) == 2 + 30 * 4
    for idx, line in enumerate(lines):
        assert _is_base(line) is (idx % 4 == 3)
        if not _is_base(line):
            assert line.thickness == 0.1
            assert line.color == AUX_COLOR
        assert line.dash_pattern is None

    ys = [resolve_line(line, letter_portrait)[1] for line in lines]
    for upper, lower in zip(ys, ys[1:]):
        assert upper - lower == pytest.approx(2.0)
    assert ys[-1] == pytest.approx(7.4)


def test_seyes_lines_span_full_width(letter_portrait: PaperSize) -> None:
    for line in create_seyes_lines(_seyes(), letter_portrait):
        x1, y1, x2, y2 = resolve_line(line, letter_portrait)
        assert (x1, x2) == (0.0, letter_portrait.width)
        assert y1 == y2


def test_seyes_lookahead_runs_past_bottom_margin() -> None:
    paper = PaperSize(100.0, 100.0)
    lines = create_seyes_lines(_seyes(top_margin=85.0), paper)

    # neither leading line fits, but one block still starts above the margin
    ys = [resolve_line(line, paper)[1] for line in lines]
    assert ys == pytest.approx([11.0, 9.0, 7.0, 5.0])
    assert [_is_base(line) for line in lines] == [False, True, False, False]


def test_seyes_single_leading_line() -> None:
    paper = PaperSize(100.0, 100.0)
    lines = create_seyes_lines(_seyes(top_margin=79.0, bottom_margin=20.0), paper)

    ys = [resolve_line(line, paper)[1] for line in lines]
    assert ys[0] == pytest.approx(21.0)
    assert ys[1:5] == pytest.approx([17.0, 15.0, 13.0, 11.0])
    assert len(lines) == 5


@pytest.mark.parametrize(
    "overrides, parameter",
    [
        ({"y_spacing": 0.0}, "y spacing"),
        ({"top_margin": -1.0}, "top margin"),
        ({"bottom_margin": 0.0}, "bottom margin"),
    ],
)
def test_seyes_preconditions(letter_portrait, overrides, parameter) -> None:
    with pytest.raises(NotPositiveError) as exc_info:
        create_seyes_lines(_seyes(**overrides), letter_portrait)
    assert exc_info.value.parameter == parameter
