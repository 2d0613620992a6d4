from __future__ import annotations

import pytest

from mprcad.entities import CircleDescriptor, LineDescriptor
from mprcad.errors import LineExtractionError
from mprcad.logging import DiagnosticsLog
from mprcad.parser import extract_circles, extract_line, parse_document, parse_number


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("12.5", 12.5),
        ("  3 ", 3.0),
        ("-.5", -0.5),
        ("+7.", 7.0),
        ("1.5e2", 150.0),
        ("2E-1", 0.2),
    ],
)
def test_parse_number_accepts_plain_literals(token: str, expected: float) -> None:
    assert parse_number(token) == pytest.approx(expected)


@pytest.mark.parametrize("token", ["", "abc", "1,5", "1_000", "12mm", "inf", "nan", "1e999", "--1"])
def test_parse_number_rejects_everything_else(token: str) -> None:
    assert parse_number(token) is None


# ----- line -----


def test_extract_line_from_sample(sample_mpr: str) -> None:
    assert extract_line(sample_mpr) == LineDescriptor(x=10.0, y=20.0, z=5.0)


def test_line_value_substituted_from_variables() -> None:
    text = '[001\nFOO="12.5"\n\n$E\nX=FOO\nY=1\nZ=0\n'

    assert extract_line(text).x == 12.5


def test_line_quotes_are_stripped_before_substitution() -> None:
    text = '[001\nFOO="4"\n\n$E\nX="FOO"\nY="2"\nZ = 3\n'

    assert extract_line(text) == LineDescriptor(x=4.0, y=2.0, z=3.0)


def test_line_keys_are_case_insensitive_and_later_values_win() -> None:
    text = "$E\nx=1\nX=2\ny=3\nz=4\n"

    assert extract_line(text) == LineDescriptor(x=2.0, y=3.0, z=4.0)


def test_missing_line_section_raises() -> None:
    with pytest.raises(LineExtractionError) as excinfo:
        extract_line('[001\nA="1"\n<102\nXA="1"\n')

    assert excinfo.value.missing == ("x", "y", "z")
    assert "missing" in str(excinfo.value).lower()


def test_incomplete_line_raises_with_missing_field() -> None:
    with pytest.raises(LineExtractionError) as excinfo:
        extract_line("$E\nX=1\nY=2\n")

    assert excinfo.value.missing == ("z",)
    assert excinfo.value.malformed == ()


def test_malformed_line_value_is_warned_and_fails_validation() -> None:
    log = DiagnosticsLog()

    with pytest.raises(LineExtractionError) as excinfo:
        extract_line("$E\nX=T\nY=2\nZ=3\n", diagnostics=log)

    assert excinfo.value.malformed == ("x",)
    assert excinfo.value.missing == ()
    [warning] = log.warnings
    assert warning.key == "x"
    assert warning.raw == "T"
    assert warning.line_number == 2


def test_malformed_repeat_does_not_clear_good_value() -> None:
    log = DiagnosticsLog()

    line = extract_line("$E\nX=1\nX=oops\nY=2\nZ=3\n", diagnostics=log)

    assert line.x == 1.0
    assert len(log) == 1


def test_line_window_is_ten_lines() -> None:
    filler = "\n".join(f"K{i}=0" for i in range(7))
    inside = f"$E\nX=1\nY=2\n{filler}\nZ=3\n"
    outside = f"$E\nX=1\nY=2\n{filler}\nKX=0\nZ=3\n"

    assert extract_line(inside).z == 3.0
    with pytest.raises(LineExtractionError) as excinfo:
        extract_line(outside)
    assert excinfo.value.missing == ("z",)


@pytest.mark.parametrize("separator", ["", "[002", "<102", "$E1"])
def test_line_window_closes_on_boundary(separator: str) -> None:
    with pytest.raises(LineExtractionError):
        extract_line(f"$E\nX=1\nY=2\n{separator}\nZ=3\n")


def test_other_dollar_lines_do_not_close_line_window() -> None:
    assert extract_line("$E\nX=1\n$KO\nY=2\nZ=3\n") == LineDescriptor(x=1.0, y=2.0, z=3.0)


def test_only_first_line_section_is_used() -> None:
    text = "$E0\nX=1\nY=2\nZ=3\n\n$E1\nX=9\nY=9\nZ=9\n"

    assert extract_line(text) == LineDescriptor(x=1.0, y=2.0, z=3.0)


def test_incomplete_first_line_section_is_not_rescued_by_second() -> None:
    with pytest.raises(LineExtractionError):
        extract_line("$E0\nX=1\n\n$E1\nX=9\nY=9\nZ=9\n")


# ----- circles -----


def test_extract_circles_from_sample(sample_mpr: str) -> None:
    assert extract_circles(sample_mpr) == (
        CircleDescriptor(xa=100.0, ya=200.0, du=2.0),
        CircleDescriptor(xa=800.0, ya=40.5, du=8.0),
    )


def test_circles_keep_document_order() -> None:
    text = "".join(
        f'<102 \\BohrVert\\\nXA="{xa}"\nYA="{ya}"\nDU="{du}"\n\n'
        for xa, ya, du in [(3, 30, 6), (1, 10, 2), (2, 20, 4)]
    )

    circles = extract_circles(text)

    assert [(c.xa, c.ya, c.du) for c in circles] == [(3, 30, 6), (1, 10, 2), (2, 20, 4)]


def test_partial_circle_is_dropped_with_warning() -> None:
    log = DiagnosticsLog()
    text = '<102\nXA="1"\nYA="2"\n\n<102\nXA="3"\nYA="4"\nDU="5"\n'

    circles = extract_circles(text, diagnostics=log)

    assert circles == (CircleDescriptor(xa=3.0, ya=4.0, du=5.0),)
    [warning] = log.warnings
    assert warning.line_number == 1
    assert "DU" in warning.raw
    assert "dropped" in warning.message


def test_circle_values_require_quotes() -> None:
    assert extract_circles("<102\nXA=1\nYA=2\nDU=3\n") == ()


def test_circle_keys_are_case_insensitive() -> None:
    assert extract_circles('<102\nxa="1"\nYa="2"\ndU="3"\n') == (CircleDescriptor(1.0, 2.0, 3.0),)


def test_adjacent_circle_markers_are_all_found() -> None:
    text = '<102\nXA="1"\nYA="1"\nDU="1"\n<102\nXA="2"\nYA="2"\nDU="2"\n'

    assert [c.xa for c in extract_circles(text)] == [1.0, 2.0]


def test_circle_window_is_fifteen_lines() -> None:
    filler = "\n".join(f'K{i}="0"' for i in range(12))
    inside = f'<102\nXA="1"\nYA="2"\n{filler}\nDU="3"\n'
    outside = f'<102\nXA="1"\nYA="2"\n{filler}\nKX="0"\nDU="3"\n'

    assert len(extract_circles(inside)) == 1
    assert extract_circles(outside) == ()


@pytest.mark.parametrize("separator", ["", "$E", "[002", "<103"])
def test_circle_window_closes_on_boundary(separator: str) -> None:
    assert extract_circles(f'<102\nXA="1"\nYA="2"\n{separator}\nDU="3"\n') == ()


def test_circle_variable_that_is_not_numeric_drops_circle() -> None:
    log = DiagnosticsLog()
    text = '[001\nKM="note"\n\n<102\nXA="1"\nYA="2"\nDU="KM"\n'

    assert extract_circles(text, diagnostics=log) == ()
    assert log.warnings[0].key == "du"
    assert "note" in log.warnings[0].message


def test_no_circles_is_valid() -> None:
    assert extract_circles("$E\nX=1\nY=2\nZ=3\n") == ()


# ----- document -----


def test_parse_document_example(minimal_mpr: str) -> None:
    result = parse_document(minimal_mpr)

    assert result.line == LineDescriptor(x=10.0, y=20.0, z=5.0)
    assert result.circles == (CircleDescriptor(xa=100.0, ya=200.0, du=2.0),)
    assert result.circles[0].radius == 1.0
    assert result.warnings == ()


def test_parse_document_collects_warnings() -> None:
    text = '$E\nX=1\nY=2\nZ=3\nW=?\n\n<102\nXA="a"\nYA="2"\nDU="3"\n'

    result = parse_document(text)

    assert [w.key for w in result.warnings] == ["xa", "circle"]


def test_parse_document_uses_only_its_own_warnings() -> None:
    log = DiagnosticsLog()
    log.record(section="earlier", line_number=1, key="x", raw="?", message="old")

    result = parse_document('$E\nX=1\nY=2\nZ=3\n<102\nXA="?"\n', diagnostics=log)

    assert len(log) == 3
    assert [w.section for w in result.warnings] == ["<102@5", "<102@5"]


def test_parsing_is_deterministic(sample_mpr: str) -> None:
    assert parse_document(sample_mpr) == parse_document(sample_mpr)
