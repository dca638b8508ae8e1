import pytest

from transportation import (
    InvalidTrailingData,
    MalformedInput,
    format_problem,
    parse_problem_file,
    parse_problem_text,
)

PROBLEM = """2 3
4 8 8 76
16 24 16 82
72 50 36
"""


def test_parse_problem_text():
    data = parse_problem_text(PROBLEM)
    assert data['n'] == 2
    assert data['m'] == 3
    assert data['costs'] == [[4, 8, 8], [16, 24, 16]]
    assert data['supply'] == [76, 82]
    assert data['demand'] == [72, 50, 36]


def test_trailing_blank_lines_are_ignored():
    assert parse_problem_text(PROBLEM + "\n  \n")['demand'] == [72, 50, 36]


def test_trailing_content_fails():
    with pytest.raises(InvalidTrailingData):
        parse_problem_text(PROBLEM + "1 2 3\n")


def test_trailing_content_after_blank_lines_fails():
    with pytest.raises(InvalidTrailingData, match="Line 7"):
        parse_problem_text(PROBLEM + "\n\n1\n")


@pytest.mark.parametrize("text", ["1 0\n0\n", "1 0\n0\n\n", "1 0\n0", "2 0\n0\n0\n\n  \n"])
def test_empty_demand_line_when_no_columns(text):
    data = parse_problem_text(text)
    assert data['m'] == 0
    assert data['demand'] == []
    assert data['supply'] == [0] * data['n']
    assert data['costs'] == [[]] * data['n']


def test_no_columns_with_stray_demand_values_fails():
    with pytest.raises(MalformedInput):
        parse_problem_text("1 0\n0\n5\n")


@pytest.mark.parametrize("text", [
    "",
    "2\n",
    "2 3 4\n",
    "x 3\n",
    "2 3\n4 8 8 76\n",
    "2 3\n4 8 8\n16 24 16 82\n72 50 36\n",
    "2 3\n4 8 8 76 1\n16 24 16 82\n72 50 36\n",
    "2 3\n4 eight 8 76\n16 24 16 82\n72 50 36\n",
    "2 3\n4 8 8 76\n16 24 16 82\n72 50\n",
    "2 3\n4 8 8 76\n\n16 24 16 82\n72 50 36\n",
    "-1 3\n",
])
def test_malformed_input(text):
    with pytest.raises(MalformedInput):
        parse_problem_text(text)


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError, match="Line 2"):
        parse_problem_text("1 1\n3 abc\n3\n")


def test_custom_scalar():
    data = parse_problem_text("1 1\n2.5 3.5\n3.5\n", scalar=float)
    assert data['costs'] == [[2.5]]
    assert data['supply'] == [3.5]


def test_parse_problem_file(tmp_path):
    path = tmp_path / "problem.txt"
    path.write_text(PROBLEM)
    assert parse_problem_file(path)['supply'] == [76, 82]


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_problem_file(tmp_path / "missing.txt")


def test_format_problem_is_parseable():
    text = format_problem([[4, 8, 8], [16, 24, 16]], [76, 82], [72, 50, 36])
    assert text == PROBLEM
    assert parse_problem_text(text)['costs'] == [[4, 8, 8], [16, 24, 16]]
