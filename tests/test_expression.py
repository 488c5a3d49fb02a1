import pytest

from kmap_minimizer.expression import simplified_expression, to_expression, to_literal
from kmap_minimizer.kmap import build_headers, empty_grid, grid_from_minterms


def test_to_literal():
    assert to_literal("01", ['A', 'B']) == "A'B"
    assert to_literal("1-0", ['A', 'B', 'C']) == "AC'"
    assert to_literal("--1", ['X1', 'X2', 'X3']) == "X3"
    assert to_literal("--", ['A', 'B']) == "1"


def test_to_literal_rejects_bad_implicants():
    with pytest.raises(ValueError):
        to_literal("01", ['A', 'B', 'C'])
    with pytest.raises(ValueError):
        to_literal("0X", ['A', 'B'])


def test_to_expression():
    assert to_expression(["1-", "-1"], ['A', 'B']) == "A + B"
    assert to_expression([], ['A', 'B']) == "0"


def test_simplified_expression():
    rows, cols = build_headers(2)
    zeros = empty_grid(rows, cols)
    ones = {r: {c: 'X' for c in cols} for r in rows}
    ones["0"]["0"] = '1'
    grid, _, _ = grid_from_minterms(['A', 'B'], [1, 3])

    assert simplified_expression(zeros, rows, cols, []) == "F = 0"
    assert simplified_expression(ones, rows, cols, []) == "F = 1"
    assert simplified_expression(grid, rows, cols, ["B"]) == "F = B"
    assert simplified_expression(grid, rows, cols, ["A'B", "AB"]) == "F = A'B + AB"
