import pytest

from kmap_minimizer.kmap import (
    build_headers,
    cell_index,
    cycle_cell,
    empty_grid,
    grid_from_minterms,
    index_to_term,
    print_kmap,
    set_cell,
    split_bits,
)


def test_split_bits():
    assert split_bits(2) == (1, 1)
    assert split_bits(3) == (1, 2)
    assert split_bits(4) == (2, 2)
    assert split_bits(5) == (2, 3)


@pytest.mark.parametrize("n", [0, 1])
def test_split_bits_rejects_small_maps(n):
    with pytest.raises(ValueError):
        split_bits(n)


def test_build_headers_for_three_variables():
    rows, cols = build_headers(3)
    assert rows == ["0", "1"]
    assert cols == ["00", "01", "11", "10"]


def test_grid_from_minterms_places_cells():
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C', 'D'], [0, 10], [5])
    assert len(rows) * len(cols) == 16
    assert grid["00"]["00"] == '1'
    assert grid["10"]["10"] == '1'
    assert grid["01"]["01"] == 'X'
    assert sum(v == '0' for cols_ in grid.values() for v in cols_.values()) == 13
    assert cell_index("10", "10") == 10


def test_grid_from_minterms_rejects_bad_indices():
    with pytest.raises(ValueError):
        grid_from_minterms(['A', 'B'], [4])
    with pytest.raises(ValueError):
        grid_from_minterms(['A', 'B'], [1], [1])


def test_index_to_term():
    assert index_to_term(5, 3) == "101"
    assert index_to_term(0, 2) == "00"


def test_cycle_cell_returns_new_grid():
    rows, cols = build_headers(2)
    grid = empty_grid(rows, cols)

    one = cycle_cell(grid, "0", "1")
    dc = cycle_cell(one, "0", "1")
    back = cycle_cell(dc, "0", "1")

    assert grid["0"]["1"] == '0'
    assert one["0"]["1"] == '1'
    assert dc["0"]["1"] == 'X'
    assert back["0"]["1"] == '0'


def test_set_cell_rejects_unknown_value():
    rows, cols = build_headers(2)
    with pytest.raises(ValueError):
        set_cell(empty_grid(rows, cols), "0", "0", '2')


def test_print_kmap(capsys):
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C'], [1])
    print_kmap(grid, rows, cols, ['A', 'B', 'C'])
    out = capsys.readouterr().out
    assert "A/BC" in out
    assert "01" in out
