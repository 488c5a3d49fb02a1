from kmap_minimizer.groups import candidate_groups, find_groups, group_to_implicant, group_terms
from kmap_minimizer.kmap import build_headers, empty_grid, grid_from_minterms


def _is_power_of_two(x):
    return x > 0 and x & (x - 1) == 0


def test_candidates_wrap_around():
    candidates = candidate_groups(2, 4)
    assert ((0, 3), (0, 0)) in candidates
    assert ((1, 3), (1, 0), (0, 3), (0, 0)) in candidates
    assert all(_is_power_of_two(len(g)) for g in candidates)


def test_constant_one_is_single_full_group():
    rows, cols = build_headers(3)
    grid = {r: {c: '1' for c in cols} for r in rows}
    grid["1"]["10"] = 'X'

    groups = find_groups(grid, rows, cols)

    assert len(groups) == 1
    assert len(groups[0]) == 8
    assert set(groups[0]) == {(r, c) for r in range(2) for c in range(4)}


def test_all_zero_map_has_no_groups():
    rows, cols = build_headers(4)
    assert find_groups(empty_grid(rows, cols), rows, cols) == []


def test_column_pair_group():
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C'], [1, 3, 5, 7])

    groups = find_groups(grid, rows, cols)

    assert groups == [((0, 1), (0, 2), (1, 1), (1, 2))]
    assert group_terms(groups, rows, cols) == ["--1"]


def test_corners_form_one_toroidal_group():
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C', 'D'], [0, 2, 8, 10])

    groups = find_groups(grid, rows, cols)

    assert len(groups) == 1
    assert set(groups[0]) == {(0, 0), (0, 3), (3, 0), (3, 3)}
    assert group_to_implicant(groups[0], rows, cols) == "-0-0"


def test_dont_care_enlarges_group():
    grid, rows, cols = grid_from_minterms(['A', 'B'], [1], [3])

    groups = find_groups(grid, rows, cols)

    assert len(groups) == 1
    assert group_to_implicant(groups[0], rows, cols) == "-1"


def test_dont_care_alone_is_not_grouped():
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C'], [0], [7])

    groups = find_groups(grid, rows, cols)

    assert groups == [((0, 0),)]


def test_groups_cover_every_one_and_no_zero():
    grid, rows, cols = grid_from_minterms(
        ['A', 'B', 'C', 'D'], [0, 1, 3, 4, 5, 7, 9, 14], [15, 6]
    )

    groups = find_groups(grid, rows, cols)

    covered = {cell for g in groups for cell in g}
    for r, row in enumerate(rows):
        for c, col in enumerate(cols):
            if grid[row][col] == '1':
                assert (r, c) in covered
            if grid[row][col] == '0':
                assert (r, c) not in covered
    assert all(_is_power_of_two(len(g)) for g in groups)


def test_groups_are_deterministic():
    grid, rows, cols = grid_from_minterms(['A', 'B', 'C', 'D'], [2, 6, 7, 13, 15], [5])
    assert find_groups(grid, rows, cols) == find_groups(grid, rows, cols)
