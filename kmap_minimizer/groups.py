"""
Visual grouping of Karnaugh map cells.

Finds a covering set of toroidal power-of-two rectangles over the grid
using a greedy set cover. The groups drive cell highlighting only; the
algebraic result comes from the Quine-McCluskey engine.
"""

from .kmap import ON, DONT_CARE, all_ones_or_dont_care

Cell = tuple[int, int]
Group = tuple[Cell, ...]


def _power_of_two_sizes(length: int) -> list[int]:
    """length, length/2, ..., 1 (length is a power of two)."""
    sizes = []
    size = length
    while size >= 1:
        sizes.append(size)
        size >>= 1
    return sizes


def candidate_groups(rows: int, cols: int) -> list[Group]:
    """
    Enumerate every toroidal rectangle on a rows x cols map.

    Sizes run from the full map down to single cells, in descending powers
    of two for each axis; every cell is tried as an origin.
    """
    candidates = []
    for size_r in _power_of_two_sizes(rows):
        for size_c in _power_of_two_sizes(cols):
            for r in range(rows):
                for c in range(cols):
                    candidates.append(tuple(
                        ((r + dr) % rows, (c + dc) % cols)
                        for dr in range(size_r)
                        for dc in range(size_c)
                    ))
    return candidates


def find_groups(grid, row_headers: list[str], col_headers: list[str]) -> list[Group]:
    """
    Find the groups to highlight on the map.

    Args:
        grid: Nested mapping grid[row_code][col_code] -> '0' | '1' | 'X'
        row_headers: Gray code row labels
        col_headers: Gray code column labels

    Returns:
        Accepted groups in acceptance order, each a tuple of
        (row_index, col_index) cells
    """
    rows = len(row_headers)
    cols = len(col_headers)

    if all_ones_or_dont_care(grid, row_headers, col_headers):
        return [tuple((r, c) for r in range(rows) for c in range(cols))]

    def value(cell: Cell):
        r, c = cell
        return grid.get(row_headers[r], {}).get(col_headers[c])

    def includable(group: Group) -> bool:
        return all(value(cell) in (ON, DONT_CARE) for cell in group)

    def uncovered_ones(group: Group, covered: frozenset) -> list[Cell]:
        return [cell for cell in group if value(cell) == ON and cell not in covered]

    # Nothing is covered while sorting, so the tie-break counts every ON cell
    ordered = sorted(
        candidate_groups(rows, cols),
        key=lambda g: (-len(g), -len(uncovered_ones(g, frozenset()))),
    )

    accepted = []
    covered = frozenset()
    for group in ordered:
        if not includable(group):
            continue
        new_cells = uncovered_ones(group, covered)
        if new_cells:
            accepted.append(group)
            covered = covered | frozenset(new_cells)

    return accepted


def group_to_implicant(group: Group, row_headers: list[str], col_headers: list[str]) -> str:
    """
    Collapse a group into the implicant of bits shared by all its cells.

    Positions where the cells disagree become '-'.
    """
    terms = [row_headers[r] + col_headers[c] for r, c in group]
    implicant = []
    for bits in zip(*terms):
        implicant.append(bits[0] if len(set(bits)) == 1 else '-')
    return "".join(implicant)


def group_terms(groups: list[Group], row_headers: list[str], col_headers: list[str]) -> list[str]:
    """Implicants for a list of groups, in the same order."""
    return [group_to_implicant(g, row_headers, col_headers) for g in groups]
