"""
Karnaugh map grid model.

A map over n variables is split into row bits and column bits:
- row_bits = max(1, n // 2)  (the leading variables)
- col_bits = n - row_bits    (the trailing variables)

Rows and columns are labelled with Gray codes, and the grid is a nested
mapping grid[row_code][col_code] -> cell value:

    '1' = ON (minterm)
    '0' = OFF
    'X' = don't care

The cell for row code r and column code c is the term r + c; its
decimal value int(r + c, 2) is the minterm index.
"""

from .gray_code import generate_gray_code

OFF = '0'
ON = '1'
DONT_CARE = 'X'
CELL_VALUES = (OFF, ON, DONT_CARE)

# Click order of the original editor: 0 -> 1 -> X -> 0
_NEXT_VALUE = {OFF: ON, ON: DONT_CARE, DONT_CARE: OFF}


def split_bits(n_vars: int) -> tuple[int, int]:
    """Return (row_bits, col_bits) for a map over n_vars variables."""
    if n_vars < 2:
        raise ValueError(
            f"A Karnaugh map needs at least 2 variables, got {n_vars}"
        )
    row_bits = max(1, n_vars // 2)
    return row_bits, n_vars - row_bits


def build_headers(n_vars: int) -> tuple[list[str], list[str]]:
    """Return the (row_headers, col_headers) Gray code labels."""
    row_bits, col_bits = split_bits(n_vars)
    return generate_gray_code(row_bits), generate_gray_code(col_bits)


def empty_grid(row_headers: list[str], col_headers: list[str]) -> dict[str, dict[str, str]]:
    """Build a grid with every cell OFF."""
    return {r: {c: OFF for c in col_headers} for r in row_headers}


def cell_index(row_code: str, col_code: str) -> int:
    """Decimal minterm index of a cell."""
    return int(row_code + col_code, 2)


def index_to_term(index: int, n_vars: int) -> str:
    """Convert a minterm index to its n_vars-bit binary term."""
    if not 0 <= index < (1 << n_vars):
        raise ValueError(f"Minterm {index} out of range for {n_vars} variables")
    return format(index, f"0{n_vars}b")


def grid_from_minterms(
    variables: list[str],
    minterms,
    dont_cares=(),
) -> tuple[dict[str, dict[str, str]], list[str], list[str]]:
    """
    Build a grid from minterm and don't-care indices.

    Returns:
        Tuple of (grid, row_headers, col_headers)
    """
    n_vars = len(variables)
    row_headers, col_headers = build_headers(n_vars)
    grid = empty_grid(row_headers, col_headers)

    on_set = set(minterms)
    dc_set = set(dont_cares)
    overlap = on_set & dc_set
    if overlap:
        raise ValueError(f"Indices both ON and don't care: {sorted(overlap)}")

    row_bits = len(row_headers[0])
    for index, value in [(m, ON) for m in on_set] + [(d, DONT_CARE) for d in dc_set]:
        term = index_to_term(index, n_vars)
        grid[term[:row_bits]][term[row_bits:]] = value

    return grid, row_headers, col_headers


def set_cell(grid, row_code: str, col_code: str, value: str) -> dict[str, dict[str, str]]:
    """Return a copy of grid with one cell replaced."""
    if value not in CELL_VALUES:
        raise ValueError(f"Invalid cell value {value!r}, expected one of {CELL_VALUES}")
    new_grid = {r: dict(cols) for r, cols in grid.items()}
    new_grid.setdefault(row_code, {})[col_code] = value
    return new_grid


def cycle_cell(grid, row_code: str, col_code: str) -> dict[str, dict[str, str]]:
    """Return a copy of grid with one cell advanced 0 -> 1 -> X -> 0."""
    current = grid.get(row_code, {}).get(col_code, OFF)
    return set_cell(grid, row_code, col_code, _NEXT_VALUE.get(current, OFF))


def all_ones_or_dont_care(grid, row_headers: list[str], col_headers: list[str]) -> bool:
    """True if no cell is OFF, i.e. the function is the constant 1."""
    return all(
        grid.get(r, {}).get(c) in (ON, DONT_CARE)
        for r in row_headers
        for c in col_headers
    )


def print_kmap(grid, row_headers: list[str], col_headers: list[str], variables: list[str]):
    """Print the map with its Gray code headers."""
    row_bits = len(row_headers[0])
    corner = f"{''.join(variables[:row_bits])}/{''.join(variables[row_bits:])}"
    width = max(len(corner), len(row_headers[0]))
    cell_width = max(len(col_headers[0]), 1) + 2

    print(f"{corner:>{width}} | " + "".join(f"{c:^{cell_width}}" for c in col_headers))
    print("-" * (width + 3 + cell_width * len(col_headers)))
    for r in row_headers:
        cells = "".join(f"{grid.get(r, {}).get(c, '?'):^{cell_width}}" for c in col_headers)
        print(f"{r:>{width}} | {cells}")
