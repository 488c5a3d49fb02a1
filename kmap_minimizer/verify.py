"""
Verification of minimization results.

Ensures a sum-of-products agrees with the map on every cell that is not a
don't care.
"""

from .kmap import ON, DONT_CARE
from .quine_mccluskey import implicant_covers


def evaluate_implicant(implicant: str, term: str) -> bool:
    """Evaluate an implicant (product term) on a specific input term."""
    return implicant_covers(implicant, term)


def evaluate_sop(implicants: list[str], term: str) -> bool:
    """Evaluate a sum-of-products on a specific input (OR of AND terms)."""
    return any(evaluate_implicant(impl, term) for impl in implicants)


def verify_result(grid, row_headers: list[str], col_headers: list[str], implicants: list[str]) -> tuple[bool, list[str]]:
    """
    Verify that implicants reproduce the map.

    Args:
        grid: Nested mapping grid[row_code][col_code] -> '0' | '1' | 'X'
        implicants: Raw implicant strings (e.g. SolveResult.selected_implicants)

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []

    for row in row_headers:
        for col in col_headers:
            value = grid.get(row, {}).get(col)
            if value == DONT_CARE:
                continue

            term = row + col
            actual = evaluate_sop(implicants, term)
            expected = value == ON

            if actual != expected:
                errors.append(
                    f"Cell {term} (minterm {int(term, 2)}): "
                    f"expected {int(expected)}, got {int(actual)}"
                )

    return len(errors) == 0, errors
