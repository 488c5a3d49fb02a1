"""Render implicant bit strings as product terms and sum-of-products expressions."""

from .kmap import all_ones_or_dont_care

COMPLEMENT = "'"
WILDCARD = '-'


def to_literal(implicant: str, variables: list[str]) -> str:
    """
    Convert an implicant to a product term.

    '1' -> A, '0' -> A', '-' -> nothing, concatenated in variable order.
    An implicant with no literals is the constant "1".
    """
    if len(implicant) != len(variables):
        raise ValueError(
            f"Implicant {implicant!r} has {len(implicant)} positions "
            f"for {len(variables)} variables"
        )

    literals = []
    for bit, name in zip(implicant, variables):
        if bit == '1':
            literals.append(name)
        elif bit == '0':
            literals.append(f"{name}{COMPLEMENT}")
        elif bit != WILDCARD:
            raise ValueError(f"Invalid implicant character {bit!r} in {implicant!r}")

    return "".join(literals) if literals else "1"


def to_expression(implicants: list[str], variables: list[str]) -> str:
    """OR together the product terms of several implicants."""
    terms = [to_literal(impl, variables) for impl in implicants]
    return " + ".join(terms) if terms else "0"


def simplified_expression(grid, row_headers: list[str], col_headers: list[str], essential: list[str]) -> str:
    """
    Final "F = ..." line.

    Args:
        essential: Already rendered product terms
    """
    if all_ones_or_dont_care(grid, row_headers, col_headers):
        return "F = 1"
    if not essential:
        return "F = 0"
    return f"F = {' + '.join(essential)}"
