"""
Karnaugh map solver.

Ties the pieces together for one variable list:
1. Gray code headers for rows and columns
2. Visual groups for highlighting
3. Quine-McCluskey trace with greedy essential selection
4. Optionally, a minimum-cost cover found with MaxSAT
"""

from dataclasses import dataclass, field
from typing import Optional

from pysat.formula import WCNF
from pysat.examples.rc2 import RC2

from .kmap import build_headers, empty_grid, split_bits
from .groups import Group, find_groups, group_terms
from .quine_mccluskey import (
    PhaseError,
    QMResult,
    count_wildcards,
    find_prime_implicants,
    implicant_covers,
)
from .expression import simplified_expression, to_literal

METHODS = ("greedy", "exact")


@dataclass
class SolveResult:
    """Everything a map display needs after an edit."""

    groups: list[Group]
    group_terms: list[str]      # rendered product term per visual group
    steps: list
    primes: list[str]
    essential: list[str]
    expression: str
    method: str
    qm: Optional[QMResult] = None
    selected_implicants: list[str] = field(default_factory=list)
    error: Optional[PhaseError] = None

    @property
    def num_literals(self) -> int:
        """Literal count of the selected terms."""
        return sum(len(impl) - count_wildcards(impl) for impl in self.selected_implicants)


def minimum_cover(primes: list[str], minterms: list[str]) -> list[str]:
    """
    Choose a minimum-cost subset of primes covering every minterm.

    Formulated as weighted MaxSAT:
    - Hard clauses: every minterm is covered by at least one selected prime
    - Soft clauses: penalize each prime by its literal count + 1
      (AND inputs plus the OR input it feeds)

    Returns:
        Selected primes, in the order given
    """
    if not minterms:
        return []

    wcnf = WCNF()

    # Variable mapping: prime index -> SAT variable (1-indexed)
    prime_vars = {i: i + 1 for i in range(len(primes))}

    for minterm in minterms:
        covering = [prime_vars[i] for i, p in enumerate(primes) if implicant_covers(p, minterm)]
        if not covering:
            raise RuntimeError(f"No prime implicant covers minterm {minterm}")
        wcnf.append(covering)

    for i, prime in enumerate(primes):
        cost = len(prime) - count_wildcards(prime) + 1
        wcnf.append([-prime_vars[i]], weight=cost)

    with RC2(wcnf) as solver:
        model = solver.compute()
        if model is None:
            raise RuntimeError("MaxSAT solver found no solution")
        chosen = {v for v in model if v > 0}

    return [p for i, p in enumerate(primes) if prime_vars[i] in chosen]


class KarnaughSolver:
    """
    Minimizer for Karnaugh maps over a fixed variable list.

    Each solve() call works on the grid it is given and keeps no state
    between calls.
    """

    def __init__(self, variables: list[str]):
        split_bits(len(variables))  # rejects fewer than 2 variables
        self.variables = list(variables)
        self.row_headers, self.col_headers = build_headers(len(self.variables))

    @property
    def n_vars(self) -> int:
        return len(self.variables)

    def empty_grid(self) -> dict[str, dict[str, str]]:
        return empty_grid(self.row_headers, self.col_headers)

    def solve(self, grid, method: str = "greedy") -> SolveResult:
        """
        Minimize a grid.

        Args:
            grid: Nested mapping grid[row_code][col_code] -> '0' | '1' | 'X'
            method: "greedy" keeps the essential implicants picked by the
                coverage pass; "exact" replaces them with a minimum-cost
                cover from MaxSAT

        Returns:
            SolveResult with groups, trace and final expression
        """
        if method not in METHODS:
            raise ValueError(f"Unknown method {method!r}, expected one of {METHODS}")

        groups = find_groups(grid, self.row_headers, self.col_headers)
        qm = find_prime_implicants(grid, self.row_headers, self.col_headers, self.variables)

        if method == "exact":
            selected = minimum_cover(qm.prime_implicants, qm.minterms)
            essential = [to_literal(impl, self.variables) for impl in selected]
        else:
            selected = qm.essential_implicants
            essential = qm.essential

        return SolveResult(
            groups=groups,
            group_terms=[
                to_literal(impl, self.variables)
                for impl in group_terms(groups, self.row_headers, self.col_headers)
            ],
            steps=qm.steps,
            primes=qm.primes,
            essential=essential,
            expression=simplified_expression(grid, self.row_headers, self.col_headers, essential),
            method=method,
            qm=qm,
            selected_implicants=list(selected),
            error=qm.error,
        )

    def print_result(self, result: SolveResult):
        """Print a summary of a result."""
        print(f"\n{'=' * 60}")
        print(f"Karnaugh Map Result: {result.method}")
        print(f"{'=' * 60}")
        print(f"Variables: {', '.join(self.variables)}")

        if result.error:
            print(f"Error ({result.error.kind.value}): {result.error.message}")

        print(f"\nGroups ({len(result.groups)}):")
        for i, (group, term) in enumerate(zip(result.groups, result.group_terms)):
            cells = sorted(int(self.row_headers[r] + self.col_headers[c], 2) for r, c in group)
            print(f"  {i + 1}: {term:12} cells {cells}")

        print(f"\nPrime implicants ({len(result.primes)}): {', '.join(result.primes)}")
        print(f"Selected ({len(result.essential)}, {result.num_literals} literals): "
              f"{', '.join(result.essential)}")
        print(f"\n{result.expression}")
