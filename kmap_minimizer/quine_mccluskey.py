"""
Quine-McCluskey minimization of a Karnaugh map with a full derivation trace.

Terms and implicants are strings over {'0', '1', '-'} with one position per
variable; '-' marks a position merged away during combination.

The derivation runs in phases:
1. Initial grouping of minterms and don't cares by number of ones
2. Iterative combination of terms that differ in exactly one position
3. Coverage table and essential implicant selection

Each phase runs through _run_phase, which turns an exception into a
PhaseError instead of letting it escape. find_prime_implicants therefore
always returns a structurally valid QMResult.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .kmap import ON, DONT_CARE, CELL_VALUES
from .expression import to_literal, WILDCARD


class ErrorKind(str, Enum):
    """Failure categories reported by the engine."""

    INVALID_PARAMETERS = "InvalidParameters"
    DATA_ACCESS = "DataAccessError"
    COMPUTATION = "ComputationError"


@dataclass(frozen=True)
class PhaseError:
    kind: ErrorKind
    phase: str
    message: str


@dataclass(frozen=True)
class PhaseOutcome:
    """Either a phase's value or the error that stopped it."""

    value: object = None
    error: Optional[PhaseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Combination:
    """One successful merge of two terms from adjacent weight groups."""

    weights: tuple[int, int]    # (ones in lower term, ones in higher term)
    pair: tuple[str, str]
    implicant: str
    indices: tuple[int, ...]    # minterm indices spanned by the implicant
    combined: bool = True


@dataclass(frozen=True)
class CoverageRow:
    """A prime implicant's row in the coverage table."""

    implicant: str
    covers: tuple[str, ...]     # original minterms only, never don't cares
    essential: bool             # selected by the greedy pass
    sole_cover: bool            # some covered minterm has no other prime covering it


@dataclass(frozen=True)
class TraceStep:
    """One phase of the derivation. Never mutated after being recorded."""

    title: str
    note: str = ""
    groups: tuple[tuple[int, tuple[str, ...]], ...] = ()
    combinations: tuple[Combination, ...] = ()
    coverage: tuple[CoverageRow, ...] = ()
    essential: tuple[str, ...] = ()
    error: Optional[PhaseError] = None


@dataclass
class QMResult:
    """Outcome of find_prime_implicants."""

    steps: list[TraceStep] = field(default_factory=list)
    primes: list[str] = field(default_factory=list)             # rendered product terms
    essential: list[str] = field(default_factory=list)          # rendered product terms
    prime_implicants: list[str] = field(default_factory=list)   # raw '01-' strings
    essential_implicants: list[str] = field(default_factory=list)
    minterms: list[str] = field(default_factory=list)
    dont_cares: list[str] = field(default_factory=list)
    error: Optional[PhaseError] = None


def count_ones(term: str) -> int:
    """Hamming weight of a term; '-' positions do not count."""
    return term.count('1')


def count_wildcards(implicant: str) -> int:
    return implicant.count(WILDCARD)


def implicant_covers(implicant: str, term: str) -> bool:
    """Check if an implicant covers a fully specified term."""
    return all(i == WILDCARD or i == t for i, t in zip(implicant, term))


def expand_implicant(implicant: str) -> list[int]:
    """All minterm indices an implicant spans, ascending."""
    terms = [""]
    for bit in implicant:
        choices = "01" if bit == WILDCARD else bit
        terms = [t + b for t in terms for b in choices]
    return sorted(int(t, 2) for t in terms)


def try_combine(term1: str, term2: str) -> Optional[str]:
    """
    Try to merge two terms differing in exactly one position.

    Returns the merged implicant with that position set to '-', or None.
    """
    if len(term1) != len(term2):
        return None

    diff = [k for k, (a, b) in enumerate(zip(term1, term2)) if a != b]
    if len(diff) != 1:
        return None

    k = diff[0]
    return term1[:k] + WILDCARD + term1[k + 1:]


def group_by_weight(terms) -> dict[int, list[str]]:
    """Bucket terms by number of ones, dropping duplicates, keys ascending."""
    buckets: dict[int, list[str]] = {}
    for term in terms:
        bucket = buckets.setdefault(count_ones(term), [])
        if term not in bucket:
            bucket.append(term)
    return {k: buckets[k] for k in sorted(buckets)}


def _freeze_groups(groups: dict[int, list[str]]) -> tuple[tuple[int, tuple[str, ...]], ...]:
    return tuple((k, tuple(groups[k])) for k in sorted(groups))


def _run_phase(phase: str, kind: ErrorKind, func: Callable, *args) -> PhaseOutcome:
    try:
        return PhaseOutcome(value=func(*args))
    except Exception as e:
        return PhaseOutcome(error=PhaseError(kind=kind, phase=phase, message=str(e) or type(e).__name__))


def _validate(grid, row_headers, col_headers, variables):
    """
    Raises:
        ValueError: if an input is missing or the sizes disagree
        TypeError: if headers or variables are not sized strings
    """
    if not grid or not row_headers or not col_headers or not variables:
        raise ValueError("grid, headers and variables are all required")
    n_bits = len(row_headers[0]) + len(col_headers[0])
    if len(variables) != n_bits:
        raise ValueError(f"{len(variables)} variables for a map of {n_bits} bits")


def extract_terms(grid, row_headers: list[str], col_headers: list[str]) -> tuple[list[str], list[str], list[tuple[str, str]]]:
    """
    Read minterms and don't cares from the grid, row-major over the headers.

    A missing row or cell is read as '0' and reported in the third element.

    Returns:
        Tuple of (minterms, don't cares, missing (row, col) cells)

    Raises:
        ValueError: if a cell holds something other than '0', '1' or 'X'
        AttributeError: if the grid or one of its rows is not a mapping
    """
    minterms = []
    dont_cares = []
    missing = []

    for row in row_headers:
        cells = grid.get(row)
        for col in col_headers:
            value = None if cells is None else cells.get(col)
            if value is None:
                missing.append((row, col))
                continue
            if value not in CELL_VALUES:
                raise ValueError(f"Invalid value {value!r} at row {row}, column {col}")
            if value == ON:
                minterms.append(row + col)
            elif value == DONT_CARE:
                dont_cares.append(row + col)

    return minterms, dont_cares, missing


def _missing_cells_error(missing: list[tuple[str, str]]) -> PhaseError:
    cells = ", ".join(f"row {r} column {c}" for r, c in missing)
    return PhaseError(ErrorKind.DATA_ACCESS, "extraction", f"Missing cells read as 0: {cells}")


def combination_pass(groups: dict[int, list[str]]) -> tuple[dict[int, list[str]], list[Combination], list[str]]:
    """
    Run one combination pass over weight groups.

    Returns:
        Tuple of (next weight groups, combinations made, terms left unused)
    """
    new_terms = []
    used = set()
    combinations = []

    keys = sorted(groups)
    for lower, higher in zip(keys, keys[1:]):
        if higher - lower != 1:
            continue

        for term1 in groups[lower]:
            for term2 in groups[higher]:
                combined = try_combine(term1, term2)
                if combined is None:
                    continue

                new_terms.append(combined)
                used.add(term1)
                used.add(term2)
                combinations.append(Combination(
                    weights=(lower, higher),
                    pair=(term1, term2),
                    implicant=combined,
                    indices=tuple(expand_implicant(combined)),
                ))

    unused = [t for k in keys for t in groups[k] if t not in used]
    return group_by_weight(new_terms), combinations, unused


def combine_terms(groups: dict[int, list[str]]) -> tuple[list[str], list[TraceStep]]:
    """
    Combine terms until a pass makes no new combination.

    Returns:
        Tuple of (prime implicants in discovery order, one trace step per
        productive pass)
    """
    primes: list[str] = []
    steps: list[TraceStep] = []
    iteration = 1

    while True:
        next_groups, combinations, unused = combination_pass(groups)

        primes = primes + [t for t in unused if t not in primes]

        if not combinations:
            return primes, steps

        steps.append(TraceStep(
            title=f"Step 2.{iteration}: Term combination",
            note=f"Combined {len(combinations)} pairs of terms",
            groups=_freeze_groups(next_groups),
            combinations=tuple(combinations),
        ))
        iteration += 1
        groups = next_groups


def coverage_table(primes: list[str], minterms: list[str]) -> tuple[list[CoverageRow], list[str]]:
    """
    Build the coverage table and pick essential implicants.

    Primes are visited most specific first (fewest '-' positions; ties keep
    discovery order). A prime is taken as essential if it covers a minterm
    that no earlier essential prime covers. This greedy pass can differ from
    the textbook definition, which sole_cover reports alongside.

    Returns:
        Tuple of (table rows in visiting order, essential implicants)
    """
    ordered = sorted(primes, key=count_wildcards)
    covers_by_prime = {
        p: tuple(m for m in minterms if implicant_covers(p, m)) for p in ordered
    }

    rows = []
    essential = []
    covered: frozenset = frozenset()

    for prime in ordered:
        covers = covers_by_prime[prime]
        is_essential = any(m not in covered for m in covers)
        sole_cover = any(
            not any(m in covers_by_prime[other] for other in ordered if other != prime)
            for m in covers
        )
        rows.append(CoverageRow(
            implicant=prime,
            covers=covers,
            essential=is_essential,
            sole_cover=sole_cover,
        ))
        if is_essential:
            essential.append(prime)
            covered = covered | frozenset(covers)

    return rows, essential


def find_prime_implicants(grid, row_headers: list[str], col_headers: list[str], variables: list[str]) -> QMResult:
    """
    Run Quine-McCluskey on a Karnaugh map grid.

    Args:
        grid: Nested mapping grid[row_code][col_code] -> '0' | '1' | 'X'
        row_headers: Gray code row labels
        col_headers: Gray code column labels
        variables: Variable names, one per bit of row code + column code

    Returns:
        QMResult with the trace, prime implicants and essential implicants.
        Invalid input or unreadable cells give an empty result carrying
        an error; failures inside a phase are recorded as error steps.
    """
    validated = _run_phase("validation", ErrorKind.INVALID_PARAMETERS,
                           _validate, grid, row_headers, col_headers, variables)
    if not validated.ok:
        return QMResult(error=validated.error)

    extracted = _run_phase("extraction", ErrorKind.DATA_ACCESS, extract_terms, grid, row_headers, col_headers)
    if not extracted.ok:
        return QMResult(error=extracted.error)
    minterms, dont_cares, missing = extracted.value

    steps: list[TraceStep] = []
    data_error = None
    if missing:
        data_error = _missing_cells_error(missing)
        steps.append(TraceStep(title="Error reading the map", error=data_error))

    if not minterms:
        steps.append(TraceStep(title="Step 1: Initial grouping", note="No minterms found"))
        return QMResult(steps=steps, dont_cares=dont_cares, error=data_error)

    # Step 1
    grouped = _run_phase("initial grouping", ErrorKind.COMPUTATION, group_by_weight, minterms + dont_cares)
    if grouped.ok:
        groups = grouped.value
        steps.append(TraceStep(
            title="Step 1: Initial grouping by number of ones",
            note=f"{len(minterms)} minterms and {len(dont_cares)} don't cares grouped",
            groups=_freeze_groups(groups),
        ))
    else:
        groups = {}
        steps.append(TraceStep(title="Error in initial grouping", error=grouped.error))

    # Step 2
    combined = _run_phase("term combination", ErrorKind.COMPUTATION, combine_terms, groups)
    if combined.ok:
        primes, combination_steps = combined.value
        steps.extend(combination_steps)
    else:
        primes = []
        steps.append(TraceStep(title="Error in term combination", error=combined.error))

    # Step 3
    covered = _run_phase("coverage table", ErrorKind.COMPUTATION, coverage_table, primes, minterms)
    if covered.ok:
        rows, essential = covered.value
        essential_terms = _run_phase(
            "coverage table", ErrorKind.COMPUTATION,
            lambda: [to_literal(e, variables) for e in essential],
        )
        steps.append(TraceStep(
            title="Step 3: Coverage table",
            note=f"Found {len(essential)} essential implicants",
            coverage=tuple(rows),
            essential=tuple(essential_terms.value or ()),
            error=essential_terms.error,
        ))
    else:
        essential = []
        steps.append(TraceStep(title="Error in coverage table", error=covered.error))

    result = QMResult(
        steps=steps,
        prime_implicants=primes,
        essential_implicants=essential,
        minterms=minterms,
        dont_cares=dont_cares,
        error=data_error,
    )

    rendered = _run_phase(
        "formatting", ErrorKind.COMPUTATION,
        lambda: ([to_literal(p, variables) for p in primes],
                 [to_literal(e, variables) for e in essential]),
    )
    if rendered.ok:
        result.primes, result.essential = rendered.value
    elif result.error is None:
        result.error = rendered.error

    return result


if __name__ == "__main__":
    from .kmap import grid_from_minterms

    variables = ['A', 'B', 'C']
    grid, rows, cols = grid_from_minterms(variables, [1, 3, 5, 7])
    result = find_prime_implicants(grid, rows, cols, variables)

    for step in result.steps:
        print(f"{step.title}: {step.note}")
    print(f"Prime implicants: {result.prime_implicants} -> {result.primes}")
    print(f"Essential: {result.essential}")
