"""Karnaugh map minimization with visual grouping and a Quine-McCluskey trace."""

from .gray_code import generate_gray_code
from .kmap import build_headers, empty_grid, grid_from_minterms, cycle_cell, split_bits
from .groups import find_groups, group_to_implicant
from .quine_mccluskey import (
    ErrorKind,
    PhaseError,
    TraceStep,
    QMResult,
    find_prime_implicants,
)
from .expression import to_literal, to_expression, simplified_expression
from .solver import KarnaughSolver, SolveResult, minimum_cover
from .export import to_equations, to_verilog, format_trace
from .verify import verify_result

__all__ = [
    "generate_gray_code",
    "build_headers",
    "empty_grid",
    "grid_from_minterms",
    "cycle_cell",
    "split_bits",
    "find_groups",
    "group_to_implicant",
    "ErrorKind",
    "PhaseError",
    "TraceStep",
    "QMResult",
    "find_prime_implicants",
    "to_literal",
    "to_expression",
    "simplified_expression",
    "KarnaughSolver",
    "SolveResult",
    "minimum_cover",
    "to_equations",
    "to_verilog",
    "format_trace",
    "verify_result",
]
__version__ = "0.1.0"
