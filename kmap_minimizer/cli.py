"""Command-line interface for Karnaugh map minimization."""

import argparse
import sys

from .solver import KarnaughSolver, METHODS
from .kmap import grid_from_minterms, print_kmap
from .verify import verify_result
from .export import to_equations, to_verilog, format_trace


def _parse_list(text: str) -> list[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def _parse_indices(text: str) -> list[int]:
    try:
        return [int(item) for item in _parse_list(text)]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {text!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Minimize a Boolean function with a Karnaugh map and Quine-McCluskey",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kmap-minimize --vars A,B,C --minterms 1,3,5,7       F = C
  kmap-minimize -m 0,2,8,10 -d 5 --show-map            4 variables, one don't care
  kmap-minimize -m 0,1,2,5,6,7 --vars A,B,C --exact    Minimum-cost cover
  kmap-minimize -m 1,3 --vars A,B --format trace       Show the derivation
  kmap-minimize -m 1,3 --vars A,B --format verilog     Output as Verilog module
        """,
    )

    parser.add_argument(
        "--vars",
        type=_parse_list,
        default=["A", "B", "C", "D"],
        help="Comma-separated variable names, MSB first (default: A,B,C,D)",
    )
    parser.add_argument(
        "--minterms", "-m",
        type=_parse_indices,
        default=[],
        help="Comma-separated minterm indices where F = 1",
    )
    parser.add_argument(
        "--dont-cares", "-d",
        type=_parse_indices,
        default=[],
        help="Comma-separated don't-care indices",
    )
    parser.add_argument(
        "--method",
        choices=METHODS,
        default="greedy",
        help="Term selection: greedy coverage pass or MaxSAT minimum cover (default: greedy)",
    )
    parser.add_argument(
        "--exact",
        action="store_const",
        const="exact",
        dest="method",
        help="Shorthand for --method exact",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "equations", "trace", "verilog"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--show-map",
        action="store_true",
        help="Print the Karnaugh map before the result",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    try:
        solver = KarnaughSolver(args.vars)
        grid, _, _ = grid_from_minterms(args.vars, args.minterms, args.dont_cares)

        if args.show_map:
            print_kmap(grid, solver.row_headers, solver.col_headers, solver.variables)
            print()

        result = solver.solve(grid, method=args.method)

        if args.format == "equations":
            print(to_equations(result, solver.variables))
        elif args.format == "trace":
            print(format_trace(result.steps))
            print()
            print(result.expression)
        elif args.format == "verilog":
            print(to_verilog(result, solver.variables))
        else:
            solver.print_result(result)
            if args.verbose:
                print()
                print(format_trace(result.steps))

            ok, errors = verify_result(grid, solver.row_headers, solver.col_headers,
                                       result.selected_implicants)
            if result.expression != "F = 1":
                if ok:
                    print("\n✓ Verified against every specified cell")
                else:
                    print("\n✗ Verification FAILED:")
                    for err in errors:
                        print(f"  {err}")

        return 1 if result.error else 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
