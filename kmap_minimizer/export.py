"""
Export minimization results as text equations, a derivation trace or Verilog.
"""

from .solver import SolveResult
from .quine_mccluskey import TraceStep
from .expression import WILDCARD


def to_equations(result: SolveResult, variables: list[str]) -> str:
    """
    Export a result as Boolean equations.

    Returns:
        Human-readable summary with visual groups, primes and the final line
    """
    lines = []
    lines.append("Karnaugh Map Minimization")
    lines.append(f"Variables: {', '.join(variables)}")
    lines.append(f"Method: {result.method}")
    lines.append("")

    if result.group_terms:
        lines.append("Visual groups:")
        for i, term in enumerate(result.group_terms):
            lines.append(f"  G{i + 1} = {term}")
        lines.append("")

    lines.append(f"Prime implicants: {', '.join(result.primes) if result.primes else '-'}")
    lines.append(f"Selected terms:   {', '.join(result.essential) if result.essential else '-'}")
    lines.append("")
    lines.append(result.expression)

    return "\n".join(lines)


def format_step(step: TraceStep) -> list[str]:
    """Text lines for one derivation step."""
    lines = [step.title]

    if step.error:
        lines.append(f"  {step.error.kind.value} in {step.error.phase}: {step.error.message}")
        return lines

    if step.note:
        lines.append(f"  {step.note}")

    for combo in step.combinations:
        lower, higher = combo.weights
        indices = ",".join(str(i) for i in combo.indices)
        lines.append(f"  [{lower}-{higher}] {combo.pair[0]} + {combo.pair[1]} -> {combo.implicant}  ({indices})")

    for weight, terms in step.groups:
        lines.append(f"  {weight} ones: {' '.join(terms)}")

    for row in step.coverage:
        marks = "*" if row.essential else " "
        marks += "!" if row.sole_cover else " "
        covers = ",".join(str(int(m, 2)) for m in row.covers)
        lines.append(f"  {marks} {row.implicant:10} covers {covers or '-'}")

    if step.essential:
        lines.append(f"  Essential: {', '.join(step.essential)}")

    return lines


def format_trace(steps: list[TraceStep]) -> str:
    """
    Export the Quine-McCluskey derivation.

    In the coverage table '*' marks a selected essential implicant and '!' a
    prime that is the only cover of one of its minterms.
    """
    lines = []
    for step in steps:
        lines.extend(format_step(step))
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def impl_to_verilog(implicant: str, variables: list[str]) -> str:
    """Convert an implicant to a Verilog expression."""
    terms = []
    for bit, name in zip(implicant, variables):
        if bit == WILDCARD:
            continue
        terms.append(name if bit == '1' else f"~{name}")

    if not terms:
        return "1'b1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_verilog(result: SolveResult, variables: list[str], module_name: str = "kmap_func") -> str:
    """
    Export a result as a combinational Verilog module.

    The input bus is MSB-first in variable order, so in[n-1] is the first
    variable.
    """
    n = len(variables)
    lines = []
    lines.append("// Karnaugh map minimized function")
    lines.append(f"// {result.expression} ({result.method})")
    lines.append("")
    lines.append(f"module {module_name} (")
    lines.append(f"    input  wire [{n - 1}:0] in,")
    lines.append("    output wire f")
    lines.append(");")
    lines.append("")
    lines.append("    // Input aliases")
    for i, name in enumerate(variables):
        lines.append(f"    wire {name} = in[{n - 1 - i}];")
    lines.append("")

    if result.expression == "F = 1":
        expr = "1'b1"
    elif not result.selected_implicants:
        expr = "1'b0"
    else:
        expr = " | ".join(impl_to_verilog(impl, variables) for impl in result.selected_implicants)

    lines.append(f"    assign f = {expr};")
    lines.append("")
    lines.append("endmodule")

    return "\n".join(lines)
