"""
Reflected binary Gray codes used as Karnaugh map row and column headers.

Cyclically adjacent codes (including last -> first) differ in exactly one
bit, which is what makes neighbouring map cells logically adjacent.
"""


def generate_gray_code(k: int) -> list[str]:
    """
    Generate the 2^k reflected Gray code strings of width k.

    generate_gray_code(0) == [""]
    generate_gray_code(2) == ["00", "01", "11", "10"]
    """
    if k < 0:
        raise ValueError(f"Gray code width must be non-negative, got {k}")

    codes = [""]
    for _ in range(k):
        codes = ["0" + c for c in codes] + ["1" + c for c in reversed(codes)]

    return codes


def hamming_distance(a: str, b: str) -> int:
    """Number of positions at which two equal-length strings differ."""
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {a!r} vs {b!r}")
    return sum(1 for x, y in zip(a, b) if x != y)
