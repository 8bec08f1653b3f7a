"""
Fixed-point ("big number") helpers.

On-chain values are integers scaled by 10**decimals (18 for every Lyra token).
Division truncates toward zero, matching the contracts' math.
"""
from __future__ import annotations

from decimal import Decimal

from lyra.constants import UNIT


def from_big_number(value: int | str | None, decimals: int = 18) -> float:
    """Convert a scaled integer to float. None -> 0.0."""
    if value is None:
        return 0.0
    return float(Decimal(int(value)) / (Decimal(10) ** decimals))


def to_big_number(value: float | int | str, decimals: int = 18) -> int:
    """Convert a float (or numeric string) to a scaled integer, truncating extra precision."""
    return int(Decimal(str(value)) * (Decimal(10) ** decimals))


def bn_div(a: int, b: int) -> int:
    """Integer division truncating toward zero. Raises ZeroDivisionError when b == 0."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def bn_mul_div(a: int, b: int, c: int) -> int:
    """(a * b) / c with truncation toward zero."""
    return bn_div(a * b, c)


def unit_div(a: int, b: int) -> int:
    """a / b as an 18-decimal fixed-point ratio."""
    return bn_div(a * UNIT, b)
