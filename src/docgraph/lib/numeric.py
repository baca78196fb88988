"""Rounding helpers.

Scores are rounded half away from zero (2.5 -> 3), not with Python's
round-half-to-even, so the same inputs always give the same integer a reader
would compute by hand.
"""

import math


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    """Round to `digits` decimal places using half-up rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
