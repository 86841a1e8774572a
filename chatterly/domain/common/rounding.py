"""Rounding helpers shared by metric computations."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to ``digits`` decimals with halves always going up.

    Unlike round(), 2.5 becomes 3 and 0.25 becomes 0.3 at one decimal.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_half_up_int(value: float) -> int:
    """Round half up to the nearest integer."""
    return math.floor(value + 0.5)
