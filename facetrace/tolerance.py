"""
Floating point tolerances shared by every geometric predicate.

All comparisons of derived scalars (cross product magnitudes, dot
products expected to vanish, ray parameters) go through these helpers so
that round-off from chained operations is treated the same everywhere.
"""

import sys

# Absolute tolerance for values of order one; scaled up for larger values.
EPSILON = 1e-9

# Distance a secondary ray is moved off the surface it leaves.
RAY_OFFSET = 1e-6

# Largest finite ray parameter; reported by surfaces "at infinity".
FAR_K = sys.float_info.max


def is_zero(value: float, scale: float = 1.0) -> bool:
    """Check whether value vanishes relative to the given magnitude."""
    return abs(value) < EPSILON * max(1.0, abs(scale))


def is_equal(a: float, b: float) -> bool:
    """Relative equality test."""
    return is_zero(a - b, max(abs(a), abs(b)))


def is_negative(value: float) -> bool:
    return value < 0.0
