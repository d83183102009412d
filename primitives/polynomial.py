"""Univariate polynomial operations over GF(p).

Dense univariate polynomials are galois.Poly objects. The sum-check verifier
only needs two operations: interpolate a handful of points and evaluate the
result at a challenge.
"""

from typing import Sequence, Tuple

import galois

from primitives.field import FF, to_field, to_field_array

# --- Type Aliases ---

Point = Tuple[int, int]  # (x, y), either ints or FF scalars


def interpolate(points: Sequence[Point]) -> galois.Poly:
    """Lagrange interpolation through points with distinct x coordinates.

    Args:
        points: (x, y) pairs

    Returns:
        Unique polynomial of degree < len(points) through all points
    """
    if len(points) == 0:
        return galois.Poly.Zero(field=FF)
    xs = to_field_array([x for x, _ in points])
    ys = to_field_array([y for _, y in points])
    return galois.lagrange_poly(xs, ys)


def evaluate(poly: galois.Poly, x) -> FF:
    """Evaluate a univariate polynomial at a field point."""
    return poly(to_field(x))


def evaluate_round_record(record: Sequence, x) -> FF:
    """Evaluate the round polynomial given by its values at 0, 1, 2, ... at x.

    A sum-check round record carries evaluations, not coefficients, so the
    polynomial is rebuilt by interpolating (k, record[k]) first.
    """
    return evaluate(interpolate([(k, y) for k, y in enumerate(record)]), x)
