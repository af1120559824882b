"""Multilinear polynomials in coefficient and evaluation form, and constraint weights."""

from __future__ import annotations

import operator
from functools import reduce
from typing import Iterable, List, Sequence, Tuple

from .field import FieldElement
from .utils import eval_eq


def _check_power_of_two(length: int) -> int:
    if length == 0 or length & (length - 1):
        raise ValueError(f"length {length} is not a power of two")
    return length.bit_length() - 1


def coefficients_to_evaluations(coeffs: Sequence[FieldElement]) -> List[FieldElement]:
    """Values of a multilinear polynomial over ``{0,1}^n`` from its coefficients.

    Bit ``i`` of a coefficient's index marks the presence of a variable in its
    monomial; the value at index ``b`` is the sum of the coefficients whose
    index is a bit-subset of ``b``. The first variable is the most significant bit.
    """
    values = list(coeffs)
    _check_power_of_two(len(values))
    return _zeta(values)


def _zeta(values: List[FieldElement]) -> List[FieldElement]:
    if len(values) == 1:
        return values
    half = len(values) // 2
    low = _zeta(values[:half])
    high = _zeta(values[half:])
    return low + [lo + hi for lo, hi in zip(low, high)]


def evaluate_coefficients(
    coeffs: Sequence[FieldElement], point: Sequence[FieldElement]
) -> FieldElement:
    """Evaluate the multilinear polynomial with ``coeffs`` at ``point``.

    ``point[0]`` is the variable of the most significant index bit.
    """
    values = list(coeffs)
    point = list(point)
    num_variables = _check_power_of_two(len(values))
    if num_variables != len(point):
        raise ValueError(
            f"point has {len(point)} coordinates, polynomial has {num_variables} variables"
        )
    for x in point:
        half = len(values) // 2
        values = [lo + x * hi for lo, hi in zip(values[:half], values[half:])]
    return values[0]


def combine_constraints(
    constraints: Iterable[Tuple[Sequence[FieldElement], FieldElement]],
    combination_randomness: FieldElement,
    num_variables: int,
) -> Tuple[List[FieldElement], FieldElement]:
    """Fold evaluation constraints into one weight table and one claimed sum.

    Each constraint is a ``(point, value)`` pair claiming ``p(point) == value``.
    The ``i``-th constraint is scaled by ``combination_randomness ** i``; the
    weight table holds ``sum_i gamma^i * eq(point_i, b)`` over ``b`` in
    ``{0,1}^num_variables`` and the sum is ``sum_i gamma^i * value_i``.
    """
    if num_variables < 0:
        raise ValueError("num_variables must be non-negative")
    field = combination_randomness.field
    weights = [field.zero()] * (1 << num_variables)
    total = field.zero()
    gamma_pow = field.one()
    for point, value in constraints:
        point = list(point)
        if len(point) != num_variables:
            raise ValueError(
                f"constraint point has {len(point)} coordinates, expected {num_variables}"
            )
        weights = list(map(operator.add, weights, eval_eq(point, gamma_pow)))
        total = total + value * gamma_pow
        gamma_pow = gamma_pow * combination_randomness
    return weights, total


def _inner_product(a: Sequence[FieldElement], b: Sequence[FieldElement]) -> FieldElement:
    return reduce(operator.add, (x * y for x, y in zip(a, b)))