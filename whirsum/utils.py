"""Helpers shared by the sumcheck code: digit decomposition and eq polynomials."""

from __future__ import annotations

from typing import List, Sequence, Union

from .field import FieldElement


def f64_eq_abs(a: float, b: float, abs_err: float) -> bool:
    """Fuzzy float comparison using absolute error."""
    return abs(a - b) <= abs_err


def base_decomposition(value: int, base: int, n_bits: int) -> List[int]:
    """Big-endian base-``base`` digits of ``value`` modulo ``base**n_bits``.

    Always returns exactly ``n_bits`` digits, padded with zeros.
    """
    if base < 2:
        raise ValueError("base must be at least 2")
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    for _ in range(n_bits):
        value, digit = divmod(value, base)
        digits.append(digit)
    digits.reverse()
    return digits


def expand_randomness(base: FieldElement, length: int) -> List[FieldElement]:
    """Return ``[1, base, base**2, ..., base**(length-1)]``."""
    powers = []
    acc = base.field.one()
    for _ in range(length):
        powers.append(acc)
        acc = acc * base
    return powers


def eval_eq(point: Sequence[FieldElement], scalar: FieldElement) -> List[FieldElement]:
    """Evaluations of ``scalar * eq(point, b)`` over ``b`` in ``{0,1}^n``.

    The result has ``2**n`` entries; the first coordinate of ``point`` is the
    most significant bit of the index.
    """
    out = [scalar]
    for x in point:
        out = [part for v in out for part in (v - v * x, v * x)]
    return out


def eq_poly3(point: Sequence[FieldElement], index: int) -> Union[FieldElement, int]:
    """Lagrange basis polynomial of ``{0,1,2}^n`` for ``index``, evaluated at ``point``.

    The last coordinate of ``point`` pairs with the least significant ternary
    digit of ``index``. For an empty point the value is the integer ``1``.
    """
    n = len(point)
    if not 0 <= index < 3**n:
        raise ValueError(f"index {index} is outside the ternary cube of dimension {n}")
    if n == 0:
        return 1
    field = point[0].field
    one = field.one()
    two = one.double()
    two_inv = two.inverse()
    acc = one
    for val in reversed(point):
        index, digit = divmod(index, 3)
        if digit == 0:
            acc = acc * (val - one) * (val - two) * two_inv
        elif digit == 1:
            acc = acc * val * (val - two) * (-one)
        else:
            acc = acc * val * (val - one) * two_inv
    return acc