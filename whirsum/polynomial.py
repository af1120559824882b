"""Polynomials given by their evaluations over the ternary cube ``{0,1,2}^n``."""

from __future__ import annotations

import operator
from functools import reduce
from typing import Iterable, List, Sequence

from .field import FieldElement
from .utils import eq_poly3


class SumcheckPolynomial:
    """A polynomial stored as its values on ``{0,1,2}^n`` in big-endian lexicographic order.

    The first coordinate of a point is the most significant ternary digit of
    the position of its value in ``evaluations``.
    """

    __slots__ = ("_evaluations", "num_variables")

    def __init__(self, evaluations: Iterable[FieldElement], num_variables: int) -> None:
        if num_variables < 0:
            raise ValueError("num_variables must be non-negative")
        values = list(evaluations)
        expected = 3**num_variables
        if len(values) != expected:
            raise ValueError(
                f"expected {expected} evaluations for {num_variables} variables, "
                f"got {len(values)}"
            )
        self._evaluations = values
        self.num_variables = num_variables

    @property
    def evaluations(self) -> List[FieldElement]:
        """The stored values, in lexicographic order of ``{0,1,2}^n``."""
        return list(self._evaluations)

    def binary_to_ternary_index(self, binary_index: int) -> int:
        """Map an index of ``{0,1}^n`` to the index of the same point in ``{0,1,2}^n``."""
        ternary_index = 0
        factor = 1
        for _ in range(self.num_variables):
            ternary_index += (binary_index & 1) * factor
            binary_index >>= 1
            factor *= 3
        return ternary_index

    def sum_over_boolean_hypercube(self) -> FieldElement:
        """Sum of the values at all points whose coordinates are 0 or 1."""
        terms = (
            self._evaluations[self.binary_to_ternary_index(point)]
            for point in range(1 << self.num_variables)
        )
        return reduce(operator.add, terms)

    def evaluate_at_point(self, point: Sequence[FieldElement]) -> FieldElement:
        """Evaluate the interpolating polynomial (degree at most 2 per variable) at ``point``."""
        point = list(point)
        if len(point) != self.num_variables:
            raise ValueError(
                f"point has {len(point)} coordinates, polynomial has "
                f"{self.num_variables} variables"
            )
        return reduce(
            operator.add,
            (value * eq_poly3(point, i) for i, value in enumerate(self._evaluations)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SumcheckPolynomial):
            return NotImplemented
        return (
            self.num_variables == other.num_variables
            and self._evaluations == other._evaluations
        )

    def __repr__(self) -> str:
        return (
            f"SumcheckPolynomial(num_variables={self.num_variables}, "
            f"evaluations={self._evaluations!r})"
        )