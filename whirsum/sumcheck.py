"""Prover side of the single-polynomial sumcheck protocol."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .field import FieldElement
from .multilinear import coefficients_to_evaluations, combine_constraints
from .polynomial import SumcheckPolynomial
from .transcript import ProverState
from .utils import eval_eq


def _fold(values: Sequence[FieldElement], r: FieldElement) -> List[FieldElement]:
    """Fix the least significant variable of an evaluation table to ``r``."""
    return [lo + (hi - lo) * r for lo, hi in zip(values[0::2], values[1::2])]


class SumcheckSingle:
    """Sumcheck prover for ``sum_b p(b) * w(b)`` over the Boolean hypercube.

    ``evaluations`` holds the values of ``p`` on ``{0,1}^n``, ``weights`` those
    of the weight polynomial ``w``, and ``total`` the claimed weighted sum.
    Each round fixes the variable of the least significant index bit.
    """

    __slots__ = ("evaluations", "weights", "total")

    def __init__(
        self,
        evaluations: Iterable[FieldElement],
        weights: Iterable[FieldElement],
        total: FieldElement,
    ) -> None:
        evaluations = list(evaluations)
        weights = list(weights)
        length = len(evaluations)
        if length == 0 or length & (length - 1):
            raise ValueError(f"number of evaluations {length} is not a power of two")
        if len(weights) != length:
            raise ValueError(
                f"expected {length} weights, got {len(weights)}"
            )
        if not isinstance(total, FieldElement):
            raise TypeError("total must be a field element")
        self.evaluations = evaluations
        self.weights = weights
        self.total = total

    @classmethod
    def from_coefficients(
        cls,
        coeffs: Sequence[FieldElement],
        constraints: Iterable[Tuple[Sequence[FieldElement], FieldElement]],
        combination_randomness: FieldElement,
    ) -> "SumcheckSingle":
        """Build a prover from polynomial coefficients and ``(point, value)`` constraints."""
        evaluations = coefficients_to_evaluations(coeffs)
        num_variables = len(evaluations).bit_length() - 1
        weights, total = combine_constraints(
            constraints, combination_randomness, num_variables
        )
        return cls(evaluations, weights, total)

    @property
    def num_variables(self) -> int:
        """Number of variables still to be folded."""
        return len(self.evaluations).bit_length() - 1

    def _require_variable(self) -> None:
        if self.num_variables < 1:
            raise ValueError("no variables left to fold")

    def compute_sumcheck_polynomial(self) -> SumcheckPolynomial:
        """The quadratic round polynomial ``h``, given by its values at 0, 1 and 2."""
        self._require_variable()
        zero = self.total.field.zero()
        p, w = self.evaluations, self.weights
        c0 = sum((a * b for a, b in zip(p[0::2], w[0::2])), zero)
        c2 = sum(
            (
                (p1 - p0) * (w1 - w0)
                for p0, p1, w0, w1 in zip(p[0::2], p[1::2], w[0::2], w[1::2])
            ),
            zero,
        )
        # total = h(0) + h(1) = 2*c0 + c1 + c2
        c1 = self.total - c0.double() - c2
        eval_0 = c0
        eval_1 = c0 + c1 + c2
        eval_2 = eval_1 + c1 + c2 + c2.double()
        return SumcheckPolynomial([eval_0, eval_1, eval_2], 1)

    def compute_sumcheck_polynomials(
        self, prover_state: ProverState, folding_factor: int, pow_bits: float
    ) -> List[FieldElement]:
        """Run ``folding_factor`` rounds against ``prover_state``.

        Returns the folding challenges, last round first.
        """
        if folding_factor < 0:
            raise ValueError("folding_factor must be non-negative")
        one = self.total.field.one()
        challenges: List[FieldElement] = []
        for _ in range(folding_factor):
            sumcheck_poly = self.compute_sumcheck_polynomial()
            prover_state.add_scalars(sumcheck_poly.evaluations)
            if pow_bits > 0:
                prover_state.challenge_pow(pow_bits)
            (folding_randomness,) = prover_state.challenge_scalars(1)
            challenges.append(folding_randomness)
            self.compress(one, [folding_randomness], sumcheck_poly)
        challenges.reverse()
        return challenges

    def add_new_equality(
        self,
        points: Sequence[Sequence[FieldElement]],
        evaluations: Sequence[FieldElement],
        combination_randomness: Sequence[FieldElement],
    ) -> None:
        """Add ``sum_i rand_i * eq(point_i, .)`` to the weights and ``rand_i * eval_i`` to the sum."""
        if not len(points) == len(evaluations) == len(combination_randomness):
            raise ValueError(
                "points, evaluations and combination_randomness must have equal lengths"
            )
        for point, value, rand in zip(points, evaluations, combination_randomness):
            point = list(point)
            if len(point) != self.num_variables:
                raise ValueError(
                    f"point has {len(point)} coordinates, expected {self.num_variables}"
                )
            self.weights = [
                w + e for w, e in zip(self.weights, eval_eq(point, rand))
            ]
            self.total = self.total + rand * value

    def compress(
        self,
        combination_randomness: FieldElement,
        folding_randomness: Sequence[FieldElement],
        sumcheck_poly: SumcheckPolynomial,
    ) -> None:
        """Fix one variable to the folding challenge and rescale the claimed sum."""
        folding_randomness = list(folding_randomness)
        if len(folding_randomness) != 1:
            raise ValueError("folding randomness must have exactly one coordinate")
        self._require_variable()
        r = folding_randomness[0]
        self.evaluations = _fold(self.evaluations, r)
        self.weights = _fold(self.weights, r)
        self.total = combination_randomness * sumcheck_poly.evaluate_at_point(
            folding_randomness
        )

    def __repr__(self) -> str:
        return (
            f"SumcheckSingle(num_variables={self.num_variables}, total={self.total!r})"
        )