import pytest

from whirsum.field import PrimeField
from whirsum.multilinear import evaluate_coefficients
from whirsum.sumcheck import SumcheckSingle
from whirsum.transcript import DomainSeparator, TranscriptError
from whirsum.utils import eval_eq

F = PrimeField(2**64 - 2**32 + 1)


def coeffs_of(*values):
    return [F(v) for v in values]


def make(coeffs, constraints=()):
    return SumcheckSingle.from_coefficients(coeffs, list(constraints), F.one())


def test_sumcheck_folding_factor_1():
    eval_point = [F(10), F(11)]
    polynomial = coeffs_of(1, 5, 10, 14)
    claimed = evaluate_coefficients(polynomial, eval_point)
    prover = make(polynomial, [(eval_point, claimed)])

    poly_1 = prover.compute_sumcheck_polynomial()
    assert poly_1.sum_over_boolean_hypercube() == claimed

    combination_randomness = F(100_101)
    folding_randomness = [F(4999)]
    prover.compress(combination_randomness, folding_randomness, poly_1)
    poly_2 = prover.compute_sumcheck_polynomial()
    assert poly_2.sum_over_boolean_hypercube() == (
        combination_randomness * poly_1.evaluate_at_point(folding_randomness)
    )


def test_weighted_sum_matches_claim():
    eval_point = [F(10), F(11)]
    polynomial = coeffs_of(1, 5, 10, 14)
    claimed = evaluate_coefficients(polynomial, eval_point)
    prover = make(polynomial, [(eval_point, claimed)])
    weighted = sum(
        (p * w for p, w in zip(prover.evaluations, prover.weights)), F.zero()
    )
    assert weighted == prover.total == claimed


def test_initialization_two_variables():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4])
    assert prover.evaluations == [c1, c1 + c2, c1 + c3, c1 + c2 + c3 + c4]
    assert prover.weights == [F.zero()] * 4
    assert prover.total == F.zero()
    assert prover.num_variables == 2


def test_initialization_one_variable():
    c1, c2 = coeffs_of(1, 3)
    prover = make([c1, c2])
    assert prover.evaluations == [c1, c1 + c2]
    assert prover.weights == [F.zero()] * 2
    assert prover.total == F.zero()
    assert prover.num_variables == 1


def test_initialization_three_variables():
    c1, c2, c3, c4, c5, c6, c7, c8 = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    prover = make([c1, c2, c3, c4, c5, c6, c7, c8])
    assert prover.evaluations == [
        c1,
        c1 + c2,
        c1 + c3,
        c1 + c2 + c3 + c4,
        c1 + c5,
        c1 + c2 + c5 + c6,
        c1 + c3 + c5 + c7,
        c1 + c2 + c3 + c4 + c5 + c6 + c7 + c8,
    ]
    assert prover.weights == [F.zero()] * 8
    assert prover.total == F.zero()
    assert prover.num_variables == 3


def test_initialization_with_equality_constraint():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4], [([F.one(), F.zero()], F(5))])
    assert prover.total == F(5)
    assert prover.evaluations == [c1, c1 + c2, c1 + c3, c1 + c2 + c3 + c4]
    assert prover.weights == [F(0), F(0), F(1), F(0)]
    assert prover.num_variables == 2


def test_initialization_multiple_constraints():
    coeffs = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    constraints = [
        ([F.one(), F.zero(), F.one()], F(5)),
        ([F.zero(), F.one(), F.zero()], F(4)),
    ]
    prover = make(coeffs, constraints)
    assert prover.total == F(9)


def test_compute_sumcheck_polynomial_without_constraints_is_zero():
    prover = make(coeffs_of(1, 2, 3, 4))
    assert prover.compute_sumcheck_polynomial().evaluations == [F.zero()] * 3


def test_compute_sumcheck_polynomial_with_equality_constraint():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4], [([F.one(), F.zero()], F(5))])
    poly = prover.compute_sumcheck_polynomial()
    assert prover.total == F(5)

    ep_00, ep_01, ep_10, ep_11 = c1, c1 + c2, c1 + c3, c1 + c3 + c2 + c4
    f_00, f_01, f_10, f_11 = F.zero(), F.zero(), F.one(), F.zero()
    e0 = ep_00 * f_00 + ep_10 * f_10
    e2 = (ep_01 - ep_00) * (f_01 - f_00) + (ep_11 - ep_10) * (f_11 - f_10)
    e1 = prover.total - e0.double() - e2
    eval_0 = e0
    eval_1 = e0 + e1 + e2
    eval_2 = eval_1 + e1 + e2 + e2.double()
    assert poly.evaluations == [eval_0, eval_1, eval_2]


def test_compute_sumcheck_polynomial_with_equality_constraint_3vars():
    c1, c2, c3, c4, c5, c6, c7, c8 = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    prover = make(
        [c1, c2, c3, c4, c5, c6, c7, c8], [([F.one(), F.zero(), F.one()], F(5))]
    )
    poly = prover.compute_sumcheck_polynomial()
    assert prover.total == F(5)

    ep = [
        c1,
        c1 + c2,
        c1 + c3,
        c1 + c2 + c3 + c4,
        c1 + c5,
        c1 + c2 + c5 + c6,
        c1 + c3 + c5 + c7,
        c1 + c2 + c3 + c4 + c5 + c6 + c7 + c8,
    ]
    f = [F.zero()] * 8
    f[5] = F.one()
    e0 = ep[0] * f[0] + ep[2] * f[2] + ep[4] * f[4] + ep[6] * f[6]
    e2 = (
        (ep[1] - ep[0]) * (f[1] - f[0])
        + (ep[3] - ep[2]) * (f[3] - f[2])
        + (ep[5] - ep[4]) * (f[5] - f[4])
        + (ep[7] - ep[6]) * (f[7] - f[6])
    )
    e1 = prover.total - e0.double() - e2
    eval_0 = e0
    eval_1 = e0 + e1 + e2
    eval_2 = eval_1 + e1 + e2 + e2.double()
    assert poly.evaluations == [eval_0, eval_1, eval_2]


def test_compute_sumcheck_polynomial_needs_a_variable():
    prover = make([F(7)])
    with pytest.raises(ValueError):
        prover.compute_sumcheck_polynomial()


def test_add_new_equality_single_constraint():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4])
    point = [F.one(), F.zero()]
    weight = F(2)
    value = c1 + c2 * F.one() + c3 * F.zero() + c4 * F.one() * F.zero()

    prover.add_new_equality([point], [value], [weight])

    assert prover.total == weight * value
    assert prover.weights == eval_eq(point, weight)
    assert prover.weights == [F(0), F(0), F(2), F(0)]


def test_add_new_equality_multiple_constraints():
    c1, c2, c3, c4, c5, c6, c7, c8 = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    prover = make([c1, c2, c3, c4, c5, c6, c7, c8])
    point1 = [F.one(), F.zero(), F.one()]
    point2 = [F.zero(), F.one(), F.zero()]
    weight1, weight2 = F(2), F(3)
    eval1 = c1 + c2 + c5 + c6
    eval2 = c1 + c3

    prover.add_new_equality([point1, point2], [eval1, eval2], [weight1, weight2])

    assert prover.total == weight1 * eval1 + weight2 * eval2
    expected = [a + b for a, b in zip(eval_eq(point1, weight1), eval_eq(point2, weight2))]
    assert prover.weights == expected
    assert prover.weights == [F(0), F(0), F(3), F(0), F(0), F(2), F(0), F(0)]


def test_add_new_equality_with_zero_weight():
    prover = make(coeffs_of(1, 2))
    prover.add_new_equality([[F.one()]], [F(5)], [F.zero()])
    assert prover.total == F.zero()
    assert prover.weights == [F.zero()] * 2


def test_add_new_equality_rejects_mismatched_lengths():
    prover = make(coeffs_of(1, 2))
    with pytest.raises(ValueError):
        prover.add_new_equality([[F.one()]], [F(5), F(6)], [F.one()])


def test_add_new_equality_rejects_wrong_dimension():
    prover = make(coeffs_of(1, 2))
    with pytest.raises(ValueError):
        prover.add_new_equality([[F.one(), F.zero()]], [F(5)], [F.one()])


def test_compress_basic():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4])
    combination_randomness = F(3)
    folding_randomness = [F(2)]
    poly = prover.compute_sumcheck_polynomial()

    prover.compress(combination_randomness, folding_randomness, poly)

    r = folding_randomness[0]
    e00, e01, e10, e11 = c1, c1 + c3, c1 + c2, c1 + c2 + c3 + c4
    assert prover.evaluations == [(e10 - e00) * r + e00, (e11 - e01) * r + e01]
    assert prover.total == combination_randomness * poly.evaluate_at_point(
        folding_randomness
    )
    assert prover.weights == [F.zero(), F.zero()]
    assert prover.num_variables == 1


def test_compress_three_variables():
    c1, c2, c3, c4, c5, c6, c7, c8 = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    prover = make([c1, c2, c3, c4, c5, c6, c7, c8])
    combination_randomness = F(2)
    folding_randomness = [F(3)]
    poly = prover.compute_sumcheck_polynomial()

    prover.compress(combination_randomness, folding_randomness, poly)

    r = folding_randomness[0]
    eval_000 = c1
    eval_001 = c1 + c5
    eval_010 = c1 + c3
    eval_011 = c1 + c3 + c5 + c7
    eval_100 = c1 + c2
    eval_101 = c1 + c2 + c5 + c6
    eval_110 = c1 + c2 + c3 + c4
    eval_111 = c1 + c2 + c3 + c4 + c5 + c6 + c7 + c8
    assert prover.evaluations == [
        (eval_100 - eval_000) * r + eval_000,
        (eval_110 - eval_010) * r + eval_010,
        (eval_101 - eval_001) * r + eval_001,
        (eval_111 - eval_011) * r + eval_011,
    ]
    assert prover.total == combination_randomness * poly.evaluate_at_point(
        folding_randomness
    )
    assert prover.weights == [F.zero()] * 4


def test_compress_with_zero_randomness():
    c1, c2, c3, c4 = coeffs_of(1, 2, 3, 4)
    prover = make([c1, c2, c3, c4])
    combination_randomness = F(2)
    folding_randomness = [F.zero()]
    poly = prover.compute_sumcheck_polynomial()

    prover.compress(combination_randomness, folding_randomness, poly)

    assert prover.evaluations == [c1, c1 + c3]
    assert prover.total == combination_randomness * poly.evaluate_at_point(
        folding_randomness
    )
    assert prover.weights == [F.zero(), F.zero()]


def test_compress_rejects_multi_coordinate_randomness():
    prover = make(coeffs_of(1, 2, 3, 4))
    poly = prover.compute_sumcheck_polynomial()
    with pytest.raises(ValueError):
        prover.compress(F.one(), [F(1), F(2)], poly)


def test_compute_sumcheck_polynomials_basic_case():
    prover = make(coeffs_of(1, 2))
    domsep = DomainSeparator("test").add_scalars(3, "test").challenge_scalars(1, "test")
    state = domsep.to_prover_state(F)

    result = prover.compute_sumcheck_polynomials(state, 1, 0.0)

    assert len(result) == 1
    assert state.is_complete
    assert len(state.narg_string()) == 3 * 8


def test_compute_sumcheck_polynomials_with_multiple_folding_factors():
    prover = make(coeffs_of(1, 2, 3, 3))
    folding_factor = 2
    domsep = DomainSeparator("test")
    for _ in range(folding_factor):
        domsep = (
            domsep.add_scalars(3, "tag").challenge_pow("tag").challenge_scalars(1, "tag")
        )
    state = domsep.to_prover_state(F)

    result = prover.compute_sumcheck_polynomials(state, folding_factor, 1.0)

    assert len(result) == folding_factor
    assert state.is_complete


def test_compute_sumcheck_polynomials_with_three_variables():
    coeffs = coeffs_of(1, 2, 3, 4, 5, 6, 7, 8)
    prover = make(coeffs)
    domsep = DomainSeparator("test").add_sumcheck(3, 2.0)
    state = domsep.to_prover_state(F)

    result = prover.compute_sumcheck_polynomials(state, 3, 2.0)

    assert len(result) == 3
    assert prover.num_variables == 0
    # The fully folded table is the polynomial at the returned point.
    assert prover.evaluations == [evaluate_coefficients(coeffs, result)]


def test_compute_sumcheck_polynomials_preserves_claim():
    coeffs = coeffs_of(1, 5, 10, 14)
    point = [F(10), F(11)]
    claimed = evaluate_coefficients(coeffs, point)
    prover = make(coeffs, [(point, claimed)])
    state = DomainSeparator("test").add_sumcheck(2, 0.0).to_prover_state(F)

    result = prover.compute_sumcheck_polynomials(state, 2, 0.0)

    assert prover.total == prover.evaluations[0] * prover.weights[0]
    assert prover.evaluations[0] == evaluate_coefficients(coeffs, result)


def test_compute_sumcheck_polynomials_edge_case_zero_folding():
    prover = make(coeffs_of(1, 2, 3, 4))
    state = DomainSeparator("test").to_prover_state(F)
    assert prover.compute_sumcheck_polynomials(state, 0, 1.0) == []
    assert prover.num_variables == 2


def test_compute_sumcheck_polynomials_rejects_undeclared_pow():
    prover = make(coeffs_of(1, 2))
    domsep = DomainSeparator("test").add_scalars(3, "test").challenge_scalars(1, "test")
    state = domsep.to_prover_state(F)
    with pytest.raises(TranscriptError):
        prover.compute_sumcheck_polynomials(state, 1, 1.0)


def test_sumcheck_first_round_like_benchmark():
    size = 1 << 4
    num_vars = 4
    coeffs = [F(i) for i in range(size)]
    eval_point = [F(1)] * num_vars
    value = evaluate_coefficients(coeffs, eval_point)
    assert value == F(sum(range(size)))

    prover = make(coeffs, [(eval_point, value)])
    poly = prover.compute_sumcheck_polynomial()
    assert poly.sum_over_boolean_hypercube() == value

    combination_randomness = F(42)
    folding_randomness = [F(4999)]
    prover.compress(combination_randomness, folding_randomness, poly)

    assert prover.num_variables == 3
    assert prover.total == combination_randomness * poly.evaluate_at_point(
        folding_randomness
    )


def test_constructor_rejects_bad_lengths():
    with pytest.raises(ValueError):
        SumcheckSingle([F(1), F(2), F(3)], [F(0)] * 3, F.zero())
    with pytest.raises(ValueError):
        SumcheckSingle([F(1), F(2)], [F(0)], F.zero())