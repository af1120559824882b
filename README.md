# whirsum

A small library with no dependencies that implements the prover side of the
sumcheck protocol for multilinear polynomials. It also provides the
prime-field arithmetic, the polynomial helpers and the Fiat-Shamir transcript
that the prover uses.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `whirsum.field`
  - `PrimeField(modulus)` is the field of integers modulo `modulus`. Calling
    it on an `int` gives a `FieldElement`. `zero()` and `one()` give the two
    identities.
  - `FieldElement` supports `+`, `-`, `*`, `/`, unary `-` and `**` with a
    negative exponent. It also has `double()` and `inverse()`. `inverse()`
    raises `ZeroDivisionError` for zero. Elements compare equal to integers
    with the same residue. Mixing elements of different fields raises
    `ValueError`.
- `whirsum.utils`
  - `base_decomposition(value, base, n_bits)` returns the big-endian digits
    of `value` modulo `base**n_bits`, always `n_bits` of them. It raises
    `ValueError` if `base < 2`.
  - `expand_randomness(base, length)` returns `[1, base, ..., base**(length-1)]`.
  - `eval_eq(point, scalar)` returns `scalar * eq(point, b)` for every `b` in
    `{0,1}^n`. The first coordinate is the most significant bit of the index.
  - `eq_poly3(point, index)` evaluates the Lagrange basis polynomial of
    `{0,1,2}^n` for `index` at `point`.
  - `f64_eq_abs(a, b, abs_err)` compares two floats within an absolute error.
- `whirsum.polynomial`
  - `SumcheckPolynomial(evaluations, num_variables)` holds the `3**n` values
    of a polynomial on `{0,1,2}^n`, in lexicographic order.
  - It provides `binary_to_ternary_index()`, `sum_over_boolean_hypercube()`
    and `evaluate_at_point()`.
- `whirsum.multilinear`
  - `coefficients_to_evaluations(coeffs)` turns the coefficients of a
    multilinear polynomial into its values on `{0,1}^n`.
  - `evaluate_coefficients(coeffs, point)` evaluates the polynomial at `point`.
  - `combine_constraints(constraints, combination_randomness, num_variables)`
    folds `(point, value)` claims into one weight table and one claimed sum,
    using powers of the combination randomness.
- `whirsum.transcript`
  - `DomainSeparator(label)` is an immutable declaration of the protocol's
    steps. Its builder methods are `add_scalars`, `challenge_scalars`,
    `challenge_pow`, `pow(pow_bits)` and `add_sumcheck(folding_factor, pow_bits)`.
    `pow(pow_bits)` adds a proof-of-work step only when `pow_bits > 0`.
  - `to_prover_state(field)` returns a `ProverState`.
  - `ProverState` absorbs prover messages (`add_scalars`) and squeezes
    challenges (`challenge_scalars`), both with SHA3/SHAKE. `challenge_pow`
    grinds a BLAKE2b proof-of-work nonce.
  - `narg_string()` returns the proof bytes written so far. `is_complete`
    tells whether every declared step has been done.
  - Any call that departs from the declared pattern raises `TranscriptError`.
- `whirsum.sumcheck`
  - `SumcheckSingle` is the prover. Build it with
    `SumcheckSingle(evaluations, weights, total)` or with
    `SumcheckSingle.from_coefficients(coeffs, constraints, combination_randomness)`.
  - Its methods are `compute_sumcheck_polynomial()`,
    `compute_sumcheck_polynomials(prover_state, folding_factor, pow_bits)`,
    `add_new_equality(points, evaluations, combination_randomness)` and
    `compress(...)`.
  - `num_variables` is a property.

## Example

```python
from whirsum.field import PrimeField
from whirsum.multilinear import evaluate_coefficients
from whirsum.sumcheck import SumcheckSingle
from whirsum.transcript import DomainSeparator

field = PrimeField(2**64 - 2**32 + 1)
coeffs = [field(c) for c in (1, 5, 10, 14)]

point = [field(10), field(11)]
value = evaluate_coefficients(coeffs, point)

prover = SumcheckSingle.from_coefficients(coeffs, [(point, value)], field.one())
assert prover.compute_sumcheck_polynomial().sum_over_boolean_hypercube() == value

domsep = DomainSeparator("example").add_sumcheck(2, 4.0)
state = domsep.to_prover_state(field)

folding_point = prover.compute_sumcheck_polynomials(state, 2, 4.0)
assert state.is_complete
proof = state.narg_string()
```

Each round does the following, in order:

1. Sends the round polynomial's values at 0, 1 and 2.
2. Grinds a proof-of-work if `pow_bits > 0`.
3. Draws one folding challenge.
4. Fixes the variable of the least significant index bit to that challenge.

`compute_sumcheck_polynomials` returns the challenges with the last round's
challenge first.

## What it does not do

This package only produces proofs. It has no verifier that reads a proof
string and checks it. It has no polynomial commitment, no Merkle trees and no
Reed-Solomon encoding. It offers no command-line program.