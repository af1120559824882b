"""Sumcheck prover over prime fields, with polynomial helpers and a Fiat-Shamir transcript."""

__version__ = "0.1.0"

__all__ = ["field", "utils", "polynomial", "multilinear", "transcript", "sumcheck"]