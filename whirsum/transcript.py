"""Fiat-Shamir transcripts: a declared interaction pattern and the prover that follows it."""

from __future__ import annotations

import hashlib
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterable, List, Sequence, Tuple, Union

from .field import FieldElement, PrimeField

_NONCE_BYTES = 8
_POW_HASH_BITS = 64
_CHALLENGE_SEED_BYTES = 32
_EXTRA_CHALLENGE_BYTES = 16


class TranscriptError(Exception):
    """Raised when a prover deviates from the declared interaction pattern."""


class Kind(Enum):
    """The kinds of interaction a domain separator can declare."""

    ABSORB = "A"
    SQUEEZE = "S"
    POW = "P"


@dataclass(frozen=True)
class Operation:
    """One declared step of the interaction."""

    kind: Kind
    count: int
    label: str

    def encode(self) -> bytes:
        return f"{self.kind.value}{self.count}{self.label}".encode() + b"\0"


def _check_label(label: str) -> str:
    if not isinstance(label, str):
        raise TypeError("label must be a string")
    if "\0" in label:
        raise ValueError("label must not contain NUL characters")
    return label


class DomainSeparator:
    """An immutable description of the messages and challenges of a protocol.

    Every builder method returns a new separator; the original is left unchanged.
    """

    __slots__ = ("label", "operations")

    def __init__(self, label: str) -> None:
        self.label = _check_label(label)
        self.operations: Tuple[Operation, ...] = ()

    def _with(self, operation: Operation) -> "DomainSeparator":
        extended = DomainSeparator(self.label)
        extended.operations = self.operations + (operation,)
        return extended

    def add_scalars(self, count: int, label: str) -> "DomainSeparator":
        """Declare that the prover sends ``count`` field elements."""
        if count < 1:
            raise ValueError("count must be at least 1")
        return self._with(Operation(Kind.ABSORB, count, _check_label(label)))

    def challenge_scalars(self, count: int, label: str) -> "DomainSeparator":
        """Declare that ``count`` field elements are drawn as challenges."""
        if count < 1:
            raise ValueError("count must be at least 1")
        return self._with(Operation(Kind.SQUEEZE, count, _check_label(label)))

    def challenge_pow(self, label: str) -> "DomainSeparator":
        """Declare a proof-of-work step."""
        return self._with(Operation(Kind.POW, 1, _check_label(label)))

    def pow(self, pow_bits: float) -> "DomainSeparator":
        """Declare a proof-of-work step only when ``pow_bits`` is positive."""
        if pow_bits > 0:
            return self.challenge_pow("pow_queries")
        return self

    def add_sumcheck(self, folding_factor: int, pow_bits: float) -> "DomainSeparator":
        """Declare ``folding_factor`` sumcheck rounds."""
        separator = self
        for _ in range(folding_factor):
            separator = (
                separator.add_scalars(3, "sumcheck_poly")
                .pow(pow_bits)
                .challenge_scalars(1, "folding_randomness")
            )
        return separator

    def to_prover_state(self, field: PrimeField) -> "ProverState":
        """Start a prover that follows this pattern over ``field``."""
        return ProverState(self.operations, self.label, field)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainSeparator):
            return NotImplemented
        return self.label == other.label and self.operations == other.operations

    def __hash__(self) -> int:
        return hash((self.label, self.operations))

    def __repr__(self) -> str:
        return f"DomainSeparator({self.label!r}, operations={list(self.operations)!r})"


class ProverState:
    """A prover's side of a Fiat-Shamir transcript.

    Messages are written to the proof string and absorbed into a hash-based
    sponge; challenges are squeezed from it. Every call is checked against the
    declared pattern and raises :class:`TranscriptError` on a mismatch.
    """

    def __init__(
        self, pattern: Iterable[Operation], label: str, field: PrimeField
    ) -> None:
        if not isinstance(field, PrimeField):
            raise TypeError("field must be a PrimeField")
        self.field = field
        self._pending: Deque[Operation] = deque(pattern)
        self._element_bytes = (field.modulus.bit_length() + 7) // 8
        seed = hashlib.sha3_256()
        seed.update(_check_label(label).encode() + b"\0")
        seed.update(field.modulus.to_bytes(self._element_bytes, "little"))
        for operation in self._pending:
            seed.update(operation.encode())
        self._state = seed.digest()
        self._narg = bytearray()

    @property
    def is_complete(self) -> bool:
        """Whether every declared step has been performed."""
        return not self._pending

    def _expect(self, kind: Kind, count: int) -> Operation:
        if not self._pending:
            raise TranscriptError(f"no more operations declared, got {kind.name}")
        operation = self._pending[0]
        if operation.kind is not kind or operation.count != count:
            raise TranscriptError(
                f"expected {operation.kind.name} of {operation.count} "
                f"({operation.label!r}), got {kind.name} of {count}"
            )
        return self._pending.popleft()

    def _absorb(self, data: bytes) -> None:
        self._state = hashlib.sha3_256(b"absorb" + self._state + data).digest()

    def _squeeze(self, length: int) -> bytes:
        output = hashlib.shake_256(b"squeeze" + self._state).digest(length)
        self._state = hashlib.sha3_256(b"ratchet" + self._state).digest()
        return output

    def _encode(self, element: FieldElement) -> bytes:
        return element.value.to_bytes(self._element_bytes, "little")

    def add_scalars(self, scalars: Sequence[Union[FieldElement, int]]) -> None:
        """Send field elements to the verifier."""
        elements = [self.field(s) for s in scalars]
        self._expect(Kind.ABSORB, len(elements))
        data = b"".join(self._encode(e) for e in elements)
        self._narg.extend(data)
        self._absorb(data)

    def challenge_scalars(self, count: int) -> List[FieldElement]:
        """Draw ``count`` field elements from the transcript."""
        self._expect(Kind.SQUEEZE, count)
        width = self._element_bytes + _EXTRA_CHALLENGE_BYTES
        raw = self._squeeze(width * count)
        return [
            self.field(int.from_bytes(raw[i : i + width], "little"))
            for i in range(0, len(raw), width)
        ]

    def challenge_pow(self, pow_bits: float) -> int:
        """Grind a nonce worth ``pow_bits`` bits of work; returns the nonce."""
        if pow_bits < 0 or pow_bits >= _POW_HASH_BITS:
            raise ValueError(f"pow_bits must be in [0, {_POW_HASH_BITS})")
        self._expect(Kind.POW, 1)
        challenge = self._squeeze(_CHALLENGE_SEED_BYTES)
        threshold = int(2 ** (_POW_HASH_BITS - pow_bits))
        nonce = 0
        while True:
            nonce_bytes = nonce.to_bytes(_NONCE_BYTES, "little")
            digest = hashlib.blake2b(
                challenge + nonce_bytes, digest_size=_POW_HASH_BITS // 8
            ).digest()
            if int.from_bytes(digest, "big") < threshold:
                break
            nonce += 1
        self._narg.extend(nonce_bytes)
        self._absorb(nonce_bytes)
        return nonce

    def narg_string(self) -> bytes:
        """The proof bytes written so far."""
        return bytes(self._narg)