"""Arithmetic in prime fields of arbitrary size."""

from __future__ import annotations

from typing import Union


class PrimeField:
    """The integers modulo a prime ``modulus``; calling it makes elements."""

    __slots__ = ("modulus",)

    def __init__(self, modulus: int) -> None:
        if isinstance(modulus, bool) or not isinstance(modulus, int):
            raise TypeError("modulus must be an integer")
        if modulus < 2:
            raise ValueError("modulus must be at least 2")
        self.modulus = modulus

    def __call__(self, value: Union[int, "FieldElement"]) -> "FieldElement":
        if isinstance(value, FieldElement):
            if value.field != self:
                raise ValueError("element belongs to a different field")
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"cannot convert {type(value).__name__} to a field element")
        return FieldElement(self, value % self.modulus)

    def zero(self) -> "FieldElement":
        """The additive identity."""
        return FieldElement(self, 0)

    def one(self) -> "FieldElement":
        """The multiplicative identity."""
        return FieldElement(self, 1 % self.modulus)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrimeField):
            return NotImplemented
        return self.modulus == other.modulus

    def __hash__(self) -> int:
        return hash(("PrimeField", self.modulus))

    def __repr__(self) -> str:
        return f"PrimeField({self.modulus})"


class FieldElement:
    """An element of a :class:`PrimeField`, stored as its canonical residue."""

    __slots__ = ("field", "value")

    def __init__(self, field: PrimeField, value: int) -> None:
        self.field = field
        self.value = value % field.modulus

    def _coerce(self, other: object) -> "FieldElement":
        if isinstance(other, FieldElement):
            if other.field != self.field:
                raise ValueError("cannot combine elements of different fields")
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FieldElement(self.field, other)
        return NotImplemented  # type: ignore[return-value]

    def _new(self, value: int) -> "FieldElement":
        return FieldElement(self.field, value)

    def __add__(self, other: object) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._new(self.value + rhs.value)

    __radd__ = __add__

    def __sub__(self, other: object) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._new(self.value - rhs.value)

    def __rsub__(self, other: object) -> "FieldElement":
        lhs = self._coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return self._new(lhs.value - self.value)

    def __mul__(self, other: object) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._new(self.value * rhs.value)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "FieldElement":
        rhs = self._coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self * rhs.inverse()

    def __rtruediv__(self, other: object) -> "FieldElement":
        lhs = self._coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs * self.inverse()

    def __neg__(self) -> "FieldElement":
        return self._new(-self.value)

    def __pos__(self) -> "FieldElement":
        return self

    def __pow__(self, exponent: int) -> "FieldElement":
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return self._new(pow(self.value, exponent, self.field.modulus))

    def double(self) -> "FieldElement":
        """Return ``2 * self``."""
        return self._new(self.value << 1)

    def inverse(self) -> "FieldElement":
        """Return the multiplicative inverse; raises ZeroDivisionError for zero."""
        try:
            return self._new(pow(self.value, -1, self.field.modulus))
        except ValueError:
            raise ZeroDivisionError("element has no multiplicative inverse") from None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.field == other.field and self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other % self.field.modulus
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.field.modulus, self.value))

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"FieldElement({self.value} mod {self.field.modulus})"