# (C) 2024 Irreducible Inc.

from __future__ import annotations

from random import randrange
from typing import TYPE_CHECKING, Any, ClassVar, Self

from galois import primitive_root

from ..utils.utils import modular_inverse
from .errors import DivisionByZero
from .finite_field import FiniteField, FiniteFieldElem

if TYPE_CHECKING:
    from .conversion import FieldConverter


class PrimeFieldElem(FiniteFieldElem[int]):
    field: ClassVar[PrimeField]

    @classmethod
    def max(cls) -> Self:
        return cls(cls.field.max())

    def to_int(self) -> int:
        return self.field.to_int(self.value)

    def __int__(self) -> int:
        return self.to_int()


class PrimeField(FiniteField[int]):
    """ℤ/pℤ, with elements represented by their canonical residue in [0, p)."""

    elem_class = PrimeFieldElem

    def __init__(self, prime: int, converter: FieldConverter | None = None) -> None:
        self.p = prime
        self._primitive_element: int | None = None
        super().__init__(converter)

    @property
    def characteristic(self) -> int:
        return self.p

    @property
    def dimension(self) -> int:
        return 1

    @property
    def prime(self) -> int:
        return self.p

    @property
    def minimal_polynomial(self) -> tuple[int, ...]:
        return (0, 1)

    @property
    def symbol(self) -> None:
        return None

    def max(self) -> int:
        return self.from_int(self.p - 1)

    def random(self) -> int:
        return randrange(0, self.p)

    def add(self, left: int, right: int) -> int:
        return (left + right) % self.p

    def subtract(self, left: int, right: int) -> int:
        return (left - right) % self.p

    def negate(self, operand: int) -> int:
        return -operand % self.p

    def multiply_direct(self, left: int, right: int) -> int:
        return (left * right) % self.p

    def pow(self, base: int, exponent: int) -> int:
        if exponent < 0:
            base = self.inverse(base)
            exponent = -exponent
        return pow(base, exponent, self.p)

    def inverse(self, operand: int) -> int:
        if operand % self.p == 0:
            raise DivisionByZero("inverting zero")
        return modular_inverse(operand, self.p)

    def from_int(self, val: int) -> int:
        return val % self.p

    def to_int(self, elem: int) -> int:
        return elem

    def coerce(self, value: Any) -> int:
        if isinstance(value, FiniteFieldElem):
            return self.convert(value).value
        if isinstance(value, int):
            return value % self.p
        raise TypeError(f"cannot create an element of GF({self.p}) from {value!r}")

    def to_index(self, elem: int) -> int:
        return elem

    def from_index(self, index: int) -> int:
        return index

    def primitive_element(self) -> int:
        """The smallest primitive root modulo p."""
        if self._primitive_element is None:
            self._primitive_element = int(primitive_root(self.p))
        return self._primitive_element

    def format_str(self, elem: int) -> str:
        return str(elem)
