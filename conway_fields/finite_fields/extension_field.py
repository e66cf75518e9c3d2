# (C) 2024 Irreducible Inc.

from __future__ import annotations

import functools
import random
from typing import TYPE_CHECKING, Any, ClassVar, Sequence

from ..utils.utils import from_index, modular_inverse, to_index
from . import polynomial
from .errors import DivisionByZero
from .finite_field import FiniteField, FiniteFieldElem

if TYPE_CHECKING:
    from .conversion import FieldConverter

Coeffs = tuple[int, ...]


def default_symbol(degree: int) -> str:
    return f"z{degree}"


class ExtensionFieldElem(FiniteFieldElem[Coeffs]):
    field: ClassVar[ExtensionField]

    @property
    def coefficients(self) -> Coeffs:
        """Coordinates in the basis 1, β, β², ..., βⁿ⁻¹, where β is the field's generator."""
        return self.value


class ExtensionField(FiniteField[Coeffs]):
    """𝔽_{pⁿ} = 𝔽_p[β] / (f(β)), elements represented by length-n coefficient tuples in the power basis of β.

    The minimal polynomial f is trusted to be monic and irreducible of degree n ≥ 2; the construction functions check
    user-supplied polynomials before getting here.
    """

    elem_class = ExtensionFieldElem

    def __init__(
        self,
        prime: int,
        minimal_polynomial: Sequence[int],
        symbol: str,
        is_conway: bool = False,
        converter: FieldConverter | None = None,
    ) -> None:
        modulus = polynomial.normalize(minimal_polynomial, prime)
        assert polynomial.is_monic(modulus), "minimal polynomial must be monic"
        assert polynomial.degree(modulus) >= 2, "extension fields have degree at least 2"
        self.p = prime
        self.n = polynomial.degree(modulus)
        self.modulus = modulus
        self._symbol = symbol
        self.is_conway = is_conway
        super().__init__(converter)

    @property
    def characteristic(self) -> int:
        return self.p

    @property
    def dimension(self) -> int:
        return self.n

    @property
    def minimal_polynomial(self) -> Coeffs:
        return self.modulus

    @property
    def symbol(self) -> str:
        return self._symbol

    def random(self) -> Coeffs:
        return tuple(random.randrange(self.p) for _ in range(self.n))

    def add(self, left: Coeffs, right: Coeffs) -> Coeffs:
        return tuple((a + b) % self.p for a, b in zip(left, right))

    def subtract(self, left: Coeffs, right: Coeffs) -> Coeffs:
        return tuple((a - b) % self.p for a, b in zip(left, right))

    def negate(self, operand: Coeffs) -> Coeffs:
        return tuple(-a % self.p for a in operand)

    def reduce(self, poly: Sequence[int]) -> Coeffs:
        """Reduces a polynomial in β of any degree modulo the minimal polynomial."""
        return polynomial.pad(polynomial.mod(poly, self.modulus, self.p), self.n)

    def multiply_direct(self, left: Coeffs, right: Coeffs) -> Coeffs:
        # full convolution (degree ≤ 2n − 2), then long division by the minimal polynomial
        return self.reduce(polynomial.multiply(left, right, self.p))

    def inverse(self, operand: Coeffs) -> Coeffs:
        element = polynomial.normalize(operand, self.p)
        if not element:
            raise DivisionByZero("inverting zero")
        # f is irreducible, so gcd(f, a) is a nonzero constant c and s ⋅ f + t ⋅ a == c gives a⁻¹ = t / c
        g, _, t = polynomial.extended_gcd(self.modulus, element, self.p)
        assert polynomial.degree(g) == 0, "minimal polynomial is not irreducible"
        return self.reduce(polynomial.scale(t, modular_inverse(g[0], self.p), self.p))

    def from_int(self, val: int) -> Coeffs:
        return (val % self.p,) + (0,) * (self.n - 1)

    def hash_value(self, elem: Coeffs) -> int:
        if not any(elem[1:]):
            return hash(elem[0])
        # embeddings fix 𝔽_p and commute with Frobenius, so they preserve the conjugates' trace and norm
        conjugates = [elem]
        conjugate = self.pow(elem, self.p)
        while conjugate != elem:
            conjugates.append(conjugate)
            conjugate = self.pow(conjugate, self.p)
        trace = functools.reduce(self.add, conjugates)
        norm = functools.reduce(self.multiply, conjugates)
        return hash((self.p, len(conjugates), trace[0], norm[0]))

    def coerce(self, value: Any) -> Coeffs:
        if isinstance(value, FiniteFieldElem):
            return self.convert(value).value
        if isinstance(value, int):
            return self.from_int(value)
        if isinstance(value, (tuple, list)):
            if not all(isinstance(c, int) for c in value):
                raise TypeError(f"coefficients of an element of {self.type_name} must be integers, got {value!r}")
            if len(value) == self.n:
                return tuple(c % self.p for c in value)
            return self.reduce(value)
        raise TypeError(f"cannot create an element of {self.type_name} from {value!r}")

    def to_index(self, elem: Coeffs) -> int:
        return to_index(elem, self.p)

    def from_index(self, index: int) -> Coeffs:
        return from_index(index, self.p, self.n)

    def primitive_element(self) -> Coeffs:
        return polynomial.pad(polynomial.X, self.n)

    def format_str(self, elem: Coeffs) -> str:
        terms = []
        for i in reversed(range(self.n)):
            c = elem[i]
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
                continue
            power = self.symbol if i == 1 else f"{self.symbol}^{i}"
            terms.append(power if c == 1 else f"{c}{power}")
        return " + ".join(terms) if terms else "0"
