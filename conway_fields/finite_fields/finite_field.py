# (C) 2024 Irreducible Inc.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Iterator, Self, TypeVar

from ..utils.utils import distinct_prime_factors
from .errors import IncompatibleFields
from .zech import ZechAccelerator

if TYPE_CHECKING:
    from .conversion import FieldConverter

R = TypeVar("R")


@dataclass(frozen=True, eq=False)
class FiniteFieldElem(Generic[R]):
    """A finite field element.

    This class cannot be instantiated directly. Each FiniteField creates a subclass of the appropriate element class
    with the field class variable set to itself (see FiniteField.elem_type), and the construction functions hand that
    subclass out. It can be called with anything the field knows how to coerce: an integer, a coefficient sequence,
    or an element of another field, which is converted through the field's converter.

    Operands from different fields are first moved into a common field, so elements of two structurally equal fields
    mix freely, while elements of unrelated fields raise IncompatibleFields.
    """

    value: R
    field: ClassVar[FiniteField]

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.field.coerce(self.value))

    def _coerce_pair(self, other: Any) -> tuple[FiniteFieldElem, FiniteFieldElem] | None:
        if isinstance(other, FiniteFieldElem):
            if other.field == self.field:
                return self, other
            target = self.field.common_field(other.field)
            return target.convert(self), target.convert(other)
        if isinstance(other, int):
            return self, self.__class__(other)
        return None

    def _apply(self, other: Any, operation: str, reflected: bool = False):
        pair = self._coerce_pair(other)
        if pair is None:
            return NotImplemented
        left, right = pair
        if reflected:
            left, right = right, left
        return left.__class__(getattr(left.field, operation)(left.value, right.value))

    def __add__(self, other):
        return self._apply(other, "add")

    def __radd__(self, other):
        return self._apply(other, "add", reflected=True)

    def __sub__(self, other):
        return self._apply(other, "subtract")

    def __rsub__(self, other):
        return self._apply(other, "subtract", reflected=True)

    def __mul__(self, other):
        return self._apply(other, "multiply")

    def __rmul__(self, other):
        return self._apply(other, "multiply", reflected=True)

    def __truediv__(self, other):
        return self._apply(other, "divide")

    def __rtruediv__(self, other):
        return self._apply(other, "divide", reflected=True)

    def __neg__(self) -> Self:
        return self.__class__(self.field.negate(self.value))

    def inverse(self) -> Self:
        return self.__class__(self.field.inverse(self.value))

    def square(self) -> Self:
        return self.__class__(self.field.square(self.value))

    def __pow__(self, exponent: int) -> Self:
        return self.__class__(self.field.pow(self.value, exponent))

    def __eq__(self, other) -> bool:
        pair = self._coerce_pair(other)
        if pair is None:
            return NotImplemented
        left, right = pair
        return bool(left.value == right.value)

    def __hash__(self) -> int:
        return self.field.hash_value(self.value)

    def __str__(self) -> str:
        return self.field.format_str(self.value)

    def __repr__(self) -> str:
        return self.field.format_repr(self.value)

    def is_zero(self) -> bool:
        return bool(self.value == self.field.zero())

    def is_one(self) -> bool:
        return bool(self.value == self.field.one())

    def __bool__(self) -> bool:
        return not self.is_zero()

    def is_generator(self) -> bool:
        return self.field.is_generator(self.value)

    @classmethod
    def convert_from(cls, elem: FiniteFieldElem) -> Self:
        return cls(cls.field.convert(elem).value)

    @classmethod
    def zero(cls) -> Self:
        return cls(cls.field.zero())

    @classmethod
    def one(cls) -> Self:
        return cls(cls.field.one())

    @classmethod
    def random(cls) -> Self:
        return cls(cls.field.random())

    @classmethod
    def from_int(cls, val: int) -> Self:
        return cls(cls.field.from_int(val))

    @classmethod
    def generator(cls) -> Self:
        return cls(cls.field.primitive_element())

    @classmethod
    def multiplicative_generator(cls) -> Self:
        return cls(cls.field.multiplicative_generator())

    @classmethod
    def elements(cls) -> Iterator[Self]:
        """Iterates over every element of the field, zero first."""
        for index in range(cls.field.order):
            yield cls(cls.field.from_index(index))


class FiniteField(ABC, Generic[R]):
    """A finite field implementation, acting as the descriptor of one concrete field.

    All finite fields have order p^n, where p is a prime number. p is the field characteristic and n is the degree
    of the field extension of GF(p^n) over the base field GF(p). An instance of FiniteField encapsulates the
    representation of field elements and the logic for all basic field operations: addition, negation, multiplication,
    and inversion.

    Two instances denote the same field iff characteristic, degree, minimal polynomial and symbol agree; equality and
    hashing are structural, so independently constructed copies are interchangeable. Everything else an instance
    carries (provenance, converter, Zech state) is not part of its identity.
    """

    elem_class: ClassVar[type[FiniteFieldElem]]
    is_conway: bool = False

    def __init__(self, converter: FieldConverter | None = None) -> None:
        self.converter = converter
        self.zech = ZechAccelerator(self)
        self.elem_type: type[FiniteFieldElem] = type(self.type_name, (self.elem_class,), {"field": self})

    @property
    @abstractmethod
    def characteristic(self) -> int:
        """The field characteristic, ie. the order of the base field."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """The dimension of the field as a vector space over its base field."""
        pass

    @property
    def degree(self) -> int:
        """The degree of the field as an extension over its base field.

        Alias of dimension property.
        """
        return self.dimension

    @property
    def order(self) -> int:
        return self.characteristic**self.dimension

    @property
    @abstractmethod
    def minimal_polynomial(self) -> tuple[int, ...]:
        """Coefficients of the monic minimal polynomial, lowest degree first."""
        pass

    @property
    @abstractmethod
    def symbol(self) -> str | None:
        pass

    @property
    def type_name(self) -> str:
        if self.dimension == 1:
            return f"GF{self.characteristic}"
        return f"GF{self.characteristic}_{self.dimension}_{self.symbol}"

    @property
    def key(self) -> tuple[int, int, tuple[int, ...], str | None]:
        return self.characteristic, self.dimension, self.minimal_polynomial, self.symbol

    def __eq__(self, other) -> bool:
        if not isinstance(other, FiniteField):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}{self.key}"

    def zero(self) -> R:
        return self.from_int(0)

    def one(self) -> R:
        return self.from_int(1)

    @abstractmethod
    def random(self) -> R:
        pass

    @abstractmethod
    def add(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def subtract(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def negate(self, operand: R) -> R:
        pass

    @abstractmethod
    def multiply_direct(self, left: R, right: R) -> R:
        """Multiplication by the field's own arithmetic, never consulting the Zech table."""
        pass

    def multiply(self, left: R, right: R) -> R:
        table = self.zech.table()
        if table is None:
            return self.multiply_direct(left, right)
        return table.multiply(self, left, right)

    def square(self, operand: R) -> R:
        return self.multiply(operand, operand)

    def pow(self, base: R, exponent: int) -> R:
        if exponent < 0:
            base = self.inverse(base)
            exponent = -exponent

        acc = self.one()
        val = base

        while exponent:
            if exponent % 2:
                acc = self.multiply(acc, val)
            val = self.square(val)
            exponent >>= 1

        return acc

    @abstractmethod
    def inverse(self, operand: R) -> R:
        pass

    def divide(self, left: R, right: R) -> R:
        return self.multiply(left, self.inverse(right))

    @abstractmethod
    def format_str(self, elem: R) -> str:
        pass

    def format_repr(self, elem: R) -> str:
        return f"{self.type_name}({self.format_str(elem)})"

    def hash_value(self, elem: R) -> int:
        """Hash of an element that every field it converts into agrees on.

        Elements of the prime subfield hash like the integer in [0, p) they stand for.
        """
        return hash(elem)

    @abstractmethod
    def from_int(self, val: int) -> R:
        """Creates a field element from an integer.

        The integer argument will be automatically converted to val % p, where p is the field's prime characteristic.
        """
        pass

    @abstractmethod
    def coerce(self, value: Any) -> R:
        """Turns anything an element class accepts into this field's canonical representation."""
        pass

    @abstractmethod
    def to_index(self, elem: R) -> int:
        """Maps an element to an integer in [0, order), with zero mapping to 0."""
        pass

    @abstractmethod
    def from_index(self, index: int) -> R:
        pass

    @abstractmethod
    def primitive_element(self) -> R:
        """The element Zech logarithms are taken against.

        For extension fields this is the root of the minimal polynomial, which need not generate the multiplicative
        group unless the minimal polynomial is primitive.
        """
        pass

    def is_generator(self, elem: R) -> bool:
        if elem == self.zero():
            return False
        group_order = self.order - 1
        factors = distinct_prime_factors(group_order)
        return not any(self.pow(elem, group_order // factor) == self.one() for factor in factors)

    def multiplicative_generator(self) -> R:
        """Returns the multiplicative generator with the smallest index."""
        for i in range(1, self.order):
            g = self.from_index(i)
            if self.is_generator(g):
                return g
        raise ValueError("no multiplicative generator found")

    def common_field(self, other: FiniteField) -> FiniteField:
        """The field in which an operation mixing elements of self and other is carried out."""
        converter = self.converter or other.converter
        if converter is None:
            raise IncompatibleFields(f"no converter available to combine {self!r} with {other!r}")
        return converter.common_field(self, other)

    def convert(self, elem: FiniteFieldElem) -> FiniteFieldElem:
        """Converts an element of any field into this one."""
        if elem.field == self:
            return elem
        if self.converter is None:
            raise IncompatibleFields(f"no converter available to convert {elem!r} into {self!r}")
        return self.converter.convert(elem, self)
