# (C) 2024 Irreducible Inc.

"""Entry points that turn (p), (p, n, symbol), (p, symbol, coefficients) or (q, symbol) into a field.

Every entry point returns the element class of the new field: call it to make elements, and read its `field` class
variable for the descriptor. Constructing the same field twice gives two equal descriptors whose elements mix freely.

    >>> F = field(29)
    >>> F(2) ** 29 == F(2)
    True
    >>> G, β = field_with_generator(3, 3, "β")
    >>> β**27 == β
    True
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from galois import GF, Poly, is_prime

from . import polynomial
from .conversion import DEFAULT_CONVERTER, FieldConverter, IdentificationRegistry
from .database import conway_polynomial, factor_prime_power
from .errors import FieldError, MalformedPolynomial, NoConwayPolynomial, NotAPrimePower, NotIrreducible
from .extension_field import ExtensionField, default_symbol
from .finite_field import FiniteField, FiniteFieldElem
from .prime_field import PrimeField, PrimeFieldElem
from .zech import apply_construction_policy

logger = logging.getLogger(__name__)


def _converter(converter: FieldConverter | None, registry: IdentificationRegistry | None) -> FieldConverter:
    if converter is not None:
        if registry is not None and registry is not converter.registry:
            raise ValueError("pass either a converter or a registry, not both")
        return converter
    if registry is not None:
        return FieldConverter(registry)
    return DEFAULT_CONVERTER


def _check_prime(p: int) -> None:
    if not isinstance(p, int) or p < 2 or not is_prime(p):
        raise NotAPrimePower(f"characteristic {p!r} is not a prime")


def _parse_polynomial(poly: Any, p: int) -> polynomial.Poly:
    if isinstance(poly, str):
        poly = Poly.Str(poly, field=GF(p))
    if isinstance(poly, Poly):
        if poly.field.characteristic != p:
            raise MalformedPolynomial(f"{poly} is not a polynomial over GF({p})")
        return polynomial.normalize([int(c) for c in reversed(poly.coeffs)], p)
    if not isinstance(poly, Sequence) or not all(isinstance(c, int) for c in poly):
        raise MalformedPolynomial(f"expected a coefficient sequence, got {poly!r}")
    if poly and poly[-1] % p == 0:
        raise MalformedPolynomial(f"leading coefficient of {poly!r} vanishes modulo {p}")
    return polynomial.normalize(poly, p)


def as_field(field: FiniteField | type[FiniteFieldElem]) -> FiniteField:
    if isinstance(field, FiniteField):
        return field
    if isinstance(field, type) and issubclass(field, FiniteFieldElem):
        return field.field
    raise TypeError(f"{field!r} is neither a field nor an element class")


def prime_field(
    p: int,
    *,
    zech: bool | None = None,
    converter: FieldConverter | None = None,
    registry: IdentificationRegistry | None = None,
) -> type[PrimeFieldElem]:
    """ℤ/pℤ, with the trivial minimal polynomial x."""
    _check_prime(p)
    field = PrimeField(p, converter=_converter(converter, registry))
    apply_construction_policy(field, zech)
    return field.elem_type


def conway_field(
    p: int,
    n: int,
    symbol: str,
    *,
    zech: bool | None = None,
    converter: FieldConverter | None = None,
    registry: IdentificationRegistry | None = None,
) -> type[FiniteFieldElem]:
    """𝔽_{pⁿ} defined by the Conway polynomial C_{p,n}, with generator named symbol.

    :raises NoConwayPolynomial: if the database has no C_{p,n}
    """
    _check_prime(p)
    if n < 1:
        raise FieldError(f"extension degree must be positive, got {n}")
    if n == 1:
        return prime_field(p, zech=zech, converter=converter, registry=registry)
    coefficients = conway_polynomial(p, n)
    if coefficients is None:
        raise NoConwayPolynomial(f"no Conway polynomial known for GF({p}^{n})")
    logger.debug("GF(%d^%d) uses Conway polynomial %s", p, n, coefficients)
    field = ExtensionField(p, coefficients, symbol, is_conway=True, converter=_converter(converter, registry))
    apply_construction_policy(field, zech)
    return field.elem_type


def extension_field(
    p: int,
    symbol: str,
    coefficients: Sequence[int] | Poly | str,
    *,
    zech: bool | None = None,
    converter: FieldConverter | None = None,
    registry: IdentificationRegistry | None = None,
) -> type[FiniteFieldElem]:
    """𝔽_p[symbol] / (f), for a user-supplied monic irreducible f.

    The coefficients of f are given lowest degree first, e.g. [1, 1, 1] for x² + x + 1, or as a galois.Poly or a
    string such as "x^2 + x + 1". A monic f of degree 1 gives the prime field.

    :raises MalformedPolynomial: if f is not monic of degree ≥ 1
    :raises NotIrreducible: if f factors over 𝔽_p
    """
    _check_prime(p)
    modulus = _parse_polynomial(coefficients, p)
    if polynomial.degree(modulus) < 1:
        raise MalformedPolynomial(f"minimal polynomial {coefficients!r} has degree < 1")
    if not polynomial.is_monic(modulus):
        raise MalformedPolynomial(f"minimal polynomial {coefficients!r} is not monic")
    if polynomial.degree(modulus) == 1:
        return prime_field(p, zech=zech, converter=converter, registry=registry)
    if not polynomial.is_irreducible(modulus, p):
        raise NotIrreducible(f"{coefficients!r} is reducible over GF({p})")
    field = ExtensionField(p, modulus, symbol, converter=_converter(converter, registry))
    apply_construction_policy(field, zech)
    return field.elem_type


def field_of_order(
    q: int,
    symbol: str | None = None,
    *,
    zech: bool | None = None,
    converter: FieldConverter | None = None,
    registry: IdentificationRegistry | None = None,
) -> type[FiniteFieldElem]:
    """The Conway field of order q; the generator defaults to zₙ, as for the fields conversions build.

    :raises NotAPrimePower: if q is not a prime power
    """
    factored = factor_prime_power(q)
    if factored is None:
        raise NotAPrimePower(f"{q} is not a prime power")
    p, n = factored
    if symbol is None:
        symbol = default_symbol(n)
    return conway_field(p, n, symbol, zech=zech, converter=converter, registry=registry)


def field(
    order_or_prime: int,
    degree_or_symbol: int | str | None = None,
    symbol_or_poly: str | Sequence[int] | Poly | None = None,
    *,
    coefficients: Sequence[int] | Poly | str | None = None,
    minimal_poly: Sequence[int] | Poly | str | None = None,
    **kwargs,
) -> type[FiniteFieldElem]:
    """Dispatches to the entry point matching the arguments:

    - field(p): the prime field
    - field(p, n, symbol): the Conway field of degree n
    - field(p, symbol, coefficients), field(p, symbol, coefficients=...) or field(p, symbol, minimal_poly=...): a
      custom minimal polynomial
    - field(q) or field(q, symbol): the Conway field of order q
    """
    symbol = None
    if isinstance(degree_or_symbol, str) and symbol_or_poly is not None:
        if coefficients is not None or minimal_poly is not None:
            raise ValueError("minimal polynomial given twice")
        coefficients = symbol_or_poly
    else:
        symbol = symbol_or_poly
    if coefficients is not None and minimal_poly is not None:
        raise ValueError("pass either coefficients or minimal_poly, not both")
    poly = coefficients if coefficients is not None else minimal_poly
    if poly is not None:
        if not isinstance(degree_or_symbol, str):
            raise ValueError("a custom minimal polynomial needs a symbol")
        return extension_field(order_or_prime, degree_or_symbol, poly, **kwargs)
    if isinstance(degree_or_symbol, int):
        if symbol is None:
            symbol = default_symbol(degree_or_symbol)
        return conway_field(order_or_prime, degree_or_symbol, symbol, **kwargs)
    return field_of_order(order_or_prime, degree_or_symbol, **kwargs)


def field_with_generator(*args, **kwargs) -> tuple[type[FiniteFieldElem], FiniteFieldElem]:
    """Like field(), also returning the generator: the root of the minimal polynomial, or the smallest primitive root
    of a prime field."""
    elem_type = field(*args, **kwargs)
    return elem_type, elem_type.generator()


def enable_zech_multiplication(field: FiniteField | type[FiniteFieldElem]) -> None:
    as_field(field).zech.enable()


def disable_zech_multiplication(field: FiniteField | type[FiniteFieldElem]) -> None:
    as_field(field).zech.disable()
