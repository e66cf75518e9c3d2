# (C) 2024 Irreducible Inc.

"""Conversion between elements of independently constructed fields.

A conversion from field A to field B exists when an embedding A → B is known, which is the case when

1. A and B are the same field (structurally equal descriptors),
2. A is the prime field of B's characteristic (its embedding is unique),
3. an identification of A's generator with an element of B has been registered, or
4. A and B were both built from Conway polynomials over the same prime and deg A divides deg B. Conway polynomials
   are chosen so that the generator of 𝔽_{pᵐ} is the ((pⁿ − 1) / (pᵐ − 1))-th power of the generator of 𝔽_{pⁿ}.

Conversion in the opposite direction of a known embedding is solved by linear algebra over 𝔽_p, and succeeds
exactly for elements in the image of the embedding.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Any

from galois import GF

from .database import conway_polynomial
from .errors import IncompatibleFields, NoConwayPolynomial, NoIdentification
from .extension_field import ExtensionField, default_symbol
from .finite_field import FiniteField, FiniteFieldElem

logger = logging.getLogger(__name__)


class IdentificationRegistry:
    """Append-only record of identifications (generator of A) ↦ (element of B).

    Writers are serialized by a lock and publish a fresh dictionary, so lookups never take the lock and never see a
    partially applied registration.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._images: dict[tuple[FiniteField, FiniteField], Any] = {}

    def register(self, source: FiniteField, target: FiniteField, image: Any) -> None:
        with self._lock:
            existing = self._images.get((source, target))
            if existing is not None:
                if existing != image:
                    raise ValueError(f"generator of {source!r} is already identified with a different element")
                return
            images = dict(self._images)
            images[(source, target)] = image
            self._images = images
        logger.info("identified generator of %r with %r in %r", source, image, target)

    def lookup(self, source: FiniteField, target: FiniteField) -> Any | None:
        return self._images.get((source, target))

    def __len__(self) -> int:
        return len(self._images)


class FieldConverter:
    """Resolves conversions between fields, against one identification registry.

    Also owns the Conway fields it builds to host operations between Conway fields neither of whose degrees divides
    the other, so that each such field is built once per converter.
    """

    def __init__(self, registry: IdentificationRegistry | None = None) -> None:
        self.registry = registry if registry is not None else IdentificationRegistry()
        self._lock = threading.Lock()
        self._conway_fields: dict[tuple[int, int], ExtensionField] = {}

    def conway_field(self, p: int, n: int) -> ExtensionField:
        with self._lock:
            field = self._conway_fields.get((p, n))
            if field is None:
                coefficients = conway_polynomial(p, n)
                if coefficients is None:
                    raise NoConwayPolynomial(f"no Conway polynomial known for GF({p}^{n})")
                field = ExtensionField(p, coefficients, default_symbol(n), is_conway=True, converter=self)
                self._conway_fields[(p, n)] = field
        return field

    def embedding_image(self, source: FiniteField, target: FiniteField) -> Any | None:
        """Image of source's generator in target under a known embedding, if there is one."""
        image = self.registry.lookup(source, target)
        if image is not None:
            return image
        if (
            source.is_conway
            and target.is_conway
            and source.characteristic == target.characteristic
            and target.degree % source.degree == 0
        ):
            exponent = (target.order - 1) // (source.order - 1)
            return target.pow(target.primitive_element(), exponent)
        return None

    def common_field(self, left: FiniteField, right: FiniteField) -> FiniteField:
        if left == right:
            return left
        if left.characteristic != right.characteristic:
            raise IncompatibleFields(f"{left!r} and {right!r} have different characteristics")
        if left.degree == 1:
            return right
        if right.degree == 1:
            return left
        if self.embedding_image(left, right) is not None:
            return right
        if self.embedding_image(right, left) is not None:
            return left
        if left.is_conway and right.is_conway:
            n = math.lcm(left.degree, right.degree)
            logger.debug("combining %r and %r in the Conway field of degree %d", left, right, n)
            return self.conway_field(left.characteristic, n)
        raise self._no_conversion(left, right)

    def convert(self, elem: FiniteFieldElem, target: FiniteField) -> FiniteFieldElem:
        source = elem.field
        if source == target:
            return elem
        if source.characteristic != target.characteristic:
            raise IncompatibleFields(f"{source!r} and {target!r} have different characteristics")
        if source.degree == 1:
            return target.elem_type(target.from_int(elem.value))
        if target.degree == 1:
            if any(elem.value[1:]):
                raise IncompatibleFields(f"{elem!r} does not lie in the prime field")
            return target.elem_type(elem.value[0])
        image = self.embedding_image(source, target)
        if image is not None:
            logger.debug("converting %r into %r by substitution", source, target)
            return target.elem_type(substitute(elem.value, image, target))
        image = self.embedding_image(target, source)
        if image is not None:
            logger.debug("converting %r into %r through the inverse embedding", source, target)
            return target.elem_type(solve_preimage(elem.value, image, source, target))
        raise self._no_conversion(source, target)

    def identify(self, generator: FiniteFieldElem, image: FiniteFieldElem) -> None:
        source, target = generator.field, image.field
        if source.degree == 1 or generator.value != source.primitive_element():
            raise ValueError(f"{generator!r} is not the generator of an extension field")
        if source.characteristic != target.characteristic:
            raise ValueError("identified fields must have the same characteristic")
        if target.degree % source.degree != 0:
            raise ValueError(f"GF({source.order}) does not embed in GF({target.order})")
        if substitute(source.minimal_polynomial, image.value, target) != target.zero():
            raise ValueError(f"{image!r} is not a root of the minimal polynomial of {generator!r}")
        self.registry.register(source, target, image.value)

    def _no_conversion(self, source: FiniteField, target: FiniteField) -> IncompatibleFields:
        if source.order == target.order:
            return NoIdentification(f"no identification registered between {source!r} and {target!r}")
        return IncompatibleFields(f"no conversion between {source!r} and {target!r}")


def substitute(coefficients: tuple[int, ...], image: Any, target: FiniteField) -> Any:
    """Evaluates Σ cᵢ ⋅ imageⁱ in the target field, by Horner's rule."""
    acc = target.zero()
    for c in reversed(coefficients):
        acc = target.add(target.multiply(acc, image), target.from_int(c))
    return acc


def solve_preimage(value: Any, image: Any, field: FiniteField, subfield: FiniteField) -> tuple[int, ...]:
    """Finds c with Σ cᵢ ⋅ imageⁱ == value in field, where image is the image of the subfield's generator.

    The powers 1, image, ..., image^{m−1} are linearly independent over 𝔽_p, so the system has at most one solution;
    it has none when value lies outside the image of the subfield.
    """
    gf = GF(field.characteristic)
    m = subfield.degree
    columns = []
    power = field.one()
    for _ in range(m):
        columns.append(power)
        power = field.multiply(power, image)
    augmented = gf([[column[row] for column in columns] + [value[row]] for row in range(field.degree)])
    reduced = augmented.row_reduce(ncols=m)
    if any(int(c) for c in reduced[m:, m]):
        raise IncompatibleFields(f"element does not lie in the subfield {subfield!r}")
    return tuple(int(c) for c in reduced[:m, m])


DEFAULT_CONVERTER = FieldConverter()


def identify(generator: FiniteFieldElem, image: FiniteFieldElem, converter: FieldConverter | None = None) -> None:
    """Registers the identification generator ↦ image, e.g. identify(β, γ**2).

    Afterwards elements of β's field convert into γ's field by substituting image for β, and elements of γ's field
    that lie in the image convert back.
    """
    converter = converter or generator.field.converter
    if converter is None:
        raise ValueError(f"{generator.field!r} has no converter to register identifications with")
    converter.identify(generator, image)


def convert(elem: FiniteFieldElem, target: FiniteField | type[FiniteFieldElem]) -> FiniteFieldElem:
    if isinstance(target, type):
        target = target.field
    return target.convert(elem)
