# (C) 2024 Irreducible Inc.

from typing import TypeVar

import galois
from hypothesis import strategies as st

from conway_fields.finite_fields.finite_field import FiniteFieldElem

F = TypeVar("F", bound=FiniteFieldElem)


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def elements_strategy(elem_type: type[F]) -> st.SearchStrategy[F]:
    return st.integers(0, elem_type.field.order - 1).map(lambda index: elem_type(elem_type.field.from_index(index)))


def nonzero_elements_strategy(elem_type: type[F]) -> st.SearchStrategy[F]:
    return st.integers(1, elem_type.field.order - 1).map(lambda index: elem_type(elem_type.field.from_index(index)))


def galois_field(elem_type: type[FiniteFieldElem]) -> type[galois.FieldArray]:
    """The galois implementation of the same field, for cross-checking arithmetic through element indices."""
    field = elem_type.field
    if field.degree == 1:
        return galois.GF(field.characteristic)
    modulus = galois.Poly(list(reversed(field.minimal_polynomial)), field=galois.GF(field.characteristic))
    return galois.GF(field.order, irreducible_poly=modulus)
