# (C) 2024 Irreducible Inc.

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conway_fields.finite_fields.construction import conway_field, extension_field, field, field_with_generator
from conway_fields.finite_fields.errors import DivisionByZero
from conway_fields.finite_fields.extension_field import ExtensionFieldElem
from conway_fields.tests.helpers import elements_strategy, galois_field, nonzero_elements_strategy

Elem256 = conway_field(2, 8, "a")
Elem81 = conway_field(3, 4, "b")
Elem125 = conway_field(5, 3, "c")
Elem49 = conway_field(7, 2, "d")
Elem9i = extension_field(3, "i", [1, 0, 1])  # x² + 1, whose root has order 4
Elem16 = extension_field(2, "e", [1, 1, 1, 1, 1], zech=False)  # x⁴ + x³ + x² + x + 1, whose root has order 5

fields = [Elem256, Elem81, Elem125, Elem49, Elem9i, Elem16]


@pytest.mark.parametrize("elem", fields)
@given(data=st.data())
def test_field_axioms(elem: type[ExtensionFieldElem], data: st.DataObject) -> None:
    a = data.draw(elements_strategy(elem))
    b = data.draw(elements_strategy(elem))
    c = data.draw(elements_strategy(elem))
    assert (a + b) + c == a + (b + c)
    assert (a * b) * c == a * (b * c)
    assert a + b == b + a
    assert a * b == b * a
    assert a * (b + c) == a * b + a * c
    assert a + elem.zero() == a
    assert a * elem.one() == a
    assert a + (-a) == elem.zero()
    assert a - b == a + (-b)


@pytest.mark.parametrize("elem", fields)
@given(data=st.data())
def test_inversion_correctness(elem: type[ExtensionFieldElem], data: st.DataObject) -> None:
    a = data.draw(nonzero_elements_strategy(elem))
    b = data.draw(elements_strategy(elem))
    assert a * a.inverse() == elem.one()
    assert (b / a) * a == b
    assert a**-2 == (a * a).inverse()


@pytest.mark.parametrize("elem", fields)
@given(data=st.data())
@settings(deadline=None)
def test_multiplication_matches_galois(elem: type[ExtensionFieldElem], data: st.DataObject) -> None:
    gf = galois_field(elem)
    a = data.draw(elements_strategy(elem))
    b = data.draw(elements_strategy(elem))
    descriptor = elem.field
    expected = gf(descriptor.to_index(a.value)) * gf(descriptor.to_index(b.value))
    assert descriptor.to_index((a * b).value) == int(expected)


@pytest.mark.parametrize("elem", [Elem81, Elem49, Elem9i, Elem16])
def test_frobenius_fixes_every_element(elem: type[ExtensionFieldElem]) -> None:
    q = elem.field.order
    for a in elem.elements():
        assert a**q == a


@pytest.mark.parametrize("elem", fields)
def test_square_correctness(elem: type[ExtensionFieldElem]) -> None:
    a = elem.random()
    assert a.square() == a * a


def test_generator_power_relation() -> None:
    G, β = field_with_generator(3, 3, "β")
    assert β**27 == β
    assert β**26 == G.one()
    assert G.field.is_conway


def test_custom_minimal_polynomial_relation() -> None:
    F, β = field_with_generator(3, "β", coefficients=[2, 0, 0, 2, 1])
    assert β**4 + 2 * β**3 + 2 == 0
    assert F.field.minimal_polynomial == (2, 0, 0, 2, 1)
    assert not F.field.is_conway


def test_coercion() -> None:
    F, β = field_with_generator(3, "β", coefficients=[2, 0, 0, 2, 1])
    assert F((0, 1, 0, 0)) == β
    assert F([0, 1]) == β
    assert F([0, 0, 0, 0, 1]) == -(2 * β**3 + 2)  # reduced modulo the minimal polynomial
    assert F(5) == F((2, 0, 0, 0))
    assert (β + 1).coefficients == (1, 1, 0, 0)
    with pytest.raises(TypeError):
        F("β")
    with pytest.raises(TypeError):
        F((0.5, 0, 0, 0))
    with pytest.raises(TypeError):
        F([1, 2.0])


def test_format() -> None:
    F, β = field_with_generator(3, "β", coefficients=[2, 0, 0, 2, 1])
    assert str(β**2 + 2) == "β^2 + 2"
    assert str(2 * β**3 + β) == "2β^3 + β"
    assert str(F.zero()) == "0"


def test_division_by_zero() -> None:
    a = Elem49.generator()
    with pytest.raises(DivisionByZero):
        a / Elem49.zero()
    with pytest.raises(DivisionByZero):
        Elem49.zero().inverse()
    with pytest.raises(DivisionByZero):
        Elem49.zero() ** -1


def test_zero_to_the_zero() -> None:
    assert Elem49.zero() ** 0 == Elem49.one()


def test_structurally_equal_fields_are_interchangeable() -> None:
    F = extension_field(3, "β", [2, 2, 1])
    G = extension_field(3, "β", [2, 2, 1])
    assert F.field is not G.field
    assert F.field == G.field
    assert hash(F.field) == hash(G.field)
    β_F, β_G = F.generator(), G.generator()
    assert β_F == β_G
    assert β_F * β_G + 1 == F((1, 0)) + β_F**2
    assert G(β_F) == β_G
    assert {β_F, β_G} == {β_F}


def test_conway_field_from_order() -> None:
    F = field(81, "b")
    assert F.field == Elem81.field
    assert F.field.order == 81
    assert field(29).field.degree == 1


def test_multiplicative_generator() -> None:
    assert Elem49.generator().is_generator()  # Conway polynomials are primitive
    assert not Elem9i.generator().is_generator()
    g = Elem9i.multiplicative_generator()
    assert g.is_generator()
    assert len({g**k for k in range(8)}) == 8
