# (C) 2024 Irreducible Inc.


class FieldError(ValueError):
    """Base class for errors raised while constructing or combining finite field elements."""


class DivisionByZero(FieldError, ZeroDivisionError):
    pass


class MalformedPolynomial(FieldError):
    """The minimal polynomial is not monic, has the wrong shape, or has degree < 1."""


class NotIrreducible(FieldError):
    pass


class NotAPrimePower(FieldError):
    pass


class NoConwayPolynomial(FieldError):
    """The Conway polynomial database has no entry for the requested (p, n) pair."""


class IncompatibleFields(FieldError):
    """No conversion exists between the fields of two operands."""


class NoIdentification(IncompatibleFields):
    """The fields are isomorphic, but no identification between their generators has been registered."""


class NonGeneratorWarning(UserWarning):
    """Zech multiplication was requested for a field whose primitive element does not generate the group of units."""
