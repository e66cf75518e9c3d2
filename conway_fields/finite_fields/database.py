# (C) 2024 Irreducible Inc.

"""Lookups the field constructors consult but do not own: Conway polynomials and prime-power factorization.

Both are answered by galois, whose Conway polynomials come from Frank Lübeck's database. Results are pure functions
of their arguments and are memoized.
"""

import functools
import logging

from galois import conway_poly, factors, is_prime_power

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def conway_polynomial(p: int, n: int) -> tuple[int, ...] | None:
    """Returns the coefficients of the Conway polynomial C_{p,n}, lowest degree first, or None if it is unknown."""
    try:
        poly = conway_poly(p, n)
    except LookupError:
        logger.debug("no Conway polynomial for p=%d, n=%d", p, n)
        return None
    return tuple(int(c) for c in reversed(poly.coeffs))


@functools.lru_cache(maxsize=None)
def factor_prime_power(q: int) -> tuple[int, int] | None:
    """Returns (p, n) with pⁿ == q and p prime, or None if q is not a prime power."""
    if q < 2 or not is_prime_power(q):
        return None
    primes, exponents = factors(q)
    return int(primes[0]), int(exponents[0])
