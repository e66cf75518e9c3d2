# (C) 2024 Irreducible Inc.

"""Dense univariate polynomials over ℤ/pℤ.

A polynomial is a tuple of integers in ascending order of degree, so (c₀, c₁, ..., cₙ) stands for
c₀ + c₁ ⋅ x + ⋯ + cₙ ⋅ xⁿ. Functions returning polynomials always return them normalized: every coefficient lies
in [0, p) and there are no trailing zeros. The zero polynomial is the empty tuple.
"""

from typing import Sequence

from ..utils.utils import modular_inverse

Poly = tuple[int, ...]

X: Poly = (0, 1)


def normalize(poly: Sequence[int], p: int) -> Poly:
    coeffs = [c % p for c in poly]
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()
    return tuple(coeffs)


def degree(poly: Poly) -> int:
    """Returns the degree of a normalized polynomial, using -1 for the zero polynomial."""
    return len(poly) - 1


def pad(poly: Poly, length: int) -> tuple[int, ...]:
    assert len(poly) <= length, f"polynomial of degree {degree(poly)} does not fit in {length} coefficients"
    return poly + (0,) * (length - len(poly))


def add(left: Poly, right: Poly, p: int) -> Poly:
    if len(left) < len(right):
        left, right = right, left
    return normalize([c + (right[i] if i < len(right) else 0) for i, c in enumerate(left)], p)


def subtract(left: Poly, right: Poly, p: int) -> Poly:
    return add(left, scale(right, p - 1, p), p)


def scale(poly: Poly, factor: int, p: int) -> Poly:
    return normalize([c * factor for c in poly], p)


def multiply(left: Poly, right: Poly, p: int) -> Poly:
    if not left or not right:
        return ()
    result = [0] * (len(left) + len(right) - 1)
    for i, a in enumerate(left):
        if a == 0:
            continue
        for j, b in enumerate(right):
            result[i + j] += a * b
    return normalize(result, p)


def divmod_poly(dividend: Poly, divisor: Poly, p: int) -> tuple[Poly, Poly]:
    """Schoolbook long division. Returns (quotient, remainder) with deg(remainder) < deg(divisor)."""
    if not divisor:
        raise ZeroDivisionError("polynomial division by zero")
    remainder = list(normalize(dividend, p))
    n = len(divisor)
    if len(remainder) < n:
        return (), tuple(remainder)
    quotient = [0] * (len(remainder) - n + 1)
    lead_inv = modular_inverse(divisor[-1], p)
    for shift in range(len(remainder) - n, -1, -1):
        factor = remainder[shift + n - 1] * lead_inv % p
        quotient[shift] = factor
        if factor:
            for i, c in enumerate(divisor):
                remainder[shift + i] = (remainder[shift + i] - factor * c) % p
    return normalize(quotient, p), normalize(remainder[: n - 1], p)


def mod(dividend: Poly, divisor: Poly, p: int) -> Poly:
    return divmod_poly(dividend, divisor, p)[1]


def extended_gcd(left: Poly, right: Poly, p: int) -> tuple[Poly, Poly, Poly]:
    """Returns (g, s, t) such that s ⋅ left + t ⋅ right == g, where g is a (not necessarily monic) gcd."""
    r0, r1 = left, right
    s0, s1 = (1,), ()
    t0, t1 = (), (1,)
    while r1:
        q, r = divmod_poly(r0, r1, p)
        r0, r1 = r1, r
        s0, s1 = s1, subtract(s0, multiply(q, s1, p), p)
        t0, t1 = t1, subtract(t0, multiply(q, t1, p), p)
    return r0, s0, t0


def gcd(left: Poly, right: Poly, p: int) -> Poly:
    """Monic greatest common divisor."""
    g = extended_gcd(left, right, p)[0]
    if not g:
        return g
    return scale(g, modular_inverse(g[-1], p), p)


def pow_mod(base: Poly, exponent: int, modulus: Poly, p: int) -> Poly:
    acc: Poly = mod((1,), modulus, p)
    val = mod(base, modulus, p)

    while exponent:
        if exponent % 2:
            acc = mod(multiply(acc, val, p), modulus, p)
        val = mod(multiply(val, val, p), modulus, p)
        exponent >>= 1

    return acc


def is_monic(poly: Poly) -> bool:
    return len(poly) > 0 and poly[-1] == 1


def is_irreducible(poly: Poly, p: int) -> bool:
    """Tests a monic polynomial for irreducibility over ℤ/pℤ.

    A polynomial f of degree n is irreducible iff it has no irreducible factor of degree ≤ n/2, and the product of
    all monic irreducibles of degree dividing i is x^{pⁱ} − x. So it suffices to check gcd(f, x^{pⁱ} − x) == 1 for
    every 1 ≤ i ≤ n/2, which is the first phase of distinct-degree factorization.
    """
    n = degree(poly)
    if n < 1:
        return False
    if n == 1:
        return True
    if poly[0] == 0:  # divisible by x
        return False
    h = mod(X, poly, p)
    for _ in range(n // 2):
        h = pow_mod(h, p, poly, p)  # h = x^{pⁱ} mod f
        if degree(gcd(poly, subtract(h, X, p), p)) > 0:
            return False
    return True
