# (C) 2024 Irreducible Inc.

import math
from typing import Sequence


def trial_divide(n: int) -> int:  # naivest possible factoring alg...
    # returns the smallest divisor of n which is > 1.
    for i in range(2, math.isqrt(n) + 1):
        if n % i == 0:
            return i
    return n


def factorize(n: int) -> list[int]:
    factors = []
    while n > 1:
        factor = trial_divide(n)
        factors.append(factor)
        n //= factor
    return factors


def distinct_prime_factors(n: int) -> list[int]:
    return sorted(set(factorize(n)))


def extended_euclid(a: int, b: int) -> tuple[int, int, int]:
    """Returns (g, x, y) with a ⋅ x + b ⋅ y == g == gcd(a, b)."""
    x0, x1 = 1, 0
    y0, y1 = 0, 1
    while b:
        q, r = divmod(a, b)
        a, b = b, r
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def modular_inverse(a: int, p: int) -> int:
    """Inverse of a modulo the prime p, via the extended Euclidean algorithm on the representative in [0, p)."""
    a %= p
    if a == 0:
        raise ZeroDivisionError("inverting zero")
    g, x, _ = extended_euclid(a, p)
    assert g == 1, f"{a} is not invertible modulo {p}"
    return x % p


def to_index(digits: Sequence[int], base: int) -> int:
    """Packs base-`base` digits (least significant first) into an integer.

    For example, to_index((1, 2), 3) returns 7. This matches the integer representation of a polynomial-basis element
    used by galois, where the coefficient of xⁱ is the i-th base-p digit.
    """
    result = 0
    for digit in reversed(digits):
        result = result * base + digit
    return result


def from_index(index: int, base: int, length: int) -> tuple[int, ...]:
    digits = []
    for _ in range(length):
        index, digit = divmod(index, base)
        digits.append(digit)
    assert index == 0, "index does not fit in the requested number of digits"
    return tuple(digits)
