"""
Shamir's Secret Sharing: reconstruction by Lagrange interpolation at x = 0.

Two strategies:

- Exact: no modulus. Every Lagrange term is kept as an exact rational
  and the sum is reduced to an integer only once, at the end. Dividing
  term by term would truncate terms whose quotient is fractional even
  when the total is an integer.
- Modular: all arithmetic in GF(p). Division becomes multiplication by
  the modular inverse of the denominator.

Duplicate x-coordinates are detected here, as a zero denominator.
"""

from fractions import Fraction

from .radix import to_decimal
from .errors import (
    DegenerateShares,
    InsufficientShares,
    InvalidModulus,
    NoInverseExists,
    NonIntegerResult,
)


def _extended_gcd(a: int, b: int) -> tuple:
    """Extended Euclidean Algorithm. Returns (gcd, x, y) where ax + by = gcd."""
    last_x, x = 1, 0
    last_y, y = 0, 1
    while b != 0:
        quot = a // b
        a, b = b, a - quot * b
        last_x, x = x, last_x - quot * x
        last_y, y = y, last_y - quot * y
    return a, last_x, last_y


def mod_inverse(a: int, m: int) -> int:
    """
    Modular multiplicative inverse of a modulo m.

    Returns r in [0, m) with (a * r) % m == 1.

    Raises:
        NoInverseExists: If gcd(a, m) != 1 (a ≡ 0 mod m for prime m)
    """
    if m < 2:
        raise NoInverseExists(f"No modular inverse modulo {to_decimal(m)}")
    a = a % m
    g, x, _ = _extended_gcd(a, m)
    if g != 1:
        raise NoInverseExists(
            f"No modular inverse for {to_decimal(a)} mod {to_decimal(m)}"
        )
    return x % m


def _check_points(points) -> list:
    points = [(int(x), int(y)) for x, y in points]
    if not points:
        raise InsufficientShares("Need at least 1 point to interpolate, got 0")
    return points


def interpolate_exact(points, strict: bool = False) -> int:
    """
    Evaluate at 0 the unique polynomial through `points`, without a modulus.

    secret = sum_i y_i * prod_{j!=i}(-x_j) / prod_{j!=i}(x_i - x_j)

    Args:
        points: Sequence of (x, y) integer pairs
        strict: Raise instead of truncating when P(0) is not an integer

    Returns:
        P(0), truncated toward zero if it is not an integer

    Raises:
        DegenerateShares: If two points share an x-coordinate
        NonIntegerResult: If strict and P(0) has a fractional part
    """
    points = _check_points(points)

    total = Fraction(0)
    for i, (xi, yi) in enumerate(points):
        numerator = 1
        denominator = 1
        for j, (xj, _) in enumerate(points):
            if i == j:
                continue
            numerator *= -xj
            denominator *= xi - xj
        if denominator == 0:
            raise DegenerateShares(
                f"Duplicate x-coordinate {to_decimal(xi)}: "
                "Lagrange denominator is zero"
            )
        total += Fraction(yi * numerator, denominator)

    if total.denominator != 1:
        if strict:
            raise NonIntegerResult(
                f"Interpolated secret {to_decimal(total.numerator)}/"
                f"{to_decimal(total.denominator)} is not an integer; "
                "shares do not lie on an integer polynomial"
            )
        return int(total)
    return total.numerator


def interpolate_modular(points, prime: int) -> int:
    """
    Evaluate at 0 the polynomial through `points` over GF(prime).

    Args:
        points: Sequence of (x, y) integer pairs
        prime: The prime field modulus (> 2)

    Returns:
        P(0) mod prime, in [0, prime)

    Raises:
        InvalidModulus: If prime <= 2
        DegenerateShares: If two x-coordinates are equal mod prime
        NoInverseExists: If a denominator is not invertible (non-prime modulus)
    """
    if prime is None:
        raise InvalidModulus("Prime modulus is required")
    if prime <= 2:
        raise InvalidModulus(
            f"Prime modulus must be greater than 2, got {to_decimal(prime)}"
        )
    points = _check_points(points)

    secret = 0
    for i, (xi, yi) in enumerate(points):
        numerator = 1
        denominator = 1
        for j, (xj, _) in enumerate(points):
            if i == j:
                continue
            numerator = (numerator * xj) % prime
            diff = (xj - xi) % prime
            if diff == 0:
                raise DegenerateShares(
                    f"x-coordinates {to_decimal(xi)} and {to_decimal(xj)} "
                    "collide modulo the prime"
                )
            denominator = (denominator * diff) % prime

        term = (yi * mod_inverse(denominator, prime)) % prime
        term = (term * numerator) % prime
        secret = (secret + term) % prime

    return secret
