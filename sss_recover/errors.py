"""Exception classes for share reconstruction.

Every error derives from ValueError so callers can keep catching
ValueError for any data problem.
"""


class ReconstructionError(ValueError):
    """Base exception for reconstruction errors."""

    pass


class DecodeError(ReconstructionError):
    """Raised when a value is not a valid numeral in its base."""

    pass


class InvalidBase(ReconstructionError):
    """Raised when a declared base is not an integer in [2, 36]."""

    pass


class InvalidThreshold(ReconstructionError):
    """Raised when k or n are out of bounds (k < 2 or k > n)."""

    pass


class InsufficientShares(ReconstructionError):
    """Raised when fewer than k usable shares remain."""

    pass


class DegenerateShares(ReconstructionError):
    """Raised when duplicate or colliding x-coordinates zero a denominator."""

    pass


class NoInverseExists(ReconstructionError):
    """Raised when an element has no inverse modulo m."""

    pass


class NonIntegerResult(ReconstructionError):
    """Raised in strict exact mode when P(0) is not an integer."""

    pass


class InvalidModulus(ReconstructionError):
    """Raised when the field modulus is missing or not greater than 2."""

    pass


class MalformedInput(ReconstructionError):
    """Raised when a share payload cannot be understood at all."""

    pass
