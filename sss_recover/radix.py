"""
Arbitrary-base numeral decoding.

Share values arrive as strings in bases 2..36 (digits 0-9 then a-z,
case-insensitive). Decoding is exact: Python ints never overflow.
to_decimal() renders results back to decimal text of any length.
"""

import string

from .errors import DecodeError, InvalidBase


MIN_BASE = 2
MAX_BASE = 36

_DIGITS = {c: i for i, c in enumerate(string.digits + string.ascii_lowercase)}

# str(int) refuses more than 4300 digits on recent interpreters; render in
# chunks well under that limit.
_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS


def parse_base(raw) -> int:
    """
    Interpret a declared base.

    Accepts an int, an integral float (16.0, as JSON numbers may arrive)
    or a string of decimal digits ("10", " 16 ").

    Raises:
        InvalidBase: If the base is not an integer in [2, 36]
    """
    if isinstance(raw, bool):
        raise InvalidBase(f"Invalid base {raw!r}")
    if isinstance(raw, int):
        base = raw
    elif isinstance(raw, float) and raw.is_integer():
        base = int(raw)
    elif isinstance(raw, str) and raw.strip().isascii() \
            and raw.strip().isdigit():
        base = decode(raw.strip(), 10)
    else:
        raise InvalidBase(f"Invalid base {raw!r}")

    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBase(f"Base {to_decimal(base)} outside [{MIN_BASE}, {MAX_BASE}]")
    return base


def decode(value: str, base: int) -> int:
    """
    Decode `value` written in `base` into an integer.

    The numeral is read left to right as acc = acc * base + digit.
    Signs, whitespace, underscores and radix prefixes are rejected.

    Raises:
        DecodeError: If the string is empty or has a digit not valid in base
    """
    if not isinstance(base, int) or isinstance(base, bool) \
            or not MIN_BASE <= base <= MAX_BASE:
        raise DecodeError(f"Base {base!r} outside [{MIN_BASE}, {MAX_BASE}]")
    if not isinstance(value, str) or not value:
        raise DecodeError(f"Cannot decode empty or non-string value {value!r}")

    result = 0
    for ch in value:
        digit = _DIGITS.get(ch.lower())
        if digit is None or digit >= base:
            raise DecodeError(
                f"Invalid digit {ch!r} in {value!r} for base {base}"
            )
        result = result * base + digit
    return result


def to_decimal(value: int) -> str:
    """Decimal text of an integer of any size."""
    if value < 0:
        return "-" + to_decimal(-value)

    chunks = []
    while value >= _CHUNK:
        value, low = divmod(value, _CHUNK)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))
