"""
Share sets: parsing and validation ahead of interpolation.

Input is the already-parsed share payload:

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }

The key of each record is its x-coordinate. Malformed records are
dropped with a warning; only structural problems are fatal.
"""

import logging
from typing import NamedTuple

from . import radix
from .errors import (
    InsufficientShares,
    InvalidThreshold,
    MalformedInput,
    ReconstructionError,
)


logger = logging.getLogger(__name__)

KEYS_FIELD = "keys"


class Share(NamedTuple):
    """One decoded point (x, P(x))."""

    x: int
    y: int


class RawShare(NamedTuple):
    """One undecoded record: x as given, declared base, encoded value."""

    x: object
    base: object
    value: object


class RawShareSet(NamedTuple):
    n: int
    k: int
    shares: tuple


class ShareSet(NamedTuple):
    """Validated shares: exactly k, ascending x."""

    n: int
    k: int
    shares: tuple
    dropped: tuple = ()

    @property
    def points(self) -> list:
        return [(s.x, s.y) for s in self.shares]


def parse_share_set(data) -> RawShareSet:
    """
    Split a share payload into its {n, k} header and raw share records.

    Raises:
        MalformedInput: If the payload is not a mapping or has no "keys" header
    """
    if isinstance(data, RawShareSet):
        return data
    if not isinstance(data, dict):
        raise MalformedInput(
            f"Share payload must be an object, got {type(data).__name__}"
        )

    header = data.get(KEYS_FIELD)
    if not isinstance(header, dict) or "n" not in header or "k" not in header:
        raise MalformedInput('Share payload needs a "keys" object with n and k')

    shares = []
    for key, record in data.items():
        if key == KEYS_FIELD:
            continue
        if isinstance(record, dict):
            shares.append(RawShare(key, record.get("base"), record.get("value")))
        else:
            shares.append(RawShare(key, None, None))

    return RawShareSet(n=header["n"], k=header["k"], shares=tuple(shares))


def _parse_x(raw) -> int:
    if isinstance(raw, bool):
        raise MalformedInput(f"Invalid x-coordinate {raw!r}")
    if isinstance(raw, int):
        x = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        x = radix.decode(raw, 10)
    else:
        raise MalformedInput(f"Invalid x-coordinate {raw!r}")
    if x < 0:
        raise MalformedInput(
            f"x-coordinate must be non-negative, got {radix.to_decimal(x)}"
        )
    return x


def _check_threshold(n, k):
    for name, value in (("n", n), ("k", k)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidThreshold(f"{name} must be an integer, got {value!r}")
    if k < 2:
        raise InvalidThreshold(f"Threshold k must be >= 2, got {k}")
    if k > n:
        raise InvalidThreshold(f"Threshold k ({k}) must be <= total shares n ({n})")


def validate(raw_shares, n: int, k: int) -> ShareSet:
    """
    Decode raw shares, drop malformed ones, and select the first k by x.

    Args:
        raw_shares: Iterable of RawShare (or (x, base, value) triples)
        n: Total shares offered
        k: Threshold

    Returns:
        ShareSet holding exactly k shares in ascending x order

    Raises:
        InvalidThreshold: If k < 2 or k > n
        InsufficientShares: If fewer than k shares survive decoding
    """
    _check_threshold(n, k)

    decoded = []
    dropped = []
    for raw in raw_shares:
        x_raw, base_raw, value = raw
        try:
            x = _parse_x(x_raw)
            base = radix.parse_base(base_raw)
            y = radix.decode(value, base)
        except ReconstructionError as e:
            logger.warning("Skipping share x=%s: %s", x_raw, e)
            dropped.append((str(x_raw), str(e)))
            continue
        decoded.append(Share(x, y))

    if len(decoded) < k:
        raise InsufficientShares(
            f"Insufficient valid shares: {len(decoded)} decoded, need {k}"
        )

    decoded.sort(key=lambda s: s.x)

    return ShareSet(n=n, k=k, shares=tuple(decoded[:k]), dropped=tuple(dropped))


def validate_share_set(data) -> ShareSet:
    """Parse and validate a share payload in one step."""
    raw = parse_share_set(data)
    return validate(raw.shares, raw.n, raw.k)


def describe(share_set: ShareSet) -> dict:
    """JSON-friendly summary; big integers rendered as decimal strings."""
    return {
        'n': share_set.n,
        'k': share_set.k,
        'used': [{'x': s.x, 'y': radix.to_decimal(s.y)} for s in share_set.shares],
        'dropped': [{'x': x, 'reason': reason} for x, reason in share_set.dropped],
    }
