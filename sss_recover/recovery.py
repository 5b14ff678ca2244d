"""
Reconstruction orchestration.

decode -> validate -> select first k by x -> interpolate at zero.

The numeric strategy is picked by Mode:
1. EXACT: rational Lagrange interpolation, no modulus
2. MODULAR: Lagrange interpolation over GF(p), p supplied by the caller

No retries: every failure here is a deterministic data error.
"""

import enum
import json
import logging
import os
from pathlib import Path

from . import radix, shamir
from .errors import DecodeError, InvalidModulus, MalformedInput
from .shares import ShareSet, describe, validate_share_set


logger = logging.getLogger(__name__)


# secp256k1 field prime. A demonstration default for callers; reconstruct()
# never falls back to it.
DEFAULT_PRIME = 2**256 - 2**32 - 977


class Mode(enum.Enum):
    EXACT = "exact"
    MODULAR = "modular"

    @classmethod
    def parse(cls, value) -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedInput(
                f"Unknown mode {value!r}, expected 'exact' or 'modular'"
            ) from None


def parse_modulus(raw) -> int:
    """
    Interpret a modulus given as an int, a decimal string or a 0x-hex string.

    Raises:
        InvalidModulus: If it is not an integer or is <= 2
    """
    if isinstance(raw, bool):
        raise InvalidModulus(f"Invalid modulus {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip().lower()
        try:
            if text.startswith("0x"):
                value = radix.decode(text[2:], 16)
            else:
                value = radix.decode(text, 10)
        except DecodeError:
            raise InvalidModulus(f"Invalid modulus {raw!r}") from None
    else:
        raise InvalidModulus(f"Invalid modulus {raw!r}")

    if value <= 2:
        raise InvalidModulus(
            f"Prime modulus must be greater than 2, got {radix.to_decimal(value)}"
        )
    return value


_TRUE_FLAGS = ('1', 'true', 'yes')
_FALSE_FLAGS = ('0', 'false', 'no', '')


def parse_flag(raw) -> bool:
    """
    Interpret an on/off option from JSON or the environment.

    Accepts a bool or one of 1/true/yes, 0/false/no (any case). An empty
    string or None means off.

    Raises:
        MalformedInput: For anything else
    """
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in _TRUE_FLAGS:
            return True
        if text in _FALSE_FLAGS:
            return False
    raise MalformedInput(f"Invalid flag value {raw!r}, expected true or false")


class ReconstructionConfig:
    """Which interpolation to run, and over which field."""

    ENV_MODE = "SSS_RECOVER_MODE"
    ENV_MODULUS = "SSS_RECOVER_MODULUS"
    ENV_STRICT = "SSS_RECOVER_STRICT"

    def __init__(self, mode=Mode.EXACT, modulus=None, strict: bool = False):
        self.mode = Mode.parse(mode)
        if self.mode is Mode.MODULAR:
            if modulus is None:
                raise InvalidModulus("Modular mode requires a prime modulus")
            self.modulus = parse_modulus(modulus)
        else:
            self.modulus = None
        self.strict = parse_flag(strict)

    @classmethod
    def from_dict(cls, data: dict) -> "ReconstructionConfig":
        return cls(
            mode=data.get('mode', Mode.EXACT.value),
            modulus=data.get('modulus'),
            strict=data.get('strict', False),
        )

    @classmethod
    def from_env(cls, environ=None) -> "ReconstructionConfig":
        environ = os.environ if environ is None else environ
        return cls(
            mode=environ.get(cls.ENV_MODE, Mode.EXACT.value),
            modulus=environ.get(cls.ENV_MODULUS),
            strict=environ.get(cls.ENV_STRICT, ''),
        )

    def to_dict(self) -> dict:
        result = {'mode': self.mode.value, 'strict': self.strict}
        if self.modulus is not None:
            result['modulus'] = radix.to_decimal(self.modulus)
        return result

    def __repr__(self):
        return (f"ReconstructionConfig(mode={self.mode.value!r}, "
                f"modulus={self._modulus_text()}, strict={self.strict!r})")

    def _modulus_text(self):
        return "None" if self.modulus is None else radix.to_decimal(self.modulus)


def reconstruct(share_set, mode=Mode.EXACT, modulus=None,
                strict: bool = False) -> int:
    """
    Reconstruct the secret P(0) from a share set.

    Args:
        share_set: A validated ShareSet, a RawShareSet, or a share payload
            mapping ({"keys": {"n", "k"}, "<x>": {"base", "value"}, ...})
        mode: Mode.EXACT or Mode.MODULAR (or their string values)
        modulus: Prime field modulus, required iff mode is MODULAR
        strict: In exact mode, fail if P(0) is not an integer

    Returns:
        The secret. In modular mode it lies in [0, modulus).

    Raises:
        ValueError subclasses from sss_recover.errors; the first one wins.
    """
    config = ReconstructionConfig(mode=mode, modulus=modulus, strict=strict)
    return reconstruct_with(share_set, config)


def reconstruct_with(share_set, config: ReconstructionConfig) -> int:
    """Same as reconstruct(), driven by a ReconstructionConfig."""
    if not isinstance(share_set, ShareSet):
        share_set = validate_share_set(share_set)

    logger.debug(
        "Reconstructing with %d of %d shares (mode=%s): x=%s",
        share_set.k, share_set.n, config.mode.value,
        [radix.to_decimal(s.x) for s in share_set.shares],
    )

    if config.mode is Mode.MODULAR:
        return shamir.interpolate_modular(share_set.points, config.modulus)
    return shamir.interpolate_exact(share_set.points, strict=config.strict)


def inspect_share_set(data) -> dict:
    """
    Validate a share payload without interpolating.

    Returns the summary from shares.describe(): n, k, the shares that
    would be used, and the dropped ones with reasons.
    """
    return describe(validate_share_set(data))


def load_share_set(path: str) -> dict:
    """Load a share payload from a JSON file."""
    text = Path(path).read_text()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"{path}: invalid JSON ({e})") from None


def recover_file(path: str, config: ReconstructionConfig) -> int:
    """Load a JSON share file and reconstruct its secret."""
    return reconstruct_with(load_share_set(path), config)
