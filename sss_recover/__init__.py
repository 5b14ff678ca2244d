"""sss_recover: Shamir secret reconstruction from arbitrary-base shares."""

from .radix import decode, parse_base
from .shamir import mod_inverse, interpolate_exact, interpolate_modular
from .shares import Share, RawShare, RawShareSet, ShareSet
from .shares import parse_share_set, validate, validate_share_set
from .recovery import Mode, ReconstructionConfig, DEFAULT_PRIME
from .recovery import reconstruct, reconstruct_with, inspect_share_set
from .recovery import load_share_set, recover_file, parse_modulus
from .errors import (
    ReconstructionError, DecodeError, InvalidBase, InvalidThreshold,
    InsufficientShares, DegenerateShares, NoInverseExists, NonIntegerResult,
    InvalidModulus, MalformedInput,
)

__all__ = [
    'decode', 'parse_base',
    'mod_inverse', 'interpolate_exact', 'interpolate_modular',
    'Share', 'RawShare', 'RawShareSet', 'ShareSet',
    'parse_share_set', 'validate', 'validate_share_set',
    'Mode', 'ReconstructionConfig', 'DEFAULT_PRIME',
    'reconstruct', 'reconstruct_with', 'inspect_share_set',
    'load_share_set', 'recover_file', 'parse_modulus',
    'ReconstructionError', 'DecodeError', 'InvalidBase', 'InvalidThreshold',
    'InsufficientShares', 'DegenerateShares', 'NoInverseExists',
    'NonIntegerResult', 'InvalidModulus', 'MalformedInput',
]
