#!/usr/bin/env python3
"""
sss-recover CLI: reconstruct a Shamir secret from JSON share files.

Usage:
    cli.py recover input1.json [input2.json ...] [--mode exact|modular] [--modulus P] [--strict]
    cli.py inspect input1.json

Share file format:
    {"keys": {"n": 4, "k": 3}, "1": {"base": "10", "value": "4"}, ...}
"""

import argparse
import logging
import os
import sys

from sss_recover import recovery
from sss_recover.radix import to_decimal
from sss_recover.recovery import DEFAULT_PRIME, Mode, ReconstructionConfig, parse_flag


def _build_config(args) -> ReconstructionConfig:
    """Command-line flags override SSS_RECOVER_* environment variables."""
    env = os.environ
    mode = args.mode or env.get(ReconstructionConfig.ENV_MODE, Mode.EXACT.value)
    modulus = args.modulus or env.get(ReconstructionConfig.ENV_MODULUS)
    strict = args.strict or parse_flag(env.get(ReconstructionConfig.ENV_STRICT, ''))

    if Mode.parse(mode) is Mode.MODULAR and modulus is None:
        modulus = DEFAULT_PRIME
    return ReconstructionConfig(mode=mode, modulus=modulus, strict=strict)


def cmd_recover(args):
    """Reconstruct the secret of each share file."""
    try:
        config = _build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Mode: {config.mode.value}")
    if config.modulus is not None:
        print(f"Modulus: {to_decimal(config.modulus)}")

    status = 0
    for path in args.files:
        if not os.path.isfile(path):
            print(f"Error: share file not found or not a file: {path}", file=sys.stderr)
            status = 1
            continue
        try:
            secret = recovery.recover_file(path, config)
        except (ValueError, OSError) as e:
            print(f"Recovery FAILED for {path}: {e}", file=sys.stderr)
            status = 1
            continue
        print(f"Secret for {path}: {to_decimal(secret)}")

    return status


def cmd_inspect(args):
    """Show which shares would be used, and which are dropped."""
    if not os.path.isfile(args.file):
        print(f"Error: share file not found or not a file: {args.file}", file=sys.stderr)
        return 1

    try:
        summary = recovery.inspect_share_set(recovery.load_share_set(args.file))
    except (ValueError, OSError) as e:
        print(f"Inspection FAILED: {e}", file=sys.stderr)
        return 1

    print(f"Threshold: {summary['k']}-of-{summary['n']}")
    print(f"Shares used (first {summary['k']} by x):")
    for share in summary['used']:
        print(f"  (x={share['x']}, y={share['y']})")

    if summary['dropped']:
        print(f"\nDropped:")
        for share in summary['dropped']:
            print(f"  x={share['x']}: {share['reason']}")

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='sss-recover',
        description='Reconstruct a Shamir secret from arbitrary-base shares.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Exact rational reconstruction
  %(prog)s recover input1.json input2.json

  # Over GF(p), default p = 2^256 - 2^32 - 977
  %(prog)s recover input1.json --mode modular

  # Over a chosen prime
  %(prog)s recover input1.json --mode modular --modulus 2147483647

  # List decoded shares
  %(prog)s inspect input1.json
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', help='Command')

    # Recover
    p_recover = sub.add_parser('recover', help='Reconstruct secrets from share files')
    p_recover.add_argument('files', nargs='+', help='JSON share files')
    p_recover.add_argument('--mode', '-m', choices=[m.value for m in Mode],
                           help='Interpolation mode (default: exact)')
    p_recover.add_argument('--modulus', '-p', help='Prime modulus for modular mode')
    p_recover.add_argument('--strict', action='store_true',
                           help='Fail if the exact secret is not an integer')

    # Inspect
    p_inspect = sub.add_parser('inspect', help='Show decoded and dropped shares')
    p_inspect.add_argument('file', help='JSON share file')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if not args.command:
        parser.print_help()
        return 1

    handlers = {
        'recover': cmd_recover,
        'inspect': cmd_inspect,
    }

    return handlers[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
