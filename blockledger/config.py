"""
config.py - Runtime configuration for the interactive ledger.

Defaults live in core.py; this module bundles them into LedgerConfig and reads
overrides from the command line.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import argparse

from .core import DEFAULT_CONFIRM_INTERVAL, DEFAULT_LEDGER_NAME, ReservationPolicy


@dataclass
class LedgerConfig:
    """Settings for one ledger process. Modify these to experiment."""
    name: str = DEFAULT_LEDGER_NAME
    interval: float = DEFAULT_CONFIRM_INTERVAL
    policy: ReservationPolicy = ReservationPolicy.RESERVED
    verbose: bool = True

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"Interval must be positive: {self.interval}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockledger",
        description="Interactive account ledger with periodic batch confirmation.",
    )
    parser.add_argument("--name", default=DEFAULT_LEDGER_NAME, help="ledger name used in output")
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_CONFIRM_INTERVAL,
        help="seconds between confirmations (default: %(default)s)",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ReservationPolicy],
        default=ReservationPolicy.RESERVED.value,
        help="how pending debits count against new transfers (default: %(default)s)",
    )
    parser.add_argument("--quiet", action="store_true", help="suppress ledger diagnostics")
    return parser


def load_config(argv: Optional[List[str]] = None) -> LedgerConfig:
    """Build a LedgerConfig from command-line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.interval <= 0:
        parser.error(f"--interval must be positive, got {args.interval}")
    return LedgerConfig(
        name=args.name,
        interval=args.interval,
        policy=ReservationPolicy(args.policy),
        verbose=not args.quiet,
    )
