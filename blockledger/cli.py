"""
cli.py - Interactive command loop.

Reads one command per line, runs it against a shared Ledger, and prints the
outcome, while a ConfirmationScheduler confirms pending transfers in the
background.

Run:
    blockledger                       # confirm every 10 seconds
    blockledger --interval 2 --quiet  # faster, without ledger diagnostics
    python -m blockledger --policy legacy
"""

from __future__ import annotations
from typing import List, Optional, TextIO
import sys

from .commands import Exit, handle_line
from .config import LedgerConfig, load_config
from .ledger import Ledger
from .scheduler import ConfirmationScheduler

PROMPT = "> "
EXIT_OK = 0
EXIT_FATAL = 1


def run(
    config: LedgerConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    interactive: bool = True,
) -> int:
    """
    Run the command loop until `exit` or end of input.

    Returns:
        EXIT_OK on normal termination, EXIT_FATAL if the scheduler halted.
        A line read after the halt is discarded, never dispatched.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    ledger = Ledger(config.name, policy=config.policy, verbose=config.verbose)
    scheduler = ConfirmationScheduler(ledger, interval=config.interval)

    with scheduler:
        while True:
            if scheduler.failure is not None:
                return EXIT_FATAL
            if interactive:
                stdout.write(PROMPT)
                stdout.flush()
            line = stdin.readline()
            if scheduler.failure is not None:
                return EXIT_FATAL
            if not line:
                break
            request, message = handle_line(ledger, line)
            print(message, file=stdout)
            if isinstance(request, Exit):
                break

    return EXIT_FATAL if scheduler.failure is not None else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    config = load_config(argv)
    return run(config, sys.stdin, sys.stdout, interactive=sys.stdin.isatty())


if __name__ == "__main__":
    sys.exit(main())
