"""
scheduler.py - Recurring Confirmation Timer

Runs Ledger.confirm() on a fixed interval in a background thread.

Core concepts:
1. tick(): one confirmation under the ledger gate; usable without the thread
2. start()/stop(): a daemon thread that ticks every `interval` seconds
3. The ledger history IS the audit trail; the scheduler only counts ticks and
   remembers which records it minted
"""

from __future__ import annotations
from typing import List, Optional
import sys
import threading
import time

from .core import DEFAULT_CONFIRM_INTERVAL, Confirmation, LedgerInvariantViolation, Record
from .ledger import Ledger


class ConfirmationScheduler:
    """
    Background timer confirming a ledger's pending queue.

    Design:
    - Ticks are scheduled at start + n * interval, so a slow confirmation
      delays the next tick but never causes one to be skipped
    - The stop signal is checked before the gate is acquired on each tick
    - Any exception from a tick is fatal: it is stored on `failure`, reported
      on stderr, and the timer stops. Callers must check `failure`.
    """

    def __init__(
        self,
        ledger: Ledger,
        interval: float = DEFAULT_CONFIRM_INTERVAL,
        verbose: Optional[bool] = None,
    ):
        """
        Args:
            ledger: The ledger to confirm
            interval: Seconds between ticks (must be positive)
            verbose: Print tick diagnostics (default: follow ledger.verbose)
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive: {interval}")
        self.ledger = ledger
        self.interval = interval
        self.verbose = ledger.verbose if verbose is None else verbose
        self.ticks: int = 0
        self.minted: List[Record] = []
        self.failure: Optional[Exception] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Confirmation:
        """Run one confirmation while holding the ledger gate."""
        with self.ledger.gate:
            confirmation = self.ledger.confirm()
            self.ticks += 1
            if confirmation.minted:
                self.minted.append(confirmation.record)
        return confirmation

    def start(self) -> None:
        """
        Start ticking in a daemon thread.

        Raises:
            RuntimeError: If the scheduler is already running.
        """
        if self.is_running:
            raise RuntimeError("Confirmation scheduler already running")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"confirm-{self.ledger.name}",
            daemon=True,
        )
        self._thread.start()
        if self.verbose:
            print(f"🚀 Confirming {self.ledger.name} every {self.interval}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the timer to stop and wait for the thread to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        if self.verbose:
            print(f"🏁 Stopped confirming {self.ledger.name} after {self.ticks} ticks")

    def _run(self) -> None:
        next_tick = time.monotonic() + self.interval
        while not self._stop_event.wait(max(0.0, next_tick - time.monotonic())):
            next_tick += self.interval
            try:
                self.tick()
            except LedgerInvariantViolation as e:
                self._halt(e, f"FATAL: confirmation halted: {e}")
                return
            except Exception as e:
                self._halt(e, f"FATAL: confirmation crashed: {type(e).__name__}: {e}")
                return

    def _halt(self, error: Exception, message: str) -> None:
        self.failure = error
        print(message, file=sys.stderr)
        self._stop_event.set()

    def __enter__(self) -> ConfirmationScheduler:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
