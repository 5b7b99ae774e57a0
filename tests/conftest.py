"""
conftest.py - Shared pytest fixtures for ledger tests

Provides common fixtures used across unit and conformance tests:
- Basic ledgers (empty, funded, legacy policy)
- A controllable clock for deterministic record timestamps
- Conservation helpers
"""

import pytest
from typing import Dict, Iterable

from blockledger import Ledger, ReservationPolicy, Record, UserTransfer


# =============================================================================
# HELPERS
# =============================================================================

class FakeClock:
    """Settable stand-in for time.time()."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def expected_deltas(intents: Iterable) -> Dict[str, int]:
    """Net balance change per account implied by a sequence of intents."""
    deltas: Dict[str, int] = {}
    for intent in intents:
        if isinstance(intent, UserTransfer):
            deltas[intent.source] = deltas.get(intent.source, 0) - intent.amount
        deltas[intent.dest] = deltas.get(intent.dest, 0) + intent.amount
    return deltas


def confirmed_intents(records: Iterable[Record]) -> list:
    """Flatten records into the intents they confirmed, in order."""
    return [intent for record in records for intent in record.transactions]


def drop_account(ledger: Ledger, account_id: str) -> None:
    """
    Remove an account behind the ledger's back.

    Accounts are never deleted through the public API, so this is the only way
    to reach the fatal path in confirm().
    """
    del ledger._accounts._balances[account_id]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(clock):
    """Empty ledger with the default RESERVED policy."""
    return Ledger("test", clock=clock, verbose=False)


@pytest.fixture
def funded_ledger(ledger):
    """Ledger with Alice=100 and Bob=50."""
    ledger.create_account("Alice", 100)
    ledger.create_account("Bob", 50)
    return ledger


@pytest.fixture
def legacy_ledger(clock):
    """Ledger that checks submissions against confirmed balances only."""
    ledger = Ledger("legacy", policy=ReservationPolicy.LEGACY, clock=clock, verbose=False)
    ledger.create_account("Alice", 100)
    ledger.create_account("Bob", 50)
    return ledger
