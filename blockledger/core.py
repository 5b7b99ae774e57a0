"""
Core types for the batch-confirmation ledger.

This module provides the foundational data structures used by the ledger:
1. Enums: result values returned by every ledger operation
2. Exceptions: LedgerError and domain-specific error types
3. Immutable data structures: Account, UserTransfer, SystemCredit, Record
4. Type aliases: TransferIntent, BalanceMap

Nothing in this module mutates ledger state. The Ledger class in ledger.py is
the only owner of mutable state.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple, Union


# ============================================================================
# CONSTANTS
# ============================================================================

# Seconds between background confirmations.
DEFAULT_CONFIRM_INTERVAL = 10.0

# Name given to a ledger when none is supplied.
DEFAULT_LEDGER_NAME = "main"


# ============================================================================
# TYPE ALIASES
# ============================================================================

# Mapping from account ID to confirmed balance.
BalanceMap = Dict[str, int]


# ============================================================================
# ENUMS
# ============================================================================

class CreateResult(Enum):
    """
    Outcome of an account creation request.

    CREATED: The account was added with its opening balance.
    ACCOUNT_ALREADY_EXISTS: An account with this ID exists; nothing changed.
    INVALID_AMOUNT: The opening balance was negative.
    INVALID_ID: The ID was not a non-blank string; nothing changed.
    """
    CREATED = "created"
    ACCOUNT_ALREADY_EXISTS = "account_already_exists"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_ID = "invalid_id"


class SubmitResult(Enum):
    """
    Outcome of a transfer submission.

    QUEUED: The intent was validated and appended to the pending queue.
    INSUFFICIENT_FUNDS: The source cannot cover the amount.
    ACCOUNT_NOT_FOUND: The source or destination is unknown.
    INVALID_AMOUNT: The amount is zero, negative, or not an integer.
    """
    QUEUED = "queued"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_AMOUNT = "invalid_amount"


class ConfirmResult(Enum):
    """Outcome of a confirmation cycle."""
    MINTED = "minted"
    NOTHING_TO_CONFIRM = "nothing_to_confirm"


class ReservationPolicy(Enum):
    """
    How submission checks funds against intents that are still pending.

    RESERVED: Each queued debit reserves its amount on the source account.
              Later submissions see only the unreserved remainder, so pending
              intents can never jointly overdraw an account.
    LEGACY: Each submission is checked against the confirmed balance alone.
            Several pending debits may jointly overdraw the source once they
            are confirmed.
    """
    RESERVED = "reserved"
    LEGACY = "legacy"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class AccountAlreadyExists(LedgerError):
    """Raised when creating an account whose ID is already present."""
    pass


class AccountNotFound(LedgerError):
    """Raised when an operation references an unknown account ID."""
    pass


class InsufficientFunds(LedgerError):
    """Raised when a transfer amount exceeds what the source can spend."""
    pass


class InvalidAmount(LedgerError):
    """Raised for non-positive transfer amounts or negative opening balances."""
    pass


class InvalidInput(LedgerError):
    """Raised when a command line does not match any known request shape."""
    pass


class LedgerInvariantViolation(LedgerError):
    """
    Raised when confirmation finds an intent naming an account that does not exist.

    Submission already checks existence and accounts are never deleted, so this
    signals a bug elsewhere. It is the only fatal ledger error.
    """
    pass


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

def _require_positive_int(amount: int, what: str) -> None:
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"{what} amount must be int, got {type(amount).__name__}")
    if amount <= 0:
        raise ValueError(f"{what} amount must be positive, got {amount}")


@dataclass(frozen=True, slots=True)
class Account:
    """
    A named balance.

    Attributes:
        id: Unique account identifier, immutable once created.
        balance: Confirmed balance at the time this snapshot was taken.
    """
    id: str
    balance: int

    def __post_init__(self):
        if not isinstance(self.id, str):
            raise ValueError(f"Account id must be str, got {type(self.id).__name__}")
        if not self.id.strip():
            raise ValueError("Account id cannot be empty")


@dataclass(frozen=True, slots=True)
class UserTransfer:
    """
    A pending transfer between two existing accounts.

    Attributes:
        source: Account debited at confirmation.
        dest: Account credited at confirmation.
        amount: Positive integer quantity.
        sequence: Position in the ledger's arrival order (assigned on queueing).
    """
    source: str
    dest: str
    amount: int
    sequence: int = 0

    def __post_init__(self):
        if not self.source or not self.dest:
            raise ValueError("UserTransfer source and dest cannot be empty")
        _require_positive_int(self.amount, "UserTransfer")

    def __repr__(self) -> str:
        return f"UserTransfer(#{self.sequence} {self.amount}: {self.source}→{self.dest})"


@dataclass(frozen=True, slots=True)
class SystemCredit:
    """
    A pending credit with no debited source. Confirming it grows total supply.

    Attributes:
        dest: Account credited at confirmation.
        amount: Positive integer quantity.
        sequence: Position in the ledger's arrival order (assigned on queueing).
    """
    dest: str
    amount: int
    sequence: int = 0

    def __post_init__(self):
        if not self.dest:
            raise ValueError("SystemCredit dest cannot be empty")
        _require_positive_int(self.amount, "SystemCredit")

    @property
    def source(self) -> Optional[str]:
        return None

    def __repr__(self) -> str:
        return f"SystemCredit(#{self.sequence} {self.amount}: →{self.dest})"


# A validated, not-yet-applied transfer.
TransferIntent = Union[UserTransfer, SystemCredit]


@dataclass(frozen=True, slots=True)
class Record:
    """
    An immutable, timestamped batch of intents applied together.

    Attributes:
        transactions: Intents in the order they were applied.
        timestamp: Seconds since the epoch at confirmation time.
        height: Zero-based position of this record in the ledger history.
    """
    transactions: Tuple[TransferIntent, ...]
    timestamp: int
    height: int

    def __post_init__(self):
        if not self.transactions:
            raise ValueError("Record must contain at least one transaction")

    @property
    def total_amount(self) -> int:
        """Sum of all intent amounts in this record."""
        return sum(intent.amount for intent in self.transactions)

    def __repr__(self) -> str:
        when = datetime.fromtimestamp(self.timestamp, tz=timezone.utc).isoformat()
        return f"Record(height={self.height}, {len(self.transactions)} txs, at {when})"


@dataclass(frozen=True, slots=True)
class Confirmation:
    """
    Result of Ledger.confirm().

    record is set exactly when result is ConfirmResult.MINTED.
    """
    result: ConfirmResult
    record: Optional[Record] = None

    def __post_init__(self):
        if (self.result is ConfirmResult.MINTED) != (self.record is not None):
            raise ValueError("Confirmation carries a record if and only if it minted")

    @property
    def minted(self) -> bool:
        return self.result is ConfirmResult.MINTED
