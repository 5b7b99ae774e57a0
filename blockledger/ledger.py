"""
ledger.py - Batch-Confirmation Account Ledger

The Ledger class is the single owner of mutable state: the account store, the
pending queue, and the append-only history of records. It is the only module
that mutates balances.

Key responsibilities:
    - Creates accounts and answers balance queries
    - Validates transfer submissions and queues them in arrival order
    - Confirms the pending queue atomically: drain, apply deltas, append a Record
    - Serializes every operation through one re-entrant lock (the gate)
"""

from __future__ import annotations
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple, Any
import threading
import time

from .accounts import AccountStore
from .core import (
    # Types
    Account, UserTransfer, SystemCredit, TransferIntent, Record, Confirmation,
    CreateResult, SubmitResult, ConfirmResult, ReservationPolicy,
    # Constants
    DEFAULT_LEDGER_NAME,
    # Exceptions
    AccountAlreadyExists, AccountNotFound, InsufficientFunds, InvalidAmount,
    LedgerInvariantViolation,
)


_SUBMIT_REJECTIONS = {
    InvalidAmount: SubmitResult.INVALID_AMOUNT,
    AccountNotFound: SubmitResult.ACCOUNT_NOT_FOUND,
    InsufficientFunds: SubmitResult.INSUFFICIENT_FUNDS,
}


def _is_amount(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_account_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class Ledger:
    """
    In-memory account ledger with periodic batch confirmation.

    Submissions never touch balances. They are validated against the confirmed
    state and queued; confirm() later applies the whole queue as one Record.

    Thread Safety:
        Every public method holds ``gate`` for its full duration, so a
        background ConfirmationScheduler and a foreground command loop can
        share one instance. No operation ever observes a drained queue with
        un-updated balances, or the reverse.

    Example:
        ledger = Ledger("main")
        ledger.create_account("alice", 100)
        ledger.create_account("bob", 50)
        ledger.submit("alice", "bob", 30)     # SubmitResult.QUEUED
        ledger.confirm()                      # Confirmation(MINTED, Record(...))
        ledger.get_balance("alice")           # 70
    """

    def __init__(
        self,
        name: str = DEFAULT_LEDGER_NAME,
        policy: ReservationPolicy = ReservationPolicy.RESERVED,
        clock: Optional[Callable[[], float]] = None,
        verbose: bool = True,
    ):
        """
        Create a ledger.

        Args:
            name: Ledger identifier used in diagnostics
            policy: How pending debits count against later submissions
            clock: Returns seconds since the epoch (default: time.time)
            verbose: Print outcome lines for each operation (default: True)
        """
        self.name = name
        self.policy = policy
        self.verbose = verbose
        self._clock = clock or time.time
        self._gate = threading.RLock()
        self._accounts = AccountStore()
        self._pending: List[TransferIntent] = []
        self._history: List[Record] = []
        # Amounts held by pending debits, per source account (RESERVED policy only)
        self._reserved: Dict[str, int] = defaultdict(int)
        # Opening balances plus confirmed system credits
        self._issued: int = 0
        self._next_sequence: int = 0

    @property
    def gate(self) -> threading.RLock:
        """The exclusive-access lock serializing all ledger operations."""
        return self._gate

    # ========================================================================
    # ACCOUNTS
    # ========================================================================

    def create_account(self, account_id: str, balance: int = 0) -> CreateResult:
        """
        Create an account with an opening balance.

        Args:
            account_id: Unique identifier for the account
            balance: Non-negative opening balance

        Returns:
            CreateResult.CREATED on success
            CreateResult.ACCOUNT_ALREADY_EXISTS if the ID is taken (balance unchanged)
            CreateResult.INVALID_AMOUNT if the balance is negative or not an int
            CreateResult.INVALID_ID if the ID is blank or not a str
        """
        with self._gate:
            if not _is_account_id(account_id):
                self._log(f"✗ REJECTED: invalid account id {account_id!r}")
                return CreateResult.INVALID_ID
            if not _is_amount(balance) or balance < 0:
                self._log(f"✗ REJECTED: invalid opening balance {balance!r} for {account_id}")
                return CreateResult.INVALID_AMOUNT
            try:
                self._accounts.create(account_id, balance)
            except AccountAlreadyExists as e:
                self._log(f"✗ REJECTED: {e}")
                return CreateResult.ACCOUNT_ALREADY_EXISTS
            self._issued += balance
            self._log(f"📝 Created: {account_id} balance={balance}")
            return CreateResult.CREATED

    def get_balance(self, account_id: str) -> Optional[int]:
        """Confirmed balance of an account, or None if it does not exist."""
        with self._gate:
            return self._accounts.get_balance(account_id)

    def available_balance(self, account_id: str) -> Optional[int]:
        """
        Balance a new submission may spend from this account.

        Under RESERVED this is the confirmed balance minus amounts held by
        pending debits. Under LEGACY it equals the confirmed balance.
        """
        with self._gate:
            balance = self._accounts.get_balance(account_id)
            if balance is None:
                return None
            return balance - self._reserved.get(account_id, 0)

    def get_account(self, account_id: str) -> Optional[Account]:
        """Snapshot of an account, or None if it does not exist."""
        with self._gate:
            balance = self._accounts.get_balance(account_id)
            return Account(account_id, balance) if balance is not None else None

    def list_accounts(self) -> List[Account]:
        """Snapshots of every account, sorted by ID."""
        with self._gate:
            return list(self._accounts)

    # ========================================================================
    # SUBMISSION
    # ========================================================================

    def submit(self, source: str, dest: str, amount: int) -> SubmitResult:
        """
        Validate a transfer and append it to the pending queue.

        Validation order: amount is a positive int, both accounts exist, the
        source can cover the amount. Balances are not modified here.

        Returns:
            SubmitResult.QUEUED on success, otherwise the reason for rejection.
        """
        with self._gate:
            try:
                self._check_amount(amount)
                self._check_exists(source, dest)
                self._check_funds(source, amount)
            except (InvalidAmount, AccountNotFound, InsufficientFunds) as e:
                self._log(f"✗ REJECTED: {e}")
                return _SUBMIT_REJECTIONS[type(e)]

            intent = UserTransfer(source, dest, amount, self._take_sequence())
            self._pending.append(intent)
            if self.policy is ReservationPolicy.RESERVED:
                self._reserved[source] += amount
            self._log(f"⏳ QUEUED: {intent!r}")
            return SubmitResult.QUEUED

    def credit(self, dest: str, amount: int) -> SubmitResult:
        """
        Queue a system credit: value enters dest with no debited source.

        Returns:
            SubmitResult.QUEUED, INVALID_AMOUNT, or ACCOUNT_NOT_FOUND.
        """
        with self._gate:
            try:
                self._check_amount(amount)
                self._check_exists(dest)
            except (InvalidAmount, AccountNotFound) as e:
                self._log(f"✗ REJECTED: {e}")
                return _SUBMIT_REJECTIONS[type(e)]

            intent = SystemCredit(dest, amount, self._take_sequence())
            self._pending.append(intent)
            self._log(f"⏳ QUEUED: {intent!r}")
            return SubmitResult.QUEUED

    def _check_amount(self, amount: Any) -> None:
        if not _is_amount(amount) or amount <= 0:
            raise InvalidAmount(f"amount must be a positive integer, got {amount!r}")

    def _check_exists(self, *account_ids: str) -> None:
        for account_id in account_ids:
            if account_id not in self._accounts:
                raise AccountNotFound(f"Account {account_id} not found")

    def _check_funds(self, source: str, amount: int) -> None:
        spendable = self._accounts.get_balance(source)
        if self.policy is ReservationPolicy.RESERVED:
            spendable -= self._reserved.get(source, 0)
        if spendable < amount:
            raise InsufficientFunds(
                f"{source}: {amount} requested, {spendable} available"
            )

    def _take_sequence(self) -> int:
        sequence = self._next_sequence
        self._next_sequence += 1
        return sequence

    # ========================================================================
    # CONFIRMATION
    # ========================================================================

    def confirm(self) -> Confirmation:
        """
        Drain the pending queue, apply every intent, and append a Record.

        The drain, the balance updates and the append happen as one unit under
        the gate. Intents are applied in arrival order: the source (if any) is
        debited, then the destination credited.

        Returns:
            Confirmation(MINTED, record) if anything was pending,
            Confirmation(NOTHING_TO_CONFIRM) otherwise (no state change).

        Raises:
            LedgerInvariantViolation: If an intent names an account that no
                longer exists. Nothing is drained or applied in that case.
        """
        with self._gate:
            if not self._pending:
                return Confirmation(ConfirmResult.NOTHING_TO_CONFIRM)

            batch: Tuple[TransferIntent, ...] = tuple(self._pending)
            missing = sorted({
                account_id
                for intent in batch
                for account_id in (intent.source, intent.dest)
                if account_id is not None and account_id not in self._accounts
            })
            if missing:
                raise LedgerInvariantViolation(
                    f"Ledger {self.name}: pending intents reference missing accounts {missing}"
                )

            for intent in batch:
                if isinstance(intent, UserTransfer):
                    self._accounts.apply_delta(intent.source, -intent.amount)
                else:
                    self._issued += intent.amount
                self._accounts.apply_delta(intent.dest, intent.amount)

            self._pending.clear()
            self._reserved.clear()

            record = Record(
                transactions=batch,
                timestamp=int(self._clock()),
                height=len(self._history),
            )
            self._history.append(record)
            self._log(f"✓ MINTED: {record!r}")
            return Confirmation(ConfirmResult.MINTED, record)

    # ========================================================================
    # INTROSPECTION
    # ========================================================================

    def pending(self) -> Tuple[TransferIntent, ...]:
        """Intents queued since the last confirmation, in arrival order."""
        with self._gate:
            return tuple(self._pending)

    def pending_count(self) -> int:
        with self._gate:
            return len(self._pending)

    def history(self) -> Tuple[Record, ...]:
        """All confirmed records, oldest first."""
        with self._gate:
            return tuple(self._history)

    def latest_record(self) -> Optional[Record]:
        with self._gate:
            return self._history[-1] if self._history else None

    def total_supply(self) -> int:
        """Sum of confirmed balances across all accounts."""
        with self._gate:
            return self._accounts.total()

    def verify_conservation(self, expected_supply: Optional[int] = None) -> Dict[str, Any]:
        """
        Check that confirmed balances account for exactly the value issued.

        Value enters the ledger only through opening balances and confirmed
        system credits; transfers redistribute it.

        Args:
            expected_supply: Total to compare against. Defaults to the value
                             the ledger itself has issued.

        Returns:
            Dict with keys:
            - 'valid': bool - True if the totals match
            - 'supply': int - Current sum of balances
            - 'expected': int - The total compared against
            - 'difference': int - supply - expected
        """
        with self._gate:
            supply = self._accounts.total()
            expected = self._issued if expected_supply is None else expected_supply
            return {
                'valid': supply == expected,
                'supply': supply,
                'expected': expected,
                'difference': supply - expected,
            }

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[{self.name}] {message}")

    def __repr__(self) -> str:
        with self._gate:
            return (
                f"Ledger({self.name!r}, {len(self._accounts)} accounts, "
                f"{len(self._pending)} pending, {len(self._history)} records)"
            )
