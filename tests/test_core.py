"""
test_core.py - Unit tests for core.py

Tests:
- Intent construction and validation
- Record and Confirmation invariants
- Exception hierarchy
"""

import pytest
from dataclasses import FrozenInstanceError

from blockledger import (
    Account, UserTransfer, SystemCredit, Record, Confirmation, ConfirmResult,
    LedgerError, AccountAlreadyExists, AccountNotFound, InsufficientFunds,
    InvalidAmount, InvalidInput, LedgerInvariantViolation,
)


class TestAccount:

    def test_create_account(self):
        account = Account("alice", 100)
        assert account.id == "alice"
        assert account.balance == 100

    def test_empty_id_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            Account("  ", 0)

    def test_non_str_id_raises(self):
        with pytest.raises(ValueError, match="must be str"):
            Account(7, 0)


class TestIntents:
    """Tests for UserTransfer and SystemCredit."""

    def test_user_transfer_fields(self):
        intent = UserTransfer("alice", "bob", 30, sequence=4)
        assert intent.source == "alice"
        assert intent.dest == "bob"
        assert intent.amount == 30
        assert intent.sequence == 4

    def test_system_credit_has_no_source(self):
        intent = SystemCredit("bob", 10)
        assert intent.source is None
        assert intent.dest == "bob"

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount_raises(self, amount):
        with pytest.raises(ValueError, match="positive"):
            UserTransfer("alice", "bob", amount)
        with pytest.raises(ValueError, match="positive"):
            SystemCredit("bob", amount)

    @pytest.mark.parametrize("amount", [1.5, "10", True])
    def test_non_int_amount_raises(self, amount):
        with pytest.raises(ValueError, match="must be int"):
            UserTransfer("alice", "bob", amount)

    def test_intent_is_immutable(self):
        intent = UserTransfer("alice", "bob", 30)
        with pytest.raises(FrozenInstanceError):
            intent.amount = 1_000

    def test_self_transfer_is_allowed(self):
        intent = UserTransfer("alice", "alice", 5)
        assert intent.source == intent.dest


class TestRecord:

    def test_empty_record_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Record(transactions=(), timestamp=0, height=0)

    def test_total_amount(self):
        record = Record(
            transactions=(UserTransfer("a", "b", 3), SystemCredit("b", 4)),
            timestamp=0,
            height=0,
        )
        assert record.total_amount == 7

    def test_repr_mentions_height_and_count(self):
        record = Record((SystemCredit("b", 4),), timestamp=0, height=2)
        assert "height=2" in repr(record)
        assert "1 txs" in repr(record)


class TestConfirmation:

    def test_minted_requires_record(self):
        with pytest.raises(ValueError):
            Confirmation(ConfirmResult.MINTED)

    def test_nothing_to_confirm_rejects_record(self):
        record = Record((SystemCredit("b", 4),), timestamp=0, height=0)
        with pytest.raises(ValueError):
            Confirmation(ConfirmResult.NOTHING_TO_CONFIRM, record)

    def test_minted_property(self):
        record = Record((SystemCredit("b", 4),), timestamp=0, height=0)
        assert Confirmation(ConfirmResult.MINTED, record).minted
        assert not Confirmation(ConfirmResult.NOTHING_TO_CONFIRM).minted


class TestExceptions:

    @pytest.mark.parametrize("exc", [
        AccountAlreadyExists, AccountNotFound, InsufficientFunds,
        InvalidAmount, InvalidInput, LedgerInvariantViolation,
    ])
    def test_all_derive_from_ledger_error(self, exc):
        assert issubclass(exc, LedgerError)
