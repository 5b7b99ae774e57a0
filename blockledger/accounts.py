"""
accounts.py - Account Store

Leaf mapping from account ID to balance. The store enforces uniqueness of IDs
and existence on mutation, but no lower bound on balances: funds checks belong
to the Ledger at submission time.

Not thread-safe. The Ledger owns the only instance and guards it.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional

from .core import Account, AccountAlreadyExists, AccountNotFound, BalanceMap


class AccountStore:
    """In-memory map of account ID to integer balance."""

    def __init__(self):
        self._balances: Dict[str, int] = {}

    def __contains__(self, account_id: str) -> bool:
        return account_id in self._balances

    def __len__(self) -> int:
        return len(self._balances)

    def __iter__(self) -> Iterator[Account]:
        for account_id in self.ids():
            yield Account(account_id, self._balances[account_id])

    def create(self, account_id: str, initial_balance: int) -> Account:
        """
        Add a new account.

        Raises:
            AccountAlreadyExists: If the ID is already present. The existing
                                  balance is left unchanged.
        """
        if account_id in self._balances:
            raise AccountAlreadyExists(f"Account {account_id} already exists")
        account = Account(account_id, initial_balance)
        self._balances[account_id] = initial_balance
        return account

    def get_balance(self, account_id: str) -> Optional[int]:
        """Return the stored balance, or None if the account does not exist."""
        return self._balances.get(account_id)

    def apply_delta(self, account_id: str, delta: int) -> int:
        """
        Add delta (which may be negative) to an account balance.

        Returns:
            The new balance.

        Raises:
            AccountNotFound: If the account does not exist.
        """
        if account_id not in self._balances:
            raise AccountNotFound(f"Account {account_id} not found")
        self._balances[account_id] += delta
        return self._balances[account_id]

    def ids(self) -> List[str]:
        """Sorted account IDs."""
        return sorted(self._balances)

    def snapshot(self) -> BalanceMap:
        """Copy of the full balance map."""
        return dict(self._balances)

    def total(self) -> int:
        """
        Sum of all balances.

        Accounts are summed in sorted order so the accumulation is deterministic.
        """
        return sum(self._balances[account_id] for account_id in self.ids())
