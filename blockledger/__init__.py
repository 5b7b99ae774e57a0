"""
blockledger - Account Ledger with Periodic Batch Confirmation

A single-process, in-memory ledger: transfers are validated and queued, then
applied in batches that are appended to an immutable history of records.

Usage:
    from blockledger import Ledger, ConfirmationScheduler, SubmitResult

    ledger = Ledger("main")
    ledger.create_account("alice", 100)
    ledger.create_account("bob", 50)

    # Queue a transfer (balances are not touched yet)
    result = ledger.submit("alice", "bob", 30)    # SubmitResult.QUEUED

    # Confirm by hand...
    confirmation = ledger.confirm()               # Confirmation(MINTED, Record(...))

    # ...or every 10 seconds in the background
    with ConfirmationScheduler(ledger, interval=10.0):
        ...
"""

# Core types
from .core import (
    Account,
    UserTransfer,
    SystemCredit,
    TransferIntent,
    Record,
    Confirmation,
    CreateResult,
    SubmitResult,
    ConfirmResult,
    ReservationPolicy,
    LedgerError,
    AccountAlreadyExists,
    AccountNotFound,
    InsufficientFunds,
    InvalidAmount,
    InvalidInput,
    LedgerInvariantViolation,
    DEFAULT_CONFIRM_INTERVAL,
    DEFAULT_LEDGER_NAME,
)

# State
from .accounts import AccountStore
from .ledger import Ledger

# Scheduling
from .scheduler import ConfirmationScheduler

# Command interface
from .commands import (
    CreateAccount,
    Transfer,
    BalanceQuery,
    Exit,
    InvalidRequest,
    Request,
    parse_command,
    dispatch,
    render,
    handle_line,
)

from .config import LedgerConfig, load_config

__all__ = [
    # Core
    'Account', 'UserTransfer', 'SystemCredit', 'TransferIntent', 'Record', 'Confirmation',
    'CreateResult', 'SubmitResult', 'ConfirmResult', 'ReservationPolicy',
    'LedgerError', 'AccountAlreadyExists', 'AccountNotFound', 'InsufficientFunds',
    'InvalidAmount', 'InvalidInput', 'LedgerInvariantViolation',
    'DEFAULT_CONFIRM_INTERVAL', 'DEFAULT_LEDGER_NAME',
    # State
    'AccountStore', 'Ledger',
    # Scheduling
    'ConfirmationScheduler',
    # Command interface
    'CreateAccount', 'Transfer', 'BalanceQuery', 'Exit', 'InvalidRequest', 'Request',
    'parse_command', 'dispatch', 'render', 'handle_line',
    # Config
    'LedgerConfig', 'load_config',
]

__version__ = '1.0.0'
