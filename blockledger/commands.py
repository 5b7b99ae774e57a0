"""
commands.py - Command Interface

Turns one line of text into one request, runs it against a Ledger, and renders
the outcome as a single human-readable line.

Commands (whitespace-separated tokens):
    create-account <id> <balance>
    transfer <from> <to> <amount>
    balance <id>
    exit

Integers that fail to parse are read as 0, so a bad transfer amount surfaces
as INVALID_AMOUNT. Anything else, including a known command with the wrong
number of tokens, becomes InvalidRequest and never reaches the ledger.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from .core import CreateResult, SubmitResult, InvalidInput
from .ledger import Ledger


# ============================================================================
# REQUESTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class CreateAccount:
    id: str
    balance: int


@dataclass(frozen=True, slots=True)
class Transfer:
    source: str
    dest: str
    amount: int


@dataclass(frozen=True, slots=True)
class BalanceQuery:
    id: str


@dataclass(frozen=True, slots=True)
class Exit:
    pass


@dataclass(frozen=True, slots=True)
class InvalidRequest:
    """A line that matched no request shape. reason says why."""
    reason: str


Request = Union[CreateAccount, Transfer, BalanceQuery, Exit, InvalidRequest]

# command word -> expected token count (including the command word)
_ARITY = {
    "create-account": 3,
    "transfer": 4,
    "balance": 2,
    "exit": 1,
}


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        return 0


def _tokenize(line: str) -> List[str]:
    """
    Split a line and check its shape.

    Raises:
        InvalidInput: If the line is blank, names an unknown command, or has
                      the wrong number of arguments.
    """
    tokens = line.split()
    if not tokens:
        raise InvalidInput("empty command")
    command = tokens[0]
    expected = _ARITY.get(command)
    if expected is None:
        raise InvalidInput(f"unknown command: {command}")
    if len(tokens) != expected:
        raise InvalidInput(
            f"{command} takes {expected - 1} argument(s), got {len(tokens) - 1}"
        )
    return tokens


def parse_command(line: str) -> Request:
    """Parse one input line into a request."""
    try:
        tokens = _tokenize(line)
    except InvalidInput as e:
        return InvalidRequest(str(e))

    command = tokens[0]
    if command == "create-account":
        return CreateAccount(tokens[1], _parse_int(tokens[2]))
    if command == "transfer":
        return Transfer(tokens[1], tokens[2], _parse_int(tokens[3]))
    if command == "balance":
        return BalanceQuery(tokens[1])
    return Exit()


# ============================================================================
# DISPATCH AND RENDERING
# ============================================================================

def dispatch(ledger: Ledger, request: Request) -> Any:
    """
    Run a request against the ledger.

    Returns:
        CreateResult for CreateAccount, SubmitResult for Transfer,
        Optional[int] for BalanceQuery, None for Exit and InvalidRequest.
    """
    if isinstance(request, CreateAccount):
        return ledger.create_account(request.id, request.balance)
    if isinstance(request, Transfer):
        return ledger.submit(request.source, request.dest, request.amount)
    if isinstance(request, BalanceQuery):
        return ledger.get_balance(request.id)
    return None


def render(request: Request, outcome: Any) -> str:
    """Render a request's outcome as one line of text."""
    if isinstance(request, InvalidRequest):
        return f"Invalid command ({request.reason})."
    if isinstance(request, Exit):
        return "Goodbye."

    if isinstance(request, CreateAccount):
        if outcome is CreateResult.CREATED:
            return f"Account created successfully with id: {request.id}"
        if outcome is CreateResult.ACCOUNT_ALREADY_EXISTS:
            return "Account already exists!"
        if outcome is CreateResult.INVALID_ID:
            return f"Invalid account id: {request.id!r}"
        return f"Invalid opening balance: {request.balance}"

    if isinstance(request, Transfer):
        if outcome is SubmitResult.QUEUED:
            return (
                f"Transfer of {request.amount} from {request.source} to {request.dest} "
                f"queued for confirmation."
            )
        if outcome is SubmitResult.INSUFFICIENT_FUNDS:
            return "Insufficient funds."
        if outcome is SubmitResult.ACCOUNT_NOT_FOUND:
            return "One or both accounts not found."
        return "Invalid amount: transfers must be a positive integer."

    if outcome is None:
        return "Account not found."
    return f"Balance of {request.id}: {outcome}"


def handle_line(ledger: Ledger, line: str) -> Tuple[Request, str]:
    """Parse, dispatch and render one line. Returns the request and the message."""
    request = parse_command(line)
    outcome = dispatch(ledger, request)
    return request, render(request, outcome)
