#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Ledger Step by Step

Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3: Foundation   - Accounts, queued transfers, confirmation
  4-5: Rejections   - Validation at submission, the reservation policy
  6:   Background   - The confirmation scheduler

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys
import time

from blockledger import (
    Ledger, ConfirmationScheduler, ReservationPolicy, SubmitResult,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    alice_initial: int = 100
    bob_initial: int = 50
    transfer_amount: int = 30
    scheduler_interval: float = 0.5


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


# ============================================================================
# STEPS
# ============================================================================

def step_01_accounts():
    step_header(1, "Creating Accounts",
        "Accounts are named integer balances, created once and never renamed.")

    print(">>> ledger = Ledger('tutorial')")
    ledger = Ledger("tutorial", verbose=True)
    print(f">>> ledger.create_account('Alice', {CONFIG.alice_initial})")
    ledger.create_account("Alice", CONFIG.alice_initial)
    print(f">>> ledger.create_account('Bob', {CONFIG.bob_initial})")
    ledger.create_account("Bob", CONFIG.bob_initial)
    print(">>> ledger.create_account('Alice', 999)")
    result = ledger.create_account("Alice", 999)
    print(f"Result: {result}, Alice still has {ledger.get_balance('Alice')}")
    return ledger


def step_02_queue_transfer(ledger: Ledger):
    step_header(2, "Queueing a Transfer",
        "Submitting a transfer validates it but does NOT move any money yet.")

    print(f">>> ledger.submit('Alice', 'Bob', {CONFIG.transfer_amount})")
    ledger.submit("Alice", "Bob", CONFIG.transfer_amount)

    section_header("State Before Confirmation")
    print(f"Alice confirmed: {ledger.get_balance('Alice')}")
    print(f"Alice available: {ledger.available_balance('Alice')}")
    print(f"Bob confirmed:   {ledger.get_balance('Bob')}")
    print(f"Pending intents: {ledger.pending()}")


def step_03_confirm(ledger: Ledger):
    step_header(3, "Confirmation",
        "confirm() drains the queue, applies every intent, and appends a Record.")

    print(">>> ledger.confirm()")
    confirmation = ledger.confirm()
    print(f"Result: {confirmation.result}, record: {confirmation.record!r}")
    print(f"Alice: {ledger.get_balance('Alice')}, Bob: {ledger.get_balance('Bob')}")

    print("\n>>> ledger.confirm()   # nothing pending")
    print(f"Result: {ledger.confirm().result}")

    section_header("Conservation")
    print(ledger.verify_conservation())


def step_04_rejections(ledger: Ledger):
    step_header(4, "Rejected Submissions",
        "Bad amounts, unknown accounts and overdrafts never reach the queue.")

    for args in [("Alice", "Bob", 0), ("Alice", "Carol", 10), ("Bob", "Bob", 1_000)]:
        print(f">>> ledger.submit{args}")
        print(f"Result: {ledger.submit(*args)}")
    print(f"\nPending intents: {ledger.pending_count()}")


def step_05_reservations():
    step_header(5, "Reservation Policy",
        "Two pending debits cannot jointly overdraw an account under RESERVED.")

    for policy in ReservationPolicy:
        section_header(policy.name)
        ledger = Ledger(f"demo-{policy.value}", policy=policy, verbose=False)
        ledger.create_account("Alice", 20)
        ledger.create_account("Bob", 0)
        first = ledger.submit("Alice", "Bob", 15)
        second = ledger.submit("Alice", "Bob", 15)
        ledger.confirm()
        print(f"first={first.name}, second={second.name}, "
              f"Alice after confirm={ledger.get_balance('Alice')}")


def step_06_scheduler(ledger: Ledger):
    step_header(6, "Background Confirmation",
        "A ConfirmationScheduler confirms on a fixed interval in its own thread.")

    with ConfirmationScheduler(ledger, interval=CONFIG.scheduler_interval) as scheduler:
        assert ledger.submit("Bob", "Alice", 5) is SubmitResult.QUEUED
        time.sleep(CONFIG.scheduler_interval * 2.5)

    print(f"Ticks: {scheduler.ticks}, records minted by the timer: {len(scheduler.minted)}")
    print(f"History: {ledger.history()}")


def main():
    print("=" * 70)
    print("       BLOCKLEDGER TUTORIAL")
    print("=" * 70)

    ledger = step_01_accounts()
    wait_for_enter()
    step_02_queue_transfer(ledger)
    wait_for_enter()
    step_03_confirm(ledger)
    wait_for_enter()
    step_04_rejections(ledger)
    wait_for_enter()
    step_05_reservations()
    wait_for_enter()
    step_06_scheduler(ledger)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print("""
    Next steps:
      - Run the interactive ledger: python -m blockledger --interval 5
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
