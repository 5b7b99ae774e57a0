"""
Conservation Conformance Tests

INVARIANT: Confirming a batch changes each account by exactly the net of the
intents that name it.

    ∀ batch B, account x:
        balance'(x) = balance(x) - Σ{amount | source = x} + Σ{amount | dest = x}

Transfers between existing accounts leave total supply unchanged; system
credits raise it by their amount.
"""

from hypothesis import given, settings, note
from hypothesis import strategies as st

from blockledger import Ledger, ReservationPolicy, SubmitResult

from tests.conftest import expected_deltas


ACCOUNTS = ["alice", "bob", "carol", "dave"]


# =============================================================================
# STRATEGIES FOR PROPERTY-BASED TESTING
# =============================================================================

opening_balances = st.fixed_dictionaries({
    name: st.integers(min_value=0, max_value=1_000) for name in ACCOUNTS
})

transfer = st.tuples(
    st.sampled_from(ACCOUNTS),
    st.sampled_from(ACCOUNTS),
    st.integers(min_value=1, max_value=500),
)

credit = st.tuples(
    st.sampled_from(ACCOUNTS),
    st.integers(min_value=1, max_value=500),
)


def _ledger(balances, policy=ReservationPolicy.RESERVED) -> Ledger:
    ledger = Ledger("conservation", policy=policy, verbose=False)
    for name, balance in balances.items():
        ledger.create_account(name, balance)
    return ledger


class TestConservationProperties:

    @given(opening_balances, st.lists(transfer, max_size=30))
    @settings(max_examples=100)
    def test_deltas_match_confirmed_intents(self, balances, transfers):
        """
        PROPERTY: Each account moves by exactly the net of the queued intents.
        """
        ledger = _ledger(balances)
        for source, dest, amount in transfers:
            ledger.submit(source, dest, amount)

        queued = ledger.pending()
        note(f"queued: {queued}")
        confirmation = ledger.confirm()

        if queued:
            assert confirmation.record.transactions == queued
        deltas = expected_deltas(queued)
        for name in ACCOUNTS:
            assert ledger.get_balance(name) == balances[name] + deltas.get(name, 0)

    @given(opening_balances, st.lists(transfer, max_size=30))
    @settings(max_examples=100)
    def test_transfers_preserve_total_supply(self, balances, transfers):
        """
        PROPERTY: Transfers between existing accounts never change the total.
        """
        ledger = _ledger(balances)
        total = sum(balances.values())
        for source, dest, amount in transfers:
            ledger.submit(source, dest, amount)
        ledger.confirm()
        assert ledger.total_supply() == total
        assert ledger.verify_conservation(expected_supply=total)['valid']

    @given(opening_balances, st.lists(transfer, max_size=30), st.lists(credit, max_size=10))
    @settings(max_examples=100)
    def test_credits_grow_supply_by_amount(self, balances, transfers, credits):
        """
        PROPERTY: System credits increase total supply by exactly their amount.
        """
        ledger = _ledger(balances)
        for source, dest, amount in transfers:
            ledger.submit(source, dest, amount)
        for dest, amount in credits:
            assert ledger.credit(dest, amount) is SubmitResult.QUEUED
        ledger.confirm()
        assert ledger.total_supply() == sum(balances.values()) + sum(a for _, a in credits)
        assert ledger.verify_conservation()['valid']

    @given(opening_balances, st.lists(st.lists(transfer, max_size=10), max_size=5))
    @settings(max_examples=100)
    def test_reserved_policy_never_overdraws(self, balances, batches):
        """
        PROPERTY: Under RESERVED, no balance is negative after any confirmation.
        """
        ledger = _ledger(balances)
        for batch in batches:
            for source, dest, amount in batch:
                ledger.submit(source, dest, amount)
            ledger.confirm()
            for name in ACCOUNTS:
                assert ledger.get_balance(name) >= 0

    @given(opening_balances, st.lists(transfer, max_size=30))
    @settings(max_examples=100)
    def test_legacy_policy_still_conserves(self, balances, transfers):
        """
        PROPERTY: LEGACY may overdraw, but it still only redistributes value.
        """
        ledger = _ledger(balances, policy=ReservationPolicy.LEGACY)
        for source, dest, amount in transfers:
            ledger.submit(source, dest, amount)
        ledger.confirm()
        assert ledger.total_supply() == sum(balances.values())


class TestConservationExamples:

    def test_sum_per_source(self):
        ledger = _ledger({"alice": 100, "bob": 0, "carol": 0, "dave": 0})
        ledger.submit("alice", "bob", 10)
        ledger.submit("alice", "carol", 20)
        ledger.submit("alice", "bob", 5)
        ledger.confirm()
        assert ledger.get_balance("alice") == 65
        assert ledger.get_balance("bob") == 15
        assert ledger.get_balance("carol") == 20
