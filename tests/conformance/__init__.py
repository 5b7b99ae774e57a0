"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the ledger.

The tests are organized by invariant:
1. test_conservation.py - Balance deltas and total supply under confirmation
2. test_ordering.py - Arrival-order application and exact batch draining
3. test_atomicity.py - Concurrent submitters against a running scheduler
4. test_validation.py - Rejected submissions never reach the queue

These tests use hypothesis for property-based testing.
"""
