"""Tests for ObligationStore."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledger_engine.exceptions import InvalidObligationStateError, ObligationNotFoundError
from ledger_engine.models import (
    EntryKind,
    LedgerEntry,
    Obligation,
    ObligationKind,
    ObligationStatus,
    PeriodStatus,
)
from ledger_engine.store import ObligationStore


@pytest.fixture
def store(sample_loan: Obligation, sample_card: Obligation, sample_lending: Obligation) -> ObligationStore:
    """Store holding a loan, a card and a lending."""
    store = ObligationStore()
    for obligation in (sample_loan, sample_card, sample_lending):
        store.add_obligation(obligation)
    return store


class TestObligationStore:
    """Tests for store mutations and lookups."""

    def test_add_and_get(self, store: ObligationStore, sample_loan: Obligation) -> None:
        """Test obligations can be fetched by id."""
        assert store.get("loan-test-001") == sample_loan
        assert len(store.snapshot()) == 3

    def test_get_missing(self, store: ObligationStore) -> None:
        """Test unknown ids raise."""
        with pytest.raises(ObligationNotFoundError, match="missing"):
            store.get("missing")

    def test_add_migrates_legacy_entries(self, sample_loan: Obligation) -> None:
        """Test legacy untagged entries are stamped on insert."""
        store = ObligationStore()
        legacy = replace(
            sample_loan,
            entries=(
                LedgerEntry("e-1", date(2026, 9, 10), Decimal("1000000")),
                LedgerEntry("borrow-1", date(2026, 9, 12), Decimal("500000")),
            ),
        )

        store.add_obligation(legacy)

        assert [e.kind for e in store.get(sample_loan.obligation_id).entries] == [
            EntryKind.SETTLEMENT,
            EntryKind.PRINCIPAL_ADJUSTMENT,
        ]

    def test_remove_obligation(self, store: ObligationStore) -> None:
        """Test removal returns the removed obligation."""
        removed = store.remove_obligation("card-test-001")

        assert removed.name == "Visa"
        with pytest.raises(ObligationNotFoundError):
            store.get("card-test-001")

    def test_snapshots_are_immutable(self, store: ObligationStore) -> None:
        """Test earlier snapshots are unaffected by later mutations."""
        before = store.snapshot()

        store.record_payment("loan-test-001", Decimal("1000000"), on=date(2026, 10, 1))

        assert before[0].entries == ()
        assert len(store.get("loan-test-001").entries) == 1

    def test_add_entry_tags_untagged(self, store: ObligationStore) -> None:
        """Test entries added without a kind become settlements."""
        store.add_entry("loan-test-001", LedgerEntry("borrow-x", date(2026, 9, 1), Decimal("1")))

        assert store.get("loan-test-001").entries[0].kind == EntryKind.SETTLEMENT

    def test_record_payment(self, store: ObligationStore) -> None:
        """Test a recorded payment reduces the balance."""
        entry = store.record_payment("card-test-001", Decimal("500000"), on=date(2026, 10, 3), note="Partial")

        assert entry.kind == EntryKind.SETTLEMENT
        assert entry.note == "Partial"
        assert store.balance("card-test-001").remaining == Decimal("2500000")

    def test_record_principal_increase(self, store: ObligationStore) -> None:
        """Test borrowing more raises the principal and uses a prefixed id."""
        entry = store.record_principal_increase("loan-test-001", Decimal("2000000"), on=date(2026, 10, 2))

        balance = store.balance("loan-test-001")
        assert entry.entry_id.startswith("borrow-")
        assert entry.kind == EntryKind.PRINCIPAL_ADJUSTMENT
        assert balance.effective_principal == Decimal("14000000")
        assert balance.paid_to_date == Decimal("0")
        assert store.get("loan-test-001").origin_amount == Decimal("12000000")

    def test_lend_more_prefix(self, store: ObligationStore) -> None:
        """Test lending more uses the lend- prefix."""
        entry = store.record_principal_increase("lend-test-001", Decimal("300000"))

        assert entry.entry_id.startswith("lend-")
        assert store.balance("lend-test-001").remaining == Decimal("2300000")

    def test_increase_on_completed_rejected(self, store: ObligationStore) -> None:
        """Test completed obligations cannot be increased."""
        store.mark_completed("loan-test-001")

        with pytest.raises(InvalidObligationStateError):
            store.record_principal_increase("loan-test-001", Decimal("1"))

    def test_remove_entries(self, store: ObligationStore) -> None:
        """Test entries are dropped by id and unknown ids ignored."""
        first = store.record_payment("loan-test-001", Decimal("1000000"), on=date(2026, 8, 10))
        store.record_payment("loan-test-001", Decimal("1000000"), on=date(2026, 9, 10))

        updated = store.remove_entries("loan-test-001", [first.entry_id, "nope"])

        assert len(updated.entries) == 1
        assert store.balance("loan-test-001").paid_to_date == Decimal("1000000")

    def test_toggle_period_payment(self, store: ObligationStore, today: date) -> None:
        """Test the toggle round trip through the store."""
        paid = store.toggle_period_payment("loan-test-001", today)

        assert paid.to_status == PeriodStatus.PAID_THIS_PERIOD
        assert store.balance("loan-test-001").remaining == Decimal("11000000")

        unpaid = store.toggle_period_payment("loan-test-001", today)

        assert unpaid.to_status == PeriodStatus.OVERDUE
        assert store.get("loan-test-001").entries == ()
        assert store.balance("loan-test-001").remaining == Decimal("12000000")

    def test_toggle_not_applicable_rejected(self, store: ObligationStore, today: date) -> None:
        """Test toggling an obligation with no period status raises."""
        with pytest.raises(InvalidObligationStateError):
            store.toggle_period_payment("lend-test-001", today)

    def test_complete_and_restore(self, store: ObligationStore) -> None:
        """Test status changes."""
        assert store.mark_completed("card-test-001").status == ObligationStatus.COMPLETED
        assert len(store.active()) == 2

        assert store.restore("card-test-001").is_active
        assert len(store.active()) == 3

    def test_by_kind(self, store: ObligationStore) -> None:
        """Test filtering by kind."""
        assert [o.obligation_id for o in store.by_kind(ObligationKind.CREDIT_CARD)] == ["card-test-001"]
        assert store.by_kind(ObligationKind.FIXED_EXPENSE) == []

    def test_summary(self, store: ObligationStore) -> None:
        """Test summary counts."""
        store.record_payment("loan-test-001", Decimal("1000000"))

        assert store.summary() == {
            "loan": 1,
            "credit_card": 1,
            "fixed_expense": 0,
            "lending": 1,
            "active": 3,
            "entries": 1,
        }

    def test_balance_uses_cache(self, store: ObligationStore) -> None:
        """Test balances are memoized until the ledger changes."""
        store.balance("loan-test-001")
        store.balance("loan-test-001")

        assert store.balance_cache.hits == 1

        store.record_payment("loan-test-001", Decimal("1000000"))
        store.balance("loan-test-001")

        assert store.balance_cache.misses == 2

    def test_cache_stays_bounded(self, store: ObligationStore, today: date) -> None:
        """Test repeated mutations keep one cached balance per obligation."""
        for _ in range(4):
            store.toggle_period_payment("loan-test-001", today)
            store.balance("loan-test-001")
        store.balance("card-test-001")

        assert len(store.balance_cache) == 2

        store.remove_obligation("card-test-001")

        assert len(store.balance_cache) == 1

    def test_toggle_logs_obligation_context(
        self, store: ObligationStore, today: date, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test store log records carry the obligation and status change."""
        with caplog.at_level(logging.DEBUG, logger="ledger_engine.store"):
            store.toggle_period_payment("loan-test-001", today)

        toggled = [r for r in caplog.records if r.getMessage().startswith("Toggled")]
        assert len(toggled) == 1
        assert toggled[0].obligation_id == "loan-test-001"
        assert toggled[0].from_status == "OVERDUE"
        assert toggled[0].to_status == "PAID_THIS_PERIOD"

    def test_unknown_id_mutations_raise(self, store: ObligationStore) -> None:
        """Test every mutation rejects unknown ids."""
        with pytest.raises(ObligationNotFoundError):
            store.record_payment("ghost", Decimal("1"))
        with pytest.raises(ObligationNotFoundError):
            store.remove_entries("ghost", [])
        with pytest.raises(ObligationNotFoundError):
            store.mark_completed("ghost")
