"""Tests for the household ledger scenario."""

from datetime import date
from decimal import Decimal

import pytest

from ledger_engine.config import GeneratorConfig
from ledger_engine.models import ObligationKind
from ledger_engine.scenarios import HouseholdLedgerScenario
from ledger_engine.store import ObligationStore


class TestHouseholdLedgerScenario:
    """Tests for HouseholdLedgerScenario."""

    @pytest.fixture
    def scenario(self, seed: int, today: date) -> HouseholdLedgerScenario:
        """Small seeded household."""
        return HouseholdLedgerScenario(
            num_loans=3,
            num_cards=2,
            num_expenses=4,
            num_lendings=1,
            seed=seed,
            reference_date=today,
        )

    def test_generate_counts(self, scenario: HouseholdLedgerScenario) -> None:
        """Test the requested number of each kind is generated."""
        store = scenario.generate()

        assert isinstance(store, ObligationStore)
        counts = store.summary()
        assert counts["loan"] == 3
        assert counts["credit_card"] == 2
        assert counts["fixed_expense"] == 4
        assert counts["lending"] == 1
        assert counts["active"] == 10
        assert counts["entries"] > 0

    def test_entries_are_tagged(self, scenario: HouseholdLedgerScenario) -> None:
        """Test every generated entry carries an explicit kind."""
        store = scenario.generate()

        assert all(e.kind is not None for o in store.snapshot() for e in o.entries)

    def test_reproducible(self, seed: int, today: date) -> None:
        """Test the same seed yields the same household."""
        first = HouseholdLedgerScenario(seed=seed, reference_date=today).generate().snapshot()
        second = HouseholdLedgerScenario(seed=seed, reference_date=today).generate().snapshot()

        assert first == second

    def test_custom_config(self, seed: int, today: date) -> None:
        """Test history length and behavior rates come from the config."""
        config = GeneratorConfig(history_months=3, missed_rate=0.0, on_time_rate=1.0, borrow_more_rate=0.0)
        scenario = HouseholdLedgerScenario(
            num_loans=0,
            num_cards=0,
            num_expenses=2,
            num_lendings=0,
            seed=seed,
            reference_date=today,
            config=config,
        )

        store = scenario.generate()

        for expense in store.by_kind(ObligationKind.FIXED_EXPENSE):
            assert sum(e.amount for e in expense.entries) == expense.recurring_amount * 3

    def test_get_summary(self, scenario: HouseholdLedgerScenario) -> None:
        """Test the headline figures."""
        scenario.generate()

        summary = scenario.get_summary()

        assert summary["obligations"] == 10
        assert summary["total_remaining"] <= summary["total_principal"]
        assert summary["total_paid"] >= Decimal("0")
        assert summary["months_to_debt_free"] >= 1
        assert summary["schedule_incomplete"] is False
        assert set(summary["status_distribution"]) == {"UNPAID", "PAID_THIS_PERIOD", "OVERDUE"}
        assert sum(summary["status_distribution"].values()) == 9

    def test_summary_of_empty_household(self, seed: int, today: date) -> None:
        """Test the summary before anything was generated."""
        scenario = HouseholdLedgerScenario(seed=seed, reference_date=today)

        summary = scenario.get_summary()

        assert summary["obligations"] == 0
        assert summary["months_to_debt_free"] == 0
