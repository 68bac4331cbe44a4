"""Household ledger scenario: a realistic mix of obligations with history."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any

from ledger_engine.config import GeneratorConfig
from ledger_engine.engine.projector import project_schedule
from ledger_engine.engine.status import period_status_reports
from ledger_engine.engine.summary import portfolio_totals, unpaid_this_period
from ledger_engine.generators import ObligationGenerator, PaymentBehavior
from ledger_engine.models import ObligationKind, PeriodStatus
from ledger_engine.store import ObligationStore

logger = logging.getLogger(__name__)


class HouseholdLedgerScenario:
    """Generate one household's obligations and their payment history.

    This scenario creates:
    - Bank loans with a fixed term, some already part-paid
    - Credit cards with a minimum monthly payment
    - Fixed monthly expenses (rent, utilities, subscriptions)
    - Money lent to friends and family
    """

    def __init__(
        self,
        num_loans: int = 3,
        num_cards: int = 2,
        num_expenses: int = 4,
        num_lendings: int = 1,
        seed: int | None = None,
        reference_date: date | None = None,
        *,
        config: GeneratorConfig | None = None,
    ) -> None:
        """Initialize household scenario.

        Parameters
        ----------
        num_loans : int
            Number of bank loans.
        num_cards : int
            Number of credit cards.
        num_expenses : int
            Number of fixed monthly expenses.
        num_lendings : int
            Number of lendings.
        seed : int | None
            Random seed for reproducibility.
        reference_date : date | None
            "Today" for the generated history (defaults to the host clock).
        config : GeneratorConfig | None
            Locale, history length and payment behavior rates.
        """
        self.counts = {
            ObligationKind.LOAN: num_loans,
            ObligationKind.CREDIT_CARD: num_cards,
            ObligationKind.FIXED_EXPENSE: num_expenses,
            ObligationKind.LENDING: num_lendings,
        }
        self.seed = seed
        self.reference_date = reference_date or date.today()
        self.config = config or GeneratorConfig()

        self.store = ObligationStore()
        self._obligation_gen = ObligationGenerator(
            seed=seed,
            locale=self.config.locale,
            reference_date=self.reference_date,
        )
        self._payment_behavior = PaymentBehavior(
            seed=seed,
            on_time_rate=self.config.on_time_rate,
            missed_rate=self.config.missed_rate,
            borrow_more_rate=self.config.borrow_more_rate,
            locale=self.config.locale,
        )

    def generate(self) -> ObligationStore:
        """Generate all obligations and their ledgers.

        Returns
        -------
        ObligationStore
            Store containing the generated household.
        """
        logger.info(
            "Starting household scenario: %s",
            ", ".join(f"{count} {kind.value.lower()}" for kind, count in self.counts.items()),
        )

        for kind, count in self.counts.items():
            for obligation in self._obligation_gen.generate_batch(count, kind):
                entries = self._payment_behavior.history(
                    obligation,
                    self.config.history_months,
                    self.reference_date,
                )
                self.store.add_obligation(replace(obligation, entries=entries))

        logger.info(
            "Generated %d obligations with %d ledger entries",
            len(self.store.obligations),
            self.store.summary()["entries"],
        )
        return self.store

    def get_summary(self) -> dict[str, Any]:
        """Headline figures for the generated household."""
        snapshot = self.store.snapshot()
        totals = portfolio_totals(snapshot, self.store.balance_cache)
        schedule = project_schedule(
            snapshot, self.reference_date, cache=self.store.balance_cache
        )
        reports = period_status_reports(snapshot, self.reference_date, self.store.balance_cache)
        return {
            "obligations": len(snapshot),
            "total_principal": totals.total_principal,
            "total_paid": totals.total_paid,
            "total_remaining": totals.total_remaining,
            "months_to_debt_free": len(schedule),
            "schedule_incomplete": schedule.incomplete,
            "unpaid_this_period": len(unpaid_this_period(snapshot, self.reference_date)),
            "status_distribution": {
                status.value: sum(1 for r in reports if r.status == status)
                for status in PeriodStatus
                if status != PeriodStatus.NOT_APPLICABLE
            },
        }
