"""Synthetic obligations and payment histories."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterator

from ledger_engine.generators.base import BaseGenerator
from ledger_engine.models import (
    EntryKind,
    LedgerEntry,
    Obligation,
    ObligationKind,
    YearMonth,
)


class ObligationGenerator(BaseGenerator):
    """Generate loans, credit cards, fixed expenses and lendings."""

    FIXED_EXPENSE_NAMES = [
        "Rent",
        "Electricity",
        "Water",
        "Internet",
        "Mobile plan",
        "Gym membership",
        "Insurance",
        "School fees",
    ]

    # Installment amounts, in whole currency units
    LOAN_INSTALLMENTS = (500_000, 20_000_000)
    CARD_MINIMUMS = (200_000, 5_000_000)
    EXPENSE_AMOUNTS = (100_000, 8_000_000)

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        reference_date: date | None = None,
    ) -> None:
        super().__init__(seed, locale)
        self.reference_date = reference_date or date.today()

    def _amount(self, bounds: tuple[int, int], step: int = 100_000) -> Decimal:
        low, high = bounds
        return Decimal(self.rng.randint(low // step, high // step) * step)

    def _started_months_ago(self, months: int) -> date:
        return YearMonth.of(self.reference_date).add(-months).first_day

    def generate_loan(self, term_periods: int | None = None) -> Obligation:
        """Generate a bank loan: fixed installment over a fixed term.

        The origin amount is installment times term, as a bank quotes it.
        """
        term = term_periods or self.rng.choice([6, 12, 18, 24, 36, 48, 60])
        installment = self._amount(self.LOAN_INSTALLMENTS)
        provider = self.fake.company()
        return Obligation(
            obligation_id=self.fake.uuid4(),
            name=f"{provider} loan",
            kind=ObligationKind.LOAN,
            origin_amount=installment * term,
            recurring_amount=installment,
            due_day=self.rng.randint(1, 28),
            term_periods=term,
            start_date=self._started_months_ago(self.rng.randint(0, term - 1)),
            provider=provider,
        )

    def generate_credit_card(self) -> Obligation:
        """Generate a card balance with a minimum monthly payment."""
        minimum = self._amount(self.CARD_MINIMUMS)
        provider = self.fake.company()
        return Obligation(
            obligation_id=self.fake.uuid4(),
            name=f"{provider} card",
            kind=ObligationKind.CREDIT_CARD,
            origin_amount=minimum * self.rng.randint(3, 20),
            recurring_amount=minimum,
            due_day=self.rng.randint(1, 28),
            provider=provider,
        )

    def generate_fixed_expense(self) -> Obligation:
        """Generate a monthly bill with no principal."""
        amount = self._amount(self.EXPENSE_AMOUNTS)
        return Obligation(
            obligation_id=self.fake.uuid4(),
            name=self.rng.choice(self.FIXED_EXPENSE_NAMES),
            kind=ObligationKind.FIXED_EXPENSE,
            origin_amount=Decimal("0"),
            recurring_amount=amount,
            due_day=self.rng.randint(1, 28),
        )

    def generate_lending(self) -> Obligation:
        """Generate money lent to someone, repaid informally."""
        borrower = self.fake.name()
        return Obligation(
            obligation_id=self.fake.uuid4(),
            name=f"Lent to {borrower}",
            kind=ObligationKind.LENDING,
            origin_amount=self._amount((1_000_000, 50_000_000)),
            recurring_amount=Decimal("0"),
            start_date=self._started_months_ago(self.rng.randint(0, 24)),
            provider=borrower,
        )

    def generate(self, kind: ObligationKind = ObligationKind.LOAN) -> Obligation:
        """Generate a single obligation of the given kind."""
        factories = {
            ObligationKind.LOAN: self.generate_loan,
            ObligationKind.CREDIT_CARD: self.generate_credit_card,
            ObligationKind.FIXED_EXPENSE: self.generate_fixed_expense,
            ObligationKind.LENDING: self.generate_lending,
        }
        return factories[kind]()

    def generate_batch(self, count: int, kind: ObligationKind = ObligationKind.LOAN) -> Iterator[Obligation]:
        """Generate multiple obligations.

        Parameters
        ----------
        count : int
            Number of obligations to generate.
        kind : ObligationKind
            Kind of every generated obligation.

        Yields
        ------
        Obligation
            Generated obligations.
        """
        for _ in range(count):
            yield self.generate(kind)


class PaymentBehavior:
    """Simulate how a household actually pays its obligations.

    Each past month is paid on time, paid late, paid in two parts, or
    missed. Occasionally the principal is increased (borrow more).
    """

    def __init__(
        self,
        seed: int | None = None,
        on_time_rate: float = 0.80,
        missed_rate: float = 0.10,
        borrow_more_rate: float = 0.05,
        locale: str = "en_US",
    ) -> None:
        self._gen = BaseGenerator(seed, locale)
        self.on_time_rate = on_time_rate
        self.missed_rate = missed_rate
        self.borrow_more_rate = borrow_more_rate

    def history(
        self,
        obligation: Obligation,
        months: int,
        reference_date: date | None = None,
    ) -> tuple[LedgerEntry, ...]:
        """Ledger entries for the ``months`` months before ``reference_date``.

        The current month is left unpaid so its status depends on the day.
        Months before the obligation's start date are skipped, and the
        history stops once the balance would be cleared.
        """
        rng = self._gen.rng
        current = YearMonth.of(reference_date or date.today())
        start = YearMonth.of(obligation.start_date) if obligation.start_date else None
        installment = obligation.recurring_amount
        outstanding = obligation.origin_amount

        entries: list[LedgerEntry] = []
        for offset in range(months, 0, -1):
            period = current.add(-offset)
            if start is not None and period < start:
                continue
            due_day = min(obligation.due_day or 1, period.last_day.day)

            if obligation.kind != ObligationKind.FIXED_EXPENSE and rng.random() < self.borrow_more_rate:
                extra = installment * rng.randint(1, 4) if installment > 0 else Decimal("1000000")
                outstanding += extra
                prefix = "lend" if obligation.kind == ObligationKind.LENDING else "borrow"
                entries.append(
                    LedgerEntry(
                        entry_id=f"{prefix}-{self._gen.fake.uuid4()}",
                        date=period.first_day,
                        amount=extra,
                        note="Borrowed more",
                        kind=EntryKind.PRINCIPAL_ADJUSTMENT,
                    )
                )

            if installment <= 0:
                continue
            if obligation.kind != ObligationKind.FIXED_EXPENSE and outstanding <= 0:
                break

            roll = rng.random()
            if roll < self.missed_rate:
                continue
            amount = installment
            if obligation.kind != ObligationKind.FIXED_EXPENSE:
                amount = min(amount, outstanding)
            paid_on = period.first_day.replace(day=due_day)
            if roll > self.missed_rate + self.on_time_rate:
                paid_on = period.last_day

            split = roll > 0.95 and amount > 1
            parts = [amount / 2, amount - amount / 2] if split else [amount]
            for part in parts:
                entries.append(
                    LedgerEntry(
                        entry_id=self._gen.fake.uuid4(),
                        date=paid_on,
                        amount=part,
                        note=f"Payment {period.label}",
                        kind=EntryKind.SETTLEMENT,
                    )
                )
            outstanding -= amount

        return tuple(entries)
