"""Portfolio-level figures for dashboard and statistics views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from ledger_engine.engine.balance import BalanceCache, balance_of, installments_needed
from ledger_engine.engine.classifier import is_settlement
from ledger_engine.engine.status import resolve_status
from ledger_engine.models import (
    Obligation,
    ObligationKind,
    ObligationStatus,
    PeriodStatus,
    YearMonth,
)

ZERO = Decimal("0")

# Lending is money owed to the user; its settlements are income, not outflow
OUTFLOW_KINDS = (ObligationKind.LOAN, ObligationKind.CREDIT_CARD, ObligationKind.FIXED_EXPENSE)


@dataclass(frozen=True)
class PortfolioTotals:
    """Aggregate balance figures across a set of obligations."""

    total_principal: Decimal
    total_paid: Decimal
    total_remaining: Decimal
    count_active: int
    count_completed: int


@dataclass(frozen=True)
class DueItem:
    """An obligation still to be paid in the current period."""

    obligation_id: str
    name: str
    kind: ObligationKind
    amount: Decimal
    due_day: int
    overdue: bool
    provider: str | None = None


def portfolio_totals(
    obligations: Iterable[Obligation],
    cache: BalanceCache | None = None,
) -> PortfolioTotals:
    """Sum principal, paid and remaining over every obligation."""
    principal = paid = remaining = ZERO
    active = completed = 0
    for obligation in obligations:
        balance = balance_of(obligation, cache)
        principal += balance.effective_principal
        paid += balance.paid_to_date
        remaining += balance.remaining
        if obligation.status == ObligationStatus.COMPLETED:
            completed += 1
        else:
            active += 1
    return PortfolioTotals(
        total_principal=principal,
        total_paid=paid,
        total_remaining=remaining,
        count_active=active,
        count_completed=completed,
    )


def unpaid_this_period(
    obligations: Iterable[Obligation],
    today: date | None = None,
) -> list[DueItem]:
    """Active obligations not yet paid this month, overdue ones first.

    Within each group items are ordered by due day.
    """
    today = today or date.today()
    result = []
    for obligation in obligations:
        if not obligation.is_active:
            continue
        status = resolve_status(obligation, today)
        if status not in (PeriodStatus.UNPAID, PeriodStatus.OVERDUE):
            continue
        result.append(
            DueItem(
                obligation_id=obligation.obligation_id,
                name=obligation.name,
                kind=obligation.kind,
                amount=obligation.recurring_amount,
                due_day=obligation.due_day,
                overdue=status == PeriodStatus.OVERDUE,
                provider=obligation.provider,
            )
        )
    return sorted(result, key=lambda item: (not item.overdue, item.due_day))


def monthly_outflow(
    obligations: Iterable[Obligation],
    period: YearMonth,
) -> dict[ObligationKind, Decimal]:
    """Settlements dated in ``period``, totalled per obligation kind."""
    totals = {kind: ZERO for kind in OUTFLOW_KINDS}
    for obligation in obligations:
        if obligation.kind not in totals:
            continue
        totals[obligation.kind] += sum(
            (e.amount for e in obligation.entries if is_settlement(e) and period.contains(e.date)),
            ZERO,
        )
    return totals


def outflow_trend(
    obligations: Iterable[Obligation],
    end: YearMonth,
    months: int = 6,
) -> list[tuple[YearMonth, Decimal]]:
    """Total outflow for the ``months`` months ending with ``end``, oldest first."""
    snapshot = list(obligations)
    trend = []
    for offset in range(months - 1, -1, -1):
        period = end.add(-offset)
        trend.append((period, sum(monthly_outflow(snapshot, period).values(), ZERO)))
    return trend


def paid_periods(obligation: Obligation, cache: BalanceCache | None = None) -> int:
    """Installments covered by what has been paid so far."""
    if obligation.recurring_amount <= 0:
        return 0
    return int(balance_of(obligation, cache).paid_to_date // obligation.recurring_amount)


def final_payment_month(
    obligation: Obligation,
    today: date | None = None,
    cache: BalanceCache | None = None,
) -> YearMonth | None:
    """Month of the last installment at the current pace.

    Counting starts in the current month, or the next one when this
    period's installment is already paid. ``None`` when nothing is owed
    or there is no installment.
    """
    if obligation.recurring_amount <= 0:
        return None
    today = today or date.today()
    periods = installments_needed(balance_of(obligation, cache).remaining, obligation.recurring_amount)
    if periods == 0:
        return None
    first = YearMonth.of(today)
    if resolve_status(obligation, today) == PeriodStatus.PAID_THIS_PERIOD:
        first = first.add(1)
    return first.add(periods - 1)
