"""Monthly remaining-balance series for multi-obligation charts.

Each month of the shared timeline gets a balance computed one of three
ways, and the three meet at the current month:

* past months replay the ledger: effective principal minus every
  settlement dated on or before the end of that month;
* the current month is the live remaining balance;
* future months decay from the current balance by one installment per
  month, reaching zero no later than the contractual end.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from ledger_engine.engine.balance import BalanceCache, balance_of, installments_needed
from ledger_engine.engine.classifier import is_settlement
from ledger_engine.models import BalanceSeries, Obligation, YearMonth

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def is_installment_obligation(obligation: Obligation) -> bool:
    """ACTIVE, with an installment, a term and a start date."""
    return (
        obligation.is_active
        and obligation.recurring_amount > 0
        and bool(obligation.term_periods)
        and obligation.term_periods > 0
        and obligation.start_date is not None
    )


def contractual_end(obligation: Obligation) -> YearMonth:
    """Start month plus the contractual number of periods."""
    return YearMonth.of(obligation.start_date).add(obligation.term_periods)


def projected_payoff_month(
    obligation: Obligation,
    today: date | None = None,
    cache: BalanceCache | None = None,
) -> YearMonth:
    """First month whose projected balance is zero.

    Remaining periods are ``ceil(remaining / installment)`` counted from
    the current month, capped by the month after the contractual end.
    An obligation starting later pays its first installment in its start
    month, so the count runs from the month before it. A settled
    obligation pays off in the current month, or its start month if later.
    """
    current = YearMonth.of(today or date.today())
    start = YearMonth.of(obligation.start_date) if obligation.start_date is not None else None
    remaining = balance_of(obligation, cache).remaining
    if remaining <= 0:
        return current if start is None else max(current, start)
    anchor = current if start is None or start <= current else start.add(-1)
    payoff = anchor.add(installments_needed(remaining, obligation.recurring_amount))
    if obligation.term_periods and obligation.start_date is not None:
        payoff = min(payoff, max(current.add(1), contractual_end(obligation).add(1)))
    return payoff


def historical_balance(obligation: Obligation, principal: Decimal, period: YearMonth) -> Decimal:
    """Balance at the end of a past month, replayed from the ledger."""
    paid = sum(
        (
            e.amount
            for e in obligation.entries
            if is_settlement(e) and YearMonth.of(e.date) <= period
        ),
        ZERO,
    )
    return max(ZERO, principal - paid)


def obligation_series(
    obligation: Obligation,
    months: list[YearMonth],
    current: YearMonth,
    cache: BalanceCache | None = None,
) -> list[Decimal]:
    """Balances of one obligation over ``months``."""
    balance = balance_of(obligation, cache)
    start = YearMonth.of(obligation.start_date)
    end = contractual_end(obligation)

    values: list[Decimal] = []
    projected = balance.remaining
    for period in months:
        if period < start:
            value = obligation.origin_amount
        elif period == current:
            value = balance.remaining
        elif period < current:
            value = historical_balance(obligation, balance.effective_principal, period)
        elif period > end:
            value = ZERO
        else:
            projected = max(ZERO, projected - obligation.recurring_amount)
            value = projected
        values.append(value)
    return values


def _disambiguated_labels(obligations: list[Obligation]) -> dict[str, str]:
    """Display labels keyed by id; repeated names get a numeric suffix."""
    seen: dict[str, int] = {}
    labels: dict[str, str] = {}
    for obligation in obligations:
        count = seen.get(obligation.name, 0) + 1
        seen[obligation.name] = count
        labels[obligation.obligation_id] = (
            obligation.name if count == 1 else f"{obligation.name} ({count})"
        )
    return labels


def generate_balance_series(
    obligations: Iterable[Obligation],
    today: date | None = None,
    cache: BalanceCache | None = None,
) -> BalanceSeries:
    """Build the shared-timeline balance series for installment obligations.

    The timeline runs from the earliest contractual start month to the
    later of the current month and the last projected payoff month. When
    every selected obligation starts in the future the current month is
    not on the timeline.
    """
    today = today or date.today()
    current = YearMonth.of(today)
    selected = [o for o in obligations if is_installment_obligation(o)]
    if not selected:
        return BalanceSeries()

    first = min(YearMonth.of(o.start_date) for o in selected)
    last = max([current] + [projected_payoff_month(o, today, cache) for o in selected])
    months = [first.add(i) for i in range(first.months_until(last) + 1)]

    logger.debug(
        "Balance series for %d obligations over %d months (%s..%s)",
        len(selected),
        len(months),
        first,
        last,
    )

    return BalanceSeries(
        months=months,
        balances={
            o.obligation_id: obligation_series(o, months, current, cache) for o in selected
        },
        labels=_disambiguated_labels(selected),
    )
