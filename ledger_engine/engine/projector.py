"""Forward payment schedule across many obligations.

The projector starts every obligation from its true current balance (not
from how many installments the contract originally defined) and walks
forward month by month, paying the installment, or the whole balance in a
month named by an :class:`EarlySettlementOverride`, until every balance is
zero or the horizon cap is reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from ledger_engine.config import DEFAULT_HORIZON_MONTHS
from ledger_engine.engine.balance import BalanceCache, balance_of
from ledger_engine.models import (
    AmortizationSchedule,
    EarlySettlementOverride,
    MonthlyScheduleEntry,
    Obligation,
    ScheduleLineItem,
    YearMonth,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class _ScheduledObligation:
    """Mutable projection state for one obligation; never exposed."""

    obligation: Obligation
    remaining: Decimal
    settle_in: YearMonth | None = None
    starts_in: YearMonth | None = None


def schedulable_obligations(obligations: Iterable[Obligation]) -> list[Obligation]:
    """ACTIVE obligations with a positive installment, in input order."""
    return [o for o in obligations if o.is_active and o.recurring_amount > 0]


def _override_map(
    overrides: Iterable[EarlySettlementOverride],
    known_ids: set[str],
    current: YearMonth,
) -> dict[str, YearMonth]:
    """Earliest override month per obligation; stale or unknown ones dropped."""
    mapping: dict[str, YearMonth] = {}
    for override in overrides:
        if override.obligation_id not in known_ids:
            logger.debug(
                "Override for unknown obligation %s ignored",
                override.obligation_id,
                extra={"obligation_id": override.obligation_id},
            )
            continue
        if override.period < current:
            logger.debug(
                "Override for %s targets past month %s, ignored",
                override.obligation_id,
                override.period,
                extra={"obligation_id": override.obligation_id, "period": override.period},
            )
            continue
        existing = mapping.get(override.obligation_id)
        if existing is None or override.period < existing:
            mapping[override.obligation_id] = override.period
    return mapping


def project_schedule(
    obligations: Sequence[Obligation],
    today: date | None = None,
    overrides: Iterable[EarlySettlementOverride] = (),
    simulated: Sequence[Obligation] = (),
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    cache: BalanceCache | None = None,
) -> AmortizationSchedule:
    """Project the month-by-month payment plan.

    Parameters
    ----------
    obligations : Sequence[Obligation]
        Snapshot of the ledger. Inactive and zero-installment obligations
        are skipped.
    today : date | None
        Reference date; the plan starts in its month.
    overrides : Iterable[EarlySettlementOverride]
        What-if early payoffs. In the target month the obligation pays its
        whole remaining balance and contributes nothing afterwards.
    simulated : Sequence[Obligation]
        Hypothetical obligations that contribute only from their
        ``start_date`` month onwards.
    horizon_months : int
        Hard cap on projected months.
    cache : BalanceCache | None
        Optional balance memo shared with other consumers.

    Returns
    -------
    AmortizationSchedule
        Entries for months with a positive total, in chronological order.
        ``incomplete`` is set when the cap cut the plan short.
    """
    current = YearMonth.of(today or date.today())

    states: list[_ScheduledObligation] = []
    candidates = [(o, False) for o in obligations] + [(o, True) for o in simulated]
    for obligation, is_simulated in candidates:
        if not obligation.is_active:
            continue
        if obligation.recurring_amount <= 0:
            # A zero installment would never amortize and spin to the cap
            logger.debug(
                "Skipping %s: no positive installment",
                obligation.obligation_id,
                extra={"obligation_id": obligation.obligation_id},
            )
            continue
        states.append(
            _ScheduledObligation(
                obligation=obligation,
                remaining=balance_of(obligation, cache).remaining,
                starts_in=(
                    YearMonth.of(obligation.start_date)
                    if is_simulated and obligation.start_date is not None
                    else None
                ),
            )
        )

    settle_map = _override_map(
        overrides, {s.obligation.obligation_id for s in states}, current
    )
    for state in states:
        state.settle_in = settle_map.get(state.obligation.obligation_id)

    logger.debug(
        "Projecting %d obligations from %s with %d overrides",
        len(states),
        current,
        len(settle_map),
    )

    schedule = AmortizationSchedule(horizon_months=horizon_months)
    for month_offset in range(horizon_months):
        target = current.add(month_offset)

        if all(s.remaining <= 0 for s in states):
            break

        items: list[ScheduleLineItem] = []
        for state in states:
            if state.remaining <= 0:
                continue
            if state.starts_in is not None and target < state.starts_in:
                continue

            if state.settle_in == target:
                payment = state.remaining
            else:
                payment = min(state.remaining, state.obligation.recurring_amount)

            state.remaining -= payment
            if payment > 0:
                items.append(
                    ScheduleLineItem(
                        obligation_id=state.obligation.obligation_id,
                        name=state.obligation.name,
                        amount_due=payment,
                        remaining_after=state.remaining,
                    )
                )

        total = sum((item.amount_due for item in items), ZERO)
        if total > 0:
            schedule.entries.append(MonthlyScheduleEntry(period=target, total_due=total, items=items))

    if any(s.remaining > 0 for s in states):
        schedule.incomplete = True
        logger.warning(
            "Schedule truncated at %d months with %s still outstanding",
            horizon_months,
            sum((s.remaining for s in states), ZERO),
        )

    return schedule
