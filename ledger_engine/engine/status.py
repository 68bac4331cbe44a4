"""Current-period payment status of recurring obligations.

An obligation with a positive installment and a due day is, for the
calendar month containing ``today``, in exactly one of three states::

    UNPAID  --(day passes due_day)-->  OVERDUE
      |                                   |
      +------------ toggle ---------------+
                      |
                      v
              PAID_THIS_PERIOD  --toggle-->  UNPAID / OVERDUE

Paying appends one settlement for the installment amount; un-paying
retracts every settlement dated in the month, so several partial payments
made in the same period are undone together.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from ledger_engine.engine.balance import BalanceCache, balance_of
from ledger_engine.engine.classifier import is_settlement
from ledger_engine.models import EntryKind, LedgerEntry, Obligation, PeriodStatus, YearMonth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodTransition:
    """Ledger change produced by toggling an obligation's period status."""

    obligation_id: str
    from_status: PeriodStatus
    to_status: PeriodStatus
    added: LedgerEntry | None = None
    removed_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_noop(self) -> bool:
        return self.added is None and not self.removed_ids


@dataclass(frozen=True)
class PeriodStatusReport:
    """UI-facing status of one obligation for the current period."""

    obligation_id: str
    name: str
    status: PeriodStatus
    amount_due: Decimal
    due_day: int | None
    paid_to_date: Decimal
    remaining: Decimal
    paid_this_period: Decimal


def is_status_applicable(obligation: Obligation) -> bool:
    """Only obligations with an installment and a due day have a period status."""
    return obligation.recurring_amount > 0 and obligation.due_day is not None


def current_period_settlements(obligation: Obligation, today: date) -> list[LedgerEntry]:
    """Settlements dated in the calendar month containing ``today``."""
    period = YearMonth.of(today)
    return [e for e in obligation.entries if is_settlement(e) and period.contains(e.date)]


def resolve_status(obligation: Obligation, today: date | None = None) -> PeriodStatus:
    """Return the obligation's status for the month containing ``today``."""
    if not is_status_applicable(obligation):
        return PeriodStatus.NOT_APPLICABLE
    today = today or date.today()

    if current_period_settlements(obligation, today):
        return PeriodStatus.PAID_THIS_PERIOD
    if today.day > obligation.due_day:
        return PeriodStatus.OVERDUE
    return PeriodStatus.UNPAID


def toggle_period_payment(obligation: Obligation, today: date | None = None) -> PeriodTransition:
    """Compute the ledger change that flips the current-period status.

    The obligation itself is not modified; apply the result with
    :func:`apply_transition` (or through the store).
    """
    today = today or date.today()
    status = resolve_status(obligation, today)

    if status == PeriodStatus.NOT_APPLICABLE:
        logger.debug("Toggle ignored for %s: no period status", obligation.obligation_id)
        return PeriodTransition(obligation.obligation_id, status, status)

    if status == PeriodStatus.PAID_THIS_PERIOD:
        removed = tuple(e.entry_id for e in current_period_settlements(obligation, today))
        to_status = PeriodStatus.OVERDUE if today.day > obligation.due_day else PeriodStatus.UNPAID
        return PeriodTransition(
            obligation_id=obligation.obligation_id,
            from_status=status,
            to_status=to_status,
            removed_ids=removed,
        )

    payment = LedgerEntry(
        entry_id=uuid.uuid4().hex,
        date=today,
        amount=obligation.recurring_amount,
        note=f"Monthly payment - {YearMonth.of(today).label}",
        kind=EntryKind.SETTLEMENT,
    )
    return PeriodTransition(
        obligation_id=obligation.obligation_id,
        from_status=status,
        to_status=PeriodStatus.PAID_THIS_PERIOD,
        added=payment,
    )


def apply_transition(obligation: Obligation, transition: PeriodTransition) -> Obligation:
    """Return a new obligation snapshot with ``transition`` applied."""
    if transition.is_noop:
        return obligation
    removed = set(transition.removed_ids)
    entries = tuple(e for e in obligation.entries if e.entry_id not in removed)
    if transition.added is not None:
        entries = entries + (transition.added,)
    return replace(obligation, entries=entries)


def status_report(
    obligation: Obligation,
    today: date | None = None,
    cache: BalanceCache | None = None,
) -> PeriodStatusReport:
    """Status plus the paid/remaining amounts a list or detail view shows."""
    today = today or date.today()
    balance = balance_of(obligation, cache)
    paid_now = sum((e.amount for e in current_period_settlements(obligation, today)), Decimal("0"))
    return PeriodStatusReport(
        obligation_id=obligation.obligation_id,
        name=obligation.name,
        status=resolve_status(obligation, today),
        amount_due=obligation.recurring_amount,
        due_day=obligation.due_day,
        paid_to_date=balance.paid_to_date,
        remaining=balance.remaining,
        paid_this_period=paid_now,
    )


def period_status_reports(
    obligations: Iterable[Obligation],
    today: date | None = None,
    cache: BalanceCache | None = None,
) -> list[PeriodStatusReport]:
    """Reports for every obligation that has a period status.

    ``NOT_APPLICABLE`` obligations are left out entirely.
    """
    today = today or date.today()
    return [
        status_report(o, today, cache)
        for o in obligations
        if is_status_applicable(o)
    ]
