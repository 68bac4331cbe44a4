"""Result types produced by the projection components."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator

from ledger_engine.models.base import YearMonth


@dataclass(frozen=True)
class EarlySettlementOverride:
    """Simulation input: pay everything still owed on an obligation in one month.

    Never persisted; discarding the override list cancels the simulation.
    """

    obligation_id: str
    target_month: int  # 1-12
    target_year: int

    @property
    def period(self) -> YearMonth:
        return YearMonth(self.target_year, self.target_month)


@dataclass(frozen=True)
class ScheduleLineItem:
    """One obligation's contribution to a scheduled month."""

    obligation_id: str
    name: str
    amount_due: Decimal
    remaining_after: Decimal

    @property
    def is_final(self) -> bool:
        """Whether this line item is the obligation's last installment."""
        return self.remaining_after == 0


@dataclass
class MonthlyScheduleEntry:
    """Everything due in one projected month."""

    period: YearMonth
    total_due: Decimal
    items: list[ScheduleLineItem] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.period.label


@dataclass
class AmortizationSchedule:
    """Chronological payment plan across obligations.

    ``incomplete`` is set when the horizon cap was hit with balance still
    outstanding, i.e. the plan shown is truncated.
    """

    entries: list[MonthlyScheduleEntry] = field(default_factory=list)
    incomplete: bool = False
    horizon_months: int = 0

    def __iter__(self) -> Iterator[MonthlyScheduleEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> MonthlyScheduleEntry:
        return self.entries[index]

    @property
    def total_due(self) -> Decimal:
        return sum((entry.total_due for entry in self.entries), Decimal("0"))

    def items_for(self, obligation_id: str) -> list[tuple[YearMonth, ScheduleLineItem]]:
        """All line items of one obligation, in order."""
        return [
            (entry.period, item)
            for entry in self.entries
            for item in entry.items
            if item.obligation_id == obligation_id
        ]

    def payoff_month(self, obligation_id: str) -> YearMonth | None:
        """Month of the obligation's final installment, if it is in the plan."""
        for period, item in self.items_for(obligation_id):
            if item.is_final:
                return period
        return None


@dataclass
class BalanceSeries:
    """Monthly remaining balances on a shared timeline, keyed by obligation id."""

    months: list[YearMonth] = field(default_factory=list)
    balances: dict[str, list[Decimal]] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)

    def balance_at(self, obligation_id: str, period: YearMonth) -> Decimal | None:
        """Balance of one obligation in one month, or ``None`` off the timeline."""
        if obligation_id not in self.balances or period not in self.months:
            return None
        return self.balances[obligation_id][self.months.index(period)]

    def rows(self) -> list[dict[str, object]]:
        """Chart-ready rows: one dict per month with a value per obligation id."""
        result = []
        for idx, period in enumerate(self.months):
            row: dict[str, object] = {"month": period.label}
            for obligation_id, values in self.balances.items():
                row[obligation_id] = values[idx]
            result.append(row)
        return result
