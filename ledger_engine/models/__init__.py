"""Domain models for the obligation ledger."""

from ledger_engine.models.base import YearMonth
from ledger_engine.models.enums import (
    EntryKind,
    ObligationKind,
    ObligationStatus,
    PeriodStatus,
)
from ledger_engine.models.obligation import LedgerEntry, Obligation
from ledger_engine.models.schedule import (
    AmortizationSchedule,
    BalanceSeries,
    EarlySettlementOverride,
    MonthlyScheduleEntry,
    ScheduleLineItem,
)

__all__ = [
    "AmortizationSchedule",
    "BalanceSeries",
    "EarlySettlementOverride",
    "EntryKind",
    "LedgerEntry",
    "MonthlyScheduleEntry",
    "Obligation",
    "ObligationKind",
    "ObligationStatus",
    "PeriodStatus",
    "ScheduleLineItem",
    "YearMonth",
]
