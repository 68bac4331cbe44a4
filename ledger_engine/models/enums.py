"""Enumeration types for ledger entities."""

from enum import Enum


class ObligationKind(str, Enum):
    LOAN = "LOAN"
    CREDIT_CARD = "CREDIT_CARD"
    FIXED_EXPENSE = "FIXED_EXPENSE"
    LENDING = "LENDING"


class ObligationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class EntryKind(str, Enum):
    SETTLEMENT = "SETTLEMENT"
    PRINCIPAL_ADJUSTMENT = "PRINCIPAL_ADJUSTMENT"


class PeriodStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID_THIS_PERIOD = "PAID_THIS_PERIOD"
    OVERDUE = "OVERDUE"
    NOT_APPLICABLE = "NOT_APPLICABLE"
