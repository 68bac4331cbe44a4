"""Obligation and ledger entry models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ledger_engine.models.enums import EntryKind, ObligationKind, ObligationStatus


@dataclass(frozen=True)
class LedgerEntry:
    """A dated monetary record on an obligation.

    ``kind`` is stamped at creation time. Entries loaded from legacy data
    carry ``kind=None`` and are classified by
    :func:`ledger_engine.engine.classifier.classify`.
    """

    entry_id: str
    date: date
    amount: Decimal
    note: str | None = None
    kind: EntryKind | None = None


@dataclass(frozen=True)
class Obligation:
    """A recurring financial liability (loan, card balance, fixed expense).

    Loans, credit cards, fixed expenses and lendings share this shape and
    differ only in which optional fields are populated.
    """

    obligation_id: str
    name: str
    origin_amount: Decimal
    recurring_amount: Decimal  # Installment or minimum payment
    kind: ObligationKind = ObligationKind.LOAN
    due_day: int | None = None  # 1-31
    term_periods: int | None = None
    start_date: date | None = None
    status: ObligationStatus = ObligationStatus.ACTIVE
    entries: tuple[LedgerEntry, ...] = field(default_factory=tuple)
    provider: str | None = None
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ObligationStatus.ACTIVE
