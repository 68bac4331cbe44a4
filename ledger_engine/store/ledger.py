"""In-memory obligation store; the only place ledger state changes."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from ledger_engine.engine.balance import BalanceCache, ObligationBalance
from ledger_engine.engine.classifier import migrate_obligation
from ledger_engine.engine.status import PeriodTransition, apply_transition, toggle_period_payment
from ledger_engine.exceptions import InvalidObligationStateError, ObligationNotFoundError
from ledger_engine.models import (
    EntryKind,
    LedgerEntry,
    Obligation,
    ObligationKind,
    ObligationStatus,
    PeriodStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class ObligationStore:
    """Holds the current obligation snapshots, keyed by id.

    Every mutation replaces the affected :class:`Obligation` with a new
    frozen instance, so snapshots handed to the engine earlier stay valid.
    """

    obligations: dict[str, Obligation] = field(default_factory=dict)
    balance_cache: BalanceCache = field(default_factory=BalanceCache)

    def add_obligation(self, obligation: Obligation) -> None:
        """Add an obligation, tagging any legacy entries it carries."""
        self.obligations[obligation.obligation_id] = migrate_obligation(obligation)
        logger.debug(
            "Added obligation %s (%s)",
            obligation.obligation_id,
            obligation.kind.value,
            extra={"obligation_id": obligation.obligation_id},
        )

    def get(self, obligation_id: str) -> Obligation:
        """Return an obligation or raise :class:`ObligationNotFoundError`."""
        try:
            return self.obligations[obligation_id]
        except KeyError:
            raise ObligationNotFoundError(f"Obligation {obligation_id} not found") from None

    def remove_obligation(self, obligation_id: str) -> Obligation:
        removed = self.get(obligation_id)
        del self.obligations[obligation_id]
        self.balance_cache.discard(obligation_id)
        return removed

    def _put(self, obligation: Obligation) -> Obligation:
        self.obligations[obligation.obligation_id] = obligation
        return obligation

    def add_entry(self, obligation_id: str, entry: LedgerEntry) -> Obligation:
        """Append a ledger entry; untagged entries are recorded as settlements."""
        obligation = self.get(obligation_id)
        if entry.kind is None:
            entry = replace(entry, kind=EntryKind.SETTLEMENT)
        logger.debug(
            "Entry %s added to %s",
            entry.entry_id,
            obligation_id,
            extra={"obligation_id": obligation_id, "entry_id": entry.entry_id},
        )
        return self._put(replace(obligation, entries=obligation.entries + (entry,)))

    def record_payment(
        self,
        obligation_id: str,
        amount: Decimal,
        on: date | None = None,
        note: str | None = None,
    ) -> LedgerEntry:
        """Record a settlement and return the new entry."""
        entry = LedgerEntry(
            entry_id=uuid.uuid4().hex,
            date=on or date.today(),
            amount=amount,
            note=note,
            kind=EntryKind.SETTLEMENT,
        )
        self.add_entry(obligation_id, entry)
        return entry

    def record_principal_increase(
        self,
        obligation_id: str,
        amount: Decimal,
        on: date | None = None,
        note: str | None = None,
    ) -> LedgerEntry:
        """Borrow more on a loan (or lend more on a lending) and return the new entry.

        The origin amount is left untouched; the adjustment entry is what
        raises the effective principal.
        """
        obligation = self.get(obligation_id)
        if obligation.status == ObligationStatus.COMPLETED:
            raise InvalidObligationStateError(
                f"Obligation {obligation_id} is completed and cannot be increased"
            )
        prefix = "lend" if obligation.kind == ObligationKind.LENDING else "borrow"
        entry = LedgerEntry(
            entry_id=f"{prefix}-{uuid.uuid4().hex}",
            date=on or date.today(),
            amount=amount,
            note=note or f"Principal increased by {amount}",
            kind=EntryKind.PRINCIPAL_ADJUSTMENT,
        )
        self.add_entry(obligation_id, entry)
        return entry

    def remove_entries(self, obligation_id: str, entry_ids: list[str] | tuple[str, ...]) -> Obligation:
        """Drop entries by id; unknown ids are ignored."""
        obligation = self.get(obligation_id)
        doomed = set(entry_ids)
        kept = tuple(e for e in obligation.entries if e.entry_id not in doomed)
        logger.debug(
            "Removed %d entries from %s",
            len(obligation.entries) - len(kept),
            obligation_id,
            extra={"obligation_id": obligation_id},
        )
        return self._put(replace(obligation, entries=kept))

    def toggle_period_payment(self, obligation_id: str, today: date | None = None) -> PeriodTransition:
        """Flip the current-period paid status and persist the change."""
        obligation = self.get(obligation_id)
        transition = toggle_period_payment(obligation, today)
        if transition.from_status == PeriodStatus.NOT_APPLICABLE:
            raise InvalidObligationStateError(
                f"Obligation {obligation_id} has no installment or due day to toggle"
            )
        self._put(apply_transition(obligation, transition))
        logger.debug(
            "Toggled %s: %s -> %s",
            obligation_id,
            transition.from_status.value,
            transition.to_status.value,
            extra={
                "obligation_id": obligation_id,
                "from_status": transition.from_status.value,
                "to_status": transition.to_status.value,
            },
        )
        return transition

    def mark_completed(self, obligation_id: str) -> Obligation:
        return self._put(replace(self.get(obligation_id), status=ObligationStatus.COMPLETED))

    def restore(self, obligation_id: str) -> Obligation:
        return self._put(replace(self.get(obligation_id), status=ObligationStatus.ACTIVE))

    # Query methods
    def snapshot(self) -> tuple[Obligation, ...]:
        """Immutable view of every obligation, in insertion order."""
        return tuple(self.obligations.values())

    def balance(self, obligation_id: str) -> ObligationBalance:
        """Balance figures of one obligation, memoized across calls."""
        return self.balance_cache.get(self.get(obligation_id))

    def active(self) -> list[Obligation]:
        return [o for o in self.obligations.values() if o.is_active]

    def by_kind(self, kind: ObligationKind) -> list[Obligation]:
        return [o for o in self.obligations.values() if o.kind == kind]

    def summary(self) -> dict[str, int]:
        """Return summary counts of obligations and entries."""
        counts = {kind.value.lower(): len(self.by_kind(kind)) for kind in ObligationKind}
        counts["active"] = len(self.active())
        counts["entries"] = sum(len(o.entries) for o in self.obligations.values())
        return counts
