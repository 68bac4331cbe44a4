"""Obligation balance calculations."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from ledger_engine.engine.classifier import classify
from ledger_engine.models import EntryKind, Obligation

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ObligationBalance:
    """Derived balance figures for one obligation."""

    paid_to_date: Decimal
    effective_principal: Decimal
    remaining: Decimal
    progress_percent: Decimal


def paid_to_date(obligation: Obligation) -> Decimal:
    """Sum of settlement entries."""
    return sum(
        (e.amount for e in obligation.entries if classify(e) == EntryKind.SETTLEMENT),
        ZERO,
    )


def effective_principal(obligation: Obligation) -> Decimal:
    """Origin amount plus every principal adjustment."""
    return obligation.origin_amount + sum(
        (
            e.amount
            for e in obligation.entries
            if classify(e) == EntryKind.PRINCIPAL_ADJUSTMENT
        ),
        ZERO,
    )


def remaining(obligation: Obligation) -> Decimal:
    """Amount still owed, never negative."""
    return max(ZERO, effective_principal(obligation) - paid_to_date(obligation))


def progress_percent(obligation: Obligation) -> Decimal:
    """Share of the effective principal already paid, capped at 100."""
    denominator = max(ONE, effective_principal(obligation))
    return min(HUNDRED, paid_to_date(obligation) / denominator * HUNDRED)


def compute_balance(obligation: Obligation) -> ObligationBalance:
    """Compute all balance figures in a single pass over the entries."""
    paid = ZERO
    adjustments = ZERO
    for entry in obligation.entries:
        if classify(entry) == EntryKind.SETTLEMENT:
            paid += entry.amount
        else:
            adjustments += entry.amount

    principal = obligation.origin_amount + adjustments
    return ObligationBalance(
        paid_to_date=paid,
        effective_principal=principal,
        remaining=max(ZERO, principal - paid),
        progress_percent=min(HUNDRED, paid / max(ONE, principal) * HUNDRED),
    )


class BalanceCache:
    """Memoize :func:`compute_balance` across consumers of one snapshot.

    Each obligation id holds a single slot, tagged with the origin amount
    and a fingerprint of the entries. A changed snapshot (new entry,
    retraction, borrow-more) misses and replaces the slot, so the cache
    never grows past one balance per obligation.
    """

    def __init__(self) -> None:
        self._balances: dict[str, tuple[tuple, ObligationBalance]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(obligation: Obligation) -> tuple:
        fingerprint = hash(
            tuple((e.entry_id, e.date, e.amount, e.note, e.kind) for e in obligation.entries)
        )
        return (
            obligation.origin_amount,
            len(obligation.entries),
            fingerprint,
        )

    def get(self, obligation: Obligation) -> ObligationBalance:
        """Return the cached balance, computing it on first use."""
        key = self._key(obligation)
        slot = self._balances.get(obligation.obligation_id)
        if slot is not None and slot[0] == key:
            self.hits += 1
            return slot[1]
        self.misses += 1
        balance = compute_balance(obligation)
        self._balances[obligation.obligation_id] = (key, balance)
        return balance

    def discard(self, obligation_id: str) -> None:
        """Forget the balance of a removed obligation."""
        self._balances.pop(obligation_id, None)

    def clear(self) -> None:
        self._balances.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._balances)


def balance_of(obligation: Obligation, cache: BalanceCache | None = None) -> ObligationBalance:
    """Balance figures, through ``cache`` when one is given."""
    if cache is not None:
        return cache.get(obligation)
    return compute_balance(obligation)


def installments_needed(amount: Decimal, installment: Decimal) -> int:
    """Whole installments required to clear ``amount`` (0 for a clear balance)."""
    if amount <= 0 or installment <= 0:
        return 0
    return int((amount / installment).to_integral_value(rounding=ROUND_CEILING))
