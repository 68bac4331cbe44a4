"""Ledger entry classification.

Entries created by this package carry an explicit :class:`EntryKind`.
Older ledgers stored borrow-more and lend-more records alongside payments
with no tag, distinguishable only by an id prefix or a note phrase; the
heuristic below recognises those and the ``migrate_*`` helpers stamp the
inferred kind so it only has to run once.
"""

from __future__ import annotations

from dataclasses import replace

from ledger_engine.models import EntryKind, LedgerEntry, Obligation

LEGACY_ADJUSTMENT_ID_PREFIXES = ("borrow-", "lend-")
LEGACY_ADJUSTMENT_NOTE_MARKER = "Vay thêm"


def is_legacy_adjustment(entry_id: str, note: str | None = None) -> bool:
    """Whether an untagged entry looks like a borrow-more/lend-more record."""
    if entry_id.startswith(LEGACY_ADJUSTMENT_ID_PREFIXES):
        return True
    return note is not None and LEGACY_ADJUSTMENT_NOTE_MARKER in note


def classify(entry: LedgerEntry) -> EntryKind:
    """Return the kind of a ledger entry.

    The explicit ``kind`` wins; untagged entries fall back to the legacy
    id/note heuristic.
    """
    if entry.kind is not None:
        return entry.kind
    if is_legacy_adjustment(entry.entry_id, entry.note):
        return EntryKind.PRINCIPAL_ADJUSTMENT
    return EntryKind.SETTLEMENT


def is_settlement(entry: LedgerEntry) -> bool:
    return classify(entry) == EntryKind.SETTLEMENT


def settlements(obligation: Obligation) -> list[LedgerEntry]:
    """Entries that count as payments."""
    return [e for e in obligation.entries if is_settlement(e)]


def principal_adjustments(obligation: Obligation) -> list[LedgerEntry]:
    """Entries that increase the amount owed."""
    return [e for e in obligation.entries if not is_settlement(e)]


def migrate_entry(entry: LedgerEntry) -> LedgerEntry:
    """Return ``entry`` with its kind stamped explicitly."""
    if entry.kind is not None:
        return entry
    return replace(entry, kind=classify(entry))


def migrate_obligation(obligation: Obligation) -> Obligation:
    """Return ``obligation`` with every legacy entry tagged.

    Returns the same object when nothing needed migrating.
    """
    if all(e.kind is not None for e in obligation.entries):
        return obligation
    return replace(obligation, entries=tuple(migrate_entry(e) for e in obligation.entries))
