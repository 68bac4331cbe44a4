"""Tests for ledger entry classification and legacy migration."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from ledger_engine.engine.classifier import (
    classify,
    is_legacy_adjustment,
    is_settlement,
    migrate_entry,
    migrate_obligation,
    principal_adjustments,
    settlements,
)
from ledger_engine.models import EntryKind, LedgerEntry, Obligation


def _entry(entry_id: str, note: str | None = None, kind: EntryKind | None = None) -> LedgerEntry:
    return LedgerEntry(
        entry_id=entry_id,
        date=date(2026, 5, 10),
        amount=Decimal("1000"),
        note=note,
        kind=kind,
    )


class TestLegacyHeuristic:
    """Tests for the id-prefix/note heuristic on untagged entries."""

    def test_borrow_prefix(self) -> None:
        """Test borrow- ids are adjustments."""
        assert is_legacy_adjustment("borrow-123")

    def test_lend_prefix(self) -> None:
        """Test lend- ids are adjustments."""
        assert is_legacy_adjustment("lend-abc")

    def test_note_marker(self) -> None:
        """Test the legacy note phrase marks an adjustment."""
        assert is_legacy_adjustment("e-1", "Vay thêm 5.000.000")

    def test_plain_entry(self) -> None:
        """Test ordinary ids and notes are settlements."""
        assert not is_legacy_adjustment("e-1")
        assert not is_legacy_adjustment("e-1", "Monthly payment")
        assert not is_legacy_adjustment("payment-borrow-1")


class TestClassify:
    """Tests for classify()."""

    def test_untagged_settlement(self) -> None:
        """Test untagged plain entries default to settlement."""
        assert classify(_entry("e-1")) == EntryKind.SETTLEMENT
        assert is_settlement(_entry("e-1"))

    def test_untagged_adjustment(self) -> None:
        """Test untagged legacy adjustments are recognised."""
        assert classify(_entry("borrow-1")) == EntryKind.PRINCIPAL_ADJUSTMENT
        assert classify(_entry("e-2", note="Vay thêm")) == EntryKind.PRINCIPAL_ADJUSTMENT

    def test_explicit_kind_wins(self) -> None:
        """Test an explicit tag overrides whatever the id suggests."""
        entry = _entry("borrow-1", kind=EntryKind.SETTLEMENT)

        assert classify(entry) == EntryKind.SETTLEMENT

    def test_explicit_adjustment_without_prefix(self) -> None:
        """Test new-style adjustments need no id convention."""
        entry = _entry("9f2c", kind=EntryKind.PRINCIPAL_ADJUSTMENT)

        assert classify(entry) == EntryKind.PRINCIPAL_ADJUSTMENT
        assert not is_settlement(entry)


class TestPartition:
    """Tests for settlements() and principal_adjustments()."""

    def test_partition(self, sample_loan: Obligation) -> None:
        """Test that every entry lands in exactly one group."""
        loan = replace(
            sample_loan,
            entries=(_entry("e-1"), _entry("borrow-1"), _entry("e-2", kind=EntryKind.SETTLEMENT)),
        )

        assert [e.entry_id for e in settlements(loan)] == ["e-1", "e-2"]
        assert [e.entry_id for e in principal_adjustments(loan)] == ["borrow-1"]


class TestMigration:
    """Tests for one-time legacy migration."""

    def test_migrate_entry_stamps_kind(self) -> None:
        """Test untagged entries get the inferred kind."""
        migrated = migrate_entry(_entry("lend-1"))

        assert migrated.kind == EntryKind.PRINCIPAL_ADJUSTMENT
        assert migrated.entry_id == "lend-1"

    def test_migrate_entry_keeps_tagged(self) -> None:
        """Test tagged entries are returned unchanged."""
        entry = _entry("e-1", kind=EntryKind.SETTLEMENT)

        assert migrate_entry(entry) is entry

    def test_migrate_obligation(self, sample_loan: Obligation) -> None:
        """Test every entry of an obligation is tagged."""
        loan = replace(sample_loan, entries=(_entry("e-1"), _entry("borrow-1")))

        migrated = migrate_obligation(loan)

        assert [e.kind for e in migrated.entries] == [
            EntryKind.SETTLEMENT,
            EntryKind.PRINCIPAL_ADJUSTMENT,
        ]
        assert loan.entries[0].kind is None

    def test_migrate_obligation_noop(self, paid_loan: Obligation) -> None:
        """Test an already-tagged obligation is returned as-is."""
        assert migrate_obligation(paid_loan) is paid_loan

    def test_migration_preserves_classification(self, sample_loan: Obligation) -> None:
        """Test classification is identical before and after migration."""
        loan = replace(
            sample_loan,
            entries=(_entry("e-1"), _entry("borrow-1"), _entry("e-3", note="Vay thêm")),
        )

        before = [classify(e) for e in loan.entries]
        after = [classify(e) for e in migrate_obligation(loan).entries]

        assert before == after
