"""Pytest configuration and fixtures."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledger_engine.models import EntryKind, LedgerEntry, Obligation, ObligationKind


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference date, mid-month so due days on either side exist."""
    return date(2026, 10, 15)


@pytest.fixture
def sample_loan() -> Obligation:
    """12-installment loan with no payments, due on the 10th."""
    return Obligation(
        obligation_id="loan-test-001",
        name="Car loan",
        kind=ObligationKind.LOAN,
        origin_amount=Decimal("12000000"),
        recurring_amount=Decimal("1000000"),
        due_day=10,
        term_periods=12,
        start_date=date(2026, 6, 1),
        provider="Test Bank",
    )


@pytest.fixture
def paid_loan(sample_loan: Obligation) -> Obligation:
    """The sample loan with four monthly installments paid (Jun-Sep 2026)."""
    entries = tuple(
        LedgerEntry(
            entry_id=f"pay-{month}",
            date=date(2026, month, 10),
            amount=Decimal("1000000"),
            kind=EntryKind.SETTLEMENT,
        )
        for month in (6, 7, 8, 9)
    )
    return replace(sample_loan, entries=entries)


@pytest.fixture
def sample_card() -> Obligation:
    """Credit card balance, due on the 20th, no term."""
    return Obligation(
        obligation_id="card-test-001",
        name="Visa",
        kind=ObligationKind.CREDIT_CARD,
        origin_amount=Decimal("3000000"),
        recurring_amount=Decimal("1500000"),
        due_day=20,
    )


@pytest.fixture
def sample_expense() -> Obligation:
    """Monthly rent: no principal, due on the 1st."""
    return Obligation(
        obligation_id="rent-test-001",
        name="Rent",
        kind=ObligationKind.FIXED_EXPENSE,
        origin_amount=Decimal("0"),
        recurring_amount=Decimal("5000000"),
        due_day=1,
    )


@pytest.fixture
def sample_lending() -> Obligation:
    """Money lent out with no installment."""
    return Obligation(
        obligation_id="lend-test-001",
        name="Lent to Sam",
        kind=ObligationKind.LENDING,
        origin_amount=Decimal("2000000"),
        recurring_amount=Decimal("0"),
        start_date=date(2026, 1, 1),
    )
