"""Base value types shared across the engine."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, ordered chronologically.

    Month arithmetic carries into years, so ``YearMonth(2025, 11).add(3)``
    is ``YearMonth(2026, 2)``.
    """

    year: int
    month: int  # 1-12

    @classmethod
    def of(cls, value: date) -> YearMonth:
        """Return the month containing ``value`` (a date or datetime)."""
        return cls(value.year, value.month)

    def add(self, months: int) -> YearMonth:
        """Return the month ``months`` after this one (negative goes back)."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def months_until(self, other: YearMonth) -> int:
        """Number of months from this month to ``other``."""
        return (other.year - self.year) * 12 + (other.month - self.month)

    def contains(self, value: date) -> bool:
        """Whether ``value`` falls inside this month."""
        return value.year == self.year and value.month == self.month

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``"Jan 2026"``."""
        return f"{calendar.month_abbr[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
