"""Console sink for debugging and development."""

import json
from typing import Any

from ledger_engine.models import AmortizationSchedule, BalanceSeries
from ledger_engine.sinks.serialization import to_dict


class ConsoleSink:
    """Output engine results to console (stdout) for debugging."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def _dump(self, data: Any) -> None:
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))

    def _header(self, title: str) -> None:
        print(f"\n{'='*60}")
        print(title)
        print("=" * 60)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records (obligations, status reports, ...) to console."""
        self._header(f"Entity: {entity_type} ({len(records)} records)")

        display_records = records[: self.max_records] if self.max_records else records
        for record in display_records:
            self._dump(to_dict(record))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def write_schedule(self, schedule: AmortizationSchedule) -> None:
        """Print the payment plan, one line per month."""
        self._header(f"Payment schedule ({len(schedule)} months)")
        entries = schedule.entries[: self.max_records] if self.max_records else schedule.entries
        for entry in entries:
            finals = [item.name for item in entry.items if item.is_final]
            suffix = f"  (final: {', '.join(finals)})" if finals else ""
            print(f"{entry.label:>10}  {entry.total_due:>16}  {len(entry.items)} items{suffix}")
        if self.max_records and len(schedule) > self.max_records:
            print(f"... and {len(schedule) - self.max_records} more months")
        print(f"Total: {schedule.total_due}")
        if schedule.incomplete:
            print(f"WARNING: schedule truncated at {schedule.horizon_months} months")
        self._counts["schedule_months"] = self._counts.get("schedule_months", 0) + len(schedule)

    def write_series(self, series: BalanceSeries) -> None:
        """Print a balance series as JSON."""
        self._header(f"Balance series ({len(series.balances)} obligations, {len(series.months)} months)")
        self._dump(to_dict(series))
        self._counts["series"] = self._counts.get("series", 0) + len(series.balances)

    def close(self) -> None:
        """Print summary and close."""
        self._header("Console Sink Summary")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
