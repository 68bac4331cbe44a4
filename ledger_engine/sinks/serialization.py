"""JSON-ready serialization of engine results for collaborators."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from ledger_engine.models import AmortizationSchedule, BalanceSeries, YearMonth


def to_dict(obj: Any) -> dict:
    """Convert an engine result to a dictionary."""
    if isinstance(obj, AmortizationSchedule):
        return schedule_to_dict(obj)
    elif isinstance(obj, BalanceSeries):
        return series_to_dict(obj)
    elif is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization.

    Uses ``dataclasses.fields()`` + ``getattr`` so nested dataclasses
    (``YearMonth`` in particular) reach :func:`serialize_value` intact.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def schedule_to_dict(schedule: AmortizationSchedule) -> dict:
    """Serialize a schedule with month labels, as a bar chart consumes it."""
    return {
        "incomplete": schedule.incomplete,
        "horizon_months": schedule.horizon_months,
        "total_due": serialize_value(schedule.total_due),
        "months": [
            {
                "period": serialize_value(entry.period),
                "label": entry.label,
                "total_due": serialize_value(entry.total_due),
                "items": [dataclass_to_dict(item) for item in entry.items],
            }
            for entry in schedule.entries
        ],
    }


def series_to_dict(series: BalanceSeries) -> dict:
    """Serialize a balance series: timeline, rows per month, and labels."""
    return {
        "months": [serialize_value(m) for m in series.months],
        "labels": dict(series.labels),
        "rows": [serialize_value(row) for row in series.rows()],
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, YearMonth):
        return str(value)
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
