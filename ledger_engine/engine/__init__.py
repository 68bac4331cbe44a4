"""Pure computations over an obligation snapshot."""

from ledger_engine.engine.balance import (
    BalanceCache,
    ObligationBalance,
    compute_balance,
    effective_principal,
    paid_to_date,
    progress_percent,
    remaining,
)
from ledger_engine.engine.classifier import classify, migrate_obligation
from ledger_engine.engine.projector import project_schedule, schedulable_obligations
from ledger_engine.engine.series import generate_balance_series, projected_payoff_month
from ledger_engine.engine.status import (
    PeriodStatusReport,
    PeriodTransition,
    apply_transition,
    period_status_reports,
    resolve_status,
    toggle_period_payment,
)

__all__ = [
    "BalanceCache",
    "ObligationBalance",
    "PeriodStatusReport",
    "PeriodTransition",
    "apply_transition",
    "classify",
    "compute_balance",
    "effective_principal",
    "generate_balance_series",
    "migrate_obligation",
    "paid_to_date",
    "period_status_reports",
    "progress_percent",
    "project_schedule",
    "projected_payoff_month",
    "remaining",
    "resolve_status",
    "schedulable_obligations",
    "toggle_period_payment",
]
