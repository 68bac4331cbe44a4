#!/usr/bin/env python3
"""Generate a sample household ledger and print its payment roadmap.

Useful for eyeballing the projector and the balance series against a
realistic mix of obligations, including a what-if early payoff.
"""

import argparse
import logging
from datetime import date

from ledger_engine.config import LedgerConfig
from ledger_engine.engine import (
    generate_balance_series,
    period_status_reports,
    project_schedule,
    schedulable_obligations,
)
from ledger_engine.engine.summary import outflow_trend
from ledger_engine.logging import setup_logging
from ledger_engine.models import EarlySettlementOverride, YearMonth
from ledger_engine.scenarios import HouseholdLedgerScenario
from ledger_engine.sinks import ConsoleSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print the payment roadmap of a generated household ledger"
    )
    parser.add_argument(
        "--loans",
        type=int,
        default=3,
        help="Number of bank loans to generate (default: 3)",
    )
    parser.add_argument(
        "--cards",
        type=int,
        default=2,
        help="Number of credit cards to generate (default: 2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: $SEED)",
    )
    parser.add_argument(
        "--settle-first-in",
        type=int,
        default=None,
        metavar="MONTHS",
        help="Simulate paying off the first loan in full this many months from now",
    )
    parser.add_argument(
        "--max-months",
        type=int,
        default=24,
        help="Maximum schedule months to print (default: 24)",
    )
    args = parser.parse_args()

    config = LedgerConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    today = date.today()
    scenario = HouseholdLedgerScenario(
        num_loans=args.loans,
        num_cards=args.cards,
        seed=args.seed if args.seed is not None else config.seed,
        reference_date=today,
        config=config.generator,
    )
    store = scenario.generate()
    snapshot = store.snapshot()
    cache = store.balance_cache if config.engine.enable_balance_cache else None

    overrides = []
    candidates = schedulable_obligations(snapshot)
    if args.settle_first_in is not None and candidates:
        target = YearMonth.of(today).add(args.settle_first_in)
        overrides.append(
            EarlySettlementOverride(candidates[0].obligation_id, target.month, target.year)
        )
        logger.info("Simulating early payoff of %s in %s", candidates[0].name, target.label)

    sink = ConsoleSink(pretty=True, max_records=args.max_months)
    sink.write_batch("period_status", period_status_reports(snapshot, today, cache))
    sink.write_schedule(
        project_schedule(
            candidates,
            today,
            overrides=overrides,
            horizon_months=config.engine.horizon_months,
            cache=cache,
        )
    )
    sink.write_series(generate_balance_series(snapshot, today, cache))
    sink.write_batch(
        "outflow_trend",
        [
            {"month": period.label, "total": total}
            for period, total in outflow_trend(
                snapshot, YearMonth.of(today), config.engine.trend_months
            )
        ],
    )
    sink.close()

    logger.info("Summary: %s", scenario.get_summary())


if __name__ == "__main__":
    main()
