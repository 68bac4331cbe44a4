"""Scenarios for generating realistic household ledgers."""

from ledger_engine.scenarios.household import HouseholdLedgerScenario

__all__ = ["HouseholdLedgerScenario"]
