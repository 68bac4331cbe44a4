"""Amortization and obligation-state engine for a personal ledger."""

__version__ = "0.1.0"
