"""Output sinks for engine results."""

from ledger_engine.sinks.console import ConsoleSink

__all__ = ["ConsoleSink"]
