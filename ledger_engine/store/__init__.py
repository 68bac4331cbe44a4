"""In-memory state store for obligations."""

from ledger_engine.store.ledger import ObligationStore

__all__ = ["ObligationStore"]
