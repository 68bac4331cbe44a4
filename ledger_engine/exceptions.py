"""Custom exception hierarchy for ledger-engine."""


class LedgerError(Exception):
    """Base exception for all ledger-engine errors."""


class ObligationNotFoundError(LedgerError):
    """Raised when a referenced obligation does not exist."""


class InvalidObligationStateError(LedgerError):
    """Raised when an obligation is in an invalid state for the operation."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""
