"""Synthetic data generators for obligations and ledgers."""

from ledger_engine.generators.base import BaseGenerator
from ledger_engine.generators.obligation import ObligationGenerator, PaymentBehavior

__all__ = ["BaseGenerator", "ObligationGenerator", "PaymentBehavior"]
