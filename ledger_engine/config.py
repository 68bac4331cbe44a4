"""Configuration management for ledger-engine."""

from dataclasses import dataclass, field

from ledger_engine.exceptions import ConfigurationError

# Hard cap on projected months; guarantees the projector terminates
DEFAULT_HORIZON_MONTHS = 600


@dataclass
class EngineConfig:
    """Projection and caching knobs for the engine."""

    horizon_months: int = DEFAULT_HORIZON_MONTHS
    enable_balance_cache: bool = True
    trend_months: int = 6

    def __post_init__(self) -> None:
        if self.horizon_months < 1:
            raise ConfigurationError(
                f"horizon_months must be positive, got {self.horizon_months}"
            )
        if self.trend_months < 1:
            raise ConfigurationError(
                f"trend_months must be positive, got {self.trend_months}"
            )


@dataclass
class GeneratorConfig:
    """Synthetic ledger generation settings."""

    locale: str = "en_US"
    history_months: int = 12
    on_time_rate: float = 0.80
    missed_rate: float = 0.10
    borrow_more_rate: float = 0.05


@dataclass
class LedgerConfig:
    """Main configuration for ledger-engine."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            engine = EngineConfig(
                horizon_months=int(
                    os.getenv("LEDGER_HORIZON_MONTHS", str(DEFAULT_HORIZON_MONTHS))
                ),
                enable_balance_cache=os.getenv("LEDGER_BALANCE_CACHE", "true").lower() == "true",
                trend_months=int(os.getenv("LEDGER_TREND_MONTHS", "6")),
            )
            generator = GeneratorConfig(
                locale=os.getenv("LEDGER_LOCALE", "en_US"),
                history_months=int(os.getenv("LEDGER_HISTORY_MONTHS", "12")),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric environment value: {exc}") from exc

        return cls(
            engine=engine,
            generator=generator,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
