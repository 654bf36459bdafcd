"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from blackjack.log import DEFAULT_FORMAT


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED environment variable."""
    seed = os.getenv("BLACKJACK_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    initial_bankroll: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("BLACKJACK_BANKROLL", "500"))
    )
    seed: int | None = field(default_factory=_parse_seed)

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.initial_bankroll < 0:
            raise ValueError("initial_bankroll cannot be negative")


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    format: str = DEFAULT_FORMAT


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
