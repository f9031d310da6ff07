"""Configuration management for the broker dashboard."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from broker_dashboard.core.constants import (
    API_LATENCY_SECONDS,
    DEFAULT_LOG_DIR,
    DEFAULT_PRICE_BASE,
    POLL_INTERVAL_SECONDS,
    TICK_INTERVAL_SECONDS,
)


class DashboardConfig(BaseSettings):
    """Simulation and viewer configuration.

    Uses Pydantic v2 settings with environment variable support.
    """

    model_config = SettingsConfigDict(
        env_prefix="BROKER_DASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Simulation settings
    price_base: float = Field(
        default=DEFAULT_PRICE_BASE,
        description="Initial prices are drawn from [price_base, 2 * price_base)",
    )
    tick_interval_seconds: float = Field(
        default=TICK_INTERVAL_SECONDS, description="Seconds between simulator ticks"
    )
    random_seed: int | None = Field(
        default=None, description="Seed for reproducible price walks (None = random)"
    )

    # Query interface settings
    api_latency_seconds: float = Field(
        default=API_LATENCY_SECONDS, description="Fixed simulated round-trip per request"
    )

    # Viewer settings
    poll_interval_seconds: float = Field(
        default=POLL_INTERVAL_SECONDS, description="Seconds between account data polls"
    )

    # Paths
    log_dir: Path = Field(default=DEFAULT_LOG_DIR, description="Directory for logs")
    telemetry_file: Path | None = Field(
        default=None, description="Optional JSON lines file receiving telemetry records"
    )

    @field_validator("price_base")
    @classmethod
    def validate_price_base(cls, value: float) -> float:
        """Reject bases that would seed zero or negative prices."""
        if value <= 0:
            raise ValueError("price_base must be positive")
        return value

    @field_validator("tick_interval_seconds", "poll_interval_seconds")
    @classmethod
    def validate_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("intervals must be positive")
        return value

    @field_validator("api_latency_seconds")
    @classmethod
    def validate_latency(cls, value: float) -> float:
        if value < 0:
            raise ValueError("api_latency_seconds cannot be negative")
        return value


def load_config() -> DashboardConfig:
    """Load configuration from environment and .env file."""
    return DashboardConfig()
