"""Shared utility functions for CLI commands."""

import random
import sys
from pathlib import Path

from loguru import logger

from broker_dashboard.api.client import MockApi
from broker_dashboard.core.config import DashboardConfig
from broker_dashboard.store import MarketStore


def setup_logging(log_dir: Path, verbose: bool = False) -> None:
    """Configure loguru logging.

    Args:
        log_dir: Directory for log files
        verbose: Enable verbose debug logging
    """
    # Remove default handler
    logger.remove()

    log_level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>",
        level=log_level,
    )

    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "dashboard_{time}.log",
        rotation="1 day",
        retention="7 days",
        level="DEBUG",
    )


def build_store(config: DashboardConfig) -> MarketStore:
    """Create and seed a store from configuration."""
    rng = random.Random(config.random_seed) if config.random_seed is not None else None
    store = MarketStore(price_base=config.price_base, rng=rng)
    store.initialize()
    return store


def build_api(config: DashboardConfig, store: MarketStore) -> MockApi:
    return MockApi(store, latency_seconds=config.api_latency_seconds)
