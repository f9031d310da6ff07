"""Broker Dashboard - simulated live quotes for brokerage accounts."""

__version__ = "0.1.0"

from broker_dashboard.api import ApiResponse, MockApi, parse_path
from broker_dashboard.core.config import DashboardConfig, load_config
from broker_dashboard.core.constants import (
    API_LATENCY_SECONDS,
    DEFAULT_PRICE_BASE,
    POLL_INTERVAL_SECONDS,
    PRICE_FLOOR,
    TICK_INTERVAL_SECONDS,
)
from broker_dashboard.errors import ApiError, BrokerDashboardError, LoginError
from broker_dashboard.models import Account, AccountData, Company, Quote
from broker_dashboard.seed import AccountDirectory, default_directory
from broker_dashboard.session import DashboardSession
from broker_dashboard.sim.simulator import PriceSimulator
from broker_dashboard.store import MarketStore

__all__ = [
    "DashboardConfig",
    "load_config",
    "API_LATENCY_SECONDS",
    "DEFAULT_PRICE_BASE",
    "POLL_INTERVAL_SECONDS",
    "PRICE_FLOOR",
    "TICK_INTERVAL_SECONDS",
    "Account",
    "AccountData",
    "Company",
    "Quote",
    "AccountDirectory",
    "default_directory",
    "MarketStore",
    "PriceSimulator",
    "MockApi",
    "ApiResponse",
    "parse_path",
    "DashboardSession",
    "BrokerDashboardError",
    "ApiError",
    "LoginError",
]
