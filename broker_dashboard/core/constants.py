"""Common constants shared across the dashboard."""

from __future__ import annotations

from pathlib import Path

DEFAULT_PRICE_BASE = 100.0
PRICE_FLOOR = 0.01
PRICE_PRECISION = 2
MAX_TICK_MOVE_FRACTION = 0.02
TICK_INTERVAL_SECONDS = 1.0
API_LATENCY_SECONDS = 0.12
POLL_INTERVAL_SECONDS = 1.0
DASHBOARD_REFRESH_SECONDS = 0.5
DEFAULT_LOG_DIR = Path("logs")
