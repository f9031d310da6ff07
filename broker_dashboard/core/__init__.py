"""Core infrastructure modules for the broker dashboard."""

from .config import DashboardConfig, load_config
from .constants import (
    API_LATENCY_SECONDS,
    DEFAULT_PRICE_BASE,
    POLL_INTERVAL_SECONDS,
    PRICE_FLOOR,
    TICK_INTERVAL_SECONDS,
)
from .events import DiagnosticEvent, EventBus, EventSubscription, EventTopic, QuoteTickEvent
from .telemetry import (
    EventBusTelemetrySink,
    FileTelemetrySink,
    LogTelemetrySink,
    TelemetryReporter,
    TelemetrySink,
    build_telemetry_reporter,
)

__all__ = [
    "DashboardConfig",
    "load_config",
    "API_LATENCY_SECONDS",
    "DEFAULT_PRICE_BASE",
    "POLL_INTERVAL_SECONDS",
    "PRICE_FLOOR",
    "TICK_INTERVAL_SECONDS",
    "EventBus",
    "EventTopic",
    "EventSubscription",
    "QuoteTickEvent",
    "DiagnosticEvent",
    "TelemetrySink",
    "TelemetryReporter",
    "LogTelemetrySink",
    "EventBusTelemetrySink",
    "FileTelemetrySink",
    "build_telemetry_reporter",
]
