"""Tests for telemetry utilities and the event bus."""

from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from broker_dashboard.core.events import DiagnosticEvent, EventBus, EventTopic, QuoteTickEvent
from broker_dashboard.core.telemetry import (
    EventBusTelemetrySink,
    FileTelemetrySink,
    TelemetryReporter,
    build_telemetry_reporter,
)


def test_file_telemetry_sink_writes_json(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "telemetry.jsonl"
    reporter = TelemetryReporter(FileTelemetrySink(path), source="viewer")

    reporter.warning("viewer.account_data_failed", context={"error": ValueError("boom")})

    record = json.loads(path.read_text(encoding="utf-8").strip())
    assert record["message"] == "viewer.account_data_failed"
    assert record["level"] == "WARNING"
    assert record["context"] == {"source": "viewer", "error": "boom"}


def test_reporter_without_source_keeps_context(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    reporter = build_telemetry_reporter(log_sink=False, file_path=path)

    reporter.info("simulator.started")

    record = json.loads(path.read_text(encoding="utf-8").strip())
    assert record["context"] is None
    assert reporter.source is None


@pytest.mark.asyncio
async def test_event_bus_sink_publishes_event() -> None:
    bus = EventBus()
    reporter = TelemetryReporter(EventBusTelemetrySink(bus))
    subscription = bus.subscribe(EventTopic.DIAGNOSTIC)

    reporter.info("poll slow", context={"seconds": 1.5})

    event = await asyncio.wait_for(subscription.get(), timeout=1.0)
    assert event.message == "poll slow"
    assert event.level == "INFO"
    assert event.context == {"seconds": 1.5}


@pytest.mark.asyncio
async def test_event_bus_delivers_to_every_subscriber() -> None:
    bus = EventBus()
    sub_a = bus.subscribe(EventTopic.QUOTES)
    sub_b = bus.subscribe(EventTopic.QUOTES)
    event = QuoteTickEvent(tick=1, quote_count=10, timestamp=datetime.now(UTC))

    await bus.publish(EventTopic.QUOTES, event)

    assert await asyncio.wait_for(sub_a.get(), timeout=0.1) == event
    assert await asyncio.wait_for(sub_b.get(), timeout=0.1) == event


@pytest.mark.asyncio
async def test_closed_subscription_stops_receiving() -> None:
    bus = EventBus()
    event = QuoteTickEvent(tick=1, quote_count=10, timestamp=datetime.now(UTC))

    async with bus.subscribe(EventTopic.QUOTES) as subscription:
        pass
    await bus.publish(EventTopic.QUOTES, event)

    assert subscription._queue.empty()
    with pytest.raises(StopAsyncIteration):
        await subscription.get()


class AsyncRecordingSink:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.messages: list[str] = []

    async def emit(self, event: DiagnosticEvent) -> None:
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("sink offline")
        self.messages.append(event.message)


@pytest.mark.asyncio
async def test_drain_waits_for_async_sinks() -> None:
    sink = AsyncRecordingSink()
    reporter = TelemetryReporter(sink)

    reporter.warning("viewer.account_data_failed")
    reporter.info("viewer.signed_in")
    await reporter.drain()

    assert sink.messages == ["viewer.account_data_failed", "viewer.signed_in"]
    assert not reporter._pending


@pytest.mark.asyncio
async def test_failing_async_sink_is_collected() -> None:
    reporter = TelemetryReporter(AsyncRecordingSink(fail=True))

    reporter.warning("viewer.account_data_failed")
    await reporter.drain()

    assert not reporter._pending


def test_async_sink_without_running_loop_is_awaited() -> None:
    sink = AsyncRecordingSink()
    reporter = TelemetryReporter(sink)

    reporter.info("viewer.signed_in")

    assert sink.messages == ["viewer.signed_in"]
