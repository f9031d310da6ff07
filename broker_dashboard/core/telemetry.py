"""Telemetry helpers for publishing diagnostic messages."""

from __future__ import annotations

import asyncio
import inspect
import json
from collections.abc import Awaitable
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from loguru import logger

from broker_dashboard.core.events import DiagnosticEvent, EventBus, EventTopic


class TelemetrySink(Protocol):
    """Protocol implemented by telemetry sinks."""

    def emit(self, event: DiagnosticEvent) -> None | Awaitable[None]: ...


class LogTelemetrySink:
    """Emit telemetry entries to loguru logger."""

    def emit(self, event: DiagnosticEvent) -> None:
        logger.log(event.level, "[telemetry] {} {}", event.message, event.context or "")


class EventBusTelemetrySink:
    """Forward telemetry entries onto the in-process EventBus."""

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    async def emit(self, event: DiagnosticEvent) -> None:
        await self._event_bus.publish(EventTopic.DIAGNOSTIC, event)


class FileTelemetrySink:
    """Append telemetry entries to a JSON lines file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, event: DiagnosticEvent) -> None:
        record = {
            "level": event.level,
            "message": event.message,
            "timestamp": event.timestamp.isoformat(),
            "context": event.context,
        }
        with self._path.open("a", encoding="utf-8") as handle:
            # Exception objects and timestamps in context fall back to str().
            handle.write(json.dumps(record, separators=(",", ":"), default=str))
            handle.write("\n")


class TelemetryReporter:
    """Fan diagnostic messages out to sinks, tagging each with its source."""

    def __init__(self, *sinks: TelemetrySink, source: str | None = None) -> None:
        self._sinks: list[TelemetrySink] = list(sinks) or [LogTelemetrySink()]
        self._source = source
        self._pending: set[asyncio.Future[None]] = set()

    @property
    def source(self) -> str | None:
        return self._source

    def info(self, message: str, *, context: dict[str, object] | None = None) -> None:
        self._emit("INFO", message, context=context)

    def warning(self, message: str, *, context: dict[str, object] | None = None) -> None:
        self._emit("WARNING", message, context=context)

    def _emit(self, level: str, message: str, *, context: dict[str, object] | None) -> None:
        if self._source is not None:
            context = {"source": self._source, **(context or {})}
        event = DiagnosticEvent(
            level=level,
            message=message,
            timestamp=datetime.now(tz=UTC),
            context=context,
        )
        for sink in list(self._sinks):
            result = sink.emit(event)
            if inspect.isawaitable(result):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    asyncio.run(_await(result))
                else:
                    task = asyncio.ensure_future(result, loop=loop)
                    self._pending.add(task)
                    task.add_done_callback(self._sink_done)

    async def drain(self) -> None:
        """Wait for async sinks still delivering earlier messages."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _sink_done(self, task: asyncio.Future[None]) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.opt(exception=task.exception()).warning("Telemetry sink failed")


async def _await(result: Awaitable[None]) -> None:
    await result


def build_telemetry_reporter(
    *,
    source: str | None = None,
    log_sink: bool = True,
    event_bus: EventBus | None = None,
    file_path: Path | None = None,
) -> TelemetryReporter:
    """Assemble a reporter from the sinks enabled in configuration."""

    sinks: list[TelemetrySink] = []
    if log_sink:
        sinks.append(LogTelemetrySink())
    if file_path is not None:
        sinks.append(FileTelemetrySink(file_path))
    if event_bus is not None:
        sinks.append(EventBusTelemetrySink(event_bus))
    return TelemetryReporter(*sinks, source=source)
