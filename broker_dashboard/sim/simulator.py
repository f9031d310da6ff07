"""Background task that advances a MarketStore on a fixed period."""

from __future__ import annotations

import asyncio
from contextlib import suppress

from loguru import logger

from broker_dashboard.core.constants import TICK_INTERVAL_SECONDS
from broker_dashboard.core.events import EventBus, EventTopic, QuoteTickEvent
from broker_dashboard.store import MarketStore


class PriceSimulator:
    """Owns the single clock that drives ``MarketStore.tick``.

    ``start`` schedules ticks on the running event loop and ``stop`` cancels
    them between ticks. Tests advance the walk with ``step`` instead of
    waiting on wall-clock time.
    """

    def __init__(
        self,
        store: MarketStore,
        *,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        event_bus: EventBus | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._store = store
        self._interval = interval_seconds
        self._event_bus = event_bus
        self._task: asyncio.Task[None] | None = None

    @property
    def store(self) -> MarketStore:
        return self._store

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule periodic ticks on the running loop."""
        if self.running:
            raise RuntimeError("PriceSimulator is already running")
        if not self._store.initialized:
            self._store.initialize()
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Price simulator started (interval={}s)", self._interval)

    async def stop(self) -> None:
        """Cancel the tick task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        logger.info("Price simulator stopped after {} ticks", self._store.tick_count)

    async def step(self, count: int = 1) -> None:
        """Advance the simulation ``count`` ticks immediately."""
        for _ in range(count):
            await self._advance()

    async def _advance(self) -> None:
        updated = self._store.tick()
        if self._event_bus is not None:
            await self._event_bus.publish(
                EventTopic.QUOTES,
                QuoteTickEvent(
                    tick=self._store.tick_count,
                    quote_count=updated,
                    timestamp=self._store.last_update,
                ),
            )

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            await self._advance()
            next_tick += self._interval
            # Skip missed slots instead of bursting after a stall.
            if next_tick < loop.time():
                next_tick = loop.time() + self._interval

    async def __aenter__(self) -> PriceSimulator:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
