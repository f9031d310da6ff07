"""Tests for the background price simulator."""

from __future__ import annotations

import asyncio

import pytest

from broker_dashboard.core.events import EventBus, EventTopic, QuoteTickEvent
from broker_dashboard.sim.simulator import PriceSimulator
from broker_dashboard.store import MarketStore


@pytest.mark.asyncio
async def test_step_advances_store_and_publishes_ticks(store: MarketStore) -> None:
    bus = EventBus()
    simulator = PriceSimulator(store, event_bus=bus)
    subscription = bus.subscribe(EventTopic.QUOTES)

    await simulator.step(3)

    assert store.tick_count == 3
    events = [await asyncio.wait_for(subscription.get(), timeout=0.1) for _ in range(3)]
    assert all(isinstance(event, QuoteTickEvent) for event in events)
    assert [event.tick for event in events] == [1, 2, 3]
    assert events[-1].quote_count == 10
    assert events[-1].timestamp == store.last_update
    subscription.close()


@pytest.mark.asyncio
async def test_step_without_event_bus(store: MarketStore) -> None:
    await PriceSimulator(store).step()

    assert store.tick_count == 1


@pytest.mark.asyncio
async def test_start_runs_ticks_until_stopped(store: MarketStore) -> None:
    simulator = PriceSimulator(store, interval_seconds=0.01)

    simulator.start()
    assert simulator.running
    await asyncio.sleep(0.1)
    await simulator.stop()

    assert not simulator.running
    ticks = store.tick_count
    assert ticks >= 1
    await asyncio.sleep(0.05)
    assert store.tick_count == ticks


@pytest.mark.asyncio
async def test_start_twice_is_rejected(store: MarketStore) -> None:
    simulator = PriceSimulator(store, interval_seconds=10)
    simulator.start()
    try:
        with pytest.raises(RuntimeError, match="already running"):
            simulator.start()
    finally:
        await simulator.stop()


@pytest.mark.asyncio
async def test_start_initializes_fresh_store() -> None:
    store = MarketStore()
    assert not store.initialized

    async with PriceSimulator(store, interval_seconds=10) as simulator:
        assert simulator.running
        assert store.initialized
        assert len(store.get_account_quotes("b1")) == 2

    assert not simulator.running


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(store: MarketStore) -> None:
    simulator = PriceSimulator(store)

    await simulator.stop()

    assert not simulator.running


@pytest.mark.parametrize("interval", [0, -1.0])
def test_non_positive_interval_rejected(store: MarketStore, interval: float) -> None:
    with pytest.raises(ValueError):
        PriceSimulator(store, interval_seconds=interval)
