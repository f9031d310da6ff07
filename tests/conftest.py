"""Pytest configuration for shared fixtures."""

from __future__ import annotations

import random

import pytest
from loguru import logger

from broker_dashboard.api.client import MockApi
from broker_dashboard.store import MarketStore
from tests.support import FakeClock


@pytest.fixture(scope="session", autouse=True)
def silence_loguru_handlers() -> None:
    """Route Loguru output to a no-op sink during tests to avoid closed stream errors."""
    logger.remove()
    logger.add(lambda _: None, catch=True)
    yield


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MarketStore:
    market = MarketStore(rng=random.Random(1234), clock=clock)
    market.initialize()
    return market


@pytest.fixture
def api(store: MarketStore) -> MockApi:
    return MockApi(store, latency_seconds=0)
