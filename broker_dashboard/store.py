"""In-memory quote store with a random-walk price model."""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from broker_dashboard.core.constants import (
    DEFAULT_PRICE_BASE,
    MAX_TICK_MOVE_FRACTION,
    PRICE_FLOOR,
    PRICE_PRECISION,
)
from broker_dashboard.models import Account, Company, Quote
from broker_dashboard.seed import AccountDirectory, default_directory


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MarketStore:
    """Authoritative state for companies, accounts and per-account quotes.

    Quotes are tracked per account: a ticker subscribed by two accounts walks
    independently in each of them. The store performs no I/O; ``tick`` is a
    synchronous pass so readers on the same event loop never see a partially
    applied update.
    """

    def __init__(
        self,
        directory: AccountDirectory | None = None,
        *,
        price_base: float = DEFAULT_PRICE_BASE,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create an empty store.

        Args:
            directory: Company/account layout, defaults to the seed directory
            price_base: Lower bound of the initial price range ``[base, 2*base)``
            rng: Random source, injectable for reproducible runs
            clock: Timestamp source for ``updated_at``

        Raises:
            ValueError: If ``price_base`` is not positive
        """
        if price_base <= 0:
            raise ValueError(f"price_base must be positive, got {price_base}")
        self._directory = directory or default_directory()
        self._price_base = float(price_base)
        self._rng = rng or random.Random()
        self._clock = clock or _utc_now
        self._quotes: dict[str, list[Quote]] = {}
        self._tick_count = 0
        self._last_update: datetime | None = None

    @property
    def directory(self) -> AccountDirectory:
        return self._directory

    @property
    def price_base(self) -> float:
        return self._price_base

    @property
    def tick_count(self) -> int:
        """Ticks applied since the last ``initialize``."""
        return self._tick_count

    @property
    def last_update(self) -> datetime | None:
        return self._last_update

    @property
    def initialized(self) -> bool:
        return self._last_update is not None

    def initialize(self) -> None:
        """Seed one quote per (account, ticker) and reset the simulation clock."""
        now = self._clock()
        quotes: dict[str, list[Quote]] = {}
        for account in self._directory.iter_accounts():
            quotes[account.id] = [
                Quote(ticker=ticker, price=self._seed_price(), change=0.0, updated_at=now)
                for ticker in account.tickers
            ]
        self._quotes = quotes
        self._tick_count = 0
        self._last_update = now
        logger.info(
            "Seeded {} quotes across {} accounts (base={})",
            sum(len(items) for items in quotes.values()),
            len(quotes),
            self._price_base,
        )

    def tick(self) -> int:
        """Apply one random-walk step to every quote.

        Returns:
            Number of quotes updated
        """
        now = self._clock()
        if self._last_update is not None and now < self._last_update:
            now = self._last_update

        updated = 0
        for quotes in self._quotes.values():
            for quote in quotes:
                price = quote.price
                delta = (self._rng.random() - 0.5) * (price * MAX_TICK_MOVE_FRACTION)
                new_price = max(PRICE_FLOOR, round(price + delta, PRICE_PRECISION))
                quote.change = round(new_price - price, PRICE_PRECISION)
                quote.price = new_price
                quote.updated_at = now
                updated += 1

        self._tick_count += 1
        self._last_update = now
        logger.debug("Tick {} updated {} quotes", self._tick_count, updated)
        return updated

    def list_companies(self) -> list[Company]:
        return list(self._directory.companies)

    def list_accounts(self, company_id: str) -> list[Account]:
        """Accounts of a company; unknown ids yield an empty list."""
        return list(self._directory.accounts_for(company_id))

    def get_account_quotes(self, account_id: str) -> list[Quote]:
        """Live quotes of an account in subscription order; unknown ids yield an empty list."""
        return list(self._quotes.get(account_id, ()))

    def _seed_price(self) -> float:
        base = self._price_base
        price = round(base + self._rng.random() * base, PRICE_PRECISION)
        # Rounding can reach the exclusive upper bound.
        if price >= 2 * base:
            price = round(2 * base - 10**-PRICE_PRECISION, PRICE_PRECISION)
        return max(PRICE_FLOOR, price)
