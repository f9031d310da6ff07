"""Viewer state driven by polling the query endpoints."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from loguru import logger

from broker_dashboard.api.client import MockApi
from broker_dashboard.core.constants import POLL_INTERVAL_SECONDS
from broker_dashboard.core.telemetry import TelemetryReporter
from broker_dashboard.errors import LoginError
from broker_dashboard.models import Account, AccountData, Company, Quote


class DashboardSession:
    """Selection and quote state for one signed-in viewer.

    Mirrors the browser flow: companies are fetched once, choosing a company
    loads its accounts and selects the first, and the selected account's
    quotes are polled on a fixed cadence. A failed poll is reported and the
    previously displayed quotes stay on screen.
    """

    def __init__(
        self,
        api: MockApi,
        *,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
        telemetry: TelemetryReporter | None = None,
    ) -> None:
        self._api = api
        self._poll_interval = poll_interval_seconds
        self._telemetry = telemetry or TelemetryReporter(source="viewer")

        self.email = ""
        self.logged_in = False
        self.companies: list[Company] = []
        self.selected_company = ""
        self.accounts: list[Account] = []
        self.selected_account = ""
        self.quotes: list[Quote] = []
        self.last_refresh: datetime | None = None
        self.failed_polls = 0

    @property
    def poll_interval_seconds(self) -> float:
        return self._poll_interval

    async def load_companies(self) -> list[Company]:
        try:
            payload = await self._api.call_api("/companies")
            self.companies = [Company.model_validate(item) for item in payload]
        except Exception as exc:
            self._report_failure("companies", exc)
        return self.companies

    async def login(self, email: str) -> None:
        """Sign in with any non-empty email.

        Raises:
            LoginError: If ``email`` is empty
        """
        if not email:
            raise LoginError("please enter email")
        self.email = email
        self.logged_in = True
        self._telemetry.info("viewer.signed_in", context={"email": email})
        if not self.selected_company and self.companies:
            await self.select_company(self.companies[0].id)

    def logout(self) -> None:
        logger.info("Signed out {}", self.email)
        self.email = ""
        self.logged_in = False
        self.selected_company = ""
        self.accounts = []
        self.selected_account = ""
        self.quotes = []

    async def select_company(self, company_id: str) -> None:
        """Load accounts for ``company_id`` and select the first one."""
        self.selected_company = company_id
        if not company_id:
            self.accounts = []
            await self.select_account("")
            return
        try:
            payload = await self._api.call_api(f"/companies/{company_id}/accounts")
        except Exception as exc:
            self._report_failure("accounts", exc, company_id=company_id)
            return
        if self.selected_company != company_id:
            return
        self.accounts = [Account.model_validate(item) for item in payload or []]
        if self.accounts:
            await self.select_account(self.accounts[0].id)

    async def select_account(self, account_id: str) -> None:
        self.selected_account = account_id
        if not account_id:
            self.quotes = []
            return
        await self.refresh()

    async def refresh(self) -> bool:
        """Poll the selected account once.

        Returns:
            True when fresh quotes were applied
        """
        account_id = self.selected_account
        if not account_id:
            self.quotes = []
            return False
        try:
            payload = await self._api.call_api(f"/accounts/{account_id}/data")
            data = AccountData.model_validate(payload)
        except Exception as exc:
            self._report_failure("account data", exc, account_id=account_id)
            return False
        # The selection may have moved on while the request was in flight.
        if self.selected_account != account_id:
            return False
        self.quotes = data.stocks
        self.last_refresh = datetime.now(UTC)
        return True

    async def poll(self, stop: asyncio.Event) -> None:
        """Refresh every poll interval until ``stop`` is set.

        Polls are scheduled against fixed deadlines, so the request latency
        does not stretch the period.
        """
        loop = asyncio.get_running_loop()
        next_poll = loop.time() + self._poll_interval
        while not stop.is_set():
            try:
                await asyncio.wait_for(
                    stop.wait(), timeout=max(0.0, next_poll - loop.time())
                )
            except TimeoutError:
                await self.refresh()
                next_poll += self._poll_interval
                # Skip missed slots instead of bursting after a slow request.
                if next_poll < loop.time():
                    next_poll = loop.time() + self._poll_interval

    def _report_failure(self, what: str, exc: Exception, **context: object) -> None:
        self.failed_polls += 1
        logger.opt(exception=exc).debug("Fetching {} failed", what)
        self._telemetry.warning(
            f"viewer.{what.replace(' ', '_')}_failed",
            context={"error": str(exc), **context},
        )
