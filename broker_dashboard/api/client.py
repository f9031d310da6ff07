"""In-process query endpoints backed by a MarketStore."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from loguru import logger

from broker_dashboard.api.routes import (
    ApiRequest,
    GetAccountData,
    ListAccounts,
    ListCompanies,
    Unrecognized,
    parse_path,
)
from broker_dashboard.core.constants import API_LATENCY_SECONDS
from broker_dashboard.errors import ApiError
from broker_dashboard.models import AccountData
from broker_dashboard.store import MarketStore

NOT_FOUND_BODY: dict[str, str] = {"error": "not found"}


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Status code plus JSON-compatible body."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return self.body


class MockApi:
    """Serve read-only views of a store through path-addressed endpoints.

    Every call waits a fixed latency to model a network round trip, then
    reads the store at response time.
    """

    def __init__(self, store: MarketStore, *, latency_seconds: float = API_LATENCY_SECONDS) -> None:
        if latency_seconds < 0:
            raise ValueError("latency_seconds cannot be negative")
        self._store = store
        self._latency = latency_seconds

    @property
    def latency_seconds(self) -> float:
        return self._latency

    async def fetch(self, path: str) -> ApiResponse:
        """Answer ``path`` after the simulated latency."""
        await asyncio.sleep(self._latency)
        response = self.dispatch(parse_path(path))
        logger.debug("GET {} -> {}", path, response.status)
        return response

    async def call_api(self, path: str) -> Any:
        """Fetch ``path`` and return its body.

        Raises:
            ApiError: If the endpoint answers with a non-success status
        """
        response = await self.fetch(path)
        if not response.ok:
            raise ApiError(path, response.status, response.body)
        return response.json()

    def dispatch(self, request: ApiRequest) -> ApiResponse:
        store = self._store
        match request:
            case ListCompanies():
                body: Any = [company.model_dump(mode="json") for company in store.list_companies()]
            case ListAccounts(company_id=company_id):
                body = [
                    account.model_dump(mode="json", by_alias=True)
                    for account in store.list_accounts(company_id)
                ]
            case GetAccountData(account_id=account_id):
                data = AccountData(stocks=store.get_account_quotes(account_id))
                body = data.model_dump(mode="json", by_alias=True)
            case Unrecognized():
                return ApiResponse(status=404, body=dict(NOT_FOUND_BODY))
        return ApiResponse(status=200, body=body)
