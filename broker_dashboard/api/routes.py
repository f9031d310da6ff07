"""Parse endpoint paths into typed requests."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True, slots=True)
class ListCompanies:
    """``/companies``"""


@dataclass(frozen=True, slots=True)
class ListAccounts:
    """``/companies/{company_id}/accounts``"""

    company_id: str


@dataclass(frozen=True, slots=True)
class GetAccountData:
    """``/accounts/{account_id}/data``"""

    account_id: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """Any path that matches none of the endpoints."""

    path: str


ApiRequest = ListCompanies | ListAccounts | GetAccountData | Unrecognized


def split_path(path: str) -> list[str]:
    """Non-empty path segments, ignoring query string and fragment."""
    return [segment for segment in urlsplit(path).path.split("/") if segment]


def parse_path(path: str) -> ApiRequest:
    """Map a request path onto one of the known endpoints.

    Only the leading segments are inspected, so trailing segments after a
    recognized shape are ignored.
    """
    match split_path(path):
        case ["companies"]:
            return ListCompanies()
        case ["companies", company_id, "accounts", *_]:
            return ListAccounts(company_id=company_id)
        case ["accounts", account_id, "data", *_]:
            return GetAccountData(account_id=account_id)
        case _:
            return Unrecognized(path=path)
