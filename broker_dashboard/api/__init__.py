"""Query interface over the quote store."""

from .client import NOT_FOUND_BODY, ApiResponse, MockApi
from .routes import (
    ApiRequest,
    GetAccountData,
    ListAccounts,
    ListCompanies,
    Unrecognized,
    parse_path,
)

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "GetAccountData",
    "ListAccounts",
    "ListCompanies",
    "MockApi",
    "NOT_FOUND_BODY",
    "Unrecognized",
    "parse_path",
]
