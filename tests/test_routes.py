"""Tests for endpoint path parsing."""

from __future__ import annotations

import pytest

from broker_dashboard.api.routes import (
    GetAccountData,
    ListAccounts,
    ListCompanies,
    Unrecognized,
    parse_path,
    split_path,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/companies", ListCompanies()),
        ("/companies/", ListCompanies()),
        ("companies", ListCompanies()),
        ("/companies?page=2", ListCompanies()),
        ("/companies/c1/accounts", ListAccounts(company_id="c1")),
        ("/companies//c2/accounts/", ListAccounts(company_id="c2")),
        ("/companies/c1/accounts/extra", ListAccounts(company_id="c1")),
        ("/accounts/a1/data", GetAccountData(account_id="a1")),
        ("/accounts/a1/data#top", GetAccountData(account_id="a1")),
        ("/accounts/zzz/data", GetAccountData(account_id="zzz")),
    ],
)
def test_parse_known_paths(path: str, expected: object) -> None:
    assert parse_path(path) == expected


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "",
        "/unknown/path",
        "/companies/c1",
        "/companies/c1/users",
        "/accounts",
        "/accounts/a1",
        "/accounts//data",
        "/Companies",
    ],
)
def test_parse_unrecognized_paths(path: str) -> None:
    assert parse_path(path) == Unrecognized(path=path)


def test_split_path_drops_empty_segments() -> None:
    assert split_path("/a//b/?q=1") == ["a", "b"]
