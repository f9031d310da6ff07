"""Company and account directory seeded into every store."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from broker_dashboard.models import Account, Company

SEED_COMPANIES: tuple[tuple[str, str], ...] = (
    ("c1", "Sumaiya Tech"),
    ("c2", "Fathima Holdings"),
)

# company id -> (account id, account name, tickers)
SEED_ACCOUNTS: dict[str, tuple[tuple[str, str, tuple[str, ...]], ...]] = {
    "c1": (
        ("a1", "Sumaiya - Account 1", ("GOOG", "TSLA", "AMZN")),
        ("a2", "Sumaiya - Account 2", ("META", "NVDA")),
    ),
    "c2": (
        ("b1", "Fathima - Account 1", ("TSLA", "NVDA")),
        ("b2", "Fathima - Account 2", ("GOOG", "AMZN", "META")),
    ),
}


@dataclass(frozen=True, slots=True)
class AccountDirectory:
    """Static mapping of companies to their ordered accounts."""

    companies: tuple[Company, ...]
    accounts: Mapping[str, tuple[Account, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        company_ids = {company.id for company in self.companies}
        if len(company_ids) != len(self.companies):
            raise ValueError("Company ids must be unique")
        unknown = set(self.accounts) - company_ids
        if unknown:
            raise ValueError(f"Accounts reference unknown companies: {sorted(unknown)}")
        seen: set[str] = set()
        for account in self.iter_accounts():
            if account.id in seen:
                raise ValueError(f"Duplicate account id: {account.id}")
            seen.add(account.id)

    def accounts_for(self, company_id: str) -> tuple[Account, ...]:
        return self.accounts.get(company_id, ())

    def iter_accounts(self) -> Iterator[Account]:
        for company in self.companies:
            yield from self.accounts.get(company.id, ())

    @classmethod
    def build(
        cls,
        companies: Sequence[tuple[str, str]],
        accounts: Mapping[str, Sequence[tuple[str, str, Sequence[str]]]],
    ) -> AccountDirectory:
        """Build a directory from plain tuples."""
        return cls(
            companies=tuple(Company(id=cid, name=name) for cid, name in companies),
            accounts={
                company_id: tuple(
                    Account(id=aid, name=name, tickers=tuple(tickers))
                    for aid, name, tickers in rows
                )
                for company_id, rows in accounts.items()
            },
        )


def default_directory() -> AccountDirectory:
    """Directory used when no other layout is injected."""
    return AccountDirectory.build(SEED_COMPANIES, SEED_ACCOUNTS)
