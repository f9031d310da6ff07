"""One-shot query commands against a freshly seeded store."""

import asyncio
import json

import typer

from broker_dashboard.core.config import load_config
from broker_dashboard.dashboard import format_change, format_price, format_updated
from broker_dashboard.models import AccountData
from broker_dashboard.sim.simulator import PriceSimulator

from .utils import build_api, build_store, setup_logging

query_app = typer.Typer(
    name="query",
    help="Query the simulated brokerage endpoints",
)


@query_app.command()
def companies(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """List seeded companies."""
    config = load_config()
    setup_logging(config.log_dir, verbose)

    store = build_store(config)
    for company in store.list_companies():
        typer.echo(f"{company.id}\t{company.name}")


@query_app.command()
def accounts(
    company_id: str = typer.Argument(..., help="Company identifier"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """List the accounts of a company."""
    config = load_config()
    setup_logging(config.log_dir, verbose)

    store = build_store(config)
    rows = store.list_accounts(company_id)
    if not rows:
        typer.echo(f"No accounts for company {company_id}")
        return
    for account in rows:
        typer.echo(f"{account.id}\t{account.name}\t{', '.join(account.tickers)}")


@query_app.command()
def quotes(
    account_id: str = typer.Argument(..., help="Account identifier"),
    ticks: int = typer.Option(0, "--ticks", min=0, help="Simulator steps to apply first"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Show the quotes of an account, optionally after advancing the simulation."""
    config = load_config()
    setup_logging(config.log_dir, verbose)

    store = build_store(config)
    api = build_api(config, store)

    async def _run() -> AccountData:
        await PriceSimulator(store, interval_seconds=config.tick_interval_seconds).step(ticks)
        return AccountData.model_validate(await api.call_api(f"/accounts/{account_id}/data"))

    data = asyncio.run(_run())
    if not data.stocks:
        typer.echo(f"No quotes for account {account_id}")
        return
    typer.echo(f"=== {account_id} after {store.tick_count} ticks ===")
    for quote in data.stocks:
        typer.echo(
            f"{quote.ticker:<6} {format_price(quote.price):>10} "
            f"{format_change(quote.change):>8}  {format_updated(quote.updated_at)}"
        )


@query_app.command()
def fetch(
    path: str = typer.Argument(..., help="Endpoint path, e.g. /companies/c1/accounts"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Print the raw status and JSON body for any path."""
    config = load_config()
    setup_logging(config.log_dir, verbose)

    api = build_api(config, build_store(config))
    response = asyncio.run(api.fetch(path))
    typer.echo(f"HTTP {response.status}")
    typer.echo(json.dumps(response.json(), indent=2))
    if not response.ok:
        raise typer.Exit(code=1)
