"""Live dashboard command for the broker dashboard CLI."""

import asyncio

import typer
from loguru import logger

from broker_dashboard.core.config import DashboardConfig, load_config
from broker_dashboard.core.events import EventBus
from broker_dashboard.core.telemetry import build_telemetry_reporter
from broker_dashboard.errors import LoginError
from broker_dashboard.sim.simulator import PriceSimulator

from .utils import build_api, build_store, setup_logging

monitoring_app = typer.Typer(
    name="monitoring",
    help="Live monitoring commands",
)


@monitoring_app.command()
def dashboard(
    email: str = typer.Option(..., "--email", "-e", help="Email to sign in with"),
    company: str | None = typer.Option(None, "--company", help="Company to select"),
    account: str | None = typer.Option(None, "--account", help="Account to select"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Launch the live quote dashboard."""
    config = load_config()
    setup_logging(config.log_dir, verbose)

    try:
        asyncio.run(run_dashboard(config, email, company=company, account=account))
    except LoginError as exc:
        typer.echo(f"Login failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def run_dashboard(
    config: DashboardConfig,
    email: str,
    *,
    company: str | None = None,
    account: str | None = None,
) -> None:
    """Run simulator and dashboard on one event loop."""
    from broker_dashboard.dashboard import BrokerDashboard
    from broker_dashboard.session import DashboardSession

    event_bus = EventBus()
    store = build_store(config)
    api = build_api(config, store)
    telemetry = build_telemetry_reporter(
        source="viewer",
        event_bus=event_bus,
        file_path=config.telemetry_file,
    )
    session = DashboardSession(
        api,
        poll_interval_seconds=config.poll_interval_seconds,
        telemetry=telemetry,
    )

    async with PriceSimulator(
        store, interval_seconds=config.tick_interval_seconds, event_bus=event_bus
    ):
        await session.load_companies()
        await session.login(email)
        if company:
            await session.select_company(company)
        if account:
            await session.select_account(account)
        logger.info(
            "Viewing company={} account={}", session.selected_company, session.selected_account
        )
        try:
            await BrokerDashboard(session, event_bus=event_bus).run()
        finally:
            await telemetry.drain()
