"""Real-time terminal dashboard for simulated account quotes."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from broker_dashboard.core.constants import DASHBOARD_REFRESH_SECONDS
from broker_dashboard.core.events import (
    DiagnosticEvent,
    EventBus,
    EventSubscription,
    EventTopic,
    QuoteTickEvent,
)
from broker_dashboard.models import Quote
from broker_dashboard.session import DashboardSession

MAX_RECENT_DIAGNOSTICS = 5


def format_price(price: float) -> str:
    return f"${price:.2f}"


def format_change(change: float) -> str:
    return f"{'+' if change >= 0 else ''}{change:.2f}"


def change_style(change: float) -> str:
    return "green" if change >= 0 else "red"


def format_updated(timestamp: datetime) -> str:
    """Local wall-clock time of a quote update."""
    return timestamp.astimezone().strftime("%H:%M:%S")


class BrokerDashboard:
    """Terminal rendition of the stock broker client dashboard.

    Features:
    - Signed-in user and current company/account selection
    - Subscriptions summary with signed change
    - Live price table refreshed from the session's poll loop
    - Simulator tick counter and recent diagnostics from the event bus
    """

    def __init__(
        self,
        session: DashboardSession,
        console: Console | None = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self.session = session
        self.console = console or Console()
        self.event_bus = event_bus

        self.last_tick: QuoteTickEvent | None = None
        self.recent_diagnostics: list[DiagnosticEvent] = []

        self._quote_sub: EventSubscription | None = None
        self._diagnostic_sub: EventSubscription | None = None

    async def run(self) -> None:
        """Poll and render until interrupted."""
        stop = asyncio.Event()
        poll_task = asyncio.create_task(self.session.poll(stop))
        tasks = [poll_task, *self.start_event_processors()]
        try:
            with Live(
                self._build_layout(),
                console=self.console,
                refresh_per_second=2,
                screen=True,
            ) as live:
                while not poll_task.done():
                    live.update(self._build_layout())
                    await asyncio.sleep(DASHBOARD_REFRESH_SECONDS)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Dashboard stopped by user[/yellow]")
        finally:
            stop.set()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self.close_subscriptions()

    def start_event_processors(self) -> list[asyncio.Task[None]]:
        """Subscribe to quote ticks and diagnostics; no-op without a bus."""
        if self.event_bus is None:
            return []
        self._quote_sub = self.event_bus.subscribe(EventTopic.QUOTES)
        self._diagnostic_sub = self.event_bus.subscribe(EventTopic.DIAGNOSTIC)
        return [
            asyncio.create_task(self._process_quote_ticks()),
            asyncio.create_task(self._process_diagnostics()),
        ]

    def close_subscriptions(self) -> None:
        if self._quote_sub:
            self._quote_sub.close()
        if self._diagnostic_sub:
            self._diagnostic_sub.close()

    async def _process_quote_ticks(self) -> None:
        if self._quote_sub is None:
            return
        async for event in self._quote_sub:
            if isinstance(event, QuoteTickEvent):
                self.last_tick = event

    async def _process_diagnostics(self) -> None:
        if self._diagnostic_sub is None:
            return
        async for event in self._diagnostic_sub:
            if isinstance(event, DiagnosticEvent):
                self._handle_diagnostic_event(event)

    def _handle_diagnostic_event(self, event: DiagnosticEvent) -> None:
        self.recent_diagnostics.append(event)
        if len(self.recent_diagnostics) > MAX_RECENT_DIAGNOSTICS:
            self.recent_diagnostics = self.recent_diagnostics[-MAX_RECENT_DIAGNOSTICS:]

    def _build_layout(self) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(self._build_header(), name="header", size=3),
            Layout(name="body"),
            Layout(self._build_footer(), name="footer", size=3),
        )
        layout["body"].split_row(
            Layout(name="left", ratio=1),
            Layout(self._build_prices_panel(), name="right", ratio=2),
        )
        layout["body"]["left"].split_column(
            Layout(self._build_selection_panel(), name="selection", size=8),
            Layout(self._build_subscriptions_panel(), name="subscriptions"),
            Layout(self._build_diagnostics_panel(), name="diagnostics", size=8),
        )
        return layout

    def _build_header(self) -> Panel:
        title = Text("Stock Broker Client Dashboard", style="bold white on blue", justify="center")
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        return Panel(f"{title}  {timestamp}", border_style="blue")

    def _build_selection_panel(self) -> Panel:
        session = self.session
        company = next(
            (c.name for c in session.companies if c.id == session.selected_company),
            "-- choose company --",
        )
        account = next(
            (a.name for a in session.accounts if a.id == session.selected_account),
            "-- choose account --",
        )

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Logged in as:", session.email or "--")
        table.add_row("Company:", company)
        table.add_row("Account:", account)
        if session.failed_polls:
            table.add_row("Failed polls:", f"[yellow]{session.failed_polls}[/yellow]")
        return Panel(table, title="Selection", border_style="green")

    def _build_subscriptions_panel(self) -> Panel:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="bold")
        table.add_column(justify="right")
        table.add_column(justify="right")

        if not self.session.quotes:
            table.add_row("[dim]No account selected[/dim]", "", "")
        for quote in self.session.quotes:
            table.add_row(
                quote.ticker,
                format_price(quote.price),
                f"[{change_style(quote.change)}]{format_change(quote.change)}[/]",
            )
        return Panel(table, title="Subscriptions", border_style="cyan")

    def _build_prices_panel(self) -> Panel:
        table = Table(show_header=True, header_style="bold magenta", expand=True)
        table.add_column("Ticker", style="bold")
        table.add_column("Price", justify="right")
        table.add_column("Change", justify="right")
        table.add_column("Updated", style="dim")

        for quote in self.session.quotes:
            table.add_row(*self._price_row(quote))

        last = self.session.last_refresh
        subtitle = f"Last refresh: {last:%H:%M:%S}" if last else "Awaiting data"
        return Panel(table, title="Live Prices", border_style="magenta", subtitle=subtitle)

    def _price_row(self, quote: Quote) -> tuple[str, str, str, str]:
        return (
            quote.ticker,
            format_price(quote.price),
            f"[{change_style(quote.change)}]{format_change(quote.change)}[/]",
            format_updated(quote.updated_at),
        )

    def _build_diagnostics_panel(self) -> Panel:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="dim")
        table.add_column()

        if not self.recent_diagnostics:
            table.add_row("", "[dim]No diagnostics[/dim]")
        for event in reversed(self.recent_diagnostics):
            style = "yellow" if event.level == "WARNING" else "white"
            table.add_row(
                event.timestamp.astimezone().strftime("%H:%M:%S"),
                f"[{style}]{event.message}[/]",
            )
        return Panel(table, title="Diagnostics", border_style="yellow")

    def _build_footer(self) -> Panel:
        interval = self.session.poll_interval_seconds
        tick = f"Tick {self.last_tick.tick}" if self.last_tick else "Waiting for ticks"
        return Panel(
            f"[bold]Ctrl+C[/bold]: Exit  |  Polling every {interval:g}s  |  {tick}",
            border_style="blue",
        )
