"""CLI entry point for the broker dashboard."""

import typer

from broker_dashboard.cli_commands.monitoring import monitoring_app
from broker_dashboard.cli_commands.queries import query_app

app = typer.Typer(
    name="broker-dashboard",
    help="Simulated stock broker client dashboard",
)

app.add_typer(query_app, name="query")
app.add_typer(monitoring_app, name="monitoring")


def _register_root_aliases(source_app: typer.Typer) -> None:
    """Expose subcommands at the root level (``broker-dashboard quotes a1``)."""

    for cmd in source_app.registered_commands:
        callback = cmd.callback
        if callback is None:
            continue
        command_name = cmd.name or callback.__name__.replace("_", "-")
        decorator = app.command(  # type: ignore[misc]
            name=command_name,
            help=cmd.help,
            short_help=cmd.short_help,
            hidden=cmd.hidden,
            rich_help_panel=cmd.rich_help_panel,
        )
        decorator(callback)


_register_root_aliases(query_app)
_register_root_aliases(monitoring_app)


if __name__ == "__main__":
    app()
