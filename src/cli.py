"""ppc-dashboard - command-line interface for the dashboard proxy.

Usage:
    ppc-dashboard serve                    # Run the proxy server
    ppc-dashboard credentials status       # Which credential fields are stored
    ppc-dashboard credentials clear        # Delete stored credentials
    ppc-dashboard report accounts          # List accounts via the data source
    ppc-dashboard report metrics ID        # Metrics for one account
    ppc-dashboard report conversions ID    # Conversions for one account
"""

import json

import click
import uvicorn

from src.client import DataSourceError, create_data_source
from src.config.settings import get_client_settings, get_settings
from src.core.credential_store import CredentialStore
from src.domain.periods import DEFAULT_PERIOD, PERIODS
from src.utils.logging_config import setup_logging


def _store() -> CredentialStore:
    settings = get_settings()
    return CredentialStore(settings.credentials_path, settings.encryption_key)


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
def cli():
    """ppc-dashboard - Google Ads proxy and reporting tools."""
    settings = get_settings()
    setup_logging(level=settings.log_level, log_format=settings.log_format)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host, port, reload):
    """Run the proxy server."""
    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.group()
def credentials():
    """Manage the stored Google Ads credentials."""


@credentials.command("status")
def credentials_status():
    """Show which credential fields are stored (never their values)."""
    stored = _store().load()
    if stored is None:
        _echo_json({"exists": False})
        return
    _echo_json({"exists": True, **stored.presence()})


@credentials.command("clear")
@click.confirmation_option(prompt="Delete the stored Google Ads credentials?")
def credentials_clear():
    """Delete stored credentials."""
    if not _store().clear():
        raise click.ClickException("Failed to delete credentials")
    click.echo("Credentials deleted")


@cli.group()
@click.option(
    "--source",
    type=click.Choice(["auto", "real", "mock"]),
    default=None,
    help="Data source (defaults to DASHBOARD_DATA_SOURCE)",
)
@click.pass_context
def report(ctx, source):
    """Print dashboard data as JSON."""
    settings = get_client_settings()
    if source:
        settings = settings.model_copy(update={"data_source": source})
    ctx.obj = create_data_source(settings)


period_option = click.option(
    "--period",
    type=click.Choice(PERIODS),
    default=DEFAULT_PERIOD,
    show_default=True,
    help="Reporting period",
)


@report.command("accounts")
@click.pass_obj
def report_accounts(source):
    """List accessible accounts."""
    try:
        accounts = source.get_accounts()
    except DataSourceError as exc:
        raise click.ClickException(exc.message) from exc
    _echo_json([account.to_wire() for account in accounts])


@report.command("metrics")
@click.argument("account_id")
@period_option
@click.pass_obj
def report_metrics(source, account_id, period):
    """Performance metrics for ACCOUNT_ID."""
    try:
        metrics = source.get_metrics(account_id, period)
    except DataSourceError as exc:
        raise click.ClickException(exc.message) from exc
    _echo_json(metrics.to_wire())


@report.command("conversions")
@click.argument("account_id")
@period_option
@click.pass_obj
def report_conversions(source, account_id, period):
    """Form vs. call conversions for ACCOUNT_ID."""
    try:
        conversions = source.get_conversions(account_id, period)
    except DataSourceError as exc:
        raise click.ClickException(exc.message) from exc
    _echo_json(conversions.to_wire())


if __name__ == "__main__":
    cli()
