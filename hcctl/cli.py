"""
hcctl.cli
AUTHOR: carter-vin

Command-line tool for inspecting a healthchecks.io account

Commands:
- list: all checks with time since last ping
- pings <check-id>: the 10 most recent pings of one check
"""

from __future__ import annotations

from datetime import datetime, timezone

import typer

from hcctl.render import RENDERER_NAMES, get_renderer
from hcctl.views import CHECK_HEADERS, PING_HEADERS, TimestampError, check_rows, ping_rows
from monitor import __version__
from monitor.client import ApiError, ClientConfigError, ManageApi, ManageClient
from monitor.logging import emit_event
from monitor.settings import TOKEN_ENV, Settings, SettingsError, load_settings

EXIT_ERROR = 1
EXIT_USAGE = 2

app = typer.Typer(add_completion=False, help="hcctl: inspect healthchecks.io checks and pings")


def build_manage_client(settings: Settings) -> ManageApi:
    return ManageClient(
        settings.credential,
        user_agent=settings.user_agent,
        base_url=settings.base_url,
    )


def _connect() -> ManageApi:
    settings = load_settings(TOKEN_ENV)
    return build_manage_client(settings)


def _check_format(output_format: str) -> None:
    if output_format not in RENDERER_NAMES:
        raise typer.BadParameter(f"--format must be one of: {', '.join(RENDERER_NAMES)}")


def _fatal(e: Exception) -> None:
    emit_event(
        "fatal_error",
        tool_version=__version__,
        error_type=type(e).__name__,
        message=str(e),
        exit_code=EXIT_ERROR,
    )
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=EXIT_ERROR)


_FATAL_ERRORS = (SettingsError, ClientConfigError, ApiError, TimestampError)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Missing subcommand is a usage error: print help, exit 2
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=EXIT_USAGE)


@app.command("list")
def list_checks(
    output_format: str = typer.Option(
        "table",
        "--format",
        help="Output format: table or json.",
    ),
) -> None:
    """
    List all checks associated with an account
    """
    _check_format(output_format)

    try:
        api = _connect()
        checks = api.get_checks()
        rows = check_rows(checks, now=datetime.now(timezone.utc))
    except _FATAL_ERRORS as e:
        _fatal(e)

    emit_event("checks_listed", tool_version=__version__, count=len(rows))
    typer.echo(get_renderer(output_format).render(CHECK_HEADERS, rows))


@app.command("pings")
def pings(
    check_id: str = typer.Argument(..., help="UUID of the check whose pings are listed."),
    output_format: str = typer.Option(
        "table",
        "--format",
        help="Output format: table or json.",
    ),
) -> None:
    """
    Get logged pings for a given check
    """
    _check_format(output_format)

    try:
        api = _connect()
        logged = api.list_logged_pings(check_id)
        rows = ping_rows(logged)
    except _FATAL_ERRORS as e:
        _fatal(e)

    emit_event(
        "pings_listed",
        tool_version=__version__,
        check_id=check_id,
        received=len(logged),
        shown=len(rows),
    )
    typer.echo(get_renderer(output_format).render(PING_HEADERS, rows))


if __name__ == "__main__":
    app()
