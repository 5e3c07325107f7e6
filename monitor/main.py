"""
monitor.main
------------
AUTHOR: carter-vin

PURPOSE:
- Wrap an arbitrary command and report its result to healthchecks
- Optionally signal "started" first so the service records run duration

Key contract:
- `monitor -X "cmd args"` exits with the command's exit code
- local fatal errors exit 125 (126/127 when the command cannot be started)
- HEALTHCHECKS_CHECK_ID must be set; nothing runs without it
"""

from __future__ import annotations

import typer

from monitor import __version__
from monitor.client import ApiError, ClientConfigError
from monitor.logging import emit_event
from monitor.pipeline import MissingCommandError, build_ping_client, run
from monitor.runner import EXIT_FATAL, SpawnError, SubprocessSpawner
from monitor.settings import CHECK_ID_ENV, SettingsError, load_settings

app = typer.Typer(
    add_completion=False,
    help="monitor: report results of arbitrary commands to healthchecks.io",
)


def _fatal(e: Exception, code: int) -> None:
    """
    Surface a fatal error on stderr and exit non-zero
    """
    emit_event(
        "fatal_error",
        tool_version=__version__,
        error_type=type(e).__name__,
        message=str(e),
        exit_code=code,
    )
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=code)


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def main(
    timer: bool = typer.Option(
        False,
        "--timer",
        "-t",
        help="Start a timer before running the command.",
    ),
    command: str = typer.Option(
        ...,
        "--exec",
        "-X",
        help="Command to execute and monitor (split on spaces, no shell).",
    ),
) -> None:
    """
    Run COMMAND and report success or failure
    """
    try:
        settings = load_settings(CHECK_ID_ENV)
        code = run(
            settings,
            command,
            timer,
            client_factory=build_ping_client,
            spawner=SubprocessSpawner(),
        )
    except SpawnError as e:
        _fatal(e, e.exit_code)
    except (SettingsError, MissingCommandError, ClientConfigError, ApiError) as e:
        _fatal(e, EXIT_FATAL)

    raise typer.Exit(code=code)


# run command if invoked directly
if __name__ == "__main__":
    app()
