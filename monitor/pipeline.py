"""
monitor.pipeline
AUTHOR: carter-vin

Execution-and-reporting pipeline

Per invocation:
    Idle -> TimerMaybeStarted -> Spawned
         -> CompletedSuccess | CompletedFailure | Interrupted | FatalError

Key contract:
- empty command fails before any network call or spawn
- start signal (if requested) is sent strictly before spawn
- exactly one of report_success / report_failure per completed run
- interrupted runs are reported to the operator only, never to the service
- errors propagate; the CLI maps them to exit codes
"""

from __future__ import annotations

import sys
from typing import Callable

from monitor import __version__
from monitor.client import PingApi, PingClient
from monitor.logging import emit_event
from monitor.runner import (
    EXIT_FATAL,
    Completed,
    ExecutionOutcome,
    Interrupted,
    Spawner,
    SubprocessSpawner,
)
from monitor.settings import Settings

ClientFactory = Callable[[Settings], PingApi]


class MissingCommandError(ValueError):
    """Command string has no executable token."""


def tokenize(command: str) -> list[str]:
    """
    Split a command string on ASCII spaces

    - no quoting, escaping or expansion
    - empty tokens from repeated spaces are dropped
    """
    if not command.strip():
        raise MissingCommandError("Command must be provided!")
    return [token for token in command.split(" ") if token]


def build_ping_client(settings: Settings) -> PingApi:
    return PingClient(
        settings.credential,
        user_agent=settings.user_agent,
        base_url=settings.base_url,
    )


def exit_code_for(outcome: ExecutionOutcome) -> int:
    """
    Process exit code mirroring the monitored command

    Signalled children map to 128 + signal like a shell would
    """
    if isinstance(outcome, Completed):
        return outcome.exit_code
    if outcome.signal:
        return 128 + outcome.signal
    return EXIT_FATAL


def report_outcome(client: PingApi, outcome: ExecutionOutcome) -> None:
    """
    Send the single success/failure signal for a finished run
    """
    if isinstance(outcome, Interrupted):
        emit_event("command_interrupted", tool_version=__version__, signal=outcome.signal)
        print("Interrupted!", file=sys.stderr)
        return

    if outcome.exit_code == 0:
        client.report_success()
        kind = "success"
    else:
        client.report_failure()
        kind = "fail"

    emit_event("report_sent", tool_version=__version__, kind=kind, exit_code=outcome.exit_code)


def run(
    settings: Settings,
    command: str,
    use_timer: bool,
    *,
    client_factory: ClientFactory = build_ping_client,
    spawner: Spawner | None = None,
) -> int:
    """
    Run one monitored command and report its outcome

    Returns the exit code the tool should exit with.
    Raises MissingCommandError, ClientConfigError, ApiError, SpawnError.
    """
    tokens = tokenize(command)
    client = client_factory(settings)
    spawner = spawner if spawner is not None else SubprocessSpawner()

    emit_event(
        "monitor_start",
        tool_version=__version__,
        executable=tokens[0],
        argc=len(tokens) - 1,
        timer=use_timer,
    )

    if use_timer:
        # Failure here aborts: a run without a confirmed start has no true duration
        client.start_timer()
        emit_event("timer_started", tool_version=__version__)

    emit_event("command_spawning", tool_version=__version__, executable=tokens[0])
    outcome = spawner.spawn_and_wait(tokens)

    if isinstance(outcome, Completed):
        emit_event("command_completed", tool_version=__version__, exit_code=outcome.exit_code)

    report_outcome(client, outcome)
    return exit_code_for(outcome)
