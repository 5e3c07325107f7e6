"""
Contract tests for the monitor CLI surface and exit codes
"""

import pytest
from typer.testing import CliRunner

from conftest import RecordingPingApi, ScriptedSpawner
from monitor.main import app
from monitor.runner import Completed, Interrupted, SpawnError
from monitor.settings import CHECK_ID_ENV

CHECK_UUID = "5bf66975-d4c7-4bf5-bcc8-b8d8a82ea278"


@pytest.fixture
def wired(monkeypatch, call_log):
    """
    Replace the real client and spawner; returns a setter for the outcome
    """
    monkeypatch.setenv(CHECK_ID_ENV, CHECK_UUID)
    client = RecordingPingApi(call_log)
    state: dict[str, ScriptedSpawner] = {}

    def set_outcome(result):
        state["spawner"] = ScriptedSpawner(call_log, result)
        return state["spawner"]

    monkeypatch.setattr("monitor.main.build_ping_client", lambda settings: client)
    monkeypatch.setattr("monitor.main.SubprocessSpawner", lambda: state["spawner"])
    return set_outcome


def test_success_exits_zero(wired, call_log) -> None:
    spawner = wired(Completed(0))

    result = CliRunner().invoke(app, ["-X", "pg_dump -f /tmp/db.sql"])

    assert result.exit_code == 0
    assert spawner.spawned == [["pg_dump", "-f", "/tmp/db.sql"]]
    assert call_log == ["spawn", "report_success"]


def test_failure_exit_code_is_mirrored(wired, call_log) -> None:
    wired(Completed(4))

    result = CliRunner().invoke(app, ["--timer", "--exec", "rsync -a src dst"])

    assert result.exit_code == 4
    assert call_log == ["start_timer", "spawn", "report_failure"]


def test_short_timer_flag(wired, call_log) -> None:
    wired(Completed(0))

    result = CliRunner().invoke(app, ["-t", "-X", "true"])

    assert result.exit_code == 0
    assert call_log[0] == "start_timer"


def test_interrupted_prints_diagnostic(wired, call_log) -> None:
    wired(Interrupted(signal=9))

    result = CliRunner().invoke(app, ["-X", "sleep 100"])

    assert result.exit_code == 137
    assert "Interrupted!" in result.output
    assert call_log == ["spawn"]


def test_missing_command_is_fatal(wired, call_log) -> None:
    wired(Completed(0))

    result = CliRunner().invoke(app, ["-X", "  "])

    assert result.exit_code == 125
    assert "Command must be provided" in result.output
    assert call_log == []


def test_unstartable_command_uses_spawn_exit_code(wired, call_log) -> None:
    wired(SpawnError("failed to start 'nope': No such file or directory", exit_code=127))

    result = CliRunner().invoke(app, ["-X", "nope"])

    assert result.exit_code == 127
    assert "failed to start" in result.output
    assert call_log == ["spawn"]


def test_missing_check_id_fails_before_anything(monkeypatch) -> None:
    monkeypatch.delenv(CHECK_ID_ENV, raising=False)

    result = CliRunner().invoke(app, ["-X", "true"])

    assert result.exit_code == 125
    assert f"{CHECK_ID_ENV} must be set" in result.output


def test_invalid_check_id_is_fatal(monkeypatch) -> None:
    monkeypatch.setenv(CHECK_ID_ENV, "not-a-uuid")

    result = CliRunner().invoke(app, ["-X", "true"])

    assert result.exit_code == 125
    assert "not a valid UUID" in result.output


def test_exec_option_is_required() -> None:
    result = CliRunner().invoke(app, ["--timer"])

    assert result.exit_code == 2
