"""
Shared fakes for pipeline, view and client tests
"""

from __future__ import annotations

from typing import Any

import pytest
import requests

from monitor.client import ApiError, Check, Ping
from monitor.runner import Completed, Interrupted


class RecordingPingApi:
    """
    Ping API fake that records calls into a shared log
    """

    def __init__(self, log: list[str], *, fail_start: bool = False) -> None:
        self.log = log
        self.fail_start = fail_start

    def start_timer(self) -> None:
        self.log.append("start_timer")
        if self.fail_start:
            raise ApiError("GET start failed: connection refused")

    def report_success(self) -> None:
        self.log.append("report_success")

    def report_failure(self) -> None:
        self.log.append("report_failure")


class ScriptedSpawner:
    """
    Spawner fake returning a fixed outcome (or raising) and logging the spawn
    """

    def __init__(self, log: list[str], result: Completed | Interrupted | Exception) -> None:
        self.log = log
        self.result = result
        self.spawned: list[list[str]] = []

    def spawn_and_wait(self, tokens):
        self.log.append("spawn")
        self.spawned.append(list(tokens))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeManageApi:
    def __init__(self, checks: list[Check] | None = None, pings: list[Ping] | None = None) -> None:
        self.checks = checks or []
        self.pings = pings or []
        self.requested: list[str] = []

    def get_checks(self) -> list[Check]:
        return list(self.checks)

    def list_logged_pings(self, check_id: str) -> list[Ping]:
        self.requested.append(check_id)
        return list(self.pings)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, *, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self.payload = payload
        self.invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Any:
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """
    Minimal stand-in for requests.Session
    """

    def __init__(self, response: FakeResponse | Exception | None = None) -> None:
        self.headers: dict[str, str] = {}
        self.response = response if response is not None else FakeResponse()
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, "headers": dict(self.headers), **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def call_log() -> list[str]:
    return []


@pytest.fixture
def ping_api(call_log) -> RecordingPingApi:
    return RecordingPingApi(call_log)
