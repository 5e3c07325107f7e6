"""
monitor.client
AUTHOR: carter-vin

Thin HTTP client for a healthchecks.io-compatible service

Two surfaces, each behind a Protocol so tests can swap in recording fakes:
- PingApi: start / success / fail signals for one check (ping UUID)
- ManageApi: read-only account views (management API key)

Failure semantics:
- invalid credential format -> ClientConfigError at construction
- transport error, non-2xx, malformed payload -> ApiError
- no retries; every call is attempted exactly once
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import requests

from monitor import __version__

DEFAULT_API_URL = "https://healthchecks.io"
DEFAULT_PING_URL = "https://hc-ping.com"
DEFAULT_USER_AGENT = f"healthchecks-tools/{__version__}"
REQUEST_TIMEOUT_S = 10


class ClientConfigError(ValueError):
    """Credential cannot be used to build a client."""


class ApiError(RuntimeError):
    """Request to the monitoring service failed."""


# -----------------------------
# RECORDS
# -----------------------------
@dataclass(frozen=True)
class Check:
    """
    Check as listed by the management API
    - id: None when the key is read-only (no update_url exposed)
    - last_ping: RFC3339 string or None if never pinged
    """

    id: Optional[str]
    name: str
    last_ping: Optional[str]
    status: Optional[str] = None
    n_pings: Optional[int] = None

    @staticmethod
    def from_dict(payload: dict[str, Any]) -> "Check":
        name = payload.get("name", "")
        last_ping = payload.get("last_ping")
        if not isinstance(name, str):
            raise ApiError(f"malformed check record: name {name!r}")
        if last_ping is not None and not isinstance(last_ping, str):
            raise ApiError(f"malformed check record: last_ping {last_ping!r}")

        update_url = payload.get("update_url")
        check_id = None
        if update_url:
            check_id = str(update_url).rstrip("/").rsplit("/", 1)[-1]

        return Check(
            id=check_id,
            name=name,
            last_ping=last_ping,
            status=payload.get("status"),
            n_pings=payload.get("n_pings"),
        )


@dataclass(frozen=True)
class Ping:
    """
    Logged ping
    - n: per-check sequence number
    - type: "success" | "fail" | "start" | ...
    - duration: seconds since the matching start, if any
    """

    n: int
    date: str
    type: str
    duration: Optional[float] = None

    @staticmethod
    def from_dict(payload: dict[str, Any]) -> "Ping":
        try:
            duration = payload.get("duration")
            return Ping(
                n=int(payload["n"]),
                date=str(payload["date"]),
                type=str(payload["type"]),
                duration=float(duration) if duration is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"malformed ping record: {e}") from e


# -----------------------------
# INTERFACES
# -----------------------------
class PingApi(Protocol):
    def start_timer(self) -> None: ...

    def report_success(self) -> None: ...

    def report_failure(self) -> None: ...


class ManageApi(Protocol):
    def get_checks(self) -> list[Check]: ...

    def list_logged_pings(self, check_id: str) -> list[Ping]: ...


# -----------------------------
# HTTP IMPLEMENTATION
# -----------------------------
def _urls(base_url: str | None) -> tuple[str, str]:
    """
    Resolve (api_root, ping_root); self-hosted instances serve pings under /ping
    """
    if not base_url:
        return DEFAULT_API_URL, DEFAULT_PING_URL
    root = base_url.rstrip("/")
    return root, f"{root}/ping"


class _HttpClient:
    def __init__(self, user_agent: str | None, session: requests.Session | None) -> None:
        self._session = session if session is not None else requests.Session()
        self._session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.get(url, timeout=REQUEST_TIMEOUT_S, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ApiError(f"GET {url} failed: {e}") from e
        return response

    def _get_json(self, url: str, key: str, **kwargs: Any) -> list[dict[str, Any]]:
        response = self._get(url, **kwargs)
        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(f"GET {url} returned invalid JSON") from e

        items = payload.get(key) if isinstance(payload, dict) else None
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ApiError(f"GET {url} response has no '{key}' list")
        return items


class PingClient(_HttpClient):
    """
    Signals for a single check, addressed by its ping UUID
    """

    def __init__(
        self,
        check_id: str,
        *,
        user_agent: str | None = None,
        base_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        try:
            uuid.UUID(check_id)
        except ValueError as e:
            raise ClientConfigError(f"check id is not a valid UUID: {check_id!r}") from e

        super().__init__(user_agent, session)
        _, ping_root = _urls(base_url)
        self.ping_url = f"{ping_root}/{check_id}"

    def start_timer(self) -> None:
        self._get(f"{self.ping_url}/start")

    def report_success(self) -> None:
        self._get(self.ping_url)

    def report_failure(self) -> None:
        self._get(f"{self.ping_url}/fail")


class ManageClient(_HttpClient):
    """
    Read-only management API views
    """

    def __init__(
        self,
        api_key: str,
        *,
        user_agent: str | None = None,
        base_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key or any(ch.isspace() for ch in api_key):
            raise ClientConfigError("API key must be a non-empty token without whitespace")

        super().__init__(user_agent, session)
        self._session.headers["X-Api-Key"] = api_key
        api_root, _ = _urls(base_url)
        self.api_url = f"{api_root}/api/v3"

    def get_checks(self) -> list[Check]:
        items = self._get_json(f"{self.api_url}/checks/", "checks")
        return [Check.from_dict(item) for item in items]

    def list_logged_pings(self, check_id: str) -> list[Ping]:
        items = self._get_json(f"{self.api_url}/checks/{check_id}/pings/", "pings")
        return [Ping.from_dict(item) for item in items]
