"""
hcctl.views
AUTHOR: carter-vin

Check / ping rows for operator output

- row order follows the service's order, never re-sorted
- any unparsable timestamp aborts the whole view
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable

from monitor.client import Check, Ping

CHECK_HEADERS = ["ID", "Name", "Last Ping"]
PING_HEADERS = ["Number", "Time", "Type", "Duration"]

PING_LIMIT = 10
PLACEHOLDER = "-"

# date-time per RFC 3339 section 5.6; T or space separator, mandatory offset
RFC3339_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


class TimestampError(ValueError):
    """Timestamp from the service is not RFC3339."""


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp into an aware datetime
    """
    match = RFC3339_PATTERN.fullmatch(value.strip())
    if match is None:
        raise TimestampError(f"invalid RFC3339 timestamp: {value!r}")

    date, time, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # Normalize to microseconds so fromisoformat sees a fixed-width fraction
    micros = (fraction or "")[:6].ljust(6, "0")
    try:
        return datetime.fromisoformat(f"{date}T{time}.{micros}{offset}")
    except ValueError as e:
        # Shape is right but a field is out of range (month 13, hour 25, ...)
        raise TimestampError(f"invalid RFC3339 timestamp: {value!r}") from e


def time_since_last_ping(last_ping: str | None, *, now: datetime) -> str:
    """
    Human age of the last ping

    Minutes are the total elapsed minutes, so 90 minutes reads
    "1 hour(s) and 90 minute(s) ago" (existing output format).
    """
    if last_ping is None:
        return PLACEHOLDER

    elapsed = now - parse_timestamp(last_ping)
    # Clock skew can put the ping slightly in the future
    if elapsed < timedelta(0):
        elapsed = timedelta(0)

    total_seconds = int(elapsed.total_seconds())
    hours = total_seconds // 3600
    minutes = total_seconds // 60
    return f"{hours} hour(s) and {minutes} minute(s) ago"


def format_ping_time(date: str) -> str:
    utc = parse_timestamp(date).astimezone(timezone.utc)
    return f"{utc.day}/{utc.month} {utc.hour}:{utc.minute}"


def format_duration(duration: float | None) -> str:
    if duration is None:
        return ""
    return f"{duration:.3f} sec"


def check_rows(checks: Iterable[Check], *, now: datetime | None = None) -> list[list[str]]:
    """
    One row per check: id, name, last ping age
    """
    current = now if now is not None else datetime.now(timezone.utc)
    return [
        [
            check.id or PLACEHOLDER,
            check.name,
            time_since_last_ping(check.last_ping, now=current),
        ]
        for check in checks
    ]


def ping_rows(pings: Iterable[Ping], *, limit: int = PING_LIMIT) -> list[list[str]]:
    """
    One row per ping for the first `limit` pings (service returns newest first)
    """
    kept = list(pings)[:limit]
    return [
        [
            f"#{ping.n}",
            format_ping_time(ping.date),
            ping.type,
            format_duration(ping.duration),
        ]
        for ping in kept
    ]
