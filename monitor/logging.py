"""
monitor.logging
AUTHOR: carter-vin

Structured JSON event logging for ops ingestion

Contract:
- One JSON object per line to stderr (stdout belongs to the wrapped command / tables)
- Stable event vocabulary (allowlist)
- UTC timestamps only
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

# Event types
VALID_EVENT_TYPES = {
    "monitor_start",
    "timer_started",
    "command_spawning",
    "command_completed",
    "command_interrupted",
    "report_sent",
    "fatal_error",
    "checks_listed",
    "pings_listed",
}


def _truncate_message(value: str, *, limit: int = 200) -> str:
    """
    Cap message length to keep events compact
    """
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


# Time: current in UTC ISO 8601
def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def emit_event(
    event_type: str,
    *,
    tool_version: str,
    stream: TextIO | None = None,
    **fields: Any,
) -> None:
    """
    Emit structured event line to stderr

    Rules:
    - event_type in VALID_EVENT_TYPES
    - event_type, tool_version, timestamp always present
    - sort_keys + compact separators for format
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    if "message" in fields and isinstance(fields["message"], str):
        # Avoid emitting long strings in event fields
        fields["message"] = _truncate_message(fields["message"])

    payload: dict[str, Any] = {
        "event_type": event_type,
        "utc_now": utc_now_iso(),
        "tool_version": tool_version,
        **fields,
    }

    # Resolve at call time so pytest capture sees the line
    target = stream if stream is not None else sys.stderr
    print(
        json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        ),
        file=target,
    )
