"""
monitor.settings
AUTHOR: carter-vin

Environment-derived settings, resolved once at the CLI entry point

Variables:
- HEALTHCHECKS_CHECK_ID: ping UUID used by `monitor` (required there)
- HEALTHCHECKS_TOKEN: management API key used by `hcctl` (required there)
- HEALTHCHECKS_USERAGENT: optional user-agent override
- HEALTHCHECKS_BASE_URL: optional self-hosted instance root

Components never read the environment themselves; they receive a Settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

CHECK_ID_ENV = "HEALTHCHECKS_CHECK_ID"
TOKEN_ENV = "HEALTHCHECKS_TOKEN"
USER_AGENT_ENV = "HEALTHCHECKS_USERAGENT"
BASE_URL_ENV = "HEALTHCHECKS_BASE_URL"


class SettingsError(RuntimeError):
    """Required configuration is missing."""


@dataclass(frozen=True)
class Settings:
    """
    Per-invocation configuration
    - credential: ping UUID or API key, never empty
    - user_agent: None -> client default
    - base_url: None -> public healthchecks.io
    """

    credential: str
    user_agent: Optional[str] = None
    base_url: Optional[str] = None


def load_settings(credential_var: str, *, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment

    Failure semantics:
    - missing or empty credential raises SettingsError before any other work
    - credential format is the client's concern, not checked here
    """
    env = os.environ if environ is None else environ

    credential = env.get(credential_var, "")
    if not credential:
        raise SettingsError(f"{credential_var} must be set")

    # Empty optional values behave like unset ones
    return Settings(
        credential=credential,
        user_agent=env.get(USER_AGENT_ENV) or None,
        base_url=env.get(BASE_URL_ENV) or None,
    )
