# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for snorlax clients."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"snorlax/{__version__}"

QUERY_CONFLICT_ERROR = "error"
QUERY_CONFLICT_OVERRIDE = "override"
QUERY_CONFLICT_POLICIES = frozenset({QUERY_CONFLICT_ERROR, QUERY_CONFLICT_OVERRIDE})


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or None


def _choice_env(name: str, default: str, choices: frozenset[str]) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    return value if value in choices else default


@dataclass
class ClientSettings:
    """Client defaults."""

    base_url: str = ""
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    trust_env: bool = True
    proxy_url: str | None = None
    with_metrics: bool = False
    query_conflict: str = QUERY_CONFLICT_ERROR

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("SNORLAX_BASE_URL", cls.base_url),
            timeout=_float_env("SNORLAX_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("SNORLAX_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SNORLAX_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SNORLAX_HTTP_VERIFY_SSL", cls.verify_ssl),
            trust_env=_bool_env("SNORLAX_HTTP_TRUST_ENV", cls.trust_env),
            proxy_url=_optional_str_env("SNORLAX_PROXY_URL", cls.proxy_url),
            with_metrics=_bool_env("SNORLAX_METRICS", cls.with_metrics),
            query_conflict=_choice_env("SNORLAX_QUERY_CONFLICT", cls.query_conflict, QUERY_CONFLICT_POLICIES),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
