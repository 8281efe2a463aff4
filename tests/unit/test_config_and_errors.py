# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket

import httpx

from snorlax import config
from snorlax.config import DEFAULT_USER_AGENT
from snorlax.errors import (
    BodyConsumedError,
    ErrorCategory,
    HookError,
    ResponseReadError,
    SnorlaxError,
    TransportError,
    categorize_exception,
)
from snorlax.log import get_logger, resolve_level, setup_logging


def test_client_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("SNORLAX_BASE_URL", "https://pokeapi.test/api/v2")
    monkeypatch.setenv("SNORLAX_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("SNORLAX_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("SNORLAX_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("SNORLAX_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("SNORLAX_HTTP_TRUST_ENV", "no")
    monkeypatch.setenv("SNORLAX_PROXY_URL", "http://proxy.local:3128")
    monkeypatch.setenv("SNORLAX_METRICS", "yes")
    monkeypatch.setenv("SNORLAX_QUERY_CONFLICT", "Override")

    settings = config.load_client_settings()

    assert settings.base_url == "https://pokeapi.test/api/v2"
    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.trust_env is False
    assert settings.proxy_url == "http://proxy.local:3128"
    assert settings.with_metrics is True
    assert settings.query_conflict == "override"


def test_client_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("SNORLAX_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("SNORLAX_QUERY_CONFLICT", "ignore")
    monkeypatch.setenv("SNORLAX_PROXY_URL", "   ")
    monkeypatch.delenv("SNORLAX_USER_AGENT", raising=False)

    settings = config.load_client_settings()

    assert settings.timeout == config.ClientSettings.timeout
    assert settings.query_conflict == config.QUERY_CONFLICT_ERROR
    assert settings.proxy_url is None
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_load_client_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("SNORLAX_HTTP_TIMEOUT", "7.7")
    assert config.load_client_settings().timeout == 7.7
    monkeypatch.setenv("SNORLAX_HTTP_TIMEOUT", "8.8")
    assert config.load_client_settings().timeout == 8.8


def test_categorize_exception_maps_httpx_errors():
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.ProxyError("bad proxy")) is ErrorCategory.PROXY_ERROR
    assert categorize_exception(httpx.UnsupportedProtocol("nope")) is ErrorCategory.UNSUPPORTED_PROTOCOL
    assert categorize_exception(ConnectionResetError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(RuntimeError("boom")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_inspects_wrapped_dns_failure():
    try:
        try:
            raise socket.gaierror("Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("lookup failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR


def test_error_hierarchy_and_messages():
    hook_error = HookError(len, 2, ValueError("bad"))
    assert isinstance(hook_error, SnorlaxError)
    assert hook_error.index == 2
    assert "#2" in str(hook_error)

    assert TransportError("down").category is ErrorCategory.UNKNOWN_ERROR
    assert isinstance(BodyConsumedError(), ResponseReadError)


def test_logging_helpers(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    setup_logging("debug")

    assert calls["level"] == logging.DEBUG
    assert resolve_level("bogus") == logging.WARNING
    assert resolve_level(logging.INFO) == logging.INFO
    assert get_logger().name == "snorlax"
    assert get_logger("client").name == "snorlax.client"
