# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
snorlax package entrypoint.

A small REST client over httpx: a base URL joined with per-call paths, ordered
request and response hooks, proxy configuration and optional latency metrics.
Sending is abstracted behind an injectable Transport, and responses are
wrapped in a one-shot Response accessor.
"""

from . import defaults
from .client import Client
from .config import ClientSettings, load_client_settings
from .defaults import get_default_client, reset_default_client
from .errors import (
    BodyConsumedError,
    ErrorCategory,
    HookError,
    IncapableTransportError,
    QueryConflictError,
    RequestConstructionError,
    ResponseDecodeError,
    ResponseReadError,
    SnorlaxError,
    TransportError,
    URLParseError,
)
from .hooks import RequestHook, ResponseHook, log_response, with_basic_auth, with_header, with_headers
from .http import HttpRequest, HttpxTransport, Method, ProxyTransport, StubTransport, Transport
from .log import setup_logging
from .metrics import LatencyObservation, LatencyRecorder, MetricsSink
from .response import Response
from .version import __version__

__all__ = [
    "BodyConsumedError",
    "Client",
    "ClientSettings",
    "ErrorCategory",
    "HookError",
    "HttpRequest",
    "HttpxTransport",
    "IncapableTransportError",
    "LatencyObservation",
    "LatencyRecorder",
    "Method",
    "MetricsSink",
    "ProxyTransport",
    "QueryConflictError",
    "RequestConstructionError",
    "RequestHook",
    "Response",
    "ResponseDecodeError",
    "ResponseHook",
    "ResponseReadError",
    "SnorlaxError",
    "StubTransport",
    "Transport",
    "TransportError",
    "URLParseError",
    "defaults",
    "get_default_client",
    "load_client_settings",
    "log_response",
    "reset_default_client",
    "setup_logging",
    "with_basic_auth",
    "with_header",
    "with_headers",
    "__version__",
]
