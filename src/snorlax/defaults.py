# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared default client and module-level request helpers.

The default client is built from environment settings on first use. Treat it
as immutable once a request has gone through it: it is safe for concurrent
calls, not for concurrent reconfiguration. Build your own Client when calls
need different base URLs, hooks or transports.
"""

from __future__ import annotations

import threading

from .client import Body, Client
from .config import load_client_settings
from .hooks import RequestHook
from .http.url import Query
from .response import Response

_default_client: Client | None = None
_default_lock = threading.Lock()


def get_default_client() -> Client:
    """Return the process-wide default Client, building it on first use."""
    global _default_client
    with _default_lock:
        if _default_client is None:
            _default_client = Client(load_client_settings())
        return _default_client


def reset_default_client() -> None:
    """Close and forget the default client; the next call rebuilds it."""
    global _default_client
    with _default_lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.close()


def get(path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None) -> Response:
    return get_default_client().get(path, query, *hooks, timeout=timeout)


def head(path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None) -> Response:
    return get_default_client().head(path, query, *hooks, timeout=timeout)


def options(path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None) -> Response:
    return get_default_client().options(path, query, *hooks, timeout=timeout)


def post(
    path: str, query: Query | None = None, body: Body = None, *hooks: RequestHook, timeout: float | None = None
) -> Response:
    return get_default_client().post(path, query, body, *hooks, timeout=timeout)


def put(
    path: str, query: Query | None = None, body: Body = None, *hooks: RequestHook, timeout: float | None = None
) -> Response:
    return get_default_client().put(path, query, body, *hooks, timeout=timeout)


def delete(
    path: str, query: Query | None = None, body: Body = None, *hooks: RequestHook, timeout: float | None = None
) -> Response:
    return get_default_client().delete(path, query, body, *hooks, timeout=timeout)


__all__ = [
    "delete",
    "get",
    "get_default_client",
    "head",
    "options",
    "post",
    "put",
    "reset_default_client",
]
