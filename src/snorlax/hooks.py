# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request and response hooks.

A request hook receives the mutable HttpRequest just before it is sent and may
raise to abort the call. A response hook observes the raw httpx.Response
before it is wrapped; it must not raise and must not consume the body.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

import httpx

from .http.models import HttpRequest
from .log import get_logger

RequestHook = Callable[[HttpRequest], None]
ResponseHook = Callable[[httpx.Response], None]


def with_basic_auth(username: str, password: str) -> RequestHook:
    """Set basic authentication on a request."""

    def hook(request: HttpRequest) -> None:
        request.set_basic_auth(username, password)

    return hook


def with_header(key: str, value: str) -> RequestHook:
    """Set (overwrite) a header on a request."""

    def hook(request: HttpRequest) -> None:
        request.set_header(key, value)

    return hook


def with_headers(headers: Mapping[str, str]) -> RequestHook:
    items = list(headers.items())

    def hook(request: HttpRequest) -> None:
        for key, value in items:
            request.set_header(key, value)

    return hook


def log_response(logger: logging.Logger | None = None, level: int = logging.DEBUG) -> ResponseHook:
    """Log status line details for every response."""
    target = logger or get_logger("response")

    def hook(response: httpx.Response) -> None:
        if not target.isEnabledFor(level):
            return
        try:
            request = response.request
        except RuntimeError:
            # Responses built by hand (stubs) may have no request attached.
            target.log(level, "response -> %s", response.status_code)
            return
        target.log(level, "response %s %s -> %s", request.method, request.url, response.status_code)

    return hook


__all__ = ["RequestHook", "ResponseHook", "log_response", "with_basic_auth", "with_header", "with_headers"]
