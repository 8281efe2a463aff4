# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable transports for tests and offline use."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import httpx

from .models import HttpRequest
from .transport import Transport

StubReply = httpx.Response | Callable[[HttpRequest], httpx.Response]


def make_response(
    status_code: int = 200,
    *,
    content: bytes | str = b"",
    json: Any = None,
    headers: Mapping[str, str] | None = None,
    request: HttpRequest | None = None,
) -> httpx.Response:
    """Build an httpx.Response, optionally tied to the request that produced it."""
    built_request = None
    if request is not None:
        built_request = httpx.Request(request.method.value, request.url, headers=request.headers, content=request.body)
    if json is not None:
        return httpx.Response(status_code, json=json, headers=headers, request=built_request)
    return httpx.Response(status_code, content=content, headers=headers, request=built_request)


class StubTransport(Transport):
    """
    Deterministic, programmable Transport for tests.

    Replies are looked up by ``(METHOD, url)`` first, then by url alone. A reply
    may be a ready response or a callable taking the request. Unmatched
    requests raise ``httpx.ConnectError`` like an unreachable host would.
    """

    def __init__(self, replies: dict[Any, StubReply] | None = None):
        self._replies: dict[Any, StubReply] = dict(replies or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, reply: StubReply, *, method: str | None = None) -> None:
        key: Any = (method.upper(), url) if method else url
        self._replies[key] = reply

    def send(self, request: HttpRequest) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        reply = self._replies.get((request.method.value, url), self._replies.get(url))
        if reply is None:
            raise httpx.ConnectError(f"No stubbed response configured for {request.method.value} {url}")
        if callable(reply) and not isinstance(reply, httpx.Response):
            return reply(request)
        return reply

    def close(self) -> None:
        self.closed = True


__all__ = ["StubTransport", "make_response"]
