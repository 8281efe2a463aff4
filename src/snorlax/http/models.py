# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request data models shared by the client, hooks and transports."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum

import httpx

from ..errors import RequestConstructionError


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: Method | str) -> Method:
        """Normalize a verb, rejecting anything outside the supported set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise RequestConstructionError(f"unsupported http method {value!r}") from exc


@dataclass
class HttpRequest:
    """Mutable request handed to request hooks and then to the transport."""

    url: httpx.URL
    method: Method = Method.GET
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool = True

    @property
    def path(self) -> str:
        return self.url.path

    def set_header(self, key: str, value: str) -> None:
        """Set a header, replacing any existing values for the key."""
        self.headers[key] = value

    def add_header(self, key: str, value: str) -> None:
        """Append a header value without touching existing ones."""
        self.headers = httpx.Headers([*self.headers.multi_items(), (key, value)])

    def set_basic_auth(self, username: str, password: str) -> None:
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        self.headers["Authorization"] = f"Basic {token}"
