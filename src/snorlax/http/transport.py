# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol, runtime_checkable

import httpx

from ..config import ClientSettings, load_client_settings
from .models import HttpRequest


@runtime_checkable
class Transport(Protocol):
    """Minimal protocol for sending a built request."""

    def send(self, request: HttpRequest) -> httpx.Response: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


@runtime_checkable
class ProxyTransport(Transport, Protocol):
    """Transport whose outbound proxy can be changed after construction."""

    def set_proxy(self, url: httpx.URL) -> None: ...

    def remove_proxy(self) -> None: ...


def create_default_transport(settings: ClientSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_client_settings())
