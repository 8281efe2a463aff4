# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import httpx

from ..config import ClientSettings, load_client_settings
from ..errors import IncapableTransportError
from .models import HttpRequest
from .transport import ProxyTransport
from .url import parse_proxy_url


class HttpxTransport(ProxyTransport):
    """
    Synchronous httpx transport.

    Responses are returned streamed and unread; the caller owns closing them.
    When an ``httpx.Client`` is supplied by the caller its configuration is left
    alone, so proxy changes are refused.
    """

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_client_settings()
        self._owns_client = client is None
        self._proxy: httpx.URL | None = None
        if client is not None:
            self._client = client
        else:
            if self.settings.proxy_url:
                self._proxy = parse_proxy_url(self.settings.proxy_url)
            self._client = self._build_client(self._proxy)

    @property
    def proxy(self) -> httpx.URL | None:
        return self._proxy

    def _build_client(self, proxy: httpx.URL | None) -> httpx.Client:
        try:
            return httpx.Client(
                follow_redirects=self.settings.allow_redirects,
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
                trust_env=self.settings.trust_env,
                proxy=proxy,
            )
        except ImportError as exc:
            # SOCKS proxies need the optional socksio package (httpx[socks]).
            raise IncapableTransportError(f"proxy {proxy} is not supported by this installation: {exc}") from exc

    def send(self, request: HttpRequest) -> httpx.Response:
        headers = httpx.Headers(request.headers)
        headers.setdefault("User-Agent", self.settings.user_agent)

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        built = self._client.build_request(
            request.method.value,
            request.url,
            headers=headers,
            content=request.body,
            timeout=timeout,
        )
        return self._client.send(built, stream=True, follow_redirects=request.allow_redirects)

    def set_proxy(self, url: httpx.URL) -> None:
        if not self._owns_client:
            raise IncapableTransportError(
                "proxy not set: transport wraps a caller-supplied httpx.Client; configure its proxy directly"
            )
        self._replace_client(url)

    def remove_proxy(self) -> None:
        if not self._owns_client:
            raise IncapableTransportError(
                "proxy not removed: transport wraps a caller-supplied httpx.Client; configure its proxy directly"
            )
        self._replace_client(None)

    def _replace_client(self, proxy: httpx.URL | None) -> None:
        previous = self._client
        self._client = self._build_client(proxy)
        self._proxy = proxy
        previous.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
