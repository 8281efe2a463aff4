# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST client: request construction, hook pipeline and dispatch."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from typing import BinaryIO

import httpx

from .config import QUERY_CONFLICT_POLICIES, ClientSettings, load_client_settings
from .errors import (
    HookError,
    IncapableTransportError,
    RequestConstructionError,
    TransportError,
    categorize_exception,
)
from .hooks import RequestHook, ResponseHook
from .http.models import HttpRequest, Method
from .http.transport import ProxyTransport, Transport, create_default_transport
from .http.url import Query, build_request_url, parse_proxy_url, parse_url
from .log import instance_logger, resolve_level
from .metrics import LatencyRecorder, MetricsSink
from .response import Response

Body = bytes | bytearray | str | BinaryIO | None


def _coerce_body(body: Body) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    read = getattr(body, "read", None)
    if callable(read):
        try:
            data = read()
        except OSError as exc:
            raise RequestConstructionError(f"failed to read request body: {exc}") from exc
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
    raise RequestConstructionError(f"unsupported request body type {type(body).__name__}")


class Client:
    """
    Wrapper around a Transport that makes it easier to call RESTful APIs.

    Every call joins the configured base URL with the call path, copies the
    client's default headers into a fresh HttpRequest, runs the client request
    hooks followed by the call hooks, sends through the transport, optionally
    records latency, runs response hooks and returns a Response.

    Configure the client before sharing it between threads; setters are not
    synchronized.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        base_url: str | None = None,
        transport: Transport | None = None,
        request_hooks: Iterable[RequestHook] = (),
        response_hooks: Iterable[ResponseHook] = (),
        headers: Mapping[str, str] | None = None,
        metrics: MetricsSink | None = None,
        logger: logging.Logger | None = None,
    ):
        self.settings = settings or load_client_settings()
        if self.settings.query_conflict not in QUERY_CONFLICT_POLICIES:
            raise ValueError(f"unknown query conflict policy {self.settings.query_conflict!r}")
        self._logger = logger or instance_logger("client")
        self._base_url = ""
        self.set_base_url(self.settings.base_url if base_url is None else base_url)
        self._headers = httpx.Headers(headers or {})
        self._request_hooks: list[RequestHook] = list(request_hooks)
        self._response_hooks: list[ResponseHook] = list(response_hooks)
        self._metrics = metrics
        if self._metrics is None and self.settings.with_metrics:
            self._metrics = LatencyRecorder()

        # The default transport applies settings.proxy_url itself.
        injected = transport is not None
        self._transport = transport if injected else create_default_transport(self.settings)
        if injected and self.settings.proxy_url:
            self.set_proxy(self.settings.proxy_url)

    # Configuration

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> httpx.Headers:
        return self._headers

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def metrics(self) -> MetricsSink | None:
        return self._metrics

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def request_hooks(self) -> tuple[RequestHook, ...]:
        return tuple(self._request_hooks)

    @property
    def response_hooks(self) -> tuple[ResponseHook, ...]:
        return tuple(self._response_hooks)

    def set_base_url(self, url: str) -> Client:
        """Set the URL prepended to every call path; raises URLParseError if unparseable."""
        if url:
            parse_url(url)
        self._base_url = url or ""
        self._logger.debug("base url set to %r", self._base_url)
        return self

    def set_header(self, key: str, value: str) -> Client:
        """Set a default header, replacing existing values for the key."""
        self._headers[key] = value
        return self

    def add_header(self, key: str, value: str) -> Client:
        """Append a default header value, keeping existing ones."""
        self._headers = httpx.Headers([*self._headers.multi_items(), (key, value)])
        return self

    def add_request_hook(self, hook: RequestHook) -> Client:
        self._request_hooks.append(hook)
        return self

    def add_request_hooks(self, *hooks: RequestHook) -> Client:
        for hook in hooks:
            self.add_request_hook(hook)
        return self

    def set_request_hooks(self, hooks: Iterable[RequestHook]) -> Client:
        """Replace all client request hooks."""
        self._request_hooks = list(hooks)
        return self

    def add_response_hook(self, hook: ResponseHook) -> Client:
        self._response_hooks.append(hook)
        return self

    def add_response_hooks(self, *hooks: ResponseHook) -> Client:
        for hook in hooks:
            self.add_response_hook(hook)
        return self

    def set_transport(self, transport: Transport) -> Client:
        self._transport = transport
        self._logger.debug("transport set to %s", type(transport).__name__)
        return self

    def set_proxy(self, url: str) -> Client:
        """
        Route requests through ``url``.

        Raises IncapableTransportError when the transport cannot change its proxy
        and URLParseError when ``url`` is not a usable proxy URL.
        """
        transport = self._proxy_transport("set")
        proxy = parse_proxy_url(url)
        transport.set_proxy(proxy)
        self._logger.debug("proxy url set to %s", proxy)
        return self

    def remove_proxy(self) -> Client:
        self._proxy_transport("remove").remove_proxy()
        self._logger.debug("proxy removed")
        return self

    def _proxy_transport(self, action: str) -> ProxyTransport:
        transport = self._transport
        if not isinstance(transport, ProxyTransport):
            raise IncapableTransportError(
                f"proxy not {action}: {type(transport).__name__} does not support proxy configuration"
            )
        return transport

    def set_metrics(self, sink: MetricsSink | None) -> Client:
        self._metrics = sink
        return self

    def enable_metrics(self) -> Client:
        """Record latency into an in-memory LatencyRecorder unless a sink is already set."""
        if self._metrics is None:
            self._metrics = LatencyRecorder()
        return self

    def set_log_level(self, level: int | str) -> Client:
        self._logger.setLevel(resolve_level(level))
        return self

    # Request pipeline

    def build_request(
        self,
        method: Method | str,
        path: str,
        query: Query | None = None,
        body: Body = None,
        *,
        timeout: float | None = None,
    ) -> HttpRequest:
        """Construct a request ready for the hook pipeline."""
        verb = Method.parse(method)
        url = build_request_url(
            self._base_url,
            path,
            query,
            on_conflict=self.settings.query_conflict,
            logger=self._logger,
        )
        if not url.scheme or not url.host:
            raise RequestConstructionError(f"request url {str(url)!r} must be absolute; set a base url")

        request = HttpRequest(
            url=url,
            method=verb,
            headers=httpx.Headers(self._headers.multi_items()),
            body=_coerce_body(body),
            timeout=timeout,
            allow_redirects=self.settings.allow_redirects,
        )
        request.headers.setdefault("User-Agent", self.settings.user_agent)
        self._logger.debug("request built: %s %s", verb.value, url)
        return request

    def apply_request_hooks(self, request: HttpRequest, hooks: Iterable[RequestHook] = ()) -> HttpRequest:
        """Run client hooks, then ``hooks``; the first failure aborts with HookError."""
        pipeline = [*self._request_hooks, *hooks]
        for index, hook in enumerate(pipeline):
            try:
                hook(request)
            except Exception as exc:  # noqa: BLE001
                raise HookError(hook, index, exc) from exc
        if pipeline:
            self._logger.debug("ran %d request hook(s)", len(pipeline))
        return request

    def dispatch(self, request: HttpRequest) -> Response:
        """Send a hook-processed request and wrap the result."""
        started = time.perf_counter()
        try:
            raw = self._transport.send(request)
        except Exception as exc:  # noqa: BLE001
            raise TransportError(
                f"failed to perform http request {request.method.value} {request.url}: {exc}",
                categorize_exception(exc),
            ) from exc
        elapsed = time.perf_counter() - started

        self._logger.debug(
            "request complete: method=%s url=%s status_code=%s latency=%.6f",
            request.method.value,
            request.url,
            raw.status_code,
            elapsed,
        )
        try:
            if self._metrics is not None:
                self._metrics.observe(request.method.value, raw.status_code, request.path, elapsed)
            for hook in self._response_hooks:
                hook(raw)
        except BaseException:
            raw.close()
            raise
        return Response(raw)

    def request(
        self,
        method: Method | str,
        path: str,
        query: Query | None = None,
        body: Body = None,
        *hooks: RequestHook,
        timeout: float | None = None,
    ) -> Response:
        request = self.build_request(method, path, query, body, timeout=timeout)
        self.apply_request_hooks(request, hooks)
        return self.dispatch(request)

    def get(self, path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None) -> Response:
        return self.request(Method.GET, path, query, None, *hooks, timeout=timeout)

    def head(self, path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None) -> Response:
        return self.request(Method.HEAD, path, query, None, *hooks, timeout=timeout)

    def options(
        self, path: str, query: Query | None = None, *hooks: RequestHook, timeout: float | None = None
    ) -> Response:
        return self.request(Method.OPTIONS, path, query, None, *hooks, timeout=timeout)

    def post(
        self,
        path: str,
        query: Query | None = None,
        body: Body = None,
        *hooks: RequestHook,
        timeout: float | None = None,
    ) -> Response:
        return self.request(Method.POST, path, query, body, *hooks, timeout=timeout)

    def put(
        self,
        path: str,
        query: Query | None = None,
        body: Body = None,
        *hooks: RequestHook,
        timeout: float | None = None,
    ) -> Response:
        return self.request(Method.PUT, path, query, body, *hooks, timeout=timeout)

    def delete(
        self,
        path: str,
        query: Query | None = None,
        body: Body = None,
        *hooks: RequestHook,
        timeout: float | None = None,
    ) -> Response:
        return self.request(Method.DELETE, path, query, body, *hooks, timeout=timeout)

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
