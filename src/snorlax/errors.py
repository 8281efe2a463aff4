# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROXY_ERROR = "PROXY_ERROR"
    UNSUPPORTED_PROTOCOL = "UNSUPPORTED_PROTOCOL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class SnorlaxError(Exception):
    """Base class for every error raised by snorlax."""


class URLParseError(SnorlaxError):
    """The base URL and path did not form a parseable URL."""

    def __init__(self, url: str, message: str | None = None):
        self.url = url
        super().__init__(message or f"failed to parse url {url!r}")


class QueryConflictError(SnorlaxError):
    """The call path already carried a query string."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"query parameters must not be set on the path: {url!r}; pass them as query instead")


class RequestConstructionError(SnorlaxError):
    """Method, URL and body could not form a valid request."""


class HookError(SnorlaxError):
    """A request hook failed; the pipeline was aborted at ``index``."""

    def __init__(self, hook: Any, index: int, cause: BaseException):
        self.hook = hook
        self.index = index
        name = getattr(hook, "__qualname__", None) or type(hook).__name__
        super().__init__(f"failed to execute request hook #{index} ({name}): {cause}")


class TransportError(SnorlaxError):
    """The transport failed to send the request."""

    def __init__(self, message: str, category: ErrorCategory | None = None):
        self.category = category or ErrorCategory.UNKNOWN_ERROR
        super().__init__(message)


class ResponseReadError(SnorlaxError):
    """The response body could not be read."""


class BodyConsumedError(ResponseReadError):
    """The response body was already read and closed."""

    def __init__(self) -> None:
        super().__init__("response body has already been consumed")


class ResponseDecodeError(SnorlaxError):
    """The response body could not be decoded into the requested shape."""


class IncapableTransportError(SnorlaxError):
    """The configured transport does not support the requested operation."""


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ProxyError):
        return ErrorCategory.PROXY_ERROR

    if isinstance(exc, httpx.UnsupportedProtocol):
        return ErrorCategory.UNSUPPORTED_PROTOCOL

    # httpx wraps the low-level cause; inspect it before the generic buckets.
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)) or isinstance(
        exc, (ssl_module.SSLError, ssl_module.CertificateError)
    ):
        return ErrorCategory.SSL_ERROR

    if isinstance(cause, (socket.gaierror, socket.herror)) or isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "BodyConsumedError",
    "ErrorCategory",
    "HookError",
    "IncapableTransportError",
    "QueryConflictError",
    "RequestConstructionError",
    "ResponseDecodeError",
    "ResponseReadError",
    "SnorlaxError",
    "TransportError",
    "URLParseError",
    "categorize_exception",
]
