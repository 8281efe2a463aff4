# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport and request model exports."""

from .adapters import StubTransport, make_response
from .httpx_transport import HttpxTransport
from .models import HttpRequest, Method
from .transport import ProxyTransport, Transport, create_default_transport
from .url import build_request_url, encode_query, parse_proxy_url, parse_url

__all__ = [
    "HttpRequest",
    "HttpxTransport",
    "Method",
    "ProxyTransport",
    "StubTransport",
    "Transport",
    "build_request_url",
    "create_default_transport",
    "encode_query",
    "make_response",
    "parse_proxy_url",
    "parse_url",
]
