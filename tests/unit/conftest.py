# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from snorlax.config import ClientSettings
from snorlax.http.httpx_transport import HttpxTransport

_SKIPPED_ECHO_HEADERS = {"content-length", "connection", "transfer-encoding", "host"}


class EchoHandler(BaseHTTPRequestHandler):
    """Return the request body and headers verbatim."""

    def _echo(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.send_response(200)
        for key, value in self.headers.items():
            if key.lower() in _SKIPPED_ECHO_HEADERS:
                continue
            self.send_header(key, value)
        self.send_header("X-Echo-Method", self.command)
        self.send_header("X-Echo-Path", self.path)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    do_GET = do_POST = do_PUT = do_DELETE = do_HEAD = do_OPTIONS = _echo

    def log_message(self, format, *args):  # noqa: A002, ARG002
        return None


@pytest.fixture
def echo_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


def echo_handler(request: httpx.Request) -> httpx.Response:
    headers = {key: value for key, value in request.headers.items() if key.lower() not in _SKIPPED_ECHO_HEADERS}
    headers["X-Echo-Method"] = request.method
    headers["X-Echo-Path"] = request.url.raw_path.decode("ascii")
    return httpx.Response(200, headers=headers, content=request.content)


@pytest.fixture
def mock_transport():
    """HttpxTransport backed by an in-process echo handler."""
    settings = ClientSettings(trust_env=False)
    client = httpx.Client(transport=httpx.MockTransport(echo_handler))
    transport = HttpxTransport(settings, client=client)
    yield transport
    client.close()
