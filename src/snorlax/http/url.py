# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for request construction."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from urllib.parse import urlencode

import httpx

from ..config import QUERY_CONFLICT_ERROR, QUERY_CONFLICT_OVERRIDE
from ..errors import QueryConflictError, RequestConstructionError, URLParseError

QueryValue = str | Iterable[str]
Query = Mapping[str, QueryValue]

PROXY_SCHEMES = frozenset({"http", "https", "socks5", "socks5h"})


def parse_url(raw: str) -> httpx.URL:
    """Parse a URL string, raising URLParseError instead of httpx.InvalidURL."""
    try:
        return httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise URLParseError(raw, f"failed to parse url {raw!r}: {exc}") from exc


def encode_query(query: Query | None) -> str:
    """
    URL-encode query parameters with keys sorted.

    Values may be a single string or an iterable of strings; multi-values keep
    their given order under the sorted key. ``None`` values are skipped.
    """
    if not query:
        return ""
    pairs: list[tuple[str, str]] = []
    for key in sorted(query):
        value = query[key]
        if value is None:
            continue
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            pairs.append((key, _as_text(value)))
            continue
        for item in value:
            if item is not None:
                pairs.append((key, _as_text(item)))
    return urlencode(pairs)


def _as_text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def build_request_url(
    base_url: str,
    path: str,
    query: Query | None = None,
    *,
    on_conflict: str = QUERY_CONFLICT_ERROR,
    logger: logging.Logger | None = None,
) -> httpx.URL:
    """
    Join ``base_url`` and ``path`` as plain strings and apply ``query``.

    Duplicate slashes are kept as given; ``.`` and ``..`` segments are
    resolved by httpx URL parsing. A query string already present on the
    joined URL raises QueryConflictError, unless ``on_conflict`` is
    ``"override"`` in which case it is logged and replaced.
    """
    raw = f"{base_url or ''}{path or ''}"
    url = parse_url(raw)

    if url.query:
        if on_conflict != QUERY_CONFLICT_OVERRIDE:
            raise QueryConflictError(raw)
        (logger or logging.getLogger(__name__)).warning(
            "query parameters should not be set on the path, they will be overridden: %s", raw
        )

    encoded = encode_query(query)
    try:
        return url.copy_with(query=encoded.encode("ascii") if encoded else None)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise RequestConstructionError(f"failed to apply query to {raw!r}: {exc}") from exc


def parse_proxy_url(raw: str) -> httpx.URL:
    """Parse and validate a proxy URL."""
    if not raw or not str(raw).strip():
        raise URLParseError(str(raw), "proxy url must not be empty")
    url = parse_url(str(raw).strip())
    if url.scheme not in PROXY_SCHEMES or not url.host:
        raise URLParseError(str(raw), f"invalid proxy url {raw!r}: expected one of {sorted(PROXY_SCHEMES)} with a host")
    return url


__all__ = ["PROXY_SCHEMES", "Query", "build_request_url", "encode_query", "parse_proxy_url", "parse_url"]
