# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response wrapper returned by Client calls."""

from __future__ import annotations

import dataclasses
import io
import json
from collections.abc import Mapping, MutableMapping
from typing import Any

import httpx

from .errors import BodyConsumedError, ResponseDecodeError, ResponseReadError


class Response:
    """
    Thin accessor around a raw, streamed ``httpx.Response``.

    The body can be consumed exactly once, through either ``json`` or
    ``raw_body``; both close the underlying stream. Status and header accessors
    stay usable afterwards.
    """

    def __init__(self, raw: httpx.Response):
        self._raw = raw
        self._consumed = False

    @property
    def raw(self) -> httpx.Response:
        return self._raw

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._raw.headers

    @property
    def url(self) -> httpx.URL | None:
        try:
            return self._raw.url
        except RuntimeError:
            return None

    @property
    def consumed(self) -> bool:
        return self._consumed

    def is_success(self) -> bool:
        """Return whether the status code is within the 2XX range."""
        return 200 <= self._raw.status_code < 300

    def _read(self) -> bytes:
        if self._consumed:
            raise BodyConsumedError()
        self._consumed = True
        try:
            return self._raw.read()
        except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
            raise ResponseReadError(f"failed to read response body: {exc}") from exc
        finally:
            self._raw.close()

    def raw_body(self) -> io.BytesIO:
        """Read the whole body and return it as an independent buffer."""
        return io.BytesIO(self._read())

    def json(self, target: Any = None) -> Any:
        """
        Read and decode the JSON body.

        ``target`` selects the result shape:
        - ``None``: the decoded value as-is
        - a class with ``from_mapping``: ``target.from_mapping(data)``
        - a dataclass type: constructed from matching keys, unknown keys ignored
        - a mutable mapping instance: updated in place and returned
        """
        body = self._read()
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ResponseDecodeError(f"failed to unmarshal response body: {exc}") from exc

        if target is None:
            return data
        return _decode_into(data, target)

    def close(self) -> None:
        self._raw.close()

    def __enter__(self) -> Response:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


def _decode_into(data: Any, target: Any) -> Any:
    if isinstance(target, MutableMapping):
        if not isinstance(data, Mapping):
            raise ResponseDecodeError(f"cannot decode {type(data).__name__} into a mapping")
        target.update(data)
        return target

    if not isinstance(target, type):
        raise ResponseDecodeError(f"unsupported decode target {target!r}")

    from_mapping = getattr(target, "from_mapping", None)
    if callable(from_mapping):
        if not isinstance(data, Mapping):
            raise ResponseDecodeError(f"cannot decode {type(data).__name__} into {target.__name__}")
        try:
            return from_mapping(data)
        except (TypeError, ValueError, KeyError) as exc:
            raise ResponseDecodeError(f"failed to decode into {target.__name__}: {exc}") from exc

    if dataclasses.is_dataclass(target):
        if not isinstance(data, Mapping):
            raise ResponseDecodeError(f"cannot decode {type(data).__name__} into {target.__name__}")
        names = {f.name for f in dataclasses.fields(target) if f.init}
        try:
            return target(**{key: value for key, value in data.items() if key in names})
        except TypeError as exc:
            raise ResponseDecodeError(f"failed to decode into {target.__name__}: {exc}") from exc

    raise ResponseDecodeError(f"unsupported decode target {target.__name__}")


__all__ = ["Response"]
