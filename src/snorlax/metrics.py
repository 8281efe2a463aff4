# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Latency observation sinks."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Protocol


class MetricsSink(Protocol):
    """Write-only sink for per-request latency observations."""

    def observe(self, method: str, status_code: int, path: str, duration: float) -> None: ...


@dataclass(frozen=True)
class LatencyObservation:
    method: str
    status_code: int
    path: str
    duration: float


@dataclass
class LatencySummary:
    count: int = 0
    total: float = 0.0

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


@dataclass
class LatencyRecorder:
    """
    In-memory MetricsSink.

    Keeps every observation and a running count/sum per ``(method, status, path)``
    label set. Dynamic paths produce one label set each, so callers hitting
    unbounded URL spaces should supply their own sink.
    """

    observations: list[LatencyObservation] = field(default_factory=list)
    _summaries: dict[tuple[str, int, str], LatencySummary] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def observe(self, method: str, status_code: int, path: str, duration: float) -> None:
        observation = LatencyObservation(method=method, status_code=status_code, path=path, duration=duration)
        with self._lock:
            self.observations.append(observation)
            summary = self._summaries.setdefault((method, status_code, path), LatencySummary())
            summary.count += 1
            summary.total += duration

    def summary(self) -> dict[tuple[str, int, str], LatencySummary]:
        with self._lock:
            return {key: LatencySummary(value.count, value.total) for key, value in self._summaries.items()}

    def clear(self) -> None:
        with self._lock:
            self.observations.clear()
            self._summaries.clear()


__all__ = ["LatencyObservation", "LatencyRecorder", "LatencySummary", "MetricsSink"]
