"""Timing and counter collection for one generator run."""
from __future__ import annotations

import logging
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, Iterator, Optional


_TRACKER_VAR: ContextVar["MetricsTracker | None"] = ContextVar(
    "lined_paper_pdf_metrics_tracker", default=None
)


@dataclass
class MetricsTracker:
    timings: Dict[str, float] = field(default_factory=dict)
    counters: Dict[str, float] = field(default_factory=dict)

    def add_time(self, key: str, duration: float) -> None:
        if duration < 0.0:
            return
        self.timings[key] = self.timings.get(key, 0.0) + duration

    def increment(self, key: str, value: float = 1.0) -> None:
        self.counters[key] = self.counters.get(key, 0.0) + value

    def get_time(self, key: str) -> float:
        return self.timings.get(key, 0.0)

    def counts_with_prefix(self, prefix: str) -> Dict[str, int]:
        """Counters below ``prefix.`` with the prefix stripped, in insertion order."""

        head = prefix + "."
        return {
            key[len(head):]: int(value)
            for key, value in self.counters.items()
            if key.startswith(head)
        }

    def timing_summary(self) -> str:
        parts = [f"{key}={value * 1000:.1f}ms" for key, value in self.timings.items()]
        return " | ".join(parts)


def get_tracker() -> "MetricsTracker | None":
    return _TRACKER_VAR.get()


@contextmanager
def use_tracker(tracker: MetricsTracker) -> Iterator[MetricsTracker]:
    """Activate *tracker* for the duration of the context."""

    token = _TRACKER_VAR.set(tracker)
    try:
        yield tracker
    finally:
        _TRACKER_VAR.reset(token)


def count(key: str, value: float = 1.0) -> None:
    tracker = get_tracker()
    if tracker is not None:
        tracker.increment(key, value)


class Timer(AbstractContextManager["Timer"]):
    """Records elapsed wall-clock time into the active tracker."""

    def __init__(
        self,
        key: str,
        *,
        tracker: Optional[MetricsTracker] = None,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.key = key
        self._tracker = tracker
        self._logger = logger
        self._level = level
        self.duration: float = 0.0
        self._start: float | None = None

    def __enter__(self) -> "Timer":  # type: ignore[override]
        self._start = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        if self._start is None:
            return None
        self.duration = perf_counter() - self._start
        tracker = self._tracker or get_tracker()
        if tracker is not None:
            tracker.add_time(self.key, self.duration)
        if self._logger is not None and self._logger.isEnabledFor(self._level):
            self._logger.log(self._level, "%s took %.3f s", self.key, self.duration)
        return None


__all__ = ["MetricsTracker", "Timer", "count", "get_tracker", "use_tracker"]
