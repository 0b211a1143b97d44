from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger("pageable")

DEFAULT_SLOW_FETCH_MS = 1000.0

FetchListener = Callable[["FetchEvent"], Any]


@dataclass(frozen=True)
class FetchEvent:
    """Represents a single page fetch for tracing."""

    page_number: int
    identifier: Any = None
    item_count: int | None = None
    has_next: bool | None = None
    duration_ms: float = 0.0


@dataclass
class _FetchTracer:
    """Tracing switches, captured events and listeners of the process."""

    enabled: bool = False
    slow_fetch_ms: float = DEFAULT_SLOW_FETCH_MS
    capture: bool = False
    events: list[FetchEvent] = field(default_factory=list)
    listeners: list[FetchListener] = field(default_factory=list)

    def publish(self, event: FetchEvent) -> None:
        if not self.enabled:
            return
        if self.capture:
            self.events.append(event)
        if event.duration_ms > self.slow_fetch_ms:
            logger.warning(
                "Slow page fetch: page %d (%r) took %.1fms (threshold: %.1fms)",
                event.page_number,
                event.identifier,
                event.duration_ms,
                self.slow_fetch_ms,
            )
        for listener in list(self.listeners):
            listener(event)


_tracer = _FetchTracer()


def enable_tracing(slow_fetch_ms: float = DEFAULT_SLOW_FETCH_MS, capture_events: bool = False) -> None:
    """Start timing page fetches.

    Args:
        slow_fetch_ms: Fetches slower than this are logged as warnings
        capture_events: Keep every FetchEvent for get_events()
    """
    _tracer.enabled = True
    _tracer.slow_fetch_ms = slow_fetch_ms
    _tracer.capture = capture_events


def disable_tracing() -> None:
    """Stop tracing and forget captured events and listeners."""
    global _tracer
    _tracer = _FetchTracer()


def get_events() -> list[FetchEvent]:
    return list(_tracer.events)


def clear_events() -> None:
    _tracer.events.clear()


def add_listener(callback: FetchListener) -> None:
    """Register a callback invoked with the FetchEvent of every traced fetch."""
    _tracer.listeners.append(callback)


def remove_listener(callback: FetchListener) -> None:
    _tracer.listeners.remove(callback)


def emit_event(event: FetchEvent) -> None:
    """Hand an event to the active tracer; a no-op while tracing is off."""
    _tracer.publish(event)


class _FetchTimer:
    """Measures one fetch; the walker fills in what the fetched page reported."""

    def __init__(self, page_number: int, identifier: Any) -> None:
        self.page_number = page_number
        self.identifier = identifier
        self.details: dict[str, Any] = {"item_count": None, "has_next": None}
        self._start = time.perf_counter()

    def finish(self) -> None:
        emit_event(
            FetchEvent(
                page_number=self.page_number,
                identifier=self.identifier,
                item_count=self.details["item_count"],
                has_next=self.details["has_next"],
                duration_ms=(time.perf_counter() - self._start) * 1000,
            )
        )


@contextmanager
def track_fetch(page_number: int, identifier: Any = None):
    """Time a page fetch; the yielded dict takes ``item_count`` and ``has_next``."""
    if not _tracer.enabled:
        yield {}
        return
    timer = _FetchTimer(page_number, identifier)
    try:
        yield timer.details
    finally:
        timer.finish()


@asynccontextmanager
async def atrack_fetch(page_number: int, identifier: Any = None):
    """Async variant of track_fetch for awaited fetch functions."""
    if not _tracer.enabled:
        yield {}
        return
    timer = _FetchTimer(page_number, identifier)
    try:
        yield timer.details
    finally:
        timer.finish()
