"""Span timing for ``--verbose`` runs.

A ``@traced`` service method opens a root span. ``trace_span`` blocks
inside it (the batch run, the thread pool) hang child spans off it. The
finished tree is copied into ``ServiceResult.meta["telemetry"]``. With
telemetry off, neither helper allocates anything.

Spans live in a ContextVar, so they are only visible on the thread that
opened them. Pool workers never annotate spans themselves.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from mailgate.services.result import ServiceResult

log = structlog.get_logger("mailgate.telemetry")

_enabled: ContextVar[bool] = ContextVar("mailgate_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("mailgate_active_span", default=None)


@dataclass(eq=False)
class Span:
    name: str
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)
    elapsed_ms: float | None = None
    _started: float = field(default_factory=time.perf_counter, repr=False)

    def annotate(self, **values: Any) -> None:
        self.annotations.update(values)

    def close(self) -> None:
        """Freeze the elapsed time; later calls keep the first reading."""
        if self.elapsed_ms is None:
            self.elapsed_ms = (time.perf_counter() - self._started) * 1000

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.elapsed_ms or 0.0, 2),
        }
        if self.annotations:
            node["annotations"] = dict(self.annotations)
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.close()
        _active.reset(token)


def current_span() -> Span | None:
    """Innermost open span, or None when telemetry is off or no span is open."""
    return _active.get() if _enabled.get() else None


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Child span of the current one; yields None outside a traced call."""
    parent = current_span()
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Root span around a service method, named by its qualified name."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        with _activate(Span(func.__qualname__)) as span:
            try:
                result = func(*args, **kwargs)
            except Exception:
                log.debug("span.complete", span_name=span.name, ok=False)
                raise

        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.elapsed_ms or 0.0, 2),
            ok=True,
            children=len(span.children),
        )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
