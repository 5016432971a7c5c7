"""Span timing for graph service calls.

``@traced`` wraps a GraphService method in a root span; ``trace_span``
opens child spans for the engine calls inside it (cycle scans, component
discovery, path enumeration). Nothing is recorded unless ``--verbose``
enabled telemetry, in which case the span tree lands in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from graphctl.services.result import ServiceResult

log = structlog.get_logger("graphctl.telemetry")

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """Hierarchical timing span with free-form annotations."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Create a child span under the current span.

    Yields None when telemetry is disabled or no parent span is active.
    """
    if not _verbose_enabled.get():
        yield None
        return

    parent = _current_span.get()
    if parent is None:
        yield None
        return

    child = Span(name=name, parent=parent)
    parent.children.append(child)

    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


def _finish(result: ServiceResult, span: Span) -> ServiceResult:
    """Attach *span* to a copy of *result* (results are frozen)."""
    if not result.ok and result.error is not None:
        span.annotate("error", result.error.code)
    log.debug(
        "span.complete",
        span_name=span.name,
        op=result.op,
        duration_ms=round(span.duration_ms, 2),
        ok=result.ok,
        children=len(span.children),
    )
    return result.model_copy(update={"meta": {**(result.meta or {}), "telemetry": span.to_dict()}})


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method as the root span of its call."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _current_span.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.debug("span.failed", span_name=span.name, exc_info=True)
            raise
        finally:
            span.end()
            _current_span.reset(token)

        if isinstance(result, ServiceResult):
            return _finish(result, span)  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Start recording spans for this context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def get_current_span() -> Span | None:
    """Return the innermost open span, or None when telemetry is off."""
    if not _verbose_enabled.get():
        return None
    return _current_span.get()
