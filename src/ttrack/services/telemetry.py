"""Service call timing for ``--verbose``.

When enabled, :func:`traced` measures each service call, logs it, and adds
``meta["duration_ms"]`` to the returned ServiceResult. When disabled it is a
single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import ParamSpec, TypeVar

import structlog

from ttrack.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)

log = structlog.get_logger("ttrack.telemetry")

_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and record the duration in meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.debug("service.failed", name=func.__qualname__, exc_info=True)
            raise
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "duration_ms": duration_ms}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        log.debug("service.complete", name=func.__qualname__, duration_ms=duration_ms)
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable timing (called by AppContext when ``--verbose`` is set)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
