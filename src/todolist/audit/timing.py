# src/todolist/audit/timing.py

from __future__ import annotations

"""
Request context + timed operation wrapper.

The web layer opens request_context() per request; everything below it
(task API, wrapper, audit logger) reads the ids from context variables, so
they follow the request across threads started with contextvars.copy_context()
and across asyncio tasks.

run_timed() always logs exactly one audit line and hands back an OpResult;
timed() is the raise-through form for callers that prefer exceptions.
"""

import contextlib
import contextvars
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..core.ports import AuditSink

logger = logging.getLogger(__name__)

T = TypeVar("T")

ANON_SESSION = "anon"

_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "todolist_session_id", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "todolist_request_id", default=None
)


def new_request_id() -> str:
    return f"r{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def current_session_id() -> str:
    return _session_id.get() or ANON_SESSION


def current_request_id() -> str:
    """Bound request id, or a fresh one when called outside request_context()."""
    return _request_id.get() or new_request_id()


@contextlib.contextmanager
def request_context(
    session_id: str | None = None, request_id: str | None = None
) -> Iterator[str]:
    """Bind session/request ids for the duration of one request. Yields the request id."""
    rid = request_id or new_request_id()
    s_token = _session_id.set(session_id or None)
    r_token = _request_id.set(rid)
    try:
        yield rid
    finally:
        _request_id.reset(r_token)
        _session_id.reset(s_token)


@dataclass(slots=True, frozen=True)
class OpResult(Generic[T]):
    """Outcome of one logged operation: either a value or the error it raised."""

    value: T | None = None
    error: BaseException | None = None
    status_code: int = 200
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        if self.error is not None:
            raise self.error
        return self.value


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _failure_message(exc: BaseException) -> str:
    return str(exc) or "unknown"


def run_timed(
    audit: AuditSink,
    task_code: str,
    js_mode: str,
    fn: Callable[[], T],
) -> OpResult[T]:
    start = time.perf_counter()
    session_id = current_session_id()
    request_id = current_request_id()

    try:
        value = fn()
    except Exception as e:
        duration = _elapsed_ms(start)
        logger.exception("Operation failed task_code=%s request_id=%s", task_code, request_id)
        audit.record_server_error(
            session_id, request_id, task_code, _failure_message(e), duration, js_mode
        )
        return OpResult(error=e, status_code=500, duration_ms=duration)

    duration = _elapsed_ms(start)
    audit.record_success(session_id, request_id, task_code, duration, js_mode)
    return OpResult(value=value, status_code=200, duration_ms=duration)


async def run_timed_async(
    audit: AuditSink,
    task_code: str,
    js_mode: str,
    fn: Callable[[], Awaitable[T]],
) -> OpResult[T]:
    start = time.perf_counter()
    session_id = current_session_id()
    request_id = current_request_id()

    try:
        value = await fn()
    except Exception as e:
        duration = _elapsed_ms(start)
        logger.exception("Operation failed task_code=%s request_id=%s", task_code, request_id)
        audit.record_server_error(
            session_id, request_id, task_code, _failure_message(e), duration, js_mode
        )
        return OpResult(error=e, status_code=500, duration_ms=duration)

    duration = _elapsed_ms(start)
    audit.record_success(session_id, request_id, task_code, duration, js_mode)
    return OpResult(value=value, status_code=200, duration_ms=duration)


def timed(
    audit: AuditSink,
    task_code: str,
    js_mode: str,
    fn: Callable[[], T],
) -> T | None:
    """Like run_timed(), but re-raises the operation's exception unchanged after logging."""
    return run_timed(audit, task_code, js_mode, fn).unwrap()
