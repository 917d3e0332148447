# tests/test_timing.py

from __future__ import annotations

import asyncio

import pytest

from todolist.audit.audit_log import LogStep
from todolist.audit.timing import (
    current_request_id,
    current_session_id,
    request_context,
    run_timed,
    run_timed_async,
    timed,
)

from .fakes import FakeAuditSink


def test_success_is_logged_with_anon_session(fake_audit: FakeAuditSink) -> None:
    result = run_timed(fake_audit, "T1_filter", "off", lambda: 42)

    assert result.ok
    assert result.value == 42
    assert result.status_code == 200
    (entry,) = fake_audit.entries
    assert entry.step == LogStep.SUCCESS
    assert entry.session_id == "anon"
    assert entry.request_id.startswith("r")
    assert entry.js_mode == "off"


def test_ids_come_from_request_context(fake_audit: FakeAuditSink) -> None:
    with request_context(session_id="sid-1", request_id="req-1") as rid:
        assert rid == "req-1"
        assert current_session_id() == "sid-1"
        run_timed(fake_audit, "T2_edit", "on", lambda: None)

    assert current_session_id() == "anon"
    assert current_request_id() != "req-1"
    (entry,) = fake_audit.entries
    assert (entry.session_id, entry.request_id) == ("sid-1", "req-1")


def test_request_context_generates_id() -> None:
    with request_context() as rid:
        assert rid
        assert current_request_id() == rid


def test_failure_is_logged_and_returned(fake_audit: FakeAuditSink) -> None:
    def boom() -> None:
        raise RuntimeError("store exploded")

    result = run_timed(fake_audit, "T3_add", "on", boom)

    assert not result.ok
    assert result.status_code == 500
    assert isinstance(result.error, RuntimeError)
    (entry,) = fake_audit.entries
    assert entry.step == LogStep.SERVER_ERROR
    assert entry.status_code == 500
    assert entry.outcome == "store exploded"


def test_failure_without_message_is_unknown(fake_audit: FakeAuditSink) -> None:
    def boom() -> None:
        raise KeyError()

    run_timed(fake_audit, "T4_delete", "off", boom)
    assert fake_audit.entries[0].outcome == "unknown"


def test_timed_reraises_same_exception(fake_audit: FakeAuditSink) -> None:
    err = ValueError("bad")

    def boom() -> None:
        raise err

    with pytest.raises(ValueError) as excinfo:
        timed(fake_audit, "T2_edit", "off", boom)

    assert excinfo.value is err
    assert [e.step for e in fake_audit.entries] == [LogStep.SERVER_ERROR]


def test_timed_returns_value(fake_audit: FakeAuditSink) -> None:
    assert timed(fake_audit, "T1_filter", "off", lambda: "page") == "page"


@pytest.mark.asyncio
async def test_async_wrapper(fake_audit: FakeAuditSink) -> None:
    async def work() -> str:
        await asyncio.sleep(0.01)
        return "done"

    async def fail() -> None:
        raise OSError("no space left")

    with request_context(session_id="s-async"):
        ok = await run_timed_async(fake_audit, "T1_filter", "on", work)
        bad = await run_timed_async(fake_audit, "T3_add", "on", fail)

    assert ok.value == "done"
    assert ok.duration_ms >= 0
    assert isinstance(bad.error, OSError)
    assert [e.step for e in fake_audit.entries] == [LogStep.SUCCESS, LogStep.SERVER_ERROR]
    assert {e.session_id for e in fake_audit.entries} == {"s-async"}
