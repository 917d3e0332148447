# tests/test_audit_log.py

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from todolist.audit.audit_log import AuditLogger, LogEntry, LogStep, TaskCode

HEADER_LINE = "ts_iso,session_id,request_id,task_code,step,outcome,ms,http_status,js_mode"
TS_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_header_written_once(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "metrics.csv"
    AuditLogger(path).initialize()
    AuditLogger(path).initialize()

    assert path.read_text("utf-8") == HEADER_LINE + "\n"


def test_convenience_forms(audit: AuditLogger) -> None:
    audit.record_success("s1", "r1", TaskCode.FILTER, 12, "on")
    audit.record_validation_error("anon", "r2", TaskCode.ADD, "Title is required.", "off")

    ok, bad = audit.read_entries()
    assert (ok.step, ok.status_code, ok.duration_ms, ok.outcome) == (LogStep.SUCCESS, 200, 12, "")
    assert (ok.session_id, ok.request_id, ok.task_code, ok.js_mode) == ("s1", "r1", "T1_filter", "on")
    assert (bad.step, bad.status_code, bad.duration_ms) == (LogStep.VALIDATION_ERROR, 400, 0)
    assert bad.outcome == "Title is required."
    assert TS_RE.match(ok.ts_iso or "")


def test_raw_line_layout(audit: AuditLogger) -> None:
    audit.record_success("anon", "r9", "T4_delete", 3, "off")

    lines = audit.path.read_text("utf-8").splitlines()
    assert lines[0] == HEADER_LINE
    ts, rest = lines[1].split(",", 1)
    assert TS_RE.match(ts)
    assert rest == "anon,r9,T4_delete,success,,3,200,off"


def test_outcome_with_commas_parses_back(audit: AuditLogger) -> None:
    audit.record_server_error("anon", "r1", "T2_edit", "disk full, giving up", 7, "on")

    (entry,) = audit.read_entries()
    assert entry.outcome == "disk full, giving up"
    assert entry.status_code == 500


def test_concurrent_records_do_not_interleave(audit: AuditLogger) -> None:
    def write(i: int) -> None:
        audit.record(
            LogEntry(
                session_id=f"s{i}",
                request_id=f"r{i}",
                task_code="T1_filter",
                step=LogStep.SUCCESS,
                outcome="",
                duration_ms=i,
                status_code=200,
                js_mode="on" if i % 2 else "off",
            )
        )

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(write, range(300)))

    lines = audit.path.read_text("utf-8").splitlines()
    assert len(lines) == 301
    assert all(len(line.split(",")) == 9 for line in lines[1:])

    entries = audit.read_entries()
    assert len(entries) == 300
    assert sorted(e.duration_ms for e in entries) == list(range(300))
    assert all(e.request_id == f"r{e.duration_ms}" for e in entries)


def test_read_entries_missing_file(tmp_path: Path) -> None:
    assert AuditLogger(tmp_path / "nope.csv").read_entries() == []


def test_record_accepts_plain_string_step(audit: AuditLogger) -> None:
    audit.record(LogEntry("anon", "r1", "T1_filter", "success", "", 1, 200, "off"))

    (entry,) = audit.read_entries()
    assert entry.step == LogStep.SUCCESS
    assert entry.request_id == "r1"
