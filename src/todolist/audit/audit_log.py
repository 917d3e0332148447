# src/todolist/audit/audit_log.py

from __future__ import annotations

import csv
import io
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)

HEADER = (
    "ts_iso",
    "session_id",
    "request_id",
    "task_code",
    "step",
    "outcome",
    "ms",
    "http_status",
    "js_mode",
)


class LogStep(StrEnum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    SERVER_ERROR = "server_error"


class TaskCode(StrEnum):
    """Operation classes that show up in the audit log."""

    FILTER = "T1_filter"
    EDIT = "T2_edit"
    ADD = "T3_add"
    DELETE = "T4_delete"


@dataclass(slots=True, frozen=True)
class LogEntry:
    session_id: str
    request_id: str
    task_code: str
    step: LogStep | str
    outcome: str
    duration_ms: int
    status_code: int
    js_mode: str

    # Only set on entries read back from the file; record() stamps its own time.
    ts_iso: str | None = None


def utc_timestamp() -> str:
    """UTC instant, e.g. 2026-10-19T09:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AuditLogger:
    """
    Append-only CSV audit trail: one line per request outcome.

    Shared by all request handlers; record() holds a lock around a single
    append so concurrent lines never interleave.
    """

    def __init__(self, path: str | Path = "data/metrics.csv") -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._ready = False

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        with self._lock:
            self._ensure_file()

    def _ensure_file(self) -> None:
        # caller holds self._lock
        if self._ready:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._path.write_text(",".join(HEADER) + "\n", "utf-8")
            logger.info("Audit log created path=%s", self._path)
        self._ready = True

    @staticmethod
    def _format(entry: LogEntry, ts: str) -> str:
        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(
            (
                ts,
                entry.session_id,
                entry.request_id,
                entry.task_code,
                str(entry.step),
                entry.outcome,
                int(entry.duration_ms),
                int(entry.status_code),
                entry.js_mode,
            )
        )
        return buf.getvalue()

    def record(self, entry: LogEntry) -> None:
        with self._lock:
            self._ensure_file()
            line = self._format(entry, utc_timestamp())
            with self._path.open("a", encoding="utf-8", newline="") as f:
                f.write(line)
                f.flush()

    def record_validation_error(
        self,
        session_id: str,
        request_id: str,
        task_code: str,
        outcome: str,
        js_mode: str,
    ) -> None:
        self.record(
            LogEntry(
                session_id=session_id,
                request_id=request_id,
                task_code=task_code,
                step=LogStep.VALIDATION_ERROR,
                outcome=outcome,
                duration_ms=0,
                status_code=400,
                js_mode=js_mode,
            )
        )

    def record_success(
        self,
        session_id: str,
        request_id: str,
        task_code: str,
        duration_ms: int,
        js_mode: str,
    ) -> None:
        self.record(
            LogEntry(
                session_id=session_id,
                request_id=request_id,
                task_code=task_code,
                step=LogStep.SUCCESS,
                outcome="",
                duration_ms=duration_ms,
                status_code=200,
                js_mode=js_mode,
            )
        )

    def record_server_error(
        self,
        session_id: str,
        request_id: str,
        task_code: str,
        outcome: str,
        duration_ms: int,
        js_mode: str,
    ) -> None:
        self.record(
            LogEntry(
                session_id=session_id,
                request_id=request_id,
                task_code=task_code,
                step=LogStep.SERVER_ERROR,
                outcome=outcome,
                duration_ms=duration_ms,
                status_code=500,
                js_mode=js_mode,
            )
        )

    def read_entries(self) -> list[LogEntry]:
        """Parse the log back into entries (header and unreadable lines skipped)."""
        if not self._path.exists():
            return []

        out: list[LogEntry] = []
        with self._path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)
            for row in reader:
                if len(row) != len(HEADER):
                    continue
                ts, session_id, request_id, task_code, step, outcome, ms, status, js_mode = row
                try:
                    out.append(
                        LogEntry(
                            session_id=session_id,
                            request_id=request_id,
                            task_code=task_code,
                            step=LogStep(step),
                            outcome=outcome,
                            duration_ms=int(ms),
                            status_code=int(status),
                            js_mode=js_mode,
                            ts_iso=ts,
                        )
                    )
                except ValueError:
                    logger.debug("Unreadable audit line: %r", row)
        return out
