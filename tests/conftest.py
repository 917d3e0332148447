# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.audit.audit_log import AuditLogger
from todolist.core.state import AppState
from todolist.tasks.task_store import TaskStore

from .fakes import FakeAuditSink


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.csv",
        audit_log_path=data_dir / "metrics.csv",
        page_size=10,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    s = TaskStore(settings.tasks_path)
    s.initialize()
    return s


@pytest.fixture()
def audit(settings: SimpleNamespace) -> AuditLogger:
    a = AuditLogger(settings.audit_log_path)
    a.initialize()
    return a


@pytest.fixture()
def fake_audit() -> FakeAuditSink:
    return FakeAuditSink()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, audit: AuditLogger) -> AppState:
    """
    AppState wired with the real CSV store and audit logger.

    Their on-disk behaviour is part of what we want to test.
    """
    return AppState(settings=settings, task_store=store, audit=audit)
