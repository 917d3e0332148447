# src/todolist/bootstrap.py

"""
Composition root.

- loads settings once,
- ensures local data directories exist,
- constructs and initializes the task store and the audit logger,
- hands them to the web layer bundled in AppState.
"""

from __future__ import annotations

import logging

from .audit.audit_log import AuditLogger
from .config import get_settings
from .core.state import AppState
from .logging_setup import setup_logging
from .tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.audit_log_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore(settings.tasks_path)
    task_store.initialize()

    audit = AuditLogger(settings.audit_log_path)
    audit.initialize()

    return AppState(settings=settings, task_store=task_store, audit=audit)


def start_app(*, settings=None) -> AppState:
    """Process startup: logging first, then state."""
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todolist"))
    return create_initial_state(settings=settings)


def shutdown(state: AppState) -> None:
    store = state.task_store
    if hasattr(store, "shutdown"):
        store.shutdown()
    logger.info("Bye.")
