# src/todolist/tasks/task_api.py

from __future__ import annotations

"""
High-level task operations used by the web layer.

Each function validates its input, runs the store call through the timed
wrapper (one audit line per call) and returns an OpResult the caller can
render from. Ids come from the surrounding request_context().
"""

import logging

from ..audit.audit_log import TaskCode
from ..audit.timing import OpResult, current_request_id, current_session_id, run_timed
from ..core.state import AppState
from .pagination import Page, paginate
from .task_models import Task

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required."


def _reject(state: AppState, task_code: str, outcome: str, js_mode: str) -> OpResult:
    state.audit.record_validation_error(
        current_session_id(), current_request_id(), task_code, outcome, js_mode
    )
    logger.info("Validation failed task_code=%s: %s", task_code, outcome)
    return OpResult(error=ValueError(outcome), status_code=400)


def list_tasks_page(
    state: AppState,
    *,
    query: str = "",
    page: int = 1,
    js_mode: str = "off",
) -> OpResult[Page[Task]]:
    page_size = int(getattr(state.settings, "page_size", 10))
    return run_timed(
        state.audit,
        TaskCode.FILTER,
        js_mode,
        lambda: paginate(state.task_store.search(query), page, page_size),
    )


def create_task(state: AppState, title: str, *, js_mode: str = "off") -> OpResult[Task]:
    clean = (title or "").strip()
    if not clean:
        return _reject(state, TaskCode.ADD, TITLE_REQUIRED, js_mode)
    return run_timed(state.audit, TaskCode.ADD, js_mode, lambda: state.task_store.add(clean))


def get_task(state: AppState, task_id: str, *, js_mode: str = "off") -> OpResult[Task]:
    """Lookup for the edit form / cancel-edit view. Unknown id -> value None."""
    return run_timed(state.audit, TaskCode.EDIT, js_mode, lambda: state.task_store.find(task_id))


def rename_task(
    state: AppState, task_id: str, title: str, *, js_mode: str = "off"
) -> OpResult[Task]:
    clean = (title or "").strip()
    if not clean:
        return _reject(state, TaskCode.EDIT, TITLE_REQUIRED, js_mode)
    return run_timed(
        state.audit, TaskCode.EDIT, js_mode, lambda: state.task_store.modify(task_id, title=clean)
    )


def set_completed(
    state: AppState, task_id: str, completed: bool, *, js_mode: str = "off"
) -> OpResult[Task]:
    return run_timed(
        state.audit,
        TaskCode.EDIT,
        js_mode,
        lambda: state.task_store.modify(task_id, completed=bool(completed)),
    )


def delete_task(state: AppState, task_id: str, *, js_mode: str = "off") -> OpResult[bool]:
    return run_timed(
        state.audit, TaskCode.DELETE, js_mode, lambda: state.task_store.delete(task_id)
    )
