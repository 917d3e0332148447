# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task API and the timed wrapper depend on Protocols instead of concrete
implementations. This keeps storage/logging swappable and makes testing easier.
"""

from typing import Any, Protocol


class TaskRepo(Protocol):
    def list_all(self) -> list[Any]: ...
    def add(self, title: str) -> Any: ...
    def find(self, task_id: str) -> Any | None: ...
    def update(self, task: Any) -> bool: ...
    def modify(self, task_id: str, **changes: Any) -> Any | None: ...
    def delete(self, task_id: str) -> bool: ...
    def search(self, query: str) -> list[Any]: ...


class AuditSink(Protocol):
    """Where per-operation outcomes go (AuditLogger in production)."""

    def record_validation_error(
            self,
            session_id: str,
            request_id: str,
            task_code: str,
            outcome: str,
            js_mode: str,
    ) -> None: ...

    def record_success(
            self,
            session_id: str,
            request_id: str,
            task_code: str,
            duration_ms: int,
            js_mode: str,
    ) -> None: ...

    def record_server_error(
            self,
            session_id: str,
            request_id: str,
            task_code: str,
            outcome: str,
            duration_ms: int,
            js_mode: str,
    ) -> None: ...
