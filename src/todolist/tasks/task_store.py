# src/todolist/tasks/task_store.py

from __future__ import annotations

import csv
import dataclasses
import io
import logging
import os
import threading
import uuid
from datetime import datetime
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

HEADER = ("id", "title", "completed", "createdAt")


class TaskStore:
    """
    CSV-backed task store.

    The whole collection lives in memory; the file is the durable copy:
    - initialize() loads it once (or creates it with only a header row)
    - every mutation rewrites the full file before returning

    Thread-safety:
    - one lock guards the collection; mutations hold it across
      modify + persist, reads take a snapshot under it
    """

    def __init__(self, path: str | Path = "data/tasks.csv") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._lock = threading.RLock()
        self._initialized = False
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    # ---- lifecycle ----

    def initialize(self) -> None:
        with self._lock:
            if self._initialized:
                logger.debug("TaskStore already initialized path=%s", self._path)
                return

            self._path.parent.mkdir(parents=True, exist_ok=True)
            if not self._path.exists():
                self._write_rows([])
                logger.info("TaskStore created path=%s", self._path)
            else:
                self._tasks = self._load()

            self._initialized = True
            logger.info("TaskStore ready path=%s total=%s", self._path, len(self._tasks))

    def shutdown(self) -> None:
        """Nothing is buffered (every mutation is already on disk); just end the lifecycle."""
        with self._lock:
            self._closed = True
        logger.info("TaskStore shut down path=%s", self._path)

    def _check_ready(self) -> None:
        if self._closed:
            raise RuntimeError("TaskStore has been shut down")
        if not self._initialized:
            raise RuntimeError("TaskStore is not initialized; call initialize() first")

    # ---- low-level helpers ----

    @staticmethod
    def _parse_created_at(raw: str) -> datetime:
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return datetime.now()

    def _load(self) -> list[Task]:
        tasks: list[Task] = []
        with self._path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            for lineno, row in enumerate(reader, start=2):
                if len(row) != len(HEADER):
                    logger.debug("Skipping malformed row line=%s columns=%s", lineno, len(row))
                    continue
                task_id, title, completed, created_at = row
                tasks.append(
                    Task(
                        id=task_id,
                        title=title,
                        completed=completed.strip().lower() == "true",
                        created_at=self._parse_created_at(created_at),
                    )
                )
        return tasks

    def _write_rows(self, tasks: list[Task]) -> None:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(HEADER)
        for t in tasks:
            writer.writerow(
                (t.id, t.title, "true" if t.completed else "false", t.created_at.isoformat())
            )

        # Full snapshot goes to a temp file first so a crash never leaves half a file.
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(buf.getvalue(), "utf-8")
        os.replace(tmp, self._path)

    def _persist(self) -> None:
        self._write_rows(self._tasks)

    def _snapshot(self) -> list[Task]:
        with self._lock:
            self._check_ready()
            return list(self._tasks)

    @staticmethod
    def _newest_first(tasks: list[Task]) -> list[Task]:
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    # ---- public API ----

    def count(self) -> int:
        return len(self._snapshot())

    def list_all(self) -> list[Task]:
        """Return all tasks sorted newest -> oldest."""
        return self._newest_first(self._snapshot())

    def add(self, title: str) -> Task:
        task = Task(
            id=str(uuid.uuid4()),
            title=title,
            completed=False,
            created_at=datetime.now(),
        )
        with self._lock:
            self._check_ready()
            self._tasks.append(task)
            self._persist()
        logger.debug("Task added id=%s", task.id)
        return task

    def find(self, task_id: str) -> Task | None:
        for t in self._snapshot():
            if t.id == task_id:
                return t
        return None

    def update(self, task: Task) -> bool:
        """Replace the stored task with the same id. Unknown ids are ignored."""
        with self._lock:
            self._check_ready()
            for i, t in enumerate(self._tasks):
                if t.id == task.id:
                    self._tasks[i] = task
                    self._persist()
                    logger.debug("Task updated id=%s", task.id)
                    return True
        return False

    def modify(self, task_id: str, **changes) -> Task | None:
        """
        Apply field changes to the stored task in one locked step.

        Returns the new task, or None if the id is unknown.
        """
        if "id" in changes or "created_at" in changes:
            raise ValueError("id and created_at cannot be changed")

        with self._lock:
            self._check_ready()
            for i, t in enumerate(self._tasks):
                if t.id == task_id:
                    updated = dataclasses.replace(t, **changes)
                    self._tasks[i] = updated
                    self._persist()
                    logger.debug("Task modified id=%s fields=%s", task_id, sorted(changes))
                    return updated
        return None

    def delete(self, task_id: str) -> bool:
        with self._lock:
            self._check_ready()
            kept = [t for t in self._tasks if t.id != task_id]
            if len(kept) == len(self._tasks):
                return False
            self._tasks = kept
            self._persist()
        logger.debug("Task deleted id=%s", task_id)
        return True

    def search(self, query: str) -> list[Task]:
        """Case-insensitive substring match on title; blank query lists everything."""
        if not query or not query.strip():
            return self.list_all()
        q = query.casefold()
        return self._newest_first([t for t in self._snapshot() if q in t.title.casefold()])
