# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single to-do item.

    Edits are full replacements (dataclasses.replace + TaskStore.update);
    `id` and `created_at` never change after creation.
    """

    id: str
    title: str
    completed: bool
    created_at: datetime
