# src/todolist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Paths are resolved once; components receive them explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODOLIST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path
    audit_log_path: Path

    # ---- Listing ----
    page_size: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todolist") or "todolist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path("data"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.csv")
        audit_log_path = _env_path(_k("AUDIT_LOG_PATH"), data_dir / "metrics.csv")

        # A zero or negative page size would make every listing fail.
        page_size = max(1, _env_int(_k("PAGE_SIZE"), 10))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_path=tasks_path,
            audit_log_path=audit_log_path,
            page_size=page_size,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
