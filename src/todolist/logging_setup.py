# src/todolist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _OwnLogsFilter(logging.Filter):
    """Console shows every todolist record; other loggers only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todolist" or record.name.startswith("todolist."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = "data",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Install a filtered stderr handler and a full app.log handler on the root logger.

    The per-request audit trail is separate (AuditLogger writes metrics.csv).
    Call once at startup; existing root handlers are replaced.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_OwnLogsFilter())
    root.addHandler(console)

    app_log = logging.FileHandler(str(log_dir / "app.log"), encoding="utf-8")
    app_log.setLevel(file_level)
    app_log.setFormatter(fmt)
    root.addHandler(app_log)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)
