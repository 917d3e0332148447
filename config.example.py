# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODOLIST_APP_NAME": "App display name (default: todolist).",
    "TODOLIST_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths
    "TODOLIST_DATA_DIR": "Local data directory (default: data).",
    "TODOLIST_TASKS_PATH": "Task CSV file (default: <data_dir>/tasks.csv).",
    "TODOLIST_AUDIT_LOG_PATH": "Audit CSV file (default: <data_dir>/metrics.csv).",
    # Listing
    "TODOLIST_PAGE_SIZE": "Tasks per page (default: 10).",
}
