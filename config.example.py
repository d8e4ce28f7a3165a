# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKS_APP_NAME": "App display name (default: task-tracker).",
    "TASKS_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    "TASKS_LOG_TO_FILE": "Write <data_dir>/task-tracker.log (true/false, default: true).",
    # Storage
    "TASKS_STORAGE": "Backend: json | sqlite | mongo (default: json).",
    "TASKS_DATA_DIR": "Local data directory (default: .local/task-tracker).",
    "TASKS_FILE_PATH": "JSON backend file (default: <data_dir>/tasks.json).",
    "TASKS_DB_PATH": "SQLite backend file (default: <data_dir>/tasks.sqlite3).",
    # MongoDB
    "TASKS_MONGO_URL": "MongoDB URL (default: mongodb://localhost:27017).",
    "TASKS_MONGO_DB": "Database name (default: task-tracker).",
    "TASKS_MONGO_COLLECTION": "Collection name (default: tasks).",
    "TASKS_MONGO_TIMEOUT_MS": "Server selection timeout in ms (default: 3000).",
}
