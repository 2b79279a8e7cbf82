"""Settings shared by every environment; the per-environment modules override what differs."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hours_tracker"),
}

# 'file' (JSON document, in memory when TRACKER_DATA_FILE is empty) or 'mysql'
TRACKER_BACKEND = os.getenv("TRACKER_BACKEND", "file")
TRACKER_DATA_FILE = os.getenv("TRACKER_DATA_FILE", "instance/tracker.json")
TRACKER_YEAR = int(os.getenv("TRACKER_YEAR", "2026"))

# 'manual': hours typed per row; 'derived': hours computed from start/end times
HOURS_MODE = os.getenv("HOURS_MODE", "manual")

# Admin login is disabled until both are set. Generate the hash with
# werkzeug.security.generate_password_hash.
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
