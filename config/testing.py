from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

TRACKER_BACKEND = "file"
TRACKER_DATA_FILE = ""
HOURS_MODE = "manual"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
