from .config import *  # noqa: F401,F403
from .config import db_config_from_env

DB_CONFIG = db_config_from_env()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

# No settle delays in tests.
ATTENDANCE_SETTLE_SECONDS = 0.0
LEAVE_SETTLE_SECONDS = 0.0
