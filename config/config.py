"""Settings shared by every environment module."""

import os


def env_bool(name: str, default: bool) -> bool:
    return bool(int(os.getenv(name, "1" if default else "0")))


def env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_calendar"),
    }


# Organization timezone: calendar dates are taken in this zone.
ORG_TIMEZONE = os.getenv("ORG_TIMEZONE", "Asia/Kolkata")

# calendar module numbering, Monday=0 ... Sunday=6
CALENDAR_FIRST_WEEKDAY = int(os.getenv("CALENDAR_FIRST_WEEKDAY", "6"))

# Delay before rebuilding after an external change, per event kind.
ATTENDANCE_SETTLE_SECONDS = env_float("ATTENDANCE_SETTLE_SECONDS", 0.0)
LEAVE_SETTLE_SECONDS = env_float("LEAVE_SETTLE_SECONDS", 1.0)

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "10"))
EVALUATE_ATTENDANCE_STATUS = env_bool("EVALUATE_ATTENDANCE_STATUS", False)
