"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ORG_TIMEZONE = "Asia/Kolkata"

# calendar module numbering: Monday=0 ... Sunday=6
DEFAULT_FIRST_WEEKDAY = 6

DEFAULT_ATTENDANCE_SETTLE_SECONDS = 0.0
DEFAULT_LEAVE_SETTLE_SECONDS = 1.0

DEFAULT_LATE_GRACE_MINUTES = 10
HALF_DAY_MIN_MINUTES = 210
FULL_DAY_MIN_MINUTES = 240
