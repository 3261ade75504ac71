"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Settings modules may override the rule engine values.
"""

from datetime import time

DEFAULT_ANNUAL_LEAVE_DAYS = 6
DEFAULT_ADVANCE_NOTICE_HOURS = 48
DEFAULT_MONTHLY_CONSECUTIVE_DAYS = 2

ON_TIME_CUTOFF = time(9, 30)
LATE_FINE_CUTOFF = time(10, 0)
HALF_UNPAID_CUTOFF = time(12, 30)

HALF_DAY_LEAVE_WEIGHT = 0.5
MIN_PASSWORD_LENGTH = 6
DEFAULT_LIST_LIMIT = 500
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
