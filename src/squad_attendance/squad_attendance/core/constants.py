"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MINIMUM_WORK_HOURS = 8
DEFAULT_STANDARD_CHECK_IN_TIME = "09:00"
DEFAULT_STANDARD_CHECK_OUT_TIME = "17:00"
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_EARLY_CHECKOUT_THRESHOLD_MINUTES = 30

DEFAULT_EXPORT_DAYS = 30
EXPORT_ROW_LIMIT = 10000
REMINDER_SWEEP_LIMIT = 1000
SPRINT_LENGTH_DAYS = 14
TOP_SQUADS_LIMIT = 5
DEFAULT_LIST_LIMIT = 200
