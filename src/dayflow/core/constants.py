"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_ANNUAL_LEAVE_ALLOTMENT = 20
DEFAULT_TREND_MONTHS = 6
DEFAULT_TREND_WORKERS = 4
RECENT_LEAVES_LIMIT = 3

SIGN_IN_MIN_PASSWORD = 6
SIGN_UP_MIN_PASSWORD = 8

CURRENCY_CODE = "USD"
ISO_DATE_FORMAT = "%Y-%m-%d"
