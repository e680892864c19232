"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
UNKNOWN_USER_NAME = "Unknown"

# PDF report truncation (characters)
REPORT_DESCRIPTION_MAX = 30
REPORT_PASSENGER_MAX = 15
REPORT_FLIGHT_MAX = 12

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
