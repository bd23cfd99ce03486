"""Constants and defaults."""

from datetime import date

ISO_DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

DEFAULT_TARGET_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday")
DEFAULT_HOLIDAY_REASON = "School Closed"

# Closed for every teacher; never counted as a target day.
DISABLED_DATES = (date(2025, 12, 1),)
