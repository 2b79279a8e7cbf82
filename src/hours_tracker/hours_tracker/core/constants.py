"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Sunday first, matching the weekday order of the tracker table.
DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

FIRST_HALF_LAST_DAY = 15
DEFAULT_TRACKER_YEAR = 2026
DEFAULT_AGENT_NAME = "Agent {n}"
USER_ID_PREFIX = "u-"
