"""Duration constants for lifecountdown.

All values are durations in milliseconds. Months and years use averaged
calendar lengths so that a countdown expressed in either unit decreases
smoothly instead of jumping at month boundaries.
"""

SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30.4375  # 365.25 / 12
DAYS_PER_YEAR = 365.2425  # Gregorian mean year

# Time unit constants (all values in milliseconds)
MS_PER_SECOND = 1000
MS_PER_MINUTE = MS_PER_SECOND * SECONDS_PER_MINUTE
MS_PER_HOUR = MS_PER_MINUTE * MINUTES_PER_HOUR
MS_PER_DAY = MS_PER_HOUR * HOURS_PER_DAY
MS_PER_WEEK = MS_PER_DAY * DAYS_PER_WEEK
MS_PER_MONTH = MS_PER_DAY * DAYS_PER_MONTH
MS_PER_YEAR = MS_PER_DAY * DAYS_PER_YEAR
