"""Financial calendar constants shared by the account models"""

DAYS_IN_YEAR = 365
DAYS_IN_MONTH = 31     # Idealized month used when no calendar is involved
DAYS_IN_WEEK = 7
WEEKS_IN_YEAR = 52
MONTHS_IN_YEAR = 12

CENTS_PLACES = 2
