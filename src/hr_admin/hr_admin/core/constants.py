"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_PASSWORD = "TestPass1234"

SEED_MANAGERS = 5
SEED_RECORDS_PER_MANAGER = 5

GENERIC_FORM_ERROR = "Something went wrong, please try again"
INVALID_FILTERS_MESSAGE = "Invalid input provided, please try again"
