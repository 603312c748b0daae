"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Audit records and persisted timestamps use this so every value
    carries tzinfo.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)
