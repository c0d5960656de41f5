# /homework-tracker/homework_tracker/services/database_helpers/clock.py

from datetime import date, datetime, timezone


def utc_timestamp() -> str:
    """The current UTC time as an ISO-8601 string, used for createdAt/updatedAt."""
    return datetime.now(timezone.utc).isoformat()


def today() -> date:
    return datetime.now(timezone.utc).date()
