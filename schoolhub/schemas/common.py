# schoolhub/schemas/common.py
"""Helpers shared by the request schemas."""
from datetime import datetime, date
from typing import Optional


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Store wall-clock times: aware datetimes are converted to local time and made naive."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def empty_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def today() -> date:
    return date.today()
