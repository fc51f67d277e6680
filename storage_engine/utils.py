"""Utility helper functions for the storage engine."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_current_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Get the current UTC time, strictly later than ``previous`` when given.

    Args:
        previous: Last timestamp recorded for the entity being touched

    Returns:
        Timezone-aware UTC datetime
    """
    now = datetime.now(timezone.utc)
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now
