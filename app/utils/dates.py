"""Parsing of stored dates and timestamps."""

from datetime import datetime, timezone
from typing import Any, Optional

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

# Sort key for rows with no usable date
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored date/timestamp into an aware datetime (UTC if naive).

    Plain dates (``2024-03-09``) become midnight UTC; timestamps keep their
    offset so values with different offsets compare correctly.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            LOGGER.debug(f"Unparseable timestamp: {value!r}")
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_sort_key(value: Any) -> datetime:
    return parse_timestamp(value) or EARLIEST
