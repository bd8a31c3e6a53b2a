"""Timestamp coercion for collected and stored records."""

from datetime import UTC, date, datetime, time


def coerce_timestamp(value: object) -> datetime | None:
    """Convert a timestamp-like value to an aware datetime.

    Accepts datetimes, dates (midnight) and ISO-8601 strings. Naive
    values are read as UTC; aware values are converted to UTC.

    Args:
        value: Raw timestamp value.

    Returns:
        UTC datetime, or None if the value is not a timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
