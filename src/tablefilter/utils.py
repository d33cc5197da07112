from datetime import UTC, date, datetime


def to_datetime(value: datetime | date | str) -> datetime:
    """Coerce a date-like value to datetime; a bare date becomes midnight.

    Raises:
        ValueError: If a string is not ISO-8601
        TypeError: If the value is not date-like
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)  # noqa: DTZ001
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"Expected a date, datetime or ISO-8601 string, got {type(value).__name__}")


def align_timezones(*values: datetime) -> tuple[datetime, ...]:
    """Make datetimes comparable; when any value is aware, naive ones are taken as UTC."""
    if all(value.tzinfo is None for value in values):
        return values
    return tuple(value.replace(tzinfo=UTC) if value.tzinfo is None else value for value in values)
