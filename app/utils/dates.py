"""
Date helpers.

Book dates are calendar dates: clients may send "1965-08-01",
"1965-08-01T15:30:00Z" or a datetime object, and all of them are stored as
1965-08-01 (time of day dropped).
"""

from datetime import date, datetime


def to_calendar_date(value: date | datetime | str | None) -> date | None:
    """
    Normalize a date-like value to a date, dropping any time of day.

    Args:
        value: date, datetime, ISO-8601 string, or None

    Returns:
        The calendar date, or None for None / blank strings

    Raises:
        ValueError: If the value can't be read as a date
    """
    if value is None:
        return None

    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None

    raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
