from datetime import datetime, timezone


def get_time() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    SQLite drops tzinfo on the way back out, so naive values read from the
    database are taken to already be UTC.

    Args:
        value (datetime): The datetime to normalize.

    Returns:
        datetime: The same instant with tzinfo set to UTC.

    Example:
        >>> ensure_utc(datetime(2025, 7, 15, 12, 0)).tzinfo
        datetime.timezone.utc
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def preview(content: str, width: int = 80) -> str:
    """
    Single-line preview of clipboard text for list rows.

    Args:
        content (str): The clipboard text.
        width (int): Maximum length of the preview, including the ellipsis.

    Returns:
        str: The first line of the content, truncated to `width`.

    Example:
        >>> preview("first line\\nsecond line")
        'first line…'
        >>> preview("abcdef", width=4)
        'abc…'
    """
    lines = content.splitlines() or [""]
    first = lines[0]
    if len(lines) == 1 and len(first) <= width:
        return first
    return first[: width - 1] + "…"


def format_timestamp(value: datetime) -> str:
    """Render a capture timestamp in local time, date and time to the second."""
    return ensure_utc(value).astimezone().strftime("%Y-%m-%d %H:%M:%S")
