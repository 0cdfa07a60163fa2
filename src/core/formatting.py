"""Date formatting helpers shared by reports, history and the API."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateutil_parser

from src.core import message_templates


DATE_FORMATS: dict[str, str] = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM/DD/YYYY": "%m/%d/%Y",
}


def _to_datetime(value: datetime | str) -> datetime:
    """Parse ISO strings and assume UTC for naive datetimes."""
    dt = dateutil_parser.isoparse(value) if isinstance(value, str) else value
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _localize(dt: datetime, timezone: str | None) -> datetime:
    if not timezone:
        return dt.astimezone(UTC)
    try:
        return dt.astimezone(ZoneInfo(timezone))
    except ZoneInfoNotFoundError:
        return dt.astimezone(UTC)


def format_date(value: datetime | str, *, date_format: str = "DD/MM/YYYY", timezone: str | None = None) -> str:
    """Format a date as DD/MM/YYYY or MM/DD/YYYY.

    Args:
        value: Datetime or ISO 8601 string
        date_format: One of the keys of DATE_FORMATS; unknown formats fall back to DD/MM/YYYY
        timezone: IANA zone to display in (UTC when omitted or unknown)

    Returns:
        Formatted date string
    """
    pattern = DATE_FORMATS.get(date_format, DATE_FORMATS["DD/MM/YYYY"])
    return _localize(_to_datetime(value), timezone).strftime(pattern)


def format_datetime(value: datetime | str, *, date_format: str = "DD/MM/YYYY", timezone: str | None = None) -> str:
    """Format a date and time, e.g. "25/12/2025 14:30:00"."""
    pattern = DATE_FORMATS.get(date_format, DATE_FORMATS["DD/MM/YYYY"])
    return _localize(_to_datetime(value), timezone).strftime(f"{pattern} %H:%M:%S")


def time_until(due: datetime | str, now: datetime | None = None, *, language: str | None = None) -> str:
    """Return the remaining time as "{d}d {h}h {m}m", or the expired label once due has passed."""
    current = _to_datetime(now) if now is not None else datetime.now(UTC)
    remaining = _to_datetime(due) - current

    total_seconds = int(remaining.total_seconds())
    if total_seconds <= 0:
        return message_templates.expired(language=language)

    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    return f"{days}d {hours}h {minutes}m"
