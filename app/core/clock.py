"""Time helpers bound to the CRM display timezone."""

from datetime import date, datetime, time

import pytz

from app.settings import settings


def resolve_timezone(value: str | None) -> str:
    """Resolve timezone string to valid pytz timezone name.

    Args:
        value: Timezone name or None

    Returns:
        Valid timezone name, defaults to "UTC" if invalid
    """
    if not value:
        return "UTC"
    try:
        pytz.timezone(value)
        return value
    except pytz.UnknownTimeZoneError:
        return "UTC"


def display_timezone() -> pytz.BaseTzInfo:
    """Return the timezone client dates are recorded and shown in."""
    return pytz.timezone(resolve_timezone(settings.display_timezone))


def now_local() -> datetime:
    """Current time as an aware datetime in the display timezone."""
    return datetime.now(pytz.UTC).astimezone(display_timezone())


def today_local() -> date:
    """Current calendar date in the display timezone."""
    return now_local().date()


def local_midnight(day: date) -> datetime:
    """Midnight at the start of ``day`` in the display timezone."""
    return display_timezone().localize(datetime.combine(day, time.min))


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as display-timezone local time."""
    if value.tzinfo is None:
        return display_timezone().localize(value)
    return value
