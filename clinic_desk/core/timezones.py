"""Wall-clock to UTC conversion and local calendar-day windows.

Appointment times arrive from the front desk as naive local date-times plus
the IANA zone the browser reported. Everything stored is a UTC instant, and
"the appointments for a day" means the UTC range that covers one calendar
day in the caller's zone.
"""

from datetime import UTC, date, datetime, time
from typing import NamedTuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clinic_desk.core.exceptions import InvalidDateTimeException, InvalidTimeZoneException

# Millisecond precision, matching what browsers send and display
END_OF_DAY = time(23, 59, 59, 999000)


class DayWindow(NamedTuple):
    """Inclusive UTC bounds of one local calendar day."""

    start_utc: datetime
    end_utc: datetime


def now_utc() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(UTC)


def resolve_zone(zone_name: str) -> ZoneInfo:
    """
    Look up an IANA time zone.

    Args:
        zone_name: IANA identifier such as ``Asia/Kolkata``

    Returns:
        The zone

    Raises:
        InvalidTimeZoneException: If the name is empty, malformed or unknown
    """
    if not isinstance(zone_name, str) or not zone_name.strip():
        raise InvalidTimeZoneException("Time zone is required")

    try:
        return ZoneInfo(zone_name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimeZoneException(f"Unknown time zone: {zone_name}") from e


def _parse_datetime(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateTimeException("Date-time is required")

    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDateTimeException(f"Cannot parse date-time: {value}") from e


def _parse_calendar_date(value: str | date) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return _parse_datetime(value).date()


def to_utc_instant(local_datetime: str | datetime, zone_name: str) -> datetime:
    """
    Interpret a local wall-clock value in a zone and return the UTC instant.

    A value that already carries an offset keeps it and is only normalised to
    UTC. Wall-clock times inside a DST gap resolve with the offset in effect
    before the transition; repeated times resolve to their first occurrence.

    Args:
        local_datetime: ISO-8601 date-time (``2024-03-01T10:00``) or date
        zone_name: IANA zone the wall-clock value belongs to

    Returns:
        Aware datetime in UTC

    Raises:
        InvalidTimeZoneException: If the zone is not recognised
        InvalidDateTimeException: If the value cannot be parsed
    """
    zone = resolve_zone(zone_name)
    parsed = _parse_datetime(local_datetime)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone, fold=0)

    return parsed.astimezone(UTC)


def to_local(instant: datetime, zone_name: str) -> datetime:
    """Express a stored instant as wall-clock time in a zone."""
    zone = resolve_zone(zone_name)
    if instant.tzinfo is None:
        # Naive values coming back from the database are UTC
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(zone)


def day_window(calendar_date: str | date, zone_name: str) -> DayWindow:
    """
    Compute the UTC range covering one calendar day in a zone.

    The range runs from local 00:00:00.000 to local 23:59:59.999 and is
    meant to be queried inclusively on both ends.

    Args:
        calendar_date: Date, datetime (date part used) or ISO string
        zone_name: IANA zone of the calendar

    Returns:
        DayWindow with aware UTC bounds

    Raises:
        InvalidTimeZoneException: If the zone is not recognised
        InvalidDateTimeException: If the date cannot be parsed
    """
    zone = resolve_zone(zone_name)
    day = _parse_calendar_date(calendar_date)

    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day, END_OF_DAY, tzinfo=zone)

    return DayWindow(start.astimezone(UTC), end.astimezone(UTC))
