from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from dateutil import tz as dateutil_tz


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Resolve the viewer's calendar timezone.

    :param name: IANA timezone name, or None for the machine's local timezone
    :return: tzinfo usable with datetime and pandas
    """
    if not name:
        return dateutil_tz.tzlocal()
    zone = dateutil_tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone: {name}")
    return zone


def as_timezone(zone) -> tzinfo:
    """Accept a tzinfo, a timezone name or None (local)"""
    if zone is None or isinstance(zone, str):
        return resolve_timezone(zone)
    return zone


def to_local_datetime(date_milli: int, zone=None) -> datetime:
    """Convert epoch milliseconds to an aware datetime in the viewer's calendar"""
    return datetime.fromtimestamp(date_milli / 1000, tz=as_timezone(zone))


def to_local_date(date_milli: int, zone=None) -> date:
    return to_local_datetime(date_milli, zone).date()


def local_midnight_millis(day: date, zone=None) -> int:
    """
    Epoch milliseconds of local midnight for a calendar day.

    Where a DST jump skips midnight the first existing time of the day is used.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=as_timezone(zone))
    midnight = dateutil_tz.resolve_imaginary(midnight)
    return int(round(midnight.timestamp() * 1000))


def today_local(zone=None) -> date:
    return datetime.now(as_timezone(zone)).date()


def days_since_sunday(day: date) -> int:
    # Python counts Monday as 0
    return (day.weekday() + 1) % 7


def get_week_start(day: date) -> date:
    """Sunday on or before the given day"""
    return day - timedelta(days=days_since_sunday(day))


def get_week_end(day: date) -> date:
    """Saturday on or after the given day"""
    return day + timedelta(days=6 - days_since_sunday(day))


def local_date_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
