"""
Reading store.

Writers accept either a station id or anything carrying one (a Station
instance); both resolve to the same station_id before validation.
"""

import datetime as dt

from django.utils import timezone

from . import persist
from .models import Reading
from .results import Result
from .validation import validate_reading


def _station_id(station_or_id):
    return getattr(station_or_id, "pk", station_or_id)


def add_now(station_or_id, type: str, value: float, clock=None) -> Result:
    """
    Insert a reading stamped with the current UTC date and time.
    `clock` is any callable returning an aware datetime; defaults to
    django.utils.timezone.now.
    """
    now = (clock or timezone.now)()
    if timezone.is_aware(now):
        now = now.astimezone(dt.timezone.utc)
    return add(station_or_id, now.date(), now.time(), type, value)


def add(station_or_id, date: dt.date, time: dt.time, type: str, value: float) -> Result:
    result = validate_reading(
        {
            "date": date,
            "time": time,
            "type": type,
            "value": value,
            "station_id": _station_id(station_or_id),
        }
    )
    if not result.ok:
        return result
    return persist.insert(result.record, fk_field="station_id")


def find_by_date(date: dt.date) -> list[Reading]:
    if not isinstance(date, dt.date) or isinstance(date, dt.datetime):
        raise TypeError(f"find_by_date expects a date, got {type(date).__name__}")
    return list(Reading.objects.filter(date=date))
