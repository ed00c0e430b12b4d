"""
Turn raw attribute mappings into unsaved, validated model instances.

Nothing here touches the database: whether a reading's station exists is
decided by the foreign key when the row is written (see persist.py).
"""

from django.core.exceptions import ValidationError

from .models import Reading, Station
from .results import Result

STATION_FIELDS = ("name", "lon", "lat")
READING_FIELDS = ("date", "time", "type", "value", "station_id")

NULL_MESSAGE = "This field cannot be null."


def _pick(attrs, fields):
    # unknown keys are ignored, missing ones become None
    return {name: attrs.get(name) for name in fields}


def validate_station(attrs) -> Result:
    station = Station(**_pick(attrs, STATION_FIELDS))
    try:
        station.full_clean()
    except ValidationError as exc:
        return Result.validation_failure(exc.message_dict)
    return Result.success(station)


def validate_reading(attrs) -> Result:
    values = _pick(attrs, READING_FIELDS)
    errors = {}

    station_id = values.pop("station_id")
    if station_id is None:
        errors["station_id"] = [NULL_MESSAGE]
    else:
        try:
            station_id = Reading._meta.get_field("station").to_python(station_id)
        except ValidationError as exc:
            errors["station_id"] = exc.messages

    reading = Reading(**values)
    try:
        # the station foreign key is left to the database
        reading.full_clean(exclude=["station"])
    except ValidationError as exc:
        errors.update(exc.message_dict)

    if errors:
        return Result.validation_failure(errors)

    reading.station_id = station_id
    return Result.success(reading)
