"""
Parser for semicolon-delimited air-quality lines:

    2024-02-10T09:00:00.000Z;PM10;35.56;57570;Polska, Kraków, Floriana Straszewskiego;50.057224,19.933157

Fields: timestamp, type, value, external id, name, "lat,lon".
Malformed lines are common in the feed; parse_line returns None for them
instead of raising.
"""

import datetime as dt
import math
from dataclasses import dataclass

from django.utils.dateparse import parse_datetime

FIELD_SEPARATOR = ";"
COORD_SEPARATOR = ","
FIELD_COUNT = 6


@dataclass(frozen=True)
class ParsedLine:
    id: str
    name: str
    coords: tuple[float, float]  # (lat, lon), as written in the feed
    type: str
    value: float
    date: dt.date
    time: dt.time

    @property
    def lat(self) -> float:
        return self.coords[0]

    @property
    def lon(self) -> float:
        return self.coords[1]


def _parse_float(value: str):
    value = value.strip()
    if value == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_coords(value: str):
    parts = value.strip().split(COORD_SEPARATOR)
    if len(parts) != 2:
        return None
    lat = _parse_float(parts[0])
    lon = _parse_float(parts[1])
    if lat is None or lon is None:
        return None
    return (lat, lon)


def _parse_timestamp(value: str):
    """
    Naive timestamp from ISO-8601 text. A trailing zone marker ("Z",
    "+01:00") is dropped, not applied: the wall-clock fields are kept.
    """
    value = value.strip()
    if "T" not in value and " " not in value:
        return None
    try:
        parsed = parse_datetime(value)
    except ValueError:
        return None
    if parsed is None:
        return None
    return parsed.replace(tzinfo=None)


def parse_row(fields) -> ParsedLine | None:
    """Typed record from the six raw fields of one line, or None."""
    if len(fields) != FIELD_COUNT:
        return None

    ts, type_, raw_value, external_id, name, raw_coords = fields

    value = _parse_float(raw_value)
    if value is None:
        return None

    coords = _parse_coords(raw_coords)
    if coords is None:
        return None

    timestamp = _parse_timestamp(ts)
    if timestamp is None:
        return None

    return ParsedLine(
        id=external_id,
        name=name,
        coords=coords,
        type=type_,
        value=value,
        date=timestamp.date(),
        time=timestamp.time(),
    )


def parse_line(line: str) -> ParsedLine | None:
    return parse_row(line.strip().split(FIELD_SEPARATOR))
