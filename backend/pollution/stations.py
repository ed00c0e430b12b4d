"""
Station store: validated inserts and coordinate/name lookups.

Coordinate lookups take (lon, lat), except get_by_coords which takes
(lat, lon) to match the order coordinates appear in the CSV feed.
"""

from . import persist
from .models import Station
from .results import Result
from .validation import validate_station


def add(attrs) -> Result:
    result = validate_station(attrs)
    if not result.ok:
        return result
    return persist.insert(result.record)


def get_all() -> list[Station]:
    return list(Station.objects.all())


def get_by_id(station_id) -> Station | None:
    return Station.objects.filter(pk=station_id).first()


def remove(station: Station) -> Result:
    # readings go with it (on_delete=CASCADE)
    station.delete()
    return Result.success(station)


def find_by_location(lon: float, lat: float) -> list[Station]:
    return list(Station.objects.filter(lon=lon, lat=lat))


def get_by_coords(lat: float, lon: float) -> Station | None:
    """
    Return the first station at exactly (lat, lon), or None.
    Coordinates must already be floats; anything else raises TypeError.
    """
    if not isinstance(lat, float) or not isinstance(lon, float):
        raise TypeError(
            f"get_by_coords expects float coordinates, got {type(lat).__name__}, {type(lon).__name__}"
        )
    matches = find_by_location(lon, lat)
    return matches[0] if matches else None


def find_by_name(name: str) -> list[Station]:
    return list(Station.objects.filter(name=name))


def find_by_location_range(lon_min: float, lon_max: float, lat_min: float, lat_max: float) -> list[Station]:
    """Stations inside the bounding box, edges included."""
    return list(
        Station.objects.filter(
            lon__gte=lon_min,
            lon__lte=lon_max,
            lat__gte=lat_min,
            lat__lte=lat_max,
        )
    )


def update_name(station: Station, new_name: str) -> Result:
    """Re-validate with the new name and persist only that column."""
    checked = validate_station({"name": new_name, "lon": station.lon, "lat": station.lat})
    if not checked.ok:
        return checked

    station.name = checked.record.name
    return persist.update(station, ["name", "updated_at"])
