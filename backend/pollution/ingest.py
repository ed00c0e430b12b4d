"""
Bulk loader for air-quality CSV files.

A full load wipes both tables, then streams the file line by line:
parse -> find or create the station at exactly (lat, lon) -> insert the
reading. Bad lines and rejected rows are skipped so one broken record never
aborts the whole file.

Station lookup-or-create is check-then-insert and not atomic; two loads
running at once against the same coordinates can create duplicate stations.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from . import readings, stations
from .models import Reading, Station
from .parse import ParsedLine, parse_line

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1000
ENCODING = "utf-8-sig"


@dataclass
class LoadSummary:
    lines_total: int = 0
    lines_skipped: int = 0
    stations_added: int = 0
    readings_added: int = 0
    readings_failed: int = 0


@dataclass
class BenchmarkSummary:
    stations_time_sec: float
    stations_added: int
    measurements_time_sec: float
    measurements_added: int
    total_time_sec: float
    total_added: int


def clear_tables():
    # readings reference stations, so they go first
    Reading.objects.all().delete()
    Station.objects.all().delete()


def count_lines(path) -> int:
    with Path(path).open("rb") as f:
        return sum(1 for _ in f)


def iter_lines(path):
    """
    Yield (line_number, text) for every line of the file.
    Lines are decoded one at a time; text is None when a line is not
    valid UTF-8.
    """
    with Path(path).open("rb") as f:
        for idx, raw in enumerate(f, start=1):
            try:
                yield idx, raw.decode(ENCODING)
            except UnicodeDecodeError:
                logger.debug("Line %d is not valid %s", idx, ENCODING)
                yield idx, None


def iter_parsed(path):
    """Yield (line_number, ParsedLine or None) for every line of the file."""
    for idx, text in iter_lines(path):
        yield idx, (parse_line(text) if text is not None else None)


def _find_or_create_station(parsed: ParsedLine, summary: LoadSummary = None):
    station = stations.get_by_coords(parsed.lat, parsed.lon)
    if station is not None:
        return station

    result = stations.add({"name": parsed.name, "lon": parsed.lon, "lat": parsed.lat})
    if not result.ok:
        logger.warning(
            "Could not create station %r at (%s, %s): %s",
            parsed.name, parsed.lat, parsed.lon, result.errors,
        )
        return None

    if summary is not None:
        summary.stations_added += 1
    return result.record


def send_to_db(parsed: ParsedLine, summary: LoadSummary = None) -> bool:
    """Store one parsed line. Returns True when the reading was inserted."""
    station = _find_or_create_station(parsed, summary)
    if station is None:
        return False

    result = readings.add(station.id, parsed.date, parsed.time, parsed.type, parsed.value)
    if not result.ok:
        logger.warning(
            "Could not insert reading: %s for station %s", result.errors, station.name
        )
        return False
    return True


def load_csv_data(path, progress_every: int = PROGRESS_EVERY) -> LoadSummary:
    logger.info("Starting CSV load from %s", path)

    clear_tables()

    summary = LoadSummary(lines_total=count_lines(path))
    logger.info("File has %d lines, processing", summary.lines_total)

    for idx, parsed in iter_parsed(path):
        if idx % progress_every == 0:
            logger.info("Processed %d/%d lines", idx, summary.lines_total)

        if parsed is None:
            summary.lines_skipped += 1
            logger.debug("Skipping unparseable line %d", idx)
            continue

        if send_to_db(parsed, summary):
            summary.readings_added += 1
        else:
            summary.readings_failed += 1

    logger.info(
        "CSV load finished: lines_total=%d, lines_skipped=%d, stations_added=%d, "
        "readings_added=%d, readings_failed=%d",
        summary.lines_total,
        summary.lines_skipped,
        summary.stations_added,
        summary.readings_added,
        summary.readings_failed,
    )
    return summary


def benchmark_csv_loading(path) -> BenchmarkSummary:
    """
    Same result as load_csv_data, split in two timed phases: every unique
    station first, then every reading. Each phase streams the file again;
    only the set of unique (name, coords) pairs is kept in memory.
    """
    logger.info("Starting benchmark CSV load from %s", path)

    clear_tables()

    logger.info("File has %d lines, collecting unique stations", count_lines(path))

    unique_stations = {}
    for _, parsed in iter_parsed(path):
        if parsed is not None:
            unique_stations[(parsed.name, parsed.coords)] = None
    logger.info("Found %d unique stations", len(unique_stations))

    started = time.perf_counter()
    stations_added = 0
    for name, (lat, lon) in unique_stations:
        if stations.get_by_coords(lat, lon) is not None:
            continue
        if stations.add({"name": name, "lon": lon, "lat": lat}).ok:
            stations_added += 1
    stations_time = time.perf_counter() - started
    logger.info("Added %d stations in %.3f s", stations_added, stations_time)

    started = time.perf_counter()
    measurements_added = 0
    for _, parsed in iter_parsed(path):
        if parsed is None:
            continue
        station = stations.get_by_coords(parsed.lat, parsed.lon)
        if station is None:
            continue
        if readings.add(station.id, parsed.date, parsed.time, parsed.type, parsed.value).ok:
            measurements_added += 1
    measurements_time = time.perf_counter() - started
    logger.info("Added %d readings in %.3f s", measurements_added, measurements_time)

    summary = BenchmarkSummary(
        stations_time_sec=stations_time,
        stations_added=stations_added,
        measurements_time_sec=measurements_time,
        measurements_added=measurements_added,
        total_time_sec=stations_time + measurements_time,
        total_added=stations_added + measurements_added,
    )
    logger.info(
        "Benchmark summary: stations %.3f s, readings %.3f s, total %.3f s, records added %d",
        summary.stations_time_sec,
        summary.measurements_time_sec,
        summary.total_time_sec,
        summary.total_added,
    )
    return summary
