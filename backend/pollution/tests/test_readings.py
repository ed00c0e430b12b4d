import datetime as dt

from django.core.exceptions import NON_FIELD_ERRORS
from django.test import TestCase

from pollution import persist, readings, stations
from pollution.models import Reading
from pollution.results import CONSTRAINT, VALIDATION


class ReadingStoreTests(TestCase):
    def setUp(self):
        self.station = stations.add(
            {"name": "Kraków", "lon": 19.933157, "lat": 50.057224}
        ).record

    def test_add_with_station_id(self):
        result = readings.add(self.station.pk, dt.date(2024, 2, 10), dt.time(9, 0), "PM10", 35.56)

        self.assertTrue(result.ok)
        r = Reading.objects.get()
        self.assertEqual(r.station_id, self.station.pk)
        self.assertEqual(r.type, "PM10")
        self.assertEqual(r.value, 35.56)

    def test_add_with_station_record(self):
        result = readings.add(self.station, dt.date(2024, 2, 10), dt.time(9, 0), "PM2.5", 12.0)

        self.assertTrue(result.ok)
        self.assertEqual(result.record.station_id, self.station.pk)
        self.assertEqual(self.station.readings.count(), 1)

    def test_negative_value_is_a_validation_failure(self):
        result = readings.add(self.station, dt.date(2024, 2, 10), dt.time(9, 0), "PM10", -1.0)

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, VALIDATION)
        self.assertIn("value", result.errors)
        self.assertEqual(Reading.objects.count(), 0)

    def test_nan_value_is_a_validation_failure(self):
        result = readings.add(self.station, dt.date(2024, 2, 10), dt.time(9, 0), "PM10", float("nan"))

        self.assertEqual(result.kind, VALIDATION)
        self.assertEqual(list(result.errors), ["value"])
        self.assertEqual(Reading.objects.count(), 0)

    def test_row_level_integrity_error_is_not_filed_under_station_id(self):
        reading = Reading(
            date=dt.date(2024, 2, 10), time=dt.time(9, 0), type="PM10", value=None, station=self.station
        )

        result = persist.insert(reading, fk_field="station_id")

        self.assertEqual(result.kind, CONSTRAINT)
        self.assertEqual(list(result.errors), [NON_FIELD_ERRORS])
        self.assertEqual(Reading.objects.count(), 0)

    def test_unknown_station_is_a_constraint_failure(self):
        result = readings.add(999999, dt.date(2024, 2, 10), dt.time(9, 0), "PM10", 10.0)

        self.assertFalse(result.ok)
        self.assertEqual(result.kind, CONSTRAINT)
        self.assertIn("station_id", result.errors)
        self.assertEqual(Reading.objects.count(), 0)

    def test_add_now_uses_the_clock(self):
        clock = lambda: dt.datetime(2024, 2, 10, 9, 30, 15, tzinfo=dt.timezone.utc)

        result = readings.add_now(self.station, "NO2", 4.2, clock=clock)

        self.assertTrue(result.ok)
        r = Reading.objects.get()
        self.assertEqual(r.date, dt.date(2024, 2, 10))
        self.assertEqual(r.time, dt.time(9, 30, 15))

    def test_add_now_stamps_in_utc(self):
        cet = dt.timezone(dt.timedelta(hours=1))
        clock = lambda: dt.datetime(2024, 2, 10, 0, 30, tzinfo=cet)

        result = readings.add_now(self.station.pk, "NO2", 4.2, clock=clock)

        self.assertTrue(result.ok)
        self.assertEqual(result.record.date, dt.date(2024, 2, 9))
        self.assertEqual(result.record.time, dt.time(23, 30))

    def test_add_now_default_clock(self):
        result = readings.add_now(self.station, "PM10", 1.0)

        self.assertTrue(result.ok)
        self.assertEqual(Reading.objects.count(), 1)

    def test_add_now_unknown_station(self):
        result = readings.add_now(999999, "PM10", 1.0)
        self.assertEqual(result.kind, CONSTRAINT)

    def test_find_by_date(self):
        readings.add(self.station, dt.date(2024, 2, 10), dt.time(9, 0), "PM10", 1.0)
        readings.add(self.station, dt.date(2024, 2, 10), dt.time(10, 0), "PM10", 2.0)
        readings.add(self.station, dt.date(2024, 2, 11), dt.time(9, 0), "PM10", 3.0)

        found = readings.find_by_date(dt.date(2024, 2, 10))

        self.assertEqual(sorted(r.value for r in found), [1.0, 2.0])
        self.assertEqual(readings.find_by_date(dt.date(2024, 1, 1)), [])

    def test_find_by_date_rejects_datetime(self):
        with self.assertRaises(TypeError):
            readings.find_by_date(dt.datetime(2024, 2, 10, 9, 0))
