import math

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

LON_MIN = -180.0
LON_MAX = 180.0
LAT_MIN = -90.0
LAT_MAX = 90.0
VALUE_MIN = 0.0


def validate_finite(value):
    # NaN slips through min/max comparisons
    if not math.isfinite(value):
        raise ValidationError("Ensure this value is a finite number.", code="not_finite")


class Station(models.Model):
    """
    A fixed monitoring location.
    (name, lon, lat) is deliberately not unique; lookups by coordinate
    use exact float equality.
    """
    name = models.CharField(max_length=255)
    lon = models.FloatField(
        validators=[validate_finite, MinValueValidator(LON_MIN), MaxValueValidator(LON_MAX)],
    )
    lat = models.FloatField(
        validators=[validate_finite, MinValueValidator(LAT_MIN), MaxValueValidator(LAT_MAX)],
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "stations"

    def __str__(self) -> str:
        return f"{self.name} ({self.lat}, {self.lon})"


class Reading(models.Model):
    """
    One pollutant measurement taken at a station.
    Rows are never updated in place; they go away with their station
    or with a full table clear before a reload.
    """
    date = models.DateField()
    time = models.TimeField()
    type = models.CharField(max_length=64)
    value = models.FloatField(validators=[validate_finite, MinValueValidator(VALUE_MIN)])

    station = models.ForeignKey(
        Station,
        on_delete=models.CASCADE,
        related_name="readings",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "readings"
        indexes = [
            models.Index(fields=["date"]),
        ]

    def __str__(self) -> str:
        return f"{self.type}={self.value} @ {self.station_id} {self.date} {self.time}"
