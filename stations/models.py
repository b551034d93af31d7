from django.db import models
from django.utils import timezone

from stations.constants import DEFAULT_STATION_STATUS


class BaseModel(models.Model):
    """Abstract base with audit timestamps (HackSoft Styleguide pattern)."""

    created_at = models.DateTimeField(db_index=True, default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class WashingStation(BaseModel):
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True, default="")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    status = models.CharField(max_length=50, default=DEFAULT_STATION_STATUS)
    place_id = models.CharField(
        max_length=255,
        blank=True,
        default="",
        db_index=True,
        help_text="Identifier assigned by the places provider",
    )

    class Meta:
        ordering = ["name"]
        verbose_name = "Washing Station"
        verbose_name_plural = "Washing Stations"

    def __str__(self) -> str:
        return f"{self.name} ({self.address or 'no address'})"

    @property
    def location(self) -> dict[str, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return {"lat": self.latitude, "lng": self.longitude}
