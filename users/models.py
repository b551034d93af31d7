from django.db import models

from stations.models import BaseModel


class User(BaseModel):
    """Mobile app account, independent of ``django.contrib.auth`` staff users."""

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255)
    password = models.CharField(max_length=128)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    class Meta:
        ordering = ["email"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    # DRF permission classes read this off ``request.user``.
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def location(self) -> dict | None:
        """GeoJSON point (``[lng, lat]`` order) or ``None``."""
        if self.latitude is None or self.longitude is None:
            return None
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


class Session(BaseModel):
    """Opaque session id handed to the client; never expires."""

    key = models.CharField(max_length=64, unique=True)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="sessions")

    def __str__(self) -> str:
        return f"Session for {self.user.email}"
