"""Fleet models for DriveGO: rental agencies and their cars."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Agency(models.Model):
    """A rental location owning a fleet of cars."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    country = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Agency")
        verbose_name_plural = _("Agencies")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class Car(models.Model):
    """A vehicle offered for rent by an agency."""

    class Status(models.TextChoices):
        AVAILABLE = "AVAILABLE", _("Available")
        RENTED = "RENTED", _("Rented")
        MAINTENANCE = "MAINTENANCE", _("Maintenance")
        UNAVAILABLE = "UNAVAILABLE", _("Unavailable")

    class Transmission(models.TextChoices):
        MANUAL = "MANUAL", _("Manual")
        AUTOMATIC = "AUTOMATIC", _("Automatic")
        SEMI_AUTOMATIC = "SEMI_AUTOMATIC", _("Semi-automatic")

    class FuelType(models.TextChoices):
        GASOLINE = "GASOLINE", _("Gasoline")
        DIESEL = "DIESEL", _("Diesel")
        HYBRID = "HYBRID", _("Hybrid")
        ELECTRIC = "ELECTRIC", _("Electric")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    agency = models.ForeignKey(
        Agency,
        on_delete=models.PROTECT,
        related_name="cars",
    )
    make = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    year = models.PositiveIntegerField(validators=[MinValueValidator(1900), MaxValueValidator(2100)])
    license_plate = models.CharField(max_length=20, unique=True)
    color = models.CharField(max_length=30, blank=True)
    mileage = models.PositiveIntegerField(default=0)
    transmission = models.CharField(max_length=20, choices=Transmission.choices)
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices)
    seats = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(60)])
    daily_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text=_("Price per rental day."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Car")
        verbose_name_plural = _("Cars")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(daily_rate__gt=0),
                name="car_positive_daily_rate",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="cars_car_status_idx"),
            models.Index(fields=["agency", "status"], name="cars_car_agency_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.make} {self.model} ({self.license_plate})"

    @property
    def is_available(self) -> bool:
        return self.status == self.Status.AVAILABLE
