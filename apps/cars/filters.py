"""FilterSet definitions for the car catalogue and the back office."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Car


class CarFilterSet(django_filters.FilterSet):
    """Filters shared by the public list and the back-office list."""

    status = django_filters.ChoiceFilter(field_name="status", choices=Car.Status.choices)
    agency = django_filters.UUIDFilter(field_name="agency_id")
    make = django_filters.CharFilter(field_name="make", lookup_expr="iexact")
    city = django_filters.CharFilter(field_name="agency__city", lookup_expr="iexact")
    transmission = django_filters.ChoiceFilter(field_name="transmission", choices=Car.Transmission.choices)
    fuel_type = django_filters.ChoiceFilter(field_name="fuel_type", choices=Car.FuelType.choices)
    seats_min = django_filters.NumberFilter(field_name="seats", lookup_expr="gte")
    min_rate = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="gte")
    max_rate = django_filters.NumberFilter(field_name="daily_rate", lookup_expr="lte")

    class Meta:
        model = Car
        fields = ["status", "agency", "make", "city", "transmission", "fuel_type"]
