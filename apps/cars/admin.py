"""Admin registrations for the fleet."""

from __future__ import annotations

from django.contrib import admin

from .models import Agency, Car


@admin.register(Agency)
class AgencyAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "phone", "email", "created_at")
    list_filter = ("country", "city")
    search_fields = ("name", "city", "email")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ("license_plate", "make", "model", "year", "agency", "status", "daily_rate")
    list_filter = ("status", "transmission", "fuel_type", "agency")
    search_fields = ("license_plate", "make", "model")
    list_select_related = ("agency",)
    readonly_fields = ("created_at", "updated_at")
