"""Serializers for agencies and cars."""

from __future__ import annotations

from rest_framework import exceptions, serializers  # type: ignore

from shared.infrastructure.exception_handler import DuplicateResource

from .models import Agency, Car


class AgencySummarySerializer(serializers.ModelSerializer):
    """Short agency block embedded in car and booking responses."""

    class Meta:
        model = Agency
        fields = ["id", "name", "city", "country"]
        read_only_fields = fields


class AgencySerializer(serializers.ModelSerializer):
    class Meta:
        model = Agency
        fields = [
            "id",
            "name",
            "address",
            "city",
            "country",
            "phone",
            "email",
            "latitude",
            "longitude",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class CarSummarySerializer(serializers.ModelSerializer):
    """Car block embedded in booking responses."""

    agency = AgencySummarySerializer(read_only=True)

    class Meta:
        model = Car
        fields = [
            "id",
            "make",
            "model",
            "year",
            "license_plate",
            "daily_rate",
            "image_url",
            "agency",
        ]
        read_only_fields = fields


class CarSerializer(serializers.ModelSerializer):
    agency = AgencySummarySerializer(read_only=True)
    agency_id = serializers.UUIDField(write_only=True)

    class Meta:
        model = Car
        fields = [
            "id",
            "agency",
            "agency_id",
            "make",
            "model",
            "year",
            "license_plate",
            "color",
            "mileage",
            "transmission",
            "fuel_type",
            "seats",
            "daily_rate",
            "status",
            "description",
            "image_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "agency", "created_at", "updated_at"]
        extra_kwargs = {
            # uniqueness is answered with 409 by validate_license_plate
            "license_plate": {"validators": []},
        }

    def validate_license_plate(self, value: str) -> str:
        value = value.strip().upper()
        clash = Car.objects.filter(license_plate__iexact=value)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise DuplicateResource("Car with this license plate already exists.")
        return value

    def validate_agency_id(self, value):  # type: ignore
        if not Agency.objects.filter(pk=value).exists():
            raise exceptions.NotFound("Agency not found")
        return value


class AvailabilityQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("End date cannot be before start date.")
        return attrs
