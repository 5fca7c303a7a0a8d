"""Serializers for the booking endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.cars.serializers import CarSummarySerializer
from apps.users.serializers import UserShortSerializer

from .domain.entities import BookingStatus
from .models import Booking

STATUS_CHOICES = [status.value for status in BookingStatus]


class BookingCreateSerializer(serializers.Serializer):
    car_id = serializers.UUIDField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    pickup_location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    dropoff_location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date."})
        return attrs


class BookingUpdateSerializer(serializers.Serializer):
    """Status and/or locations; dates and car are fixed after creation."""

    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)
    pickup_location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    dropoff_location = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        if not attrs:
            raise serializers.ValidationError("Provide status, pickup_location or dropoff_location.")
        return attrs

    def to_command_kwargs(self) -> dict:
        data = self.validated_data
        status = data.get("status")
        return {
            "status": BookingStatus(status) if status else None,
            "pickup_location": data.get("pickup_location"),
            "dropoff_location": data.get("dropoff_location"),
        }


class BookingSerializer(serializers.ModelSerializer):
    car = CarSummarySerializer(read_only=True)
    car_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "car_id",
            "car",
            "start_date",
            "end_date",
            "total_price",
            "status",
            "pickup_location",
            "dropoff_location",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdminBookingSerializer(BookingSerializer):
    """Back-office view of a booking, with the customer attached."""

    user = UserShortSerializer(read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ["user"]
        read_only_fields = fields


class AdminBookingFilterSerializer(serializers.Serializer):
    """Query parameters of the back-office booking list."""

    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)
    car = serializers.UUIDField(required=False)
    user = serializers.UUIDField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        has_start = "start_date" in attrs
        if has_start != ("end_date" in attrs):
            raise serializers.ValidationError("start_date and end_date must be given together.")
        if has_start and attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date."})
        return attrs
