"""Serializers for user-related API responses."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "role", "created_at"]
        read_only_fields = fields


class UserShortSerializer(serializers.ModelSerializer):
    """Customer summary embedded in back-office booking responses."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "phone"]
        read_only_fields = fields


class AdminUserSerializer(serializers.ModelSerializer):
    """Back-office user row with the number of bookings made."""

    bookings_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "role", "bookings_count", "created_at"]
        read_only_fields = fields


class AdminUserFilterSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices, default=User.Role.USER)
