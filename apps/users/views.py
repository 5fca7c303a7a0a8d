"""Back-office API over platform users."""

from __future__ import annotations

import structlog
from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Count  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.infrastructure.pagination import PagePagination

from .auth_serializers import AdminUserCreateSerializer
from .permissions import IsAdminRole, IsBackOffice
from .serializers import AdminUserFilterSerializer, AdminUserSerializer, UserSerializer

User = get_user_model()

logger = structlog.get_logger(__name__)


class AdminUserViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, viewsets.GenericViewSet):
    """
    Users for staff and admins

    The list shows one role at a time (`?role=`, customers by default).
    Only admins may create accounts.
    """

    serializer_class = AdminUserSerializer
    permission_classes = [IsBackOffice]
    pagination_class = PagePagination

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [IsAdminRole()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        queryset = User.objects.annotate(bookings_count=Count("bookings")).order_by("-created_at")
        if self.action != "list":
            return queryset

        params = AdminUserFilterSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        return queryset.filter(role=params.validated_data["role"])

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("user.created", user_id=str(user.id), role=user.role, created_by=str(request.user.id))
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
