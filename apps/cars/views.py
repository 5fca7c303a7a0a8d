"""API views for the car catalogue and the fleet back office."""

from __future__ import annotations

import structlog
from django.db.models import ProtectedError  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.services import has_conflict
from apps.users.permissions import IsBackOffice
from shared.domain.exceptions import InvalidState
from shared.infrastructure.pagination import CarPagination, PagePagination

from .filters import CarFilterSet
from .models import Agency, Car
from .serializers import AgencySerializer, AvailabilityQuerySerializer, CarSerializer

logger = structlog.get_logger(__name__)


class CarViewSet(viewsets.ReadOnlyModelViewSet):
    """Public catalogue: list, detail and date availability of cars."""

    queryset = Car.objects.select_related("agency").all()
    serializer_class = CarSerializer
    permission_classes = [permissions.AllowAny]
    filterset_class = CarFilterSet
    pagination_class = CarPagination

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        car: Car = self.get_object()  # type: ignore
        params = AvailabilityQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        start_date = params.validated_data["start_date"]
        end_date = params.validated_data["end_date"]

        conflict = has_conflict(car.id, start_date, end_date)
        return Response(
            {
                "car_id": str(car.id),
                "start_date": start_date,
                "end_date": end_date,
                "car_status": car.status,
                "available": car.is_available and not conflict,
            }
        )


class AdminAgencyViewSet(viewsets.ModelViewSet):
    queryset = Agency.objects.all()
    serializer_class = AgencySerializer
    permission_classes = [IsBackOffice]
    pagination_class = PagePagination

    def perform_destroy(self, instance):  # type: ignore
        try:
            instance.delete()
        except ProtectedError:
            raise InvalidState("Agency still has cars and cannot be deleted")
        logger.info("agency.deleted", agency_id=str(instance.pk), user_id=str(self.request.user.id))


class AdminCarViewSet(viewsets.ModelViewSet):
    queryset = Car.objects.select_related("agency").all()
    serializer_class = CarSerializer
    permission_classes = [IsBackOffice]
    filterset_class = CarFilterSet
    pagination_class = PagePagination

    def perform_create(self, serializer):  # type: ignore
        car = serializer.save()
        logger.info("car.created", car_id=str(car.id), user_id=str(self.request.user.id))

    def perform_update(self, serializer):  # type: ignore
        car = serializer.save()
        logger.info("car.updated", car_id=str(car.id), status=car.status, user_id=str(self.request.user.id))
