"""API views for customer bookings and the booking back office."""

from __future__ import annotations

import structlog
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsBackOffice
from shared.domain.exceptions import NotFound
from shared.domain.value_objects import DateRange
from shared.infrastructure.pagination import PagePagination

from .application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
)
from .conf import booking_settings
from .domain.entities import BookingStatus
from .models import Booking
from .query import BookingQuery, to_q
from .repositories import DjangoBookingRepository, DjangoCarRepository
from .serializers import (
    AdminBookingFilterSerializer,
    AdminBookingSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
)

logger = structlog.get_logger(__name__)

UUID_LOOKUP = "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"


class BookingHandlersMixin:
    """Builds command handlers with explicitly constructed repositories."""

    def get_handler(self, handler_class):
        return handler_class(
            DjangoBookingRepository(),
            DjangoCarRepository(),
            config=booking_settings(),
        )


class BaseBookingViewSet(BookingHandlersMixin, viewsets.GenericViewSet):
    pagination_class = PagePagination
    lookup_value_regex = UUID_LOOKUP

    def get_booking_query(self) -> BookingQuery:
        raise NotImplementedError

    def get_queryset(self):  # type: ignore
        return (
            Booking.objects.select_related("car", "car__agency", "user")
            .filter(to_q(self.get_booking_query()))
            .order_by("-created_at")
        )

    def get_object(self):  # type: ignore
        booking = self.get_queryset().filter(pk=self.kwargs["pk"]).first()
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def list(self, request):  # type: ignore
        page = self.paginate_queryset(self.get_queryset())
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(self.get_serializer(self.get_object()).data)

    def _update(self, request, requested_by):
        params = BookingUpdateSerializer(data=request.data)
        params.is_valid(raise_exception=True)

        booking = self.get_handler(UpdateBookingHandler).handle(
            UpdateBookingCommand(
                booking_id=self.kwargs["pk"],
                requested_by=requested_by,
                **params.to_command_kwargs(),
            )
        )
        return Response(self.get_serializer(self._reload(booking.id)).data)

    def _reload(self, booking_id):
        return Booking.objects.select_related("car", "car__agency", "user").get(pk=booking_id)


class BookingViewSet(BaseBookingViewSet):
    """
    The caller's own bookings

    Bookings of other users are reported as not found.
    """

    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_booking_query(self) -> BookingQuery:
        return BookingQuery(user_id=self.request.user.id)

    def create(self, request):  # type: ignore
        params = BookingCreateSerializer(data=request.data)
        params.is_valid(raise_exception=True)

        booking = self.get_handler(CreateBookingHandler).handle(
            CreateBookingCommand(user_id=request.user.id, **params.validated_data)
        )
        return Response(
            self.get_serializer(self._reload(booking.id)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, pk=None):  # type: ignore
        return self._update(request, requested_by=request.user.id)

    def partial_update(self, request, pk=None):  # type: ignore
        return self._update(request, requested_by=request.user.id)

    def destroy(self, request, pk=None):  # type: ignore
        """Cancel; the record is kept."""
        booking = self.get_handler(CancelBookingHandler).handle(
            CancelBookingCommand(booking_id=pk, requested_by=request.user.id)
        )
        return Response(
            {
                "message": "Booking cancelled successfully",
                "booking": self.get_serializer(self._reload(booking.id)).data,
            }
        )


class AdminBookingViewSet(BaseBookingViewSet):
    """
    Every booking, for staff and admins

    Filters: ?status=CONFIRMED&car=<uuid>&user=<uuid>&start_date=...&end_date=...
    (the date window matches bookings overlapping it).
    """

    serializer_class = AdminBookingSerializer
    permission_classes = [IsBackOffice]

    def get_booking_query(self) -> BookingQuery:
        if self.action != "list":
            return BookingQuery()

        params = AdminBookingFilterSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        window = None
        if "start_date" in data:
            window = DateRange(data["start_date"], data["end_date"])

        return BookingQuery(
            user_id=data.get("user"),
            car_id=data.get("car"),
            statuses=frozenset({BookingStatus(data["status"])}) if "status" in data else None,
            overlapping=window,
            inclusive_boundaries=booking_settings().inclusive_boundaries,
        )

    def partial_update(self, request, pk=None):  # type: ignore
        response = self._update(request, requested_by=None)
        logger.info(
            "booking.admin_updated",
            booking_id=str(pk),
            status=response.data["status"],
            user_id=str(request.user.id),
        )
        return response
