"""Back-office routes for agencies and cars (mounted under /api/v1/admin/)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AdminAgencyViewSet, AdminCarViewSet

router = SimpleRouter()
router.register(r"agencies", AdminAgencyViewSet, basename="admin-agency")
router.register(r"cars", AdminCarViewSet, basename="admin-car")

urlpatterns = [
    path("", include(router.urls)),
]
