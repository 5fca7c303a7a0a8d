"""DRF exception handler mapping domain errors to HTTP responses."""

from __future__ import annotations

import structlog
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

from shared.domain.exceptions import DomainError, InternalError

logger = structlog.get_logger(__name__)


class DomainAPIException(APIException):
    """Carries a DomainError through DRF's default handler."""

    def __init__(self, error: DomainError):
        self.status_code = error.http_status
        super().__init__(detail=error.message, code=error.code)


class DuplicateResource(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "duplicate"


def domain_exception_handler(exc, context):
    """Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"].

    Domain errors become ``{"detail": ..., "code": ...}`` with the status the
    error class declares. Database failures are logged with their traceback
    and answered with a generic 500.
    """
    error: DomainError | None = None
    if isinstance(exc, DomainError):
        error = exc
    elif isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "request.store_failure",
            view=view.__class__.__name__ if view else None,
            error=str(exc),
            exc_info=exc,
        )
        error = InternalError()

    if error is not None:
        if error.http_status >= 500 and not isinstance(exc, DatabaseError):
            logger.error("request.internal_error", error=error.message)
        exc = DomainAPIException(error)

    response = exception_handler(exc, context)
    if response is not None and error is not None:
        response.data = {"detail": error.message, "code": error.code}
    return response
