"""
Domain Errors

Every error raised by the domain and application layers derives from
DomainError. Each class carries the HTTP status and stable error code the
API boundary maps it to; the message is short and safe to show to users.
"""


class DomainError(Exception):
    """Base class for domain errors"""

    code = "domain_error"
    http_status = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Missing or malformed input"""

    code = "validation_error"
    default_message = "Invalid input"


class NotFound(DomainError):
    """Entity absent, or not visible to the caller"""

    code = "not_found"
    http_status = 404
    default_message = "Not found"


class InvalidState(DomainError):
    """Entity is in a state that does not allow the operation"""

    code = "invalid_state"
    default_message = "Operation not allowed in the current state"


class Conflict(DomainError):
    """Request collides with existing data (e.g. overlapping dates)"""

    code = "conflict"
    default_message = "Request conflicts with existing data"


class InvalidTransition(DomainError):
    """Disallowed status change"""

    code = "invalid_transition"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change booking status from {current} to {requested}")


class InternalError(DomainError):
    """Store or infrastructure failure"""

    code = "internal_error"
    http_status = 500
    default_message = "Internal server error"
