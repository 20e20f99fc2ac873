"""Error Hierarchy — typed, categorized exceptions for all club failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - NotFound / Conflict / PermissionDenied are expected outcomes (4xx), never retried by the core
    - DatabaseError is the only "unavailable" error (503) and carries a retry hint
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ClubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PERMISSION_DENIED = "permission_denied"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    member_id: str | None = None
    event_id: int | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class ClubError(Exception):
    """Base exception for all club errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "member_id": self.context.member_id,
                    "event_id": self.context.event_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Not Found (404) ────────────────────────────────────────────

class ResourceNotFoundError(ClubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None, code: str = "RESOURCE_NOT_FOUND",
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class MemberNotFoundError(ResourceNotFoundError):
    def __init__(self, member_id: object, context: ErrorContext | None = None):
        ctx = context or ErrorContext(member_id=str(member_id))
        super().__init__("Member", str(member_id), ctx, "MEMBER_NOT_FOUND")


class EventNotFoundError(ResourceNotFoundError):
    def __init__(self, event_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(event_id=event_id)
        super().__init__("Event", str(event_id), ctx, "EVENT_NOT_FOUND")


class RegistrationNotFoundError(ResourceNotFoundError):
    """No registration row exists for the (member, event) pair."""
    def __init__(self, member_id: object, event_id: int):
        super().__init__(
            "Registration", f"{member_id}/{event_id}",
            ErrorContext(member_id=str(member_id), event_id=event_id),
            "REGISTRATION_NOT_FOUND",
        )


class LocationNotFoundError(ResourceNotFoundError):
    def __init__(self, location_id: int):
        super().__init__("Location", str(location_id), code="LOCATION_NOT_FOUND")


class EventTypeNotFoundError(ResourceNotFoundError):
    def __init__(self, event_type_id: int):
        super().__init__("Event type", str(event_type_id), code="EVENT_TYPE_NOT_FOUND")


class ClubInfoNotFoundError(ResourceNotFoundError):
    def __init__(self, key: str):
        super().__init__("Club info", key, code="CLUB_INFO_NOT_FOUND")


# ─── Conflict (409) ─────────────────────────────────────────────

class ConflictError(ClubError):
    """State conflict — the request is valid but cannot be applied right now."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class AlreadyRegisteredError(ConflictError):
    """The pair already holds a registered row."""
    def __init__(self, member_id: object, event_id: int):
        super().__init__(
            f"Member '{member_id}' is already registered for event {event_id}",
            "ALREADY_REGISTERED",
            ErrorContext(member_id=str(member_id), event_id=event_id),
        )


class EventFullError(ConflictError):
    """All seats of the event are taken."""
    def __init__(self, event_id: int, capacity: int, member_id: object | None = None):
        super().__init__(
            f"Event {event_id} is full (all {capacity} seats taken)",
            "EVENT_FULL",
            ErrorContext(
                member_id=str(member_id) if member_id is not None else None,
                event_id=event_id,
            ),
        )
        self.capacity = capacity


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"Email '{email}' already exists", "EMAIL_DUPLICATE")


class DuplicatePhoneError(ConflictError):
    def __init__(self, phone: str):
        super().__init__(f"Phone number '{phone}' already exists", "PHONE_DUPLICATE")


class DuplicateNameError(ConflictError):
    def __init__(self, resource_type: str, name: str):
        super().__init__(f"{resource_type} '{name}' already exists", "NAME_DUPLICATE")


class MemberHasActiveRegistrationsError(ConflictError):
    def __init__(self, member_id: object, active: int):
        super().__init__(
            f"Member '{member_id}' holds {active} active registration(s)",
            "MEMBER_HAS_ACTIVE_REGISTRATIONS",
            ErrorContext(member_id=str(member_id)),
        )


class CapacityBelowRegisteredError(ConflictError):
    def __init__(self, event_id: int, capacity: int, registered: int):
        super().__init__(
            f"Capacity {capacity} is below the {registered} seat(s) already taken",
            "CAPACITY_BELOW_REGISTERED", ErrorContext(event_id=event_id),
        )


# ─── Permission Denied (403) ────────────────────────────────────

class MemberNotApprovedError(ClubError):
    """Member exists but its status is not 'approved'."""
    def __init__(self, member_id: object, context: ErrorContext | None = None):
        super().__init__(
            f"Member '{member_id}' is not approved",
            "MEMBER_NOT_APPROVED", ErrorCategory.PERMISSION_DENIED,
            ErrorSeverity.WARNING,
            context or ErrorContext(member_id=str(member_id)), 403,
        )


# ─── Infrastructure Errors (503) ────────────────────────────────

class DatabaseError(ClubError):
    """Database operation failed — transient, safe for the caller to retry."""
    def __init__(
        self, message: str, operation: str,
        retry_after_ms: int | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
