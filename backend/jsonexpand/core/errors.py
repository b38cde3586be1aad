"""Error Hierarchy — typed, categorized exceptions for all server failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Expansion NEVER raises these: unresolvable relations are SkipReasons, not errors

Design Decisions:
    - Single hierarchy with JsonExpandError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    METHOD_NOT_ALLOWED = "method_not_allowed"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    record_id: str | None = None
    debug_info: dict[str, Any] | None = None


class JsonExpandError(Exception):
    """Base exception for all server errors."""

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
                    "collection": self.context.collection,
                    "record_id": self.context.record_id,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidRecordError(JsonExpandError):
    """Request body is not a usable record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_RECORD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class CollectionNotFoundError(JsonExpandError):
    """No collection or singular resource with this name."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.collection = name
        super().__init__(
            f"Collection '{name}' not found",
            "COLLECTION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class ResourceNotFoundError(JsonExpandError):
    """Requested record does not exist."""
    def __init__(
        self, collection: str, record_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.collection = collection
        ctx.record_id = record_id
        super().__init__(
            f"{collection} '{record_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class ReadOnlyError(JsonExpandError):
    """Write attempted while the server runs read-only."""
    def __init__(self, method: str, context: ErrorContext | None = None):
        super().__init__(
            f"Method {method} not allowed: server is read-only",
            "READ_ONLY", ErrorCategory.METHOD_NOT_ALLOWED,
            ErrorSeverity.WARNING, context, 405,
        )
        self.method = method


# ─── Storage Errors (500-level) ─────────────────────────────────

class StoreLoadError(JsonExpandError):
    """Database document could not be read or validated."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to load database '{path}': {message}",
            "STORE_LOAD_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.path = path


class StorePersistError(JsonExpandError):
    """Database document could not be written back."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to persist database '{path}': {message}",
            "STORE_PERSIST_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.path = path
