"""Error Hierarchy — typed, categorized exceptions for every portfolio failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST envelope shared by every JSON error
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PortfolioError base: FastAPI global handler catches all
    - Deleting an absent record is not an error, so there is no NotFound for records
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    record_id: str | None = None
    rpc: str | None = None


class PortfolioError(Exception):
    """Base exception for all portfolio errors."""

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
                    "rpc": self.context.rpc,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RecordValidationError(PortfolioError):
    """Payload missing a required field or not decodable."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidRecordIdError(PortfolioError):
    """Record id does not belong to the collection it was used against."""
    def __init__(
        self, record_id: str, collection: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.collection = collection
        ctx.record_id = record_id
        super().__init__(
            f"'{record_id}' is not a valid {collection} record id",
            "INVALID_RECORD_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.record_id = record_id
        self.collection = collection


class UnauthorizedError(PortfolioError):
    """Failed login or missing/invalid session on a protected route."""
    def __init__(
        self, message: str = "Unauthorized", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class RpcNotFoundError(PortfolioError):
    """RPC name not exposed by the route group it was called under."""
    def __init__(self, rpc_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.rpc = rpc_name
        super().__init__(
            f"RPC '{rpc_name}' not found",
            "RPC_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.rpc_name = rpc_name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(PortfolioError):
    """Record store I/O, connectivity or constraint failure."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
