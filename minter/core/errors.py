"""Error Hierarchy: typed, categorized exceptions for contract interaction failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - An unsupported operation is NOT an error inside the core; the dispatcher
      returns None. UnsupportedOperationError exists only for the HTTP boundary.
    - Transport failures (network, revert, rejection) surface as ContractTransportError
    - Arguments that do not fit the ABI are a caller error (InvalidCallArgumentsError),
      never a transport failure
    - No internal details leaked in user-facing messages
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
    UNSUPPORTED = "unsupported"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection_id: int | None = None
    operation: str | None = None
    block_number: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MinterError(Exception):
    """Base exception for all minter errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "collection_id": self.context.collection_id,
                    "operation": self.context.operation,
                    "block_number": self.context.block_number,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidAddressError(MinterError):
    """Wallet or contract address is not a 0x-prefixed 20-byte hex string."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{address}' is not a valid address",
            "INVALID_ADDRESS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.address = address


class CollectionNotFoundError(MinterError):
    """No contract handle is configured for the requested collection."""
    def __init__(self, collection_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.collection_id = collection_id
        super().__init__(
            f"Collection {collection_id} is not configured",
            "COLLECTION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.collection_id = collection_id


class UnsupportedOperationError(MinterError):
    """Requested operation is absent from the contract handle's capability set."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Operation '{operation}' is not supported by this contract",
            "UNSUPPORTED_OPERATION", ErrorCategory.UNSUPPORTED,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.operation = operation


class InvalidCallArgumentsError(MinterError):
    """Arguments do not match the contract function's ABI (count or types)."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Invalid arguments for '{operation}': {message}",
            "INVALID_CALL_ARGUMENTS", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.operation = operation


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ContractTransportError(MinterError):
    """Remote contract call failed: network error, revert, or rejection."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Contract call '{operation}' failed: {message}",
            "CONTRACT_TRANSPORT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.operation = operation


class DatabaseError(MinterError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
