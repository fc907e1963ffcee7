"""Error Hierarchy — typed, categorized exceptions for all Exam Bank failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised before any write; infrastructure errors
      (500-level) propagate unchanged from the document client
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ExamBankError base: FastAPI global handler catches all
    - DocumentNotFoundError is a normal signal: stores turn it into an empty default
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
    CONFLICT = "conflict"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    subject_id: str | None = None
    question_id: str | None = None
    document_path: str | None = None
    debug_info: dict[str, Any] | None = None


class ExamBankError(Exception):
    """Base exception for all Exam Bank errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "subject_id": self.context.subject_id,
                "question_id": self.context.question_id,
            },
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class QuestionValidationError(ExamBankError):
    """Question or batch is malformed; rejected before any write."""
    def __init__(
        self,
        message: str,
        invalid_record: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details=(
                {"invalid_question": invalid_record}
                if invalid_record is not None else None
            ),
        )
        self.invalid_record = invalid_record


class ResourceNotFoundError(ExamBankError):
    """Subject or question does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateQuestionError(ExamBankError):
    """Question id already exists in the target subject."""
    def __init__(
        self, question_id: str, subject_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.subject_id = subject_id
        ctx.question_id = question_id
        super().__init__(
            f"Question '{question_id}' already exists in subject '{subject_id}'",
            "QUESTION_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


# ─── Document Store Errors ──────────────────────────────────────

class DocumentNotFoundError(ExamBankError):
    """Remote document does not exist yet."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.document_path = path
        super().__init__(
            f"Document '{path}' not found",
            "DOCUMENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.path = path


class RevisionConflictError(ExamBankError):
    """Write presented a stale or missing revision token."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.document_path = path
        super().__init__(
            f"Document '{path}' was modified concurrently, reload and retry",
            "REVISION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.path = path


class StoreTransportError(ExamBankError):
    """Backing store unreachable or returned an unexpected answer."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Document store {operation} failed: {message}",
            "STORE_TRANSPORT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreNotConfiguredError(ExamBankError):
    """Document store credentials/location missing from configuration."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Service unavailable: document store is not configured",
            "STORE_NOT_CONFIGURED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )
