"""Error Handlers — global exception handlers for the Exam Bank API.

Invariants:
    - ExamBankError → structured JSON with error code, message, severity and the
      error's own HTTP status (400 validation, 404 not found, 409 conflict, 503 store)
    - ExamBankError logs carry the subject, question and document the failure
      concerns, so a rejected write can be traced to its record
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ExamBankError), validation (Pydantic), catch-all (Exception)
    - Validation errors answer 400 (not FastAPI's default 422): missing query
      parameters and malformed bodies are client input errors like any other
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from exambank.core.errors import ExamBankError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_exam_bank_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_exam_bank_error_handler(app: FastAPI) -> None:
    """Register Exam Bank domain/infrastructure error handler."""

    @app.exception_handler(ExamBankError)
    async def exam_bank_error_handler(request: Request, exc: ExamBankError):
        """Handle all Exam Bank domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"ExamBankError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "document_path": exc.context.document_path,
                "subject_id": exc.context.subject_id,
                "question_id": exc.context.question_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response naming the offending fields."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    fields = ", ".join(d["field"] for d in details) or "request"
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": f"Invalid request data: {fields}",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        },
    }
