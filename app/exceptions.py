# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception taxonomy for the API.
# Every failure carries a short human-readable message, a machine-readable
# code and, where possible, a suggestion telling the user HOW to fix it.
# Raw backend error text only ever appears under details.error.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class WeddingPlannerException(Exception):
    """
    Base exception for the Wedding Planner API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "WEDDING_PLANNER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation / Lookup Exceptions
# =============================================================================

class InvalidInputError(WeddingPlannerException):
    """Raised when a required field is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            status_code=400,
            suggestion=suggestion,
            details={"field": field} if field else None,
        )
        self.field = field


class NotFoundError(WeddingPlannerException):
    """Raised when a referenced wedding or entity doesn't exist (or isn't visible)."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            code="NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id is correct",
            details={"resource": resource, "id": resource_id}
        )
        self.resource = resource
        self.resource_id = resource_id


# =============================================================================
# Partner Binding Exceptions
# =============================================================================

class SelfJoinError(WeddingPlannerException):
    """Raised when a user tries to join their own wedding."""

    def __init__(self, wedding_id: str):
        super().__init__(
            message="You cannot join your own wedding ID",
            code="SELF_JOIN",
            status_code=400,
            suggestion="Send your wedding ID to your partner and let them join instead",
            details={"wedding_id": wedding_id}
        )


class AlreadyFullError(WeddingPlannerException):
    """Raised when the target wedding already has two partners."""

    def __init__(self, wedding_id: str):
        super().__init__(
            message="This wedding is already full (has 2 partners)",
            code="WEDDING_FULL",
            status_code=409,
            suggestion="Ask your partner for the ID of the wedding they created",
            details={"wedding_id": wedding_id}
        )


class AlreadyBoundError(WeddingPlannerException):
    """Raised when the requesting user already shares a wedding with a partner."""

    def __init__(self, wedding_id: str):
        super().__init__(
            message="You are already connected with a partner",
            code="ALREADY_CONNECTED",
            status_code=409,
            suggestion="A user can belong to only one wedding at a time",
            details={"wedding_id": wedding_id}
        )


class BindTransactionError(WeddingPlannerException):
    """Raised when joining fails after validation passed. Safe to retry."""

    def __init__(self, wedding_id: str, error: str):
        super().__init__(
            message="Failed to join wedding, please try again",
            code="BIND_FAILED",
            status_code=503,
            suggestion="Retry the join; it re-checks the wedding before writing",
            details={"wedding_id": wedding_id, "error": error}
        )


class DataIntegrityError(WeddingPlannerException):
    """Raised when a user is found in more than one wedding."""

    def __init__(self, user_id: str, wedding_ids: list[str]):
        super().__init__(
            message="Your account is linked to more than one wedding",
            code="DATA_INTEGRITY",
            status_code=500,
            suggestion="Contact support to reconcile the duplicate weddings",
            details={"user_id": user_id, "wedding_ids": wedding_ids}
        )


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageUnavailableError(WeddingPlannerException):
    """Raised when the database or network call to Supabase fails."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Storage is unavailable while trying to {operation}",
            code="STORAGE_UNAVAILABLE",
            status_code=503,
            suggestion="Try again in a moment",
            details={"operation": operation, "error": error}
        )


class InvalidFileTypeError(WeddingPlannerException):
    """Raised when an uploaded image type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(WeddingPlannerException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(WeddingPlannerException):
    """Raised when an image upload to a storage bucket fails."""

    def __init__(self, error: str):
        super().__init__(
            message="Failed to upload image",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def wedding_planner_exception_handler(
    request: Request,
    exc: WeddingPlannerException
) -> JSONResponse:
    """
    Convert WeddingPlannerException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
