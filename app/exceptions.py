# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Services raise typed errors; the handlers below turn them into
# status codes and JSON bodies.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class MarketplaceException(Exception):
    """
    Base exception for the marketplace API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKETPLACE_ERROR",
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
# Error Taxonomy
# =============================================================================

class BadRequestError(MarketplaceException):
    """Raised when required fields are missing or invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=400,
            details=details,
        )


class UnauthenticatedError(MarketplaceException):
    """Raised when credentials or the access token are missing or invalid."""

    def __init__(self, message: str = "Authentication invalid"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
            suggestion="Log in again to obtain a fresh access token",
        )


class ForbiddenError(MarketplaceException):
    """Raised when the principal lacks rights over the resource."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            details=details,
        )


class NotFoundError(MarketplaceException):
    """Raised when a resource does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


# =============================================================================
# Resource-specific errors
# =============================================================================

class ChatNotFoundError(NotFoundError):
    """Raised when a chat ID doesn't exist."""

    def __init__(self, chat_id: int):
        super().__init__(
            message="Chat not found",
            details={"chat_id": chat_id},
        )


class CommissionerNotFoundError(NotFoundError):
    """Raised when a commissioner ID doesn't exist."""

    def __init__(self, commissioner_id: int):
        super().__init__(
            message="No commissioners Found!",
            details={"commissioner_id": commissioner_id},
        )


class OrderNotFoundError(NotFoundError):
    """Raised when an order ID doesn't exist."""

    def __init__(self, order_id: int):
        super().__init__(
            message="Order not found",
            details={"order_id": order_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def marketplace_exception_handler(
    request: Request,
    exc: MarketplaceException
) -> JSONResponse:
    """
    Convert MarketplaceException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed bodies and path parameters are reported as 400 Bad Request.
    """
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
