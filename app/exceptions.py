# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the portal.
# Every failure reaches the client as JSON: {"error": ..., "code": ...}
# plus optional "details" and "suggestion" keys.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PortalException(Exception):
    """
    Base exception for the App Launcher portal.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTAL_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


# =============================================================================
# Catalog Exceptions
# =============================================================================

class CatalogEmptyError(PortalException):
    """Raised when no APP_<TYPE>_* variables describe a usable application."""

    def __init__(self, app_types: list[str]):
        super().__init__(
            message="No app configurations found in environment variables",
            code="CATALOG_EMPTY",
            status_code=500,
            suggestion="Set APP_<TYPE>_APPID, APP_<TYPE>_URL and APP_<TYPE>_NAME for at least one type",
            details={"app_types": app_types},
        )


# =============================================================================
# Vendor Token Exceptions
# =============================================================================

class CredentialsNotConfiguredError(PortalException):
    """Raised when the Frontegg vendor client ID or secret is missing."""

    def __init__(self):
        super().__init__(
            message="Frontegg credentials not configured",
            code="CREDENTIALS_NOT_CONFIGURED",
            status_code=500,
            suggestion="Set FRONTEGG_CLIENT_ID and FRONTEGG_SECRET",
        )


class VendorTokenError(PortalException):
    """Raised when Frontegg refuses or garbles a vendor token request."""

    def __init__(
        self,
        message: str = "Failed to get vendor token",
        status_code: int = 500,
        details: Any = None,
    ):
        super().__init__(
            message=message,
            code="VENDOR_TOKEN_ERROR",
            status_code=status_code,
            details=details,
        )


# =============================================================================
# Entitlement Exceptions
# =============================================================================

class EntitlementLookupError(PortalException):
    """Raised when the Frontegg entitlement endpoint returns a non-2xx status."""

    def __init__(self, status_code: int, details: Any = None):
        super().__init__(
            message="Failed to get user applications",
            code="ENTITLEMENT_LOOKUP_FAILED",
            status_code=status_code,
            details=details,
        )


class InvalidUpstreamResponseError(PortalException):
    """Raised when Frontegg answers 2xx with a body that is not JSON."""

    def __init__(self):
        super().__init__(
            message="Invalid response from Frontegg API",
            code="INVALID_UPSTREAM_RESPONSE",
            status_code=500,
            details="Response is not valid JSON",
        )


class UpstreamUnavailableError(PortalException):
    """Raised when Frontegg cannot be reached at all."""

    def __init__(self, error: str):
        super().__init__(
            message="Internal server error",
            code="UPSTREAM_UNAVAILABLE",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details=error,
        )


# =============================================================================
# Request / Session Exceptions
# =============================================================================

class NotAuthenticatedError(PortalException):
    """Raised when a request carries no Frontegg session."""

    def __init__(self):
        super().__init__(
            message="Not authenticated. Please sign in.",
            code="NOT_AUTHENTICATED",
            status_code=401,
        )


class TenantIdRequiredError(PortalException):
    """Raised when the entitlement proxy is called without a tenantId."""

    def __init__(self):
        super().__init__(
            message="Tenant ID is required. Please ensure tenantId is provided in the request.",
            code="TENANT_ID_REQUIRED",
            status_code=400,
        )


class TenantAccessDeniedError(PortalException):
    """Raised when a user asks for entitlements outside their own session."""

    def __init__(self, message: str = "You do not have access to this tenant."):
        super().__init__(
            message=message,
            code="TENANT_ACCESS_DENIED",
            status_code=403,
            suggestion="Request only your own tenant and user",
        )


class LoginFailedError(PortalException):
    """Raised when the hosted-login callback cannot establish a session."""

    def __init__(self, reason: str, status_code: int = 400):
        super().__init__(
            message=f"Authentication failed: {reason}",
            code="LOGIN_FAILED",
            status_code=status_code,
            suggestion="Sign in again from the launcher page",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portal_exception_handler(
    request: Request,
    exc: PortalException
) -> JSONResponse:
    """
    Convert PortalException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - details: Upstream context (if available)
    - suggestion: How to fix (if available)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle request validation errors."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": str(exc)
        }
    )
