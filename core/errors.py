"""
Custom error types for Google Docs markdown operations.

Provides user-friendly error messages and structured error handling.
"""

from googleapiclient.errors import HttpError

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class WorkspaceMCPError(Exception):
    """Base exception for all Google Workspace MCP errors."""

    pass


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(WorkspaceMCPError):
    """Raised when authentication fails or credentials are invalid."""

    pass


class GoogleAuthenticationError(AuthenticationError):
    """Exception raised when Google authentication is required or fails."""

    def __init__(self, message: str, auth_url: str | None = None):
        super().__init__(message)
        self.auth_url = auth_url


class CredentialsNotFoundError(GoogleAuthenticationError):
    """Raised when no credentials are stored for a user."""

    def __init__(self, user_email: str, auth_url: str | None = None):
        super().__init__(
            f"No credentials found for user: {user_email}. Authorize access and retry.",
            auth_url=auth_url,
        )
        self.user_email = user_email


class InsufficientScopesError(GoogleAuthenticationError):
    """Raised when credentials lack required OAuth scopes."""

    def __init__(self, required: list[str], available: list[str], auth_url: str | None = None):
        missing = sorted(set(required) - set(available))
        super().__init__(
            f"Missing required OAuth scopes: {', '.join(missing)}. "
            "Please re-authenticate with the required permissions.",
            auth_url=auth_url,
        )
        self.required_scopes = required
        self.available_scopes = available
        self.missing_scopes = missing


class TokenRefreshError(GoogleAuthenticationError):
    """Raised when token refresh fails."""

    def __init__(self, user_email: str, reason: str, auth_url: str | None = None):
        super().__init__(
            f"Failed to refresh token for {user_email}: {reason}. Please re-authenticate.",
            auth_url=auth_url,
        )
        self.user_email = user_email
        self.reason = reason


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(WorkspaceMCPError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class APIError(WorkspaceMCPError):
    """
    Raised for general Google API errors.

    `document_id` is set when the failure left a document behind, such as a
    newly created document whose content could not be written.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
        document_id: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.operation = operation
        self.document_id = document_id


class ResourceNotFoundError(APIError):
    """Raised when a requested resource doesn't exist (404)."""

    pass


class PermissionDeniedError(APIError):
    """Raised when the user lacks permission for an operation (401/403)."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded (429)."""

    pass


class TableFillError(APIError):
    """
    Raised when a table was inserted but populating its cells failed.

    The table stays in the document; nothing is rolled back.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        anchor_index: int | None = None,
        tables_inserted: int = 0,
    ):
        super().__init__(message, status_code=status_code, operation="fill_table")
        self.anchor_index = anchor_index
        self.tables_inserted = tables_inserted


def _http_error_message(error: HttpError) -> str:
    """Extract the API's own message from an HttpError, falling back to str()."""
    reason = getattr(error, "reason", None)
    if reason:
        return str(reason)
    return str(error)


def api_error_from_http(error: HttpError, operation: str) -> APIError:
    """
    Convert a Google API HttpError into the matching APIError subclass.

    The API message is kept verbatim and tagged with the failing operation name.
    """
    status = getattr(getattr(error, "resp", None), "status", None)
    try:
        status = int(status) if status is not None else None
    except (TypeError, ValueError):
        status = None

    message = f"Google API error in {operation}: {_http_error_message(error)}"

    if status == 404:
        return ResourceNotFoundError(message, status_code=status, operation=operation)
    elif status in (401, 403):
        return PermissionDeniedError(message, status_code=status, operation=operation)
    elif status == 429:
        return RateLimitError(message, status_code=status, operation=operation)
    else:
        return APIError(message, status_code=status, operation=operation)
