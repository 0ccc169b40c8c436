"""Core utilities for the Google Docs markdown MCP server."""

from core.errors import (
    APIError,
    AuthenticationError,
    CredentialsNotFoundError,
    GoogleAuthenticationError,
    InsufficientScopesError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    TableFillError,
    TokenRefreshError,
    ValidationError,
    WorkspaceMCPError,
    api_error_from_http,
)
from core.server import server
from core.utils import (
    TransientNetworkError,
    handle_http_errors,
)

__all__ = [
    "APIError",
    "api_error_from_http",
    "AuthenticationError",
    "CredentialsNotFoundError",
    "GoogleAuthenticationError",
    "handle_http_errors",
    "InsufficientScopesError",
    "PermissionDeniedError",
    "RateLimitError",
    "ResourceNotFoundError",
    "server",
    "TableFillError",
    "TokenRefreshError",
    "TransientNetworkError",
    "ValidationError",
    "WorkspaceMCPError",
]
