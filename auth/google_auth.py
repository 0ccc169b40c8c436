"""
Google credential loading and service construction.

Credentials are read from the credential store, refreshed when expired,
and checked against the scopes a tool requires. When no usable credential
exists a GoogleAuthenticationError subclass carrying an authorization URL is raised;
completing that authorization flow happens outside this server.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import urlencode

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from auth.config import GOOGLE_AUTH_URI, get_oauth_config, get_oauth_redirect_uri
from auth.credential_store import get_credential_store
from auth.scopes import expand_granted_scopes, get_all_scopes, has_required_scopes
from core.errors import CredentialsNotFoundError, InsufficientScopesError, TokenRefreshError

logger = logging.getLogger(__name__)


def build_auth_url(user_google_email: str | None = None, scopes: list[str] | None = None) -> str | None:
    """
    Authorization URL the user can open to grant access.

    Returns None when no OAuth client is configured.
    """
    config = get_oauth_config()
    if not config.is_configured():
        return None

    params = {
        "client_id": config.client_id,
        "redirect_uri": get_oauth_redirect_uri(),
        "response_type": "code",
        "scope": " ".join(scopes or get_all_scopes()),
        "access_type": "offline",
        "prompt": "consent",
    }
    if user_google_email:
        params["login_hint"] = user_google_email
    return f"{GOOGLE_AUTH_URI}?{urlencode(params)}"


def get_credentials(user_google_email: str, required_scopes: list[str]) -> Credentials:
    """
    Load valid credentials for a user.

    Args:
        user_google_email: The user's Google email address
        required_scopes: Scope URLs the caller needs

    Returns:
        Credentials that are valid and carry the required scopes.

    Raises:
        CredentialsNotFoundError: No stored credentials exist.
        TokenRefreshError: The stored credentials are expired and cannot be refreshed.
        InsufficientScopesError: The credentials lack a required scope.
    """
    store = get_credential_store()
    credentials = store.get_credential(user_google_email)

    if credentials is None:
        raise CredentialsNotFoundError(user_google_email, auth_url=build_auth_url(user_google_email))

    if not has_required_scopes(credentials.scopes, required_scopes):
        raise InsufficientScopesError(
            required=required_scopes,
            available=sorted(expand_granted_scopes(credentials.scopes)),
            auth_url=build_auth_url(user_google_email),
        )

    if credentials.valid:
        return credentials

    if not (credentials.expired and credentials.refresh_token):
        raise TokenRefreshError(
            user_google_email,
            "credentials are invalid and have no refresh token",
            auth_url=build_auth_url(user_google_email),
        )

    try:
        credentials.refresh(Request())
    except RefreshError as e:
        logger.warning(f"Token refresh failed for {user_google_email}: {e}")
        raise TokenRefreshError(user_google_email, str(e), auth_url=build_auth_url(user_google_email)) from e

    logger.info(f"Refreshed credentials for {user_google_email}")
    store.store_credential(user_google_email, credentials)
    return credentials


def build_service(service_name: str, version: str, credentials: Credentials) -> Any:
    return build(service_name, version, credentials=credentials, cache_discovery=False)


async def get_authenticated_google_service(
    service_name: str,
    version: str,
    tool_name: str,
    user_google_email: str,
    required_scopes: list[str],
) -> tuple[Any, str]:
    """
    Build an authenticated Google API client for a tool call.

    Returns:
        (service, user_google_email)
    """
    logger.debug(f"[{tool_name}] Resolving {service_name} {version} service for {user_google_email}")
    credentials = await asyncio.to_thread(get_credentials, user_google_email, required_scopes)
    service = await asyncio.to_thread(build_service, service_name, version, credentials)
    return service, user_google_email
