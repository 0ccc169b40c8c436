"""
OAuth Configuration Management for the Google Docs markdown MCP server.

Provides a single source of truth for OAuth client settings and local
directories, read from environment variables with file-based fallbacks.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

# Local configuration directory
GDOCS_MARKDOWN_MCP_CONFIG_DIR = "~/.config/gdocs-markdown-mcp"

DEFAULT_REDIRECT_URI = "http://localhost:9876/oauth2callback"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class OAuthConfig:
    """
    Centralized OAuth configuration.

    Client credentials come from GOOGLE_OAUTH_CLIENT_ID and
    GOOGLE_OAUTH_CLIENT_SECRET; when either is unset they are read from
    `<config dir>/client_secret.json` (an "installed" or "web" section).
    """

    def __init__(self):
        self.config_dir = os.path.expanduser(os.getenv("WORKSPACE_MCP_CONFIG_DIR", GDOCS_MARKDOWN_MCP_CONFIG_DIR))
        self.credentials_dir = os.path.expanduser(
            os.getenv("GOOGLE_MCP_CREDENTIALS_DIR", os.path.join(self.config_dir, "credentials"))
        )
        self.redirect_uri = os.getenv("GOOGLE_OAUTH_REDIRECT_URI") or DEFAULT_REDIRECT_URI

        self.client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID") or None
        self.client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET") or None
        self.token_uri = GOOGLE_TOKEN_URI

        if not (self.client_id and self.client_secret):
            self._load_client_secret_file()

    @property
    def client_secret_path(self) -> str:
        return os.path.join(self.config_dir, "client_secret.json")

    def _load_client_secret_file(self) -> None:
        """Fill missing client settings from client_secret.json, if present."""
        path = self.client_secret_path
        if not os.path.exists(path):
            return

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read OAuth client file {path}: {e}")
            return

        section = data.get("installed") or data.get("web") or {}
        self.client_id = self.client_id or section.get("client_id")
        self.client_secret = self.client_secret or section.get("client_secret")
        self.token_uri = section.get("token_uri", self.token_uri)
        logger.debug(f"Loaded OAuth client configuration from {path}")

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def get_google_oauth_config(self) -> dict[str, Any]:
        """
        OAuth client configuration in Google's "installed app" format.

        Raises:
            ValueError: If no client ID and secret are configured.
        """
        if not self.is_configured():
            raise ValueError(
                "Google OAuth credentials not configured. "
                "Set GOOGLE_OAUTH_CLIENT_ID and GOOGLE_OAUTH_CLIENT_SECRET environment variables, "
                f"or provide {self.client_secret_path}"
            )
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": self.token_uri,
                "redirect_uris": [self.redirect_uri],
            }
        }


_oauth_config: OAuthConfig | None = None


def get_oauth_config() -> OAuthConfig:
    """Get the global OAuth configuration instance."""
    global _oauth_config
    if _oauth_config is None:
        _oauth_config = OAuthConfig()
    return _oauth_config


def reload_oauth_config() -> OAuthConfig:
    """Re-read configuration from the environment (used by tests)."""
    global _oauth_config
    _oauth_config = OAuthConfig()
    return _oauth_config


def get_credentials_directory() -> str:
    return get_oauth_config().credentials_dir


def get_oauth_redirect_uri() -> str:
    return get_oauth_config().redirect_uri


def get_google_oauth_config() -> dict[str, Any]:
    return get_oauth_config().get_google_oauth_config()


def get_default_user_email() -> str | None:
    """USER_GOOGLE_EMAIL, read at call time so tests can override it."""
    return os.getenv("USER_GOOGLE_EMAIL") or None
