# Make the auth directory a Python package
# Public API exports from canonical locations

from auth.config import (
    get_credentials_directory,
    get_default_user_email,
    get_google_oauth_config,
    get_oauth_config,
    get_oauth_redirect_uri,
    reload_oauth_config,
)
from auth.credential_store import (
    CredentialStore,
    LocalDirectoryCredentialStore,
    get_credential_store,
    set_credential_store,
)

__all__ = [
    "get_credentials_directory",
    "get_default_user_email",
    "get_google_oauth_config",
    "get_oauth_config",
    "get_oauth_redirect_uri",
    "reload_oauth_config",
    "CredentialStore",
    "LocalDirectoryCredentialStore",
    "get_credential_store",
    "set_credential_store",
]
