"""
Google Docs OAuth Scopes

This module centralizes OAuth scope definitions.
Separated from service_decorator.py to avoid circular imports.
"""

import logging

logger = logging.getLogger(__name__)

# Individual OAuth Scope Constants
USERINFO_EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"
OPENID_SCOPE = "openid"

# Google Docs scopes
DOCS_READONLY_SCOPE = "https://www.googleapis.com/auth/documents.readonly"
DOCS_WRITE_SCOPE = "https://www.googleapis.com/auth/documents"

# Base OAuth scopes required for user identification
BASE_SCOPES = [USERINFO_EMAIL_SCOPE, OPENID_SCOPE]

DOCS_SCOPES = [DOCS_READONLY_SCOPE, DOCS_WRITE_SCOPE]

# Scope groups accepted by require_google_service(); the write scope implies read access
SCOPE_GROUPS = {
    "docs_read": [DOCS_READONLY_SCOPE],
    "docs_write": [DOCS_WRITE_SCOPE],
}

SCOPE_IMPLICATIONS = {
    DOCS_WRITE_SCOPE: [DOCS_READONLY_SCOPE],
}


def resolve_scope_group(group: str | list[str]) -> list[str]:
    """
    Resolve a scope group name (or a list of names and URLs) to scope URLs.

    Raises:
        ValueError: If a name is neither a known group nor a scope URL.
    """
    names = [group] if isinstance(group, str) else list(group)
    scopes: list[str] = []
    for name in names:
        if name in SCOPE_GROUPS:
            scopes.extend(SCOPE_GROUPS[name])
        elif name.startswith("https://") or name == OPENID_SCOPE:
            scopes.append(name)
        else:
            raise ValueError(f"Unknown scope group: {name}")
    return list(dict.fromkeys(scopes))


def expand_granted_scopes(granted: list[str] | None) -> set[str]:
    """Granted scopes plus every scope they imply."""
    expanded = set(granted or [])
    for scope in list(expanded):
        expanded.update(SCOPE_IMPLICATIONS.get(scope, []))
    return expanded


def has_required_scopes(granted: list[str] | None, required: list[str]) -> bool:
    return set(required) <= expand_granted_scopes(granted)


def get_all_scopes() -> list[str]:
    """Scopes requested when authorizing a user."""
    return list(dict.fromkeys(BASE_SCOPES + DOCS_SCOPES))
