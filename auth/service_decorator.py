"""
Service injection for MCP tools.

`require_google_service` resolves an authenticated Google API client for the
calling user and passes it to the tool as its first argument. The `service`
parameter is removed from the exposed signature so MCP clients never see it.
"""

import functools
import inspect
import logging
from collections.abc import Callable

from auth.config import get_default_user_email
from auth.google_auth import get_authenticated_google_service
from auth.scopes import resolve_scope_group
from core.errors import ValidationError

logger = logging.getLogger(__name__)

SERVICE_CONFIGS = {
    "docs": {"service": "docs", "version": "v1"},
}


def _strip_service_parameter(func: Callable) -> inspect.Signature:
    sig = inspect.signature(func)
    params = [p for name, p in sig.parameters.items() if name != "service"]
    return sig.replace(parameters=params)


def require_google_service(service_type: str, scopes: str | list[str]):
    """
    Decorator that injects an authenticated Google service into a tool.

    Args:
        service_type: Key into SERVICE_CONFIGS (e.g. "docs")
        scopes: Scope group name(s) from auth.scopes (e.g. "docs_write")

    The decorated function must take `service` as its first parameter and
    `user_google_email` as a parameter. An empty email falls back to the
    USER_GOOGLE_EMAIL environment variable.
    """
    if service_type not in SERVICE_CONFIGS:
        raise ValueError(f"Unknown service type: {service_type}")
    config = SERVICE_CONFIGS[service_type]
    required_scopes = resolve_scope_group(scopes)

    def decorator(func):
        exposed_signature = _strip_service_parameter(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            bound = exposed_signature.bind_partial(*args, **kwargs)
            user_google_email = bound.arguments.get("user_google_email") or get_default_user_email()
            if not user_google_email:
                raise ValidationError(
                    "user_google_email is required (or set the USER_GOOGLE_EMAIL environment variable)"
                )
            bound.arguments["user_google_email"] = user_google_email

            service, _ = await get_authenticated_google_service(
                service_name=config["service"],
                version=config["version"],
                tool_name=func.__name__,
                user_google_email=user_google_email,
                required_scopes=required_scopes,
            )
            return await func(service, *bound.args, **bound.kwargs)

        wrapper.__signature__ = exposed_signature
        return wrapper

    return decorator
