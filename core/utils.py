import asyncio
import functools
import logging
import ssl

from googleapiclient.errors import HttpError

from core.errors import APIError, GoogleAuthenticationError, ValidationError, api_error_from_http

logger = logging.getLogger(__name__)

SSL_RETRY_ATTEMPTS = 3
SSL_RETRY_BASE_DELAY = 1


class TransientNetworkError(Exception):
    """Raised when a read-only tool keeps failing on SSL errors."""

    pass


def _reauth_error(api_error: APIError, tool_name: str, user_google_email: str) -> APIError:
    message = f"{api_error}. You might need to re-authenticate for user '{user_google_email}'."
    return type(api_error)(message, status_code=api_error.status_code, operation=tool_name)


def handle_http_errors(tool_name: str, is_read_only: bool = False, service_type: str | None = None):
    """
    Decorator that turns Google API failures into tagged APIError subclasses.

    Errors already raised by the managers (APIError, TableFillError) and
    authentication or input errors pass through unchanged. A bare HttpError
    is mapped by status and tagged with `tool_name`; 401/403 responses get a
    re-authentication hint. Any other exception becomes a generic APIError.

    Read-only tools retry ssl.SSLError with exponential backoff and raise
    TransientNetworkError once the attempts run out. Write tools never retry.

    Args:
        tool_name (str): The name of the tool being decorated (e.g., 'insert_markdown').
        is_read_only (bool): If True, the operation is safe to retry on transient
                             network errors. Defaults to False.
        service_type (str): Optional. The Google service type (e.g., 'docs'), used in log messages.
    """
    label = f"{service_type}:{tool_name}" if service_type else tool_name

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, SSL_RETRY_ATTEMPTS + 1):
                try:
                    return await func(*args, **kwargs)
                except ssl.SSLError as e:
                    if not is_read_only or attempt == SSL_RETRY_ATTEMPTS:
                        logger.error(f"[{label}] SSL error on attempt {attempt}, giving up: {e}")
                        raise TransientNetworkError(
                            f"A transient SSL error occurred in '{tool_name}'. "
                            "This is likely a temporary network or certificate issue. Please try again shortly."
                        ) from e
                    delay = SSL_RETRY_BASE_DELAY * 2 ** (attempt - 1)
                    logger.warning(f"[{label}] SSL error on attempt {attempt}: {e}. Retrying in {delay}s")
                    await asyncio.sleep(delay)
                except ValidationError as e:
                    logger.warning(f"[{label}] Input error: {e}")
                    raise
                except APIError as e:
                    logger.error(f"[{label}] API error during {e.operation}: {e}")
                    raise
                except HttpError as error:
                    api_error = api_error_from_http(error, tool_name)
                    if api_error.status_code in (401, 403):
                        api_error = _reauth_error(api_error, tool_name, kwargs.get("user_google_email", "N/A"))
                    logger.error(f"[{label}] HTTP {api_error.status_code}: {error}", exc_info=True)
                    raise api_error from error
                except (TransientNetworkError, GoogleAuthenticationError):
                    raise
                except Exception as e:
                    message = f"An unexpected error occurred in {tool_name}: {e}"
                    logger.exception(f"[{label}] {message}")
                    raise APIError(message, operation=tool_name) from e

        return wrapper

    return decorator
