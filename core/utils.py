import asyncio
import functools
import inspect
import logging
import re
import ssl

from googleapiclient.errors import HttpError

from core.errors import APIError, NotesSyncError, ValidationError, handle_http_error

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[\w\-]+$")


def _validate_id(value: str, param_name: str) -> str:
    if not value:
        raise ValidationError(f"{param_name} is required")

    value = value.strip()
    if not value:
        raise ValidationError(f"{param_name} cannot be empty")

    if not _ID_PATTERN.match(value):
        raise ValidationError(f"{param_name} contains invalid characters")

    return value


def validate_document_id(document_id: str, param_name: str = "document_id") -> str:
    """Validate a Google Docs document ID and return it stripped."""
    return _validate_id(document_id, param_name)


def validate_note_id(note_id: str, param_name: str = "note_id") -> str:
    """Validate a note ID and return it stripped."""
    return _validate_id(note_id, param_name)


class TransientNetworkError(NotesSyncError):
    """Raised when an SSL error persists after the allowed retries."""


def handle_http_errors(operation: str, is_read_only: bool = False, service_type: str | None = None):
    """
    Wrap an async Google API call so it only raises `core.errors` exceptions.

    - `HttpError` becomes the matching `APIError` subclass (404, 403, 429, ...),
      with a reconnect hint for the user on 401 and 403.
    - `ssl.SSLError` is retried with exponential backoff when `is_read_only` is
      set, then surfaces as `TransientNetworkError`. Writes are never retried.
    - `NotesSyncError` passes through unchanged; anything else becomes `APIError`.

    Args:
        operation: Name used in log lines and error messages.
        is_read_only: Whether the call is safe to repeat.
        service_type: Google service name appended to error messages.
    """

    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            max_retries = 3
            base_delay = 1

            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except ssl.SSLError as e:
                    if is_read_only and attempt < max_retries - 1:
                        delay = base_delay * (2**attempt)
                        logger.warning(
                            f"SSL error in {operation} on attempt {attempt + 1}: {e}. Retrying in {delay} seconds..."
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.error(f"SSL error in {operation} on final attempt: {e}. Raising exception.")
                        raise TransientNetworkError(
                            f"A transient SSL error occurred in '{operation}' after {attempt + 1} attempt(s). "
                            "This is likely a temporary network or certificate issue. Please try again shortly."
                        ) from e
                except HttpError as error:
                    arguments = signature.bind_partial(*args, **kwargs).arguments
                    user_id = arguments.get("user_id", "N/A")
                    typed = handle_http_error(error, arguments.get("document_id"))

                    if error.resp.status in [401, 403]:
                        message = (
                            f"API error in {operation}: {typed}. "
                            f"You might need to reconnect the Google account for user '{user_id}'."
                        )
                    else:
                        message = f"API error in {operation}: {typed}"
                    if service_type:
                        message += f" (service: {service_type})"

                    logger.error(f"API error in {operation}: {error}", exc_info=True)
                    raise type(typed)(message, status_code=typed.status_code) from error
                except NotesSyncError:
                    # Already typed (auth, validation, not found); re-raise unchanged
                    raise
                except Exception as e:
                    message = f"An unexpected error occurred in {operation}: {e}"
                    logger.exception(message)
                    raise APIError(message) from e

        return wrapper

    return decorator
