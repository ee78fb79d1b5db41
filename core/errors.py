"""
Custom error types for the notes / Google Docs sync service.

Provides user-friendly error messages and structured error handling.
"""

from googleapiclient.errors import HttpError

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class NotesSyncError(Exception):
    """Base exception for all notes sync errors."""

    pass


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(NotesSyncError):
    """Raised when authentication fails or credentials are invalid."""

    pass


class CredentialsNotFoundError(AuthenticationError):
    """Raised when no credentials are found for a user."""

    def __init__(self, user_id: str):
        super().__init__(f"No Google credentials found for user: {user_id}. Please connect a Google account first.")
        self.user_id = user_id


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Failed to refresh Google token for {user_id}: {reason}. Please reconnect the Google account."
        )
        self.user_id = user_id
        self.reason = reason


# =============================================================================
# Configuration Errors
# =============================================================================


class ServiceConfigurationError(NotesSyncError):
    """Raised when a service is misconfigured."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(NotesSyncError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class APIError(NotesSyncError):
    """Raised for general Google API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(APIError):
    """Raised when a requested resource doesn't exist (404)."""

    pass


class PermissionDeniedError(APIError):
    """Raised when the user lacks permission for an operation (403)."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded (429)."""

    pass


class NoteNotFoundError(ResourceNotFoundError):
    """Raised when a note id does not resolve to a stored note."""

    def __init__(self, note_id: str):
        super().__init__(f"Note not found: {note_id}", status_code=404)
        self.note_id = note_id


def _status_of(error: Exception) -> int | None:
    if isinstance(error, HttpError):
        return error.resp.status
    return None


def handle_http_error(error: Exception, document_id: str | None = None) -> APIError:
    """
    Convert Google API HTTP errors to the matching APIError subclass.
    """
    status = _status_of(error)
    error_str = str(error)

    if status == 404 or (status is None and "404" in error_str):
        return ResourceNotFoundError(f"Document not found: {document_id or 'unknown'}", status_code=404)
    elif status == 403 or (status is None and "403" in error_str):
        return PermissionDeniedError("Permission denied. You may not have access to this document.", status_code=403)
    elif status == 401 or (status is None and "401" in error_str):
        return APIError("Authentication expired. Please reconnect the Google account.", status_code=401)
    elif status == 429 or (status is None and "429" in error_str):
        return RateLimitError("Rate limit exceeded. Please wait and try again.", status_code=429)
    else:
        return APIError(f"Google API error: {error_str}", status_code=status)

