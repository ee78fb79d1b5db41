"""Core utilities for notes-gdocs-sync."""

from core.errors import (
    APIError,
    AuthenticationError,
    CredentialsNotFoundError,
    NoteNotFoundError,
    NotesSyncError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceConfigurationError,
    TokenRefreshError,
    ValidationError,
    handle_http_error,
)
from core.utils import (
    TransientNetworkError,
    handle_http_errors,
    validate_document_id,
    validate_note_id,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "CredentialsNotFoundError",
    "handle_http_error",
    "handle_http_errors",
    "NoteNotFoundError",
    "NotesSyncError",
    "PermissionDeniedError",
    "RateLimitError",
    "ResourceNotFoundError",
    "ServiceConfigurationError",
    "TokenRefreshError",
    "TransientNetworkError",
    "validate_document_id",
    "validate_note_id",
    "ValidationError",
]
