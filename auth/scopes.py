"""
Google OAuth Scopes

This module centralizes the OAuth scopes the sync service needs: reading and
writing Google Docs, and listing the user's documents through Drive.
"""

# Individual OAuth Scope Constants
USERINFO_EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"
USERINFO_PROFILE_SCOPE = "https://www.googleapis.com/auth/userinfo.profile"
OPENID_SCOPE = "openid"

# Google Drive scopes
DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

# Google Docs scopes
DOCS_READONLY_SCOPE = "https://www.googleapis.com/auth/documents.readonly"
DOCS_WRITE_SCOPE = "https://www.googleapis.com/auth/documents"

# Base OAuth scopes required for user identification
BASE_SCOPES = [USERINFO_EMAIL_SCOPE, USERINFO_PROFILE_SCOPE, OPENID_SCOPE]

# Service-specific scope groups
DOCS_SCOPES = [DOCS_READONLY_SCOPE, DOCS_WRITE_SCOPE]

DRIVE_SCOPES = [DRIVE_READONLY_SCOPE, DRIVE_FILE_SCOPE]

SCOPES = BASE_SCOPES + DOCS_SCOPES + DRIVE_SCOPES

# Scopes each service client needs at minimum
SERVICE_SCOPES: dict[str, list[str]] = {
    "docs": [DOCS_WRITE_SCOPE],
    "drive": [DRIVE_READONLY_SCOPE],
}


def get_scopes_for_service(service_name: str) -> list[str]:
    """Return the minimum scopes for a Google service, or every scope for an unknown one."""
    return list(SERVICE_SCOPES.get(service_name, SCOPES))
