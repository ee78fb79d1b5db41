# Make the auth directory a Python package
# Public API exports from canonical locations

from auth.credential_store import (
    CredentialStore,
    LocalDirectoryCredentialStore,
    get_credential_store,
    set_credential_store,
)
from auth.google_auth import build_service, get_credentials

__all__ = [
    "CredentialStore",
    "LocalDirectoryCredentialStore",
    "get_credential_store",
    "set_credential_store",
    "build_service",
    "get_credentials",
]
