"""
Google credential loading and API service construction.

Credentials are loaded from the credential store, refreshed when expired and
written back, then used to build `googleapiclient` service objects.
"""

import logging
from typing import Any

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from auth.credential_store import CredentialStore, get_credential_store
from auth.scopes import get_scopes_for_service
from core.config import get_config
from core.errors import CredentialsNotFoundError, ServiceConfigurationError, TokenRefreshError

logger = logging.getLogger(__name__)


def _fill_client_fields(credentials: Credentials) -> Credentials:
    """Attach the configured OAuth client when the stored token has none."""
    if credentials.client_id and credentials.client_secret:
        return credentials

    config = get_config()
    if not config.is_oauth_configured():
        raise ServiceConfigurationError(
            "Stored Google token has no OAuth client; "
            "set GOOGLE_OAUTH_CLIENT_ID and GOOGLE_OAUTH_CLIENT_SECRET to refresh it"
        )

    return Credentials(
        token=credentials.token,
        refresh_token=credentials.refresh_token,
        token_uri=credentials.token_uri or "https://oauth2.googleapis.com/token",
        client_id=credentials.client_id or config.client_id,
        client_secret=credentials.client_secret or config.client_secret,
        scopes=credentials.scopes,
        expiry=credentials.expiry,
    )


def get_credentials(user_id: str, store: CredentialStore | None = None) -> Credentials:
    """
    Load valid Google credentials for a user.

    Expired credentials with a refresh token are refreshed and stored back.

    Args:
        user_id: The user whose Google account is connected.
        store: Credential store to use; defaults to the global store.

    Returns:
        Valid credentials.

    Raises:
        CredentialsNotFoundError: If the user has no stored credentials.
        TokenRefreshError: If the token is expired and cannot be refreshed.
        ServiceConfigurationError: If no OAuth client is available for the refresh.
    """
    store = store or get_credential_store()
    credentials = store.get_credential(user_id)
    if credentials is None:
        raise CredentialsNotFoundError(user_id)

    if credentials.valid:
        logger.debug(f"Using stored credentials for {user_id}")
        return credentials

    if not credentials.refresh_token:
        raise TokenRefreshError(user_id, "token expired and no refresh token is stored")

    credentials = _fill_client_fields(credentials)
    try:
        credentials.refresh(Request())
    except RefreshError as e:
        logger.error(f"Token refresh failed for {user_id}: {e}", exc_info=True)
        raise TokenRefreshError(user_id, str(e)) from e

    logger.info(f"Refreshed Google token for {user_id}")
    store.store_credential(user_id, credentials)
    return credentials


def build_service(service_name: str, version: str, user_id: str, store: CredentialStore | None = None) -> Any:
    """Build an authorized Google API service (e.g. `docs` v1, `drive` v3) for a user."""
    credentials = get_credentials(user_id, store)

    missing = sorted(set(get_scopes_for_service(service_name)) - set(credentials.scopes or []))
    if credentials.scopes and missing:
        logger.warning(f"Stored token for {user_id} lacks {service_name} scope(s) {missing}; API calls may be denied")

    logger.debug(f"Building {service_name} {version} service for {user_id}")
    return build(service_name, version, credentials=credentials, cache_discovery=False)
