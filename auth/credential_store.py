"""
Credential Store API for notes-gdocs-sync.

Each user's Google OAuth token is kept as one JSON file named after the user
id, under the configured credentials directory.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime

from google.oauth2.credentials import Credentials

from core.config import get_config

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Abstract base class for credential storage."""

    @abstractmethod
    def get_credential(self, user_id: str) -> Credentials | None:
        """Get credentials for a user."""
        pass

    @abstractmethod
    def store_credential(self, user_id: str, credentials: Credentials) -> bool:
        """Store credentials for a user."""
        pass

    @abstractmethod
    def delete_credential(self, user_id: str) -> bool:
        """Delete credentials for a user."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List all users with stored credentials."""
        pass


def credentials_to_dict(credentials: Credentials) -> dict:
    """Serialize credentials to the on-disk JSON shape."""
    return {
        "token": credentials.token,
        "refresh_token": credentials.refresh_token,
        "token_uri": credentials.token_uri,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "scopes": credentials.scopes,
        "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
    }


def credentials_from_dict(creds_data: dict, user_id: str = "unknown") -> Credentials:
    """Build credentials from the on-disk JSON shape. Expiry is normalized to naive UTC."""
    expiry = None
    if creds_data.get("expiry"):
        try:
            expiry = datetime.fromisoformat(creds_data["expiry"])
            if expiry.tzinfo is not None:
                expiry = expiry.replace(tzinfo=None)
        except (ValueError, TypeError) as e:
            logger.warning(f"Could not parse expiry time for {user_id}: {e}")

    return Credentials(
        token=creds_data.get("token"),
        refresh_token=creds_data.get("refresh_token"),
        token_uri=creds_data.get("token_uri"),
        client_id=creds_data.get("client_id"),
        client_secret=creds_data.get("client_secret"),
        scopes=creds_data.get("scopes"),
        expiry=expiry,
    )


class LocalDirectoryCredentialStore(CredentialStore):
    """Credential store that uses local JSON files for storage."""

    def __init__(self, base_dir: str | None = None):
        if base_dir is None:
            base_dir = get_config().credentials_dir

        self.base_dir: str = base_dir
        logger.info(f"LocalDirectoryCredentialStore initialized with base_dir: {base_dir}")

    def _get_credential_path(self, user_id: str) -> str:
        """Get the file path for a user's credentials."""
        if not os.path.exists(self.base_dir):
            os.makedirs(self.base_dir)
            logger.info(f"Created credentials directory: {self.base_dir}")
        return os.path.join(self.base_dir, f"{user_id}.json")

    def get_credential(self, user_id: str) -> Credentials | None:
        """Get credentials from local JSON file."""
        creds_path = self._get_credential_path(user_id)

        if not os.path.exists(creds_path):
            logger.debug(f"No credential file found for {user_id} at {creds_path}")
            return None

        try:
            with open(creds_path) as f:
                creds_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading credentials for {user_id} from {creds_path}: {e}")
            return None

        logger.debug(f"Loaded credentials for {user_id} from {creds_path}")
        return credentials_from_dict(creds_data, user_id)

    def store_credential(self, user_id: str, credentials: Credentials) -> bool:
        """Store credentials to local JSON file."""
        creds_path = self._get_credential_path(user_id)

        try:
            with open(creds_path, "w") as f:
                json.dump(credentials_to_dict(credentials), f, indent=2)
            logger.info(f"Stored credentials for {user_id} to {creds_path}")
            return True
        except OSError as e:
            logger.error(f"Error storing credentials for {user_id} to {creds_path}: {e}")
            return False

    def delete_credential(self, user_id: str) -> bool:
        """Delete credential file for a user."""
        creds_path = self._get_credential_path(user_id)

        try:
            if os.path.exists(creds_path):
                os.remove(creds_path)
                logger.info(f"Deleted credentials for {user_id} from {creds_path}")
            else:
                logger.debug(f"No credential file to delete for {user_id} at {creds_path}")
            return True
        except OSError as e:
            logger.error(f"Error deleting credentials for {user_id} from {creds_path}: {e}")
            return False

    def list_users(self) -> list[str]:
        """List all users with credential files."""
        if not os.path.exists(self.base_dir):
            return []

        users = []
        try:
            for filename in os.listdir(self.base_dir):
                if filename.endswith(".json"):
                    users.append(filename[:-5])
            logger.debug(f"Found {len(users)} users with credentials in {self.base_dir}")
        except OSError as e:
            logger.error(f"Error listing credential files in {self.base_dir}: {e}")

        return sorted(users)


_credential_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Get the global credential store instance."""
    global _credential_store

    if _credential_store is None:
        _credential_store = LocalDirectoryCredentialStore()
        logger.info(f"Initialized credential store: {type(_credential_store).__name__}")

    return _credential_store


def set_credential_store(store: CredentialStore | None) -> None:
    """Set the global credential store instance (for testing)."""
    global _credential_store
    _credential_store = store
    logger.info(f"Set credential store: {type(store).__name__}")
