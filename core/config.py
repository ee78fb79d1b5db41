"""
Configuration management for notes-gdocs-sync.

All settings come from environment variables, read once into a
`NotesSyncConfig` and cached until `reset_config()` is called.
"""

import logging
import os

logger = logging.getLogger(__name__)

# Application metadata
NOTES_SYNC_APP_NAME = "notes-gdocs-sync"
NOTES_SYNC_DEFAULT_CONFIG_DIR = "~/.config/notes-gdocs-sync"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class NotesSyncConfig:
    """
    Centralized configuration.

    Environment variables:
        NOTES_SYNC_CONFIG_DIR: Base directory (default ~/.config/notes-gdocs-sync)
        NOTES_SYNC_CREDENTIALS_DIR: Per-user Google credentials (default <config dir>/credentials)
        NOTES_SYNC_NOTES_PATH: JSON note store (default <config dir>/notes.json)
        GOOGLE_OAUTH_CLIENT_ID / GOOGLE_OAUTH_CLIENT_SECRET: OAuth client used for token refresh
        LOG_LEVEL: Root log level (default INFO)
    """

    def __init__(self):
        self.config_dir = os.path.expanduser(os.getenv("NOTES_SYNC_CONFIG_DIR", NOTES_SYNC_DEFAULT_CONFIG_DIR))
        self.credentials_dir = os.path.expanduser(
            os.getenv("NOTES_SYNC_CREDENTIALS_DIR", os.path.join(self.config_dir, "credentials"))
        )
        self.notes_path = os.path.expanduser(
            os.getenv("NOTES_SYNC_NOTES_PATH", os.path.join(self.config_dir, "notes.json"))
        )

        # OAuth client configuration, used when a stored token lacks its own client fields
        self.client_id = os.getenv("GOOGLE_OAUTH_CLIENT_ID") or None
        self.client_secret = os.getenv("GOOGLE_OAUTH_CLIENT_SECRET") or None

        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def is_oauth_configured(self) -> bool:
        """Check if an OAuth client is configured."""
        return bool(self.client_id and self.client_secret)

    def get_config_summary(self) -> dict:
        """
        Get a summary of the current configuration for logging.

        Returns:
            Configuration summary with secrets left out.
        """
        return {
            "config_dir": self.config_dir,
            "credentials_dir": self.credentials_dir,
            "notes_path": self.notes_path,
            "client_id": self.client_id[:8] + "..." if self.client_id else "Not set",
            "client_secret_set": bool(self.client_secret),
            "log_level": self.log_level,
        }


_config: NotesSyncConfig | None = None


def get_config() -> NotesSyncConfig:
    """Get the global configuration, reading the environment on first use."""
    global _config
    if _config is None:
        _config = NotesSyncConfig()
    return _config


def reset_config() -> NotesSyncConfig:
    """Re-read the environment. Useful after changing environment variables in tests."""
    global _config
    _config = NotesSyncConfig()
    return _config


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from `level` or the LOG_LEVEL setting."""
    log_level = (level or get_config().log_level).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format=LOG_FORMAT)
    # googleapiclient logs every discovery document fetch at INFO
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
    logger.debug(f"Logging configured at {log_level}")
