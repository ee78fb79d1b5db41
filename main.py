"""Entry point: run the notes-gdocs-sync MCP server over stdio."""

import logging

from core.config import configure_logging, get_config

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    logger.info(f"Starting notes-gdocs-sync: {get_config().get_config_summary()}")

    # Registers the tools on the shared server
    import notes.tools  # noqa: F401
    from core.server import server

    server.run()


if __name__ == "__main__":
    main()
