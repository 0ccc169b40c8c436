"""
Entry point for the Google Docs markdown MCP server.

Configures logging from LOG_LEVEL, registers the Docs tools and serves over stdio.
"""

import logging
import os

from core.server import server

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> None:
    configure_logging()

    # Importing the package registers its tools on the shared server
    import gdocs  # noqa: F401

    logger.info(f"Starting {server.name} MCP server")
    server.run()


if __name__ == "__main__":
    main()
