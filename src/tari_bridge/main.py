"""Main entry point - runs the bridge API."""

import logging

import uvicorn
from dotenv import load_dotenv

from tari_bridge.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    load_dotenv()
    settings = get_settings()

    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting Tari bridge...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Indexer: {settings.get_safe_dict()['indexer_url']}")

    from tari_bridge.api.app import create_app

    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
