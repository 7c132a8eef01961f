"""Main entry point - runs the Fusion+ HTTP backend."""

import asyncio
import logging

import uvicorn
from dotenv import load_dotenv

from fusionswap.api.app import create_app
from fusionswap.config import get_settings
from fusionswap.utils.log import configure_logging

logger = logging.getLogger(__name__)


async def serve() -> None:
    """Run the FastAPI server until cancelled."""
    settings = get_settings()
    app = create_app()
    config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
    server = uvicorn.Server(config)
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"API Key configured: {'Yes' if settings.has_api_key else 'No'}")
    await server.serve()


def main():
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting fusionswap API...")
    logger.info(f"Environment: {settings.environment}")

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    main()
