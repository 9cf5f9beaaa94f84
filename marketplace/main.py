"""
Main application entry point.
"""

from marketplace.api.app import create_app
from marketplace.config.logging import configure_logging, get_logger
from marketplace.config.settings import settings

configure_logging()
logger = get_logger(__name__)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Artist Booking Marketplace server")

    uvicorn.run(
        "marketplace.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
