"""Main application entry point"""

import uvicorn
from tether.config import settings
from tether.logging_config import setup_logging, get_logger


def initialize_app() -> None:
    """Initialize the Tether application"""

    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info(
        "configuration_loaded",
        api_host=settings.api.host,
        api_port=settings.api.port,
        catalog_path=settings.matching.catalog_path or "seed",
        default_limit=settings.matching.default_limit,
        verified_only=settings.matching.verified_only,
        log_level=settings.logging.level,
        log_format=settings.logging.format,
    )

    logger.info("application_initialized")


def run_api_server():
    """Run the FastAPI server"""
    initialize_app()

    logger = get_logger(__name__)
    logger.info(
        "starting_api_server",
        host=settings.api.host,
        port=settings.api.port
    )

    uvicorn.run(
        "tether.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.debug,
        log_level=settings.logging.level.lower()
    )


if __name__ == "__main__":
    run_api_server()
