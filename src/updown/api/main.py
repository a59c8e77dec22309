"""Main entry point for running the resolver API server."""

import os

import uvicorn

from updown.api.app import create_app
from updown.config import get_settings
from updown.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the API server."""
    settings = get_settings()
    configure_logging(settings)
    app = create_app(settings)
    port = int(os.getenv("PORT", "8000"))
    logger.info("api_starting", port=port, strategy=settings.resolver.strategy)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
