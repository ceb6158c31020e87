"""Run the API under uvicorn: python -m crime_api."""

import logging

import uvicorn

from crime_api.config import get_settings
from crime_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Now listening on port {settings.port}")
    uvicorn.run(
        "crime_api.main:app", host=settings.host, port=settings.port, reload=False,
    )


if __name__ == "__main__":
    main()
