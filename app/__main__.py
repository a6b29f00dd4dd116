"""Run the API with uvicorn: ``python -m app``."""
import logging

import uvicorn

from app.core.config import get_settings
from app.core.logging import setup_logging

logger = logging.getLogger("app")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Servidor corriendo en puerto %s", settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
