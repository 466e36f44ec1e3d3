import logging
import sys

from readiness.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the application (stdout only)."""
    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Idempotent: gunicorn workers and the test client may import main twice
    for handler in logger.handlers:
        if getattr(handler, "_readiness_handler", False):
            return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._readiness_handler = True
    logger.addHandler(console_handler)

    # Gunicorn writes its own access log
    logging.getLogger("uvicorn.access").handlers = []
