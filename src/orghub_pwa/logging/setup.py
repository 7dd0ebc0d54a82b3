import sys
import logging
from typing import Any, Optional
from urllib.parse import urlsplit

from loguru import logger

from orghub_pwa.config.settings import AppSettings, settings as default_settings


def make_url_secret_filter(source_url: Optional[str]):
    """Builds a loguru filter hiding the query string of the source URL.

    Deployment URLs for the core service carry their access token in the
    query, so it never goes to the log as-is.
    """
    secret = urlsplit(source_url).query if source_url else ""

    def url_secret_filter(record: dict[str, Any]) -> bool:
        if secret and secret in record["message"]:
            record["message"] = record["message"].replace(secret, "****")
        return True  # Keep the record after masking

    return url_secret_filter


def setup_logging(settings: AppSettings = default_settings) -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,  # Locals may include the tokenised source URL
        filter=make_url_secret_filter(settings.core_list_url),
    )

    logger.debug(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx, httpcore)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug("Standard logging intercepted.")
