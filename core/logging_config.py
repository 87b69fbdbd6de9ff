# core/logging_config.py
import logging

from core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "shipyard"

# Supabase's HTTP stack logs every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def resolve_level(name: str) -> int:
    """Map a LOG_LEVEL string to a logging level; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper()) if name else None
    return level if isinstance(level, int) else logging.INFO


def setup_logger(level_name: str = settings.LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level_name))

    # Avoid duplicate handlers in dev reload
    if logger.handlers:
        return logger

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


logger = setup_logger()
