import logging
import sys
from logging.handlers import RotatingFileHandler
from . import settings

PACKAGE_LOGGER = "stock_analytics"
LOG_FILENAME = "stock_analytics.log"


def setup_logger(
    name: str = PACKAGE_LOGGER, log_level: int | str | None = None
) -> logging.Logger:
    """
    Attaches console and rotating-file output to the package logger, so every
    `stock_analytics.*` module logger reports through it. The level defaults to
    settings.LOG_LEVEL. Safe to call more than once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level or settings.LOG_LEVEL)

    if logger.hasHandlers():
        return logger

    # Console stays message-only; the file keeps timestamps and origin
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    log_dir = settings.BASE_DIR / "logs"
    log_dir.mkdir(exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    return logger
