# utils/logger.py
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from config import STORAGE_DIR

LOGGER_NAME = "cartbill"


def setup_logger(log_dir: str | Path | None = None, console_level: int = logging.WARNING):
    """
    Configure the application logger for the cart manager.

    Features:
    - Daily rotating log files (one file per day, a week kept)
    - Console output limited to warnings by default, so the menu stays readable
    - Unified log format with timestamp and level
    - Creates directories automatically
    """

    # Create log directory if not exists
    log_dir = Path(log_dir) if log_dir is not None else Path(STORAGE_DIR) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "cartbill.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Avoid duplicate handlers if setup_logger() is called multiple times
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info("Logger initialized (daily rotation enabled)")
    return logger
