"""Logging configuration for Hive Monitor."""

import logging
from datetime import datetime
from pathlib import Path

from hive_monitor.config import LOG_DIR, LOG_LEVEL

DEFAULT_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Libraries that log every request or statement at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine")


def setup_logging(log_dir: Path | None = None) -> Path:
    """Attach a dated file handler and a console handler to the root logger.

    Returns the log file path. Request-level chatter from the HTTP and SQL
    libraries is kept at WARNING whatever LOG_LEVEL says.
    """
    logs_dir = log_dir or (Path(LOG_DIR) if LOG_DIR else DEFAULT_LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"hive-{datetime.now().strftime('%Y-%m-%d')}.log"

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    # Console never goes below INFO: poll ticks log at DEBUG
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(max(level, logging.INFO))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging initialized - file: {log_file}")
    return log_file
