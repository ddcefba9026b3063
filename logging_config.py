from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(logger_name: str | None = None) -> logging.Logger:
    level_name = str(os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    log_file = os.getenv("LOG_FILE", "logs/trade_journal.log")

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Other handlers (pytest, streamlit) may already sit on the root logger
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)

    file_handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=5)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    logger.addHandler(stream_handler)
    logger.addHandler(file_handler)
    if logger_name:
        logger.propagate = False

    return logger


def _entry_point_logger(name: str) -> logging.Logger:
    # Handlers go on the root logger; core/, agents/ and database/ log under their module names
    setup_logging()
    return logging.getLogger(name)


def get_dashboard_logger() -> logging.Logger:
    return _entry_point_logger("dashboard")


def get_cli_logger() -> logging.Logger:
    return _entry_point_logger("journal_cli")
