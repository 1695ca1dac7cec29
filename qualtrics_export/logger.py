import logging
import sys
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from qualtrics_export.config import LOG_DIR


class Logger:
    @staticmethod
    def create_logger(name: str, log_dir: Optional[str] = LOG_DIR) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)

        if logger.handlers:
            return logger

        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            "%Y-%m-%d %H:%M:%S"
        )

        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, f"{name}.log"),
                maxBytes=5_000_000,
                backupCount=5,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger


def default_logger() -> logging.Logger:
    # Library-gebruik: geen handlers toevoegen, dat laten we aan de applicatie
    return logging.getLogger("qualtrics_export")
