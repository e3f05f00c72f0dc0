import logging
import sys

from mark_it_down.core.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = None) -> None:
    """Настройка корневого логгера приложения"""
    formatter = logging.Formatter(fmt=LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root = logging.getLogger("mark_it_down")
    root.handlers = [stream_handler]
    root.setLevel((level or settings.log_level).upper())
    root.propagate = False
