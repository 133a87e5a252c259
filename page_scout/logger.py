# page_scout/logger.py
"""Логгер PageScout.

Все модули пишут в именованный логгер ``"PageScout"``: либо через
``logging.getLogger("PageScout")``, либо через готовый объект :data:`logger`.
CLI вызывает :func:`init_logging` с уровнем, файлом и форматом из опций
командной строки.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

__all__ = ["logger", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]

LOGGER_NAME: Final[str] = "PageScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# ротация файла логов: 5 МБ, три архива
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Сбрасывает обработчики логгера PageScout и настраивает его заново.

    Сообщения всегда идут в stdout; при заданном *log_file* дублируются в
    файл с ротацией. Логгер не передаёт записи корневому логгеру.
    """
    crawl_logger = logging.getLogger(LOGGER_NAME)
    crawl_logger.setLevel(level)

    for old in list(crawl_logger.handlers):
        crawl_logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        crawl_logger.addHandler(handler)

    crawl_logger.propagate = False
    return crawl_logger


logger: logging.Logger = init_logging()
