# === FILE: news_scout/logger.py ===
"""Логгер проекта NewsScout.

Все модули пишут в один именованный логгер::

    from news_scout.logger import logger
    logger.warning("Unknown region %s", code)

Сообщения идут в stderr (stdout занят вердиктами и сводкой), по желанию
дублируются в файл с ротацией. CLI перенастраивает логгер через
:func:`configure` по опциям ``--log-level``/``--log-file``/``--log-format``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "NewsScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(fmt: str, log_file: str | Path | None) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Настраивает логгер ``NewsScout`` и возвращает его.

    ``replace_handlers=False`` добавляет обработчики к уже существующим;
    по умолчанию старые закрываются и снимаются.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            handler.close()
            lg.removeHandler(handler)

    for handler in _build_handlers(log_format, log_file):
        lg.addHandler(handler)

    lg.propagate = False
    return lg


# до вызова configure() из CLI видны только предупреждения
logger: logging.Logger = configure(level="WARNING")

__all__ = ["logger", "configure", "LOGGER_NAME", "DEFAULT_FORMAT"]
