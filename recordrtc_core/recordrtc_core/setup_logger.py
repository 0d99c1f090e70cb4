"""
setup_logger.py

Логгеры проекта: ротация файла + цветной вывод в консоль (colorlog).

Особенности:
- Повторный вызов для того же имени не добавляет хендлеры второй раз
- Имя можно передавать как ``__file__``: оно превращается в короткое имя модуля
- Уровень консоли и запись в файл управляются переменными окружения
  RECORDRTC_LOG_LEVEL и RECORDRTC_LOG_TO_FILE
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from colorlog import ColoredFormatter

LOG_FORMAT = "%(asctime)s [%(name)s:%(module)s:%(lineno)d] [%(levelname)s] %(message)s"
PROJECT_ROOT = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _logger_name(name: str) -> str:
    """'/.../recordrtc_core/questions/views.py' -> 'questions.views'"""
    if not name.endswith(".py"):
        return name
    path = os.path.splitext(os.path.abspath(name))[0]
    parts = path.split(os.sep)
    return ".".join(parts[-2:])


def setup_logger(
    name: str,
    log_dir: str = "logs",
    log_file: str = "debug.log",
    *,
    logger_level: int = logging.DEBUG,
    file_level: int = logging.DEBUG,
    console_level: int = None,
    propagate: bool = False,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Создаёт и настраивает логгер.

    Args:
        name: имя логгера; обычно ``__file__`` модуля
        log_dir: папка для логов относительно корня проекта
        log_file: имя файла лога
        logger_level: общий уровень логгера
        file_level: уровень записи в файл
        console_level: уровень вывода в консоль; по умолчанию RECORDRTC_LOG_LEVEL или INFO
        propagate: передавать ли записи родительскому логгеру
        max_bytes: размер файла до ротации
        backup_count: количество резервных копий

    Example:
        >>> views_logger = setup_logger(name=__file__, log_dir="logs/questions", log_file="views.log")
        >>> views_logger.info("Question 12 saved")
    """
    logger = logging.getLogger(_logger_name(name))

    if logger.handlers:
        return logger

    logger.setLevel(logger_level)
    logger.propagate = propagate

    if console_level is None:
        console_level = logging.getLevelName(os.getenv("RECORDRTC_LOG_LEVEL", "INFO").upper())
        if not isinstance(console_level, int):
            console_level = logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredFormatter(
        "%(log_color)s" + LOG_FORMAT,
        datefmt="%H:%M:%S",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        },
    ))
    logger.addHandler(console_handler)

    if os.getenv("RECORDRTC_LOG_TO_FILE", "True") == "True":
        log_dir_abs = os.path.join(PROJECT_ROOT, log_dir)
        os.makedirs(log_dir_abs, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir_abs, log_file),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
