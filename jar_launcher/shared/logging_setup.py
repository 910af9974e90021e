"""
Настройка логирования.

Логи пишутся в stderr, чтобы не смешиваться с таблицей найденных файлов
и с выводом запущенного JAR (он идет в stdout).
"""

import logging
import sys
from typing import Union


def setup_global_logging(log_level: Union[int, str] = logging.WARNING):
    """
    Настройка корневого логгера приложения.

    Args:
        log_level (int | str): Уровень логирования (DEBUG, INFO, WARNING...).
            Допускается строковое имя уровня из конфига.
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Удаляем старые хендлеры, чтобы избежать дублирования логов
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # asyncio пишет DEBUG про селекторы и подпроцессы, это шум
    logging.getLogger('asyncio').setLevel(logging.WARNING)
