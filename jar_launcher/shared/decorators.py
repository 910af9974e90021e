"""
Модуль-декоратор для безопасного запуска точек входа.
"""

import sys
import asyncio
import logging
import inspect
import functools
from typing import Callable, Any

from jar_launcher.shared.config import config
from jar_launcher.shared.logging_setup import setup_global_logging

CANCEL_NOTICE = "\n\n❌ Запуск отменен"


def safe_entry(func: Callable) -> Callable:
    """
    Декоратор для main-функции лаунчера.

    Автоматически выполняет:
    1. Инициализирует глобальное логирование.
    2. Определение типа функции (async/sync) и корректный запуск.
    3. Глобальный перехват ошибок (Try/Except) и перевод результата в код выхода.

    Политику цикла событий на Windows не меняем: подпроцессам asyncio
    там нужен Proactor, а он используется по умолчанию.

    Args:
        func (Callable): Целевая функция `main`, возвращающая код выхода
            (может быть как `def`, так и `async def`).

    Returns:
        Callable: Обернутая функция, которая завершает процесс через `sys.exit`.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        # Логирование
        setup_global_logging(config.LOG_LEVEL)
        logger = logging.getLogger("jar_launcher")

        # Запуск
        try:
            if inspect.iscoroutinefunction(func):
                exit_code = asyncio.run(func(*args, **kwargs))
            else:
                exit_code = func(*args, **kwargs)

        except KeyboardInterrupt:
            # Ctrl+C прошел мимо токена отмены (Windows или до старта цикла)
            print(CANCEL_NOTICE)
            sys.exit(0)

        except Exception as e:
            logger.critical(f"🔥 Критическая ошибка: {e}", exc_info=True)
            sys.exit(1)

        sys.exit(exit_code or 0)

    return wrapper
