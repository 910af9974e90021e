"""
Форматирование значений для отображения (размеры файлов, даты).
"""

import math
from datetime import datetime

SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
SIZE_BASE = 1024


def format_size(size_bytes: int) -> str:
    """
    Переводит размер в байтах в человекочитаемую строку.

    Значение округляется до двух знаков, незначащие нули отбрасываются:
    1024 -> "1 KB", 1536 -> "1.5 KB". Все, что больше, показывается в GB.

    Args:
        size_bytes (int): Размер файла в байтах (неотрицательный).

    Returns:
        str: Строка вида "<число> <единица>".
    """
    if size_bytes <= 0:
        return "0 Bytes"

    tier = min(int(math.floor(math.log(size_bytes, SIZE_BASE))), len(SIZE_UNITS) - 1)
    # log() с плавающей точкой может ошибиться на границе тира (например, 1024**3)
    if tier + 1 < len(SIZE_UNITS) and size_bytes >= SIZE_BASE ** (tier + 1):
        tier += 1
    elif tier > 0 and size_bytes < SIZE_BASE ** tier:
        tier -= 1

    value = round(size_bytes / SIZE_BASE ** tier, 2)
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[tier]}"


def format_timestamp(moment: datetime) -> str:
    """Дата изменения файла в локальном формате для таблицы."""
    return moment.strftime("%Y-%m-%d %H:%M:%S")
