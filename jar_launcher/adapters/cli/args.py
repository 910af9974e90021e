"""
Аргументы командной строки.

    python launcher.py                  интерактивный режим (сканирование + таймер)
    python launcher.py --scan           только сканирование и список
    python launcher.py --start <path>   прямой запуск указанного JAR
    python launcher.py --help           справка
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

USAGE_HINT = "Используйте --help для просмотра справки"


class LauncherArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser с кодом выхода 1 для неверных аргументов
    (стандартный argparse выходит с кодом 2).
    """

    def error(self, message: str):
        sys.stderr.write(f"❌ {message}\n{USAGE_HINT}\n")
        sys.exit(1)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"ожидается целое число, получено '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError("значение должно быть не меньше 1")
    return number


def build_parser() -> LauncherArgumentParser:
    parser = LauncherArgumentParser(
        prog="jar-launcher",
        description="🟢 JAR Launcher: поиск и запуск JAR-файлов.",
    )
    parser.add_argument(
        "-s", "--scan",
        action="store_true",
        help="🔍 Просканировать текущий каталог и показать найденные JAR-файлы",
    )
    parser.add_argument(
        "-r", "--start",
        metavar="<path>",
        type=Path,
        help="🚀 Запустить JAR-файл по указанному пути",
    )
    parser.add_argument(
        "-d", "--dir",
        metavar="<path>",
        type=Path,
        default=None,
        help="📁 Каталог для сканирования (по умолчанию текущий)",
    )
    parser.add_argument(
        "-c", "--countdown",
        metavar="<seconds>",
        type=_positive_int,
        default=None,
        help="⏳ Длительность отсчета до автозапуска (секунды)",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Разбирает аргументы. `--help` завершает процесс с кодом 0,
    неизвестный флаг - с кодом 1 (сообщение в stderr).
    """
    return build_parser().parse_args(argv)
