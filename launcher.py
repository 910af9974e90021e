"""
Вход в приложение (Launcher).

Без аргументов запускает интерактивный режим: поиск JAR-файлов в текущем
каталоге и автозапуск первого после отсчета.

Запуск:
    python launcher.py [--scan | --start <path> | --help]

После `pip install` та же точка входа доступна как команда `jar-launcher`.
"""

import sys
import os

# Добавляем текущую директорию (корень проекта) в начало sys.path.
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from jar_launcher.adapters.cli.menu import cli_entry


if __name__ == "__main__":
    cli_entry()
