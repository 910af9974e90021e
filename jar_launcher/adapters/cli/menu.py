"""
Логика CLI лаунчера (CLI Controller).

Этот модуль:
1. Разбирает аргументы командной строки.
2. Создает общий токен отмены и привязывает к нему SIGINT/SIGTERM.
3. Выбирает поток (сканирование, прямой запуск или интерактивный режим).
4. Переводит ошибки лаунчера в сообщение пользователю и код выхода.

Роль в архитектуре:
    Связующее звено между пользователем (консоль) и ядром (сканер, селектор, запуск).
"""

import asyncio
import logging
import signal
import sys
from typing import List, Optional

from jar_launcher.adapters.cli.args import parse_args
from jar_launcher.adapters.cli.input_reader import QuestionaryLineReader
from jar_launcher.adapters.cli.presenter import ConsolePresenter
from jar_launcher.core.cancellation import CancellationToken
from jar_launcher.flows.interactive_flow import run_interactive_flow
from jar_launcher.flows.scan_flow import run_scan_flow
from jar_launcher.flows.start_flow import run_start_flow
from jar_launcher.shared.config import AppConfig, config
from jar_launcher.shared.decorators import safe_entry
from jar_launcher.shared.exceptions import LauncherError, UserCancelledError
from jar_launcher.shared.interfaces import LauncherView, LineReader

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, token: CancellationToken) -> List[int]:
    """
    Регистрирует обработчики сигналов ОС, которые только взводят токен.
    На Windows add_signal_handler не поддерживается, там Ctrl+C
    приходит как KeyboardInterrupt и обрабатывается в `safe_entry`.
    """
    if sys.platform == "win32":
        return []

    installed = []
    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, token.cancel)
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            logger.debug(f"Не удалось установить обработчик сигнала {sig}: {e}")
    return installed


def _remove_signal_handlers(loop: asyncio.AbstractEventLoop, installed: List[int]) -> None:
    for sig in installed:
        loop.remove_signal_handler(sig)


async def main(
    argv: Optional[List[str]] = None,
    settings: Optional[AppConfig] = None,
    view: Optional[LauncherView] = None,
    reader: Optional[LineReader] = None,
) -> int:
    """
    Асинхронная точка входа CLI.

    Args:
        argv: Аргументы (по умолчанию sys.argv[1:]).
        settings: Конфигурация (по умолчанию глобальный `config`).
        view: Слой отображения (по умолчанию rich-консоль).
        reader: Источник ввода (по умолчанию questionary).

    Returns:
        int: Код выхода процесса.
    """
    args = parse_args(argv)

    settings = settings or config
    if args.countdown is not None:
        settings = settings.model_copy(update={"COUNTDOWN_SECONDS": args.countdown})
    view = view or ConsolePresenter()
    root = args.dir or settings.SCAN_ROOT

    token = CancellationToken()
    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, token)

    try:
        view.show_banner()

        # --scan имеет приоритет над --start
        if args.scan:
            return run_scan_flow(root, settings, view)

        if args.start is not None:
            return await run_start_flow(args.start, settings, view, token)

        return await run_interactive_flow(
            root, settings, view, reader or QuestionaryLineReader(), token
        )

    except UserCancelledError:
        view.show_cancelled()
        return 0

    except LauncherError as e:
        logger.info(f"Завершение с ошибкой {type(e).__name__}: {e}")
        view.show_error(str(e))
        return e.exit_code

    finally:
        _remove_signal_handlers(loop, installed)


@safe_entry
async def cli_entry() -> int:
    """
    Точка входа консольного скрипта `jar-launcher` и `python launcher.py`.
    Завершает процесс через `sys.exit` с кодом из `main`.
    """
    return await main()
