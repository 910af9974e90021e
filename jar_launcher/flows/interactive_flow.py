"""
Интерактивный поток (запуск без аргументов).

Алгоритм:
1. Проверка Java (без нее дальше не идем, код 1).
2. Сканирование каталога и таблица найденных файлов.
3. Если файлов нет - выходим с кодом 0, селектор не запускается.
4. Селектор: отсчет против ввода пользователя.
5. Запуск выбранного файла с живым выводом в терминал.
"""

import logging
from pathlib import Path

from jar_launcher.core.cancellation import CancellationToken
from jar_launcher.core.selector import InteractiveSelector
from jar_launcher.flows.execution import ensure_runtime, execute_decision
from jar_launcher.flows.scan_flow import discover
from jar_launcher.shared.config import AppConfig
from jar_launcher.shared.interfaces import LauncherView, LineReader

logger = logging.getLogger(__name__)


async def run_interactive_flow(
    root: Path,
    settings: AppConfig,
    view: LauncherView,
    reader: LineReader,
    token: CancellationToken,
) -> int:
    """
    Returns:
        int: 0 при успешном запуске, отмене или пустом результате сканирования.

    Raises:
        RuntimeUnavailableError, InvalidSelectionError, LaunchFailedError,
        UnsupportedPlatformError, UserCancelledError.
    """
    await ensure_runtime(settings, view, token)

    candidates = discover(root, settings, view)
    if not candidates:
        logger.info("Файлы не найдены, запускать нечего")
        return 0

    selector = InteractiveSelector(
        candidates,
        reader,
        token,
        view,
        countdown_seconds=settings.COUNTDOWN_SECONDS,
        tick_interval=settings.COUNTDOWN_TICK_SECONDS,
    )
    decision = await selector.run()
    logger.info(f"Селектор завершился в состоянии {selector.state}, решение: {decision.kind}")

    if decision.is_cancelled:
        view.show_cancelled()
        return 0

    await execute_decision(decision, candidates, settings, view, token)
    return 0
