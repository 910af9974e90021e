import logging
from pathlib import Path

from jar_launcher.core.cancellation import CancellationToken
from jar_launcher.flows.execution import ensure_runtime, execute_decision
from jar_launcher.shared.config import AppConfig
from jar_launcher.shared.interfaces import LauncherView
from jar_launcher.shared.primitives import LaunchDecision, ScanResult

logger = logging.getLogger(__name__)


async def run_start_flow(
    path: Path,
    settings: AppConfig,
    view: LauncherView,
    token: CancellationToken,
) -> int:
    """
    Режим `--start <path>`: без сканирования и выбора.

    Сначала проверяется Java. Если ее нет, запуск даже не пытаемся делать.

    Returns:
        int: 0 при успешном завершении JAR.

    Raises:
        RuntimeUnavailableError: Java не найдена.
        LaunchFailedError: JAR не запустился или завершился с ошибкой.
    """
    logger.info(f"Прямой запуск: {path}")
    await ensure_runtime(settings, view, token)
    await execute_decision(LaunchDecision.by_path(path), ScanResult(), settings, view, token)
    return 0
