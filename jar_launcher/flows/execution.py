"""
Общие шаги потоков: проверка Java и исполнение решения о запуске.
"""

import logging
from typing import Optional

from jar_launcher.core.cancellation import CancellationToken
from jar_launcher.infrastructure.process.launcher import launch, render_command
from jar_launcher.infrastructure.process.probe import probe_runtime
from jar_launcher.shared.config import AppConfig
from jar_launcher.shared.exceptions import RuntimeUnavailableError
from jar_launcher.shared.interfaces import LauncherView
from jar_launcher.shared.primitives import LaunchDecision, LaunchOutcome, RuntimeStatus, ScanResult

logger = logging.getLogger(__name__)


async def ensure_runtime(
    settings: AppConfig,
    view: LauncherView,
    token: CancellationToken,
) -> RuntimeStatus:
    """
    Проверяет Java перед любой попыткой запуска.

    Raises:
        RuntimeUnavailableError: Java не найдена (код выхода 1).
        UserCancelledError: Проверку прервали.
    """
    status = await probe_runtime(settings.PROBE_COMMAND, token)
    view.show_runtime_status(status)
    if not status.is_available:
        raise RuntimeUnavailableError(settings.RUNTIME_COMMAND)
    return status


async def execute_decision(
    decision: LaunchDecision,
    candidates: ScanResult,
    settings: AppConfig,
    view: LauncherView,
    token: CancellationToken,
    platform: Optional[str] = None,
) -> LaunchOutcome:
    """
    Запускает файл, на который указывает решение, и ждет завершения процесса.

    Raises:
        UnsupportedPlatformError, LaunchFailedError, UserCancelledError.
    """
    target = decision.resolve_path(candidates)
    command = render_command(target, runtime=settings.RUNTIME_COMMAND, platform=platform)

    view.show_decision(decision, target)
    view.show_launch(command, target)

    outcome = await launch(
        target,
        token,
        runtime=settings.RUNTIME_COMMAND,
        platform=platform,
        grace_seconds=settings.TERMINATE_GRACE_SECONDS,
    )
    view.show_launch_finished(outcome)
    return outcome
