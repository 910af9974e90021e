import logging
from pathlib import Path

from jar_launcher.core.scanner import scan
from jar_launcher.shared.config import AppConfig
from jar_launcher.shared.interfaces import LauncherView
from jar_launcher.shared.primitives import ScanResult

logger = logging.getLogger(__name__)


def discover(root: Path, settings: AppConfig, view: LauncherView) -> ScanResult:
    """Сканирует каталог по настройкам и показывает результат."""
    view.show_scan_started(root)
    result = scan(root, suffix=settings.ARCHIVE_SUFFIX, follow_symlinks=settings.FOLLOW_SYMLINKS)
    view.show_scan_result(result)
    return result


def run_scan_flow(root: Path, settings: AppConfig, view: LauncherView) -> int:
    """
    Режим `--scan`: только сканирование и вывод списка.

    Returns:
        int: Код выхода (всегда 0, частичный результат тоже успех).
    """
    result = discover(root, settings, view)
    logger.info(f"Режим сканирования завершен, найдено {len(result)} файлов")
    return 0
