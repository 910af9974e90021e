"""
Интерфейсы и абстракции (Ports).

Ядро (сканер, селектор, запускатель) не зависит от того, как именно
читается ввод и рисуется вывод. Конкретные реализации лежат
в `jar_launcher.adapters.cli` (questionary + rich), в тестах их
заменяют заглушками.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from jar_launcher.shared.primitives import LaunchDecision, LaunchOutcome, RuntimeStatus, ScanResult


class LineReader(ABC):
    """
    Источник пользовательского ввода (одна строка за вызов).
    """

    @abstractmethod
    async def read_line(self, message: str) -> Optional[str]:
        """
        Запрашивает одну строку у пользователя.

        Реализация обязана корректно прерываться при отмене задачи
        (`asyncio.CancelledError`), не оставляя висящего чтения.

        Args:
            message (str): Текст приглашения.

        Returns:
            Optional[str]: Введенная строка или None, если ввод прерван/закрыт.
        """
        raise NotImplementedError


class LauncherView(ABC):
    """
    Слой отображения. Только показывает данные, ничего не возвращает в ядро.
    """

    @abstractmethod
    def show_banner(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_runtime_status(self, status: RuntimeStatus) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_scan_started(self, root: Path) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_scan_result(self, result: ScanResult) -> None:
        """Таблица найденных файлов (или сообщение, что ничего не найдено)."""
        raise NotImplementedError

    @abstractmethod
    def show_menu(self, candidates: ScanResult, countdown_seconds: int) -> None:
        """Пункты меню селектора: 1 - выбор по номеру, 2 - запуск первого, 3 - выход."""
        raise NotImplementedError

    @abstractmethod
    def show_countdown(self, remaining: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_countdown_finished(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_decision(self, decision: LaunchDecision, target: Path) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_launch(self, command: str, path: Path) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_launch_finished(self, outcome: LaunchOutcome) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_cancelled(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def show_error(self, message: str) -> None:
        raise NotImplementedError
