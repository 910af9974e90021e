import asyncio
from pathlib import Path
from typing import List, Optional

import pytest

from jar_launcher.shared.config import AppConfig
from jar_launcher.shared.interfaces import LauncherView, LineReader

# Маркер для ScriptedReader: "пользователь ничего не вводит"
NO_INPUT = object()


class ScriptedReader(LineReader):
    """
    Заглушка ввода: отдает ответы по списку.

    `NO_INPUT` означает, что чтение висит, пока его не отменят.
    Счетчики позволяют проверить, что проигравшие чтения были отменены.
    """

    def __init__(self, answers: Optional[List[object]] = None):
        self.answers = list(answers or [])
        self.prompts: List[str] = []
        self.cancelled_reads = 0
        self.active_reads = 0

    async def read_line(self, message: str) -> Optional[str]:
        self.prompts.append(message)
        answer = self.answers.pop(0) if self.answers else NO_INPUT
        self.active_reads += 1
        try:
            if answer is NO_INPUT:
                await asyncio.Event().wait()
            await asyncio.sleep(0)
            return answer
        except asyncio.CancelledError:
            self.cancelled_reads += 1
            raise
        finally:
            self.active_reads -= 1


class RecordingView(LauncherView):
    """Заглушка отображения: запоминает все вызовы в `calls`."""

    def __init__(self):
        self.calls: List[tuple] = []

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def args_of(self, name: str) -> List[tuple]:
        return [call[1:] for call in self.calls if call[0] == name]

    def show_banner(self):
        self.calls.append(("banner",))

    def show_runtime_status(self, status):
        self.calls.append(("runtime_status", status))

    def show_scan_started(self, root):
        self.calls.append(("scan_started", root))

    def show_scan_result(self, result):
        self.calls.append(("scan_result", result))

    def show_menu(self, candidates, countdown_seconds):
        self.calls.append(("menu", len(candidates), countdown_seconds))

    def show_countdown(self, remaining):
        self.calls.append(("countdown", remaining))

    def show_countdown_finished(self):
        self.calls.append(("countdown_finished",))

    def show_decision(self, decision, target):
        self.calls.append(("decision", decision, target))

    def show_launch(self, command, path):
        self.calls.append(("launch", command, path))

    def show_launch_finished(self, outcome):
        self.calls.append(("launch_finished", outcome))

    def show_cancelled(self):
        self.calls.append(("cancelled",))

    def show_error(self, message):
        self.calls.append(("error", message))


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def fast_settings() -> AppConfig:
    """Настройки с коротким отсчетом (тик 10 мс), чтобы тесты шли быстро."""
    return AppConfig(
        COUNTDOWN_SECONDS=3,
        COUNTDOWN_TICK_SECONDS=0.01,
        TERMINATE_GRACE_SECONDS=2.0,
        RUNTIME_COMMAND="java",
        ARCHIVE_SUFFIX=".jar",
        FOLLOW_SYMLINKS=False,
    )


@pytest.fixture
def jar_tree(tmp_path) -> Path:
    """
    Создает дерево каталогов с JAR-файлами и посторонними файлами.

        root/
            app.jar
            README.txt
            libs/
                Core.JAR
                core.jar.bak
                nested/
                    tool.Jar
            archive.jar/          <- каталог, а не файл
                inner.jar
    """
    root = tmp_path / "root"
    (root / "libs" / "nested").mkdir(parents=True)
    (root / "archive.jar").mkdir()

    (root / "app.jar").write_bytes(b"x" * 10)
    (root / "README.txt").write_text("not a jar", encoding="utf-8")
    (root / "libs" / "Core.JAR").write_bytes(b"x" * 2048)
    (root / "libs" / "core.jar.bak").write_bytes(b"x")
    (root / "libs" / "nested" / "tool.Jar").write_bytes(b"")
    (root / "archive.jar" / "inner.jar").write_bytes(b"x" * 3)
    return root
