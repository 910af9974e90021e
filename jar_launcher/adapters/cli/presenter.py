"""
Консольное отображение на базе `rich`.

Только вывод: баннер, статус Java, таблица найденных файлов, меню,
тики таймера, команда запуска и сообщения об ошибках. Обратно в ядро
ничего не передается.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from jar_launcher.core.formatting import format_size, format_timestamp
from jar_launcher.shared.interfaces import LauncherView
from jar_launcher.shared.primitives import (
    DecisionKind,
    LaunchDecision,
    LaunchOutcome,
    RuntimeStatus,
    ScanResult,
)

RULE_WIDTH = 80


class ConsolePresenter(LauncherView):
    """
    Реализация `LauncherView` для терминала.

    Обычные сообщения идут в stdout, ошибки - в stderr.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)

    def show_banner(self) -> None:
        self.console.rule("[bold green]🚀 JAR Launcher - кроссплатформенный запуск JAR-файлов 🚀[/bold green]")
        self.console.print("📝 Находит JAR-файлы и автоматически запускает первый после отсчета")
        self.console.print("⌨️  Поддерживает аргументы командной строки, см. --help\n")

    def show_runtime_status(self, status: RuntimeStatus) -> None:
        if status.is_available:
            self.console.print("[green]✅ Java обнаружена:[/green]")
            self.console.print((status.version or "").strip(), markup=False)
        else:
            self.error_console.print(
                "[bold red]❌ Ошибка: Java не обнаружена, установите Java Runtime Environment[/bold red]"
            )

    def show_scan_started(self, root: Path) -> None:
        self.console.print(f"\n🔍 Сканирование каталога: {root}", markup=False)

    def show_scan_result(self, result: ScanResult) -> None:
        if not result:
            self.console.print("[yellow]❌ JAR-файлы не найдены[/yellow]")
            return

        table = Table(title="📦 Найденные JAR-файлы", width=RULE_WIDTH, show_lines=True)
        table.add_column("№", justify="right", style="bold")
        table.add_column("Файл")
        table.add_column("Путь", overflow="fold")
        table.add_column("Размер", justify="right")
        table.add_column("Изменен")

        for number, candidate in enumerate(result, start=1):
            table.add_row(
                str(number),
                candidate.name,
                str(candidate.path),
                format_size(candidate.size),
                format_timestamp(candidate.modified_at),
            )
        self.console.print(table)

        if result.skipped:
            self.console.print(f"[yellow]⚠️  Пропущено нечитаемых каталогов: {len(result.skipped)}[/yellow]")

    def show_menu(self, candidates: ScanResult, countdown_seconds: int) -> None:
        self.console.print("\n[bold]Выберите действие:[/bold]")
        self.console.print(f"  1. Выбрать файл по номеру (1-{len(candidates)})")
        self.console.print(f"  2. Запустить первый файл: {candidates[0].name}", markup=False)
        self.console.print("  3. Выход")
        self.console.print(
            f"Без ответа первый файл запустится через {countdown_seconds} с. (Ctrl+C - отмена)"
        )

    def show_countdown(self, remaining: int) -> None:
        self.console.print(f"⏳ Запуск первого JAR-файла через {remaining} с...")

    def show_countdown_finished(self) -> None:
        self.console.print("[green]✅ Отсчет завершен, запускаем JAR-файл![/green]")

    def show_decision(self, decision: LaunchDecision, target: Path) -> None:
        if decision.kind == DecisionKind.TIMED_OUT_DEFAULT:
            self.console.print(f"▶️  Запуск по умолчанию: {target}", markup=False)
        else:
            self.console.print(f"▶️  Выбран файл: {target}", markup=False)

    def show_launch(self, command: str, path: Path) -> None:
        self.console.print("\n[bold]🚀 Запуск JAR-файла...[/bold]")
        self.console.print(f"📌 Путь: {path}", markup=False)
        self.console.print(f"💻 Команда: {command}", markup=False)
        self.console.rule()

    def show_launch_finished(self, outcome: LaunchOutcome) -> None:
        self.console.rule()
        self.console.print(f"[green]✅ Процесс завершен (код {outcome.returncode})[/green]")

    def show_cancelled(self) -> None:
        self.console.print("\n\n[yellow]❌ Запуск отменен[/yellow]")

    def show_error(self, message: str) -> None:
        self.error_console.print(f"[bold red]❌ {message}[/bold red]")
