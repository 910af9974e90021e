"""
Сквозные тесты CLI-контроллера.

Java и реальный запуск подменяются через monkeypatch в модуле
`jar_launcher.flows.execution`, отображение и ввод - заглушками из conftest.
"""

import asyncio
import os
import signal
import sys
from pathlib import Path

import pytest

from conftest import NO_INPUT, ScriptedReader
from jar_launcher.adapters.cli.args import parse_args
from jar_launcher.adapters.cli.menu import main
from jar_launcher.shared.exceptions import LaunchFailedError
from jar_launcher.shared.primitives import DecisionKind, LaunchOutcome, RuntimeStatus


class FakeRuntime:
    """Подмена probe_runtime и launch с журналом вызовов."""

    def __init__(self, available=True, launch_error=None):
        self.available = available
        self.launch_error = launch_error
        self.probes = 0
        self.launched = []

    async def probe(self, command, token=None):
        self.probes += 1
        if self.available:
            return RuntimeStatus.available('java version "17"')
        return RuntimeStatus.unavailable()

    async def launch(self, path, token, runtime="java", platform=None, stdout=None, stderr=None, grace_seconds=3.0):
        self.launched.append(Path(path))
        if self.launch_error is not None:
            raise self.launch_error
        return LaunchOutcome(command=(runtime, "-jar", str(path)), returncode=0)


@pytest.fixture
def runtime(monkeypatch) -> FakeRuntime:
    fake = FakeRuntime()
    monkeypatch.setattr("jar_launcher.flows.execution.probe_runtime", fake.probe)
    monkeypatch.setattr("jar_launcher.flows.execution.launch", fake.launch)
    return fake


# --- Разбор аргументов ---

def test_parse_args_defaults():
    args = parse_args([])

    assert not args.scan
    assert args.start is None
    assert args.dir is None
    assert args.countdown is None


def test_parse_args_short_flags():
    args = parse_args(["-s", "-r", "my app.jar", "-d", "/opt", "-c", "7"])

    assert args.scan
    assert args.start == Path("my app.jar")
    assert args.dir == Path("/opt")
    assert args.countdown == 7


def test_help_exits_with_zero(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--help"])

    assert exc_info.value.code == 0
    assert "--start" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["--bogus"], ["--start"], ["--countdown", "0"], ["-c", "abc"]])
def test_bad_arguments_exit_with_one(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(argv)

    assert exc_info.value.code == 1
    assert "--help" in capsys.readouterr().err


# --- Режим --start ---

@pytest.mark.asyncio
async def test_start_without_runtime_fails_before_launch(runtime, fast_settings, view):
    runtime.available = False

    code = await main(["--start", "app.jar"], settings=fast_settings, view=view)

    assert code == 1
    assert runtime.launched == []
    assert view.names()[0] == "banner"
    assert view.names()[-1] == "error"


@pytest.mark.asyncio
async def test_start_launches_given_path(runtime, fast_settings, view):
    code = await main(["--start", "some dir/app.jar"], settings=fast_settings, view=view)

    assert code == 0
    assert runtime.launched == [Path("some dir/app.jar")]
    # Без сканирования и меню
    assert "scan_started" not in view.names()
    assert "menu" not in view.names()
    assert view.args_of("launch")[0][0] == 'java -jar "some dir/app.jar"'


@pytest.mark.asyncio
async def test_start_reports_launch_failure(runtime, fast_settings, view):
    runtime.launch_error = LaunchFailedError("Ошибка запуска: процесс завершился с кодом 1", returncode=1)

    code = await main(["--start", "broken.jar"], settings=fast_settings, view=view)

    assert code == 1
    assert view.args_of("error") == [("Ошибка запуска: процесс завершился с кодом 1",)]


# --- Режим --scan ---

@pytest.mark.asyncio
async def test_scan_only_lists_files(runtime, fast_settings, view, jar_tree):
    code = await main(["--scan", "--dir", str(jar_tree)], settings=fast_settings, view=view)

    assert code == 0
    assert runtime.probes == 0
    assert runtime.launched == []
    (result,) = view.args_of("scan_result")[0]
    assert len(result) == 4


@pytest.mark.asyncio
async def test_scan_takes_precedence_over_start(runtime, fast_settings, view, jar_tree):
    code = await main(["--start", "app.jar", "--scan", "-d", str(jar_tree)], settings=fast_settings, view=view)

    assert code == 0
    assert runtime.launched == []


# --- Интерактивный режим ---

@pytest.mark.asyncio
async def test_interactive_without_files_exits_zero(runtime, fast_settings, view, tmp_path):
    reader = ScriptedReader()

    code = await main(["-d", str(tmp_path)], settings=fast_settings, view=view, reader=reader)

    assert code == 0
    assert reader.prompts == []
    assert "menu" not in view.names()
    assert runtime.launched == []


@pytest.mark.asyncio
async def test_interactive_timeout_launches_first_file(runtime, fast_settings, view, jar_tree):
    reader = ScriptedReader([NO_INPUT])

    code = await main(["-d", str(jar_tree)], settings=fast_settings, view=view, reader=reader)

    assert code == 0
    # Первый по имени файл корня
    assert runtime.launched == [jar_tree / "app.jar"]
    decision, _ = view.args_of("decision")[0]
    assert decision.kind == DecisionKind.TIMED_OUT_DEFAULT


@pytest.mark.asyncio
async def test_interactive_choice_by_index(runtime, fast_settings, view, jar_tree):
    settings = fast_settings.model_copy(update={"COUNTDOWN_SECONDS": 100, "COUNTDOWN_TICK_SECONDS": 1.0})
    reader = ScriptedReader(["1", "3"])

    code = await main(["-d", str(jar_tree)], settings=settings, view=view, reader=reader)

    assert code == 0
    # Номер 3 в таблице = третий файл в порядке обхода
    assert runtime.launched == [jar_tree / "libs" / "Core.JAR"]


@pytest.mark.asyncio
async def test_interactive_cancel_choice(runtime, fast_settings, view, jar_tree):
    settings = fast_settings.model_copy(update={"COUNTDOWN_SECONDS": 100, "COUNTDOWN_TICK_SECONDS": 1.0})

    code = await main(["-d", str(jar_tree)], settings=settings, view=view, reader=ScriptedReader(["3"]))

    assert code == 0
    assert runtime.launched == []
    assert "cancelled" in view.names()


@pytest.mark.asyncio
async def test_interactive_invalid_index_exits_one(runtime, fast_settings, view, jar_tree):
    settings = fast_settings.model_copy(update={"COUNTDOWN_SECONDS": 100, "COUNTDOWN_TICK_SECONDS": 1.0})

    code = await main(["-d", str(jar_tree)], settings=settings, view=view, reader=ScriptedReader(["1", "9"]))

    assert code == 1
    assert runtime.launched == []
    assert len(view.args_of("error")) == 1


@pytest.mark.asyncio
async def test_interactive_closed_input_cancels(runtime, fast_settings, view, jar_tree):
    settings = fast_settings.model_copy(update={"COUNTDOWN_SECONDS": 100, "COUNTDOWN_TICK_SECONDS": 1.0})

    code = await main(["-d", str(jar_tree)], settings=settings, view=view, reader=ScriptedReader([None]))

    assert code == 0
    assert runtime.launched == []


@pytest.mark.asyncio
async def test_interactive_without_runtime_skips_scan(runtime, fast_settings, view, jar_tree):
    runtime.available = False
    reader = ScriptedReader()

    code = await main(["-d", str(jar_tree)], settings=fast_settings, view=view, reader=reader)

    assert code == 1
    assert "scan_started" not in view.names()
    assert reader.prompts == []


@pytest.mark.asyncio
async def test_countdown_flag_overrides_settings(runtime, fast_settings, view, jar_tree):
    code = await main(["-d", str(jar_tree), "-c", "2"], settings=fast_settings, view=view, reader=ScriptedReader(["3"]))

    assert code == 0
    assert view.args_of("menu") == [(4, 2)]
    # Исходные настройки не изменились
    assert fast_settings.COUNTDOWN_SECONDS == 3


@pytest.mark.asyncio
@pytest.mark.skipif(sys.platform == "win32", reason="add_signal_handler недоступен на Windows")
async def test_sigint_during_countdown_cancels_launch(runtime, fast_settings, view, jar_tree):
    """Ctrl+C во время отсчета: сообщение об отмене, код 0, запуска нет."""
    settings = fast_settings.model_copy(update={"COUNTDOWN_SECONDS": 100, "COUNTDOWN_TICK_SECONDS": 1.0})
    reader = ScriptedReader([NO_INPUT])
    asyncio.get_running_loop().call_later(0.2, os.kill, os.getpid(), signal.SIGINT)

    code = await asyncio.wait_for(
        main(["-d", str(jar_tree)], settings=settings, view=view, reader=reader),
        timeout=10,
    )

    assert code == 0
    assert runtime.launched == []
    assert view.names()[-1] == "cancelled"
    assert reader.active_reads == 0
