"""
Запуск JAR-файла как дочернего процесса.

Команда строится по шаблону для текущей ОС и выполняется как вектор
аргументов (без shell), поэтому пробелы и спецсимволы в пути безопасны.
Вывод дочернего процесса (stdout и stderr) пересылается в терминал
родителя "вживую", по мере поступления, до завершения процесса.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

from jar_launcher.core.cancellation import CancellationToken, first_settled
from jar_launcher.shared.exceptions import LaunchFailedError, UnsupportedPlatformError, UserCancelledError
from jar_launcher.shared.primitives import LaunchOutcome

logger = logging.getLogger(__name__)

# Шаблоны команд по платформам (значения sys.platform).
# Сейчас они одинаковые, но отдельные записи позволяют развести их при необходимости.
LAUNCH_TEMPLATES: Dict[str, Tuple[str, ...]] = {
    "win32": ("{runtime}", "-jar", "{path}"),
    "darwin": ("{runtime}", "-jar", "{path}"),
    "linux": ("{runtime}", "-jar", "{path}"),
}

CHUNK_SIZE = 64 * 1024
DEFAULT_GRACE_SECONDS = 3.0


def _template_for(platform: Optional[str]) -> Tuple[str, ...]:
    platform = platform or sys.platform
    template = LAUNCH_TEMPLATES.get(platform)
    if template is None:
        raise UnsupportedPlatformError(platform)
    return template


def build_command(
    path: Union[str, Path],
    runtime: str = "java",
    platform: Optional[str] = None,
) -> Tuple[str, ...]:
    """
    Собирает argv для запуска JAR.

    Raises:
        UnsupportedPlatformError: Для платформы нет шаблона.
    """
    return tuple(part.format(runtime=runtime, path=str(path)) for part in _template_for(platform))


def render_command(
    path: Union[str, Path],
    runtime: str = "java",
    platform: Optional[str] = None,
) -> str:
    """Строка команды для показа пользователю: java -jar "<путь>"."""
    return " ".join(
        part.format(runtime=runtime, path=f'"{path}"') for part in _template_for(platform)
    )


async def launch(
    path: Union[str, Path],
    token: CancellationToken,
    runtime: str = "java",
    platform: Optional[str] = None,
    stdout: Optional[BinaryIO] = None,
    stderr: Optional[BinaryIO] = None,
    grace_seconds: float = DEFAULT_GRACE_SECONDS,
) -> LaunchOutcome:
    """
    Запускает JAR и ждет его завершения, пересылая вывод в терминал.

    Args:
        path: Путь к JAR-файлу.
        token (CancellationToken): Токен отмены. При отмене процесс завершается.
        runtime (str): Исполняемый файл среды (java).
        platform (Optional[str]): Платформа (по умолчанию sys.platform).
        stdout, stderr: Куда пересылать вывод (по умолчанию потоки родителя).
        grace_seconds (float): Сколько ждать после terminate перед kill.

    Returns:
        LaunchOutcome: Итог при успешном завершении (код 0).

    Raises:
        UnsupportedPlatformError: Для ОС нет шаблона команды.
        LaunchFailedError: Процесс не стартовал или вернул ненулевой код.
        UserCancelledError: Запуск прерван токеном отмены.
    """
    command = build_command(path, runtime=runtime, platform=platform)
    logger.info(f"Запуск: {command}")

    outcome = await run_streaming(
        command, token, stdout=stdout, stderr=stderr, grace_seconds=grace_seconds
    )

    if outcome.signal is not None:
        raise LaunchFailedError(f"Ошибка запуска: процесс завершен сигналом {outcome.signal}", outcome.returncode)
    if not outcome.succeeded:
        raise LaunchFailedError(f"Ошибка запуска: процесс завершился с кодом {outcome.returncode}", outcome.returncode)
    return outcome


async def run_streaming(
    command: Tuple[str, ...],
    token: CancellationToken,
    stdout: Optional[BinaryIO] = None,
    stderr: Optional[BinaryIO] = None,
    grace_seconds: float = DEFAULT_GRACE_SECONDS,
) -> LaunchOutcome:
    """
    Запускает произвольную команду с живой пересылкой stdout/stderr.

    Код завершения не интерпретируется, это делает `launch`.

    Raises:
        LaunchFailedError: Процесс не удалось запустить.
        UserCancelledError: Токен отмены взведен до завершения процесса или
            одновременно с ним (процесс сам завершился от того же Ctrl+C).
    """
    stdout_sink = stdout if stdout is not None else sys.stdout.buffer
    stderr_sink = stderr if stderr is not None else sys.stderr.buffer

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise LaunchFailedError(f"Ошибка запуска: не удалось запустить процесс: {e}") from e

    forwarders = [
        asyncio.create_task(_forward(process.stdout, stdout_sink)),
        asyncio.create_task(_forward(process.stderr, stderr_sink)),
    ]

    try:
        winner, _ = await first_settled(token.wait(), process.wait())
    except asyncio.CancelledError:
        # Отменили саму задачу запуска: не оставляем процесс и пересылку
        await _terminate(process, grace_seconds)
        await _drain(forwarders, timeout=0)
        raise

    if winner == 0:
        logger.info("Отмена во время работы процесса, завершаем его")
        await _terminate(process, grace_seconds)
        await _drain(forwarders, timeout=grace_seconds)
        raise UserCancelledError()

    stdout_bytes, stderr_bytes = await _drain(forwarders, timeout=None)
    logger.info(f"Процесс завершился с кодом {process.returncode}")

    if token.cancelled:
        # Ctrl+C из терминала получил и дочерний процесс, он завершился раньше, чем сработал токен
        raise UserCancelledError()

    return LaunchOutcome(
        command=tuple(command),
        returncode=process.returncode,
        stdout_bytes=stdout_bytes,
        stderr_bytes=stderr_bytes,
    )


async def _forward(reader: asyncio.StreamReader, sink: BinaryIO) -> int:
    """Копирует поток дочернего процесса в поток родителя, чанк за чанком."""
    total = 0
    while True:
        chunk = await reader.read(CHUNK_SIZE)
        if not chunk:
            return total
        sink.write(chunk)
        sink.flush()
        total += len(chunk)


async def _drain(forwarders: List[asyncio.Task], timeout: Optional[float]) -> Tuple[int, ...]:
    """
    Дожидается окончания пересылки (или таймаута) и возвращает счетчики байт.
    Незавершенные пересылки отменяются.
    """
    if timeout is None or timeout > 0:
        await asyncio.wait(forwarders, timeout=timeout)

    for task in forwarders:
        if not task.done():
            task.cancel()
    results = await asyncio.gather(*forwarders, return_exceptions=True)

    counts = []
    for result in results:
        if isinstance(result, BaseException):
            if not isinstance(result, asyncio.CancelledError):
                logger.error(f"Ошибка пересылки вывода процесса: {result}")
            counts.append(0)
        else:
            counts.append(result)
    return tuple(counts)


async def _terminate(process: asyncio.subprocess.Process, grace_seconds: float) -> None:
    """terminate, затем kill, если процесс не завершился за отведенное время."""
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return

    try:
        await asyncio.wait_for(process.wait(), timeout=grace_seconds)
    except asyncio.TimeoutError:
        logger.warning(f"Процесс {process.pid} не завершился за {grace_seconds} с, kill")
        process.kill()
        await process.wait()
