"""
Проверка наличия внешней среды выполнения (Java).

`java -version` пишет баннер версии в stderr, а не в stdout.
Это особенность самой Java, поэтому версия берется именно из stderr.
"""

import asyncio
import logging
from typing import Optional, Sequence

from jar_launcher.core.cancellation import CancellationToken, first_settled
from jar_launcher.shared.exceptions import UserCancelledError
from jar_launcher.shared.primitives import RuntimeStatus

logger = logging.getLogger(__name__)

DEFAULT_PROBE_COMMAND = ("java", "-version")


async def probe_runtime(
    command: Sequence[str] = DEFAULT_PROBE_COMMAND,
    token: Optional[CancellationToken] = None,
) -> RuntimeStatus:
    """
    Запускает команду проверки версии и определяет, доступна ли среда.

    Args:
        command (Sequence[str]): Команда проверки (argv).
        token (Optional[CancellationToken]): Токен отмены. Ожидание процесса
            не блокирует обработку Ctrl+C.

    Returns:
        RuntimeStatus: Available(текст из stderr) при коде 0, иначе Unavailable.

    Raises:
        UserCancelledError: Если проверку прервали токеном (процесс убивается).
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.info(f"Команда проверки среды не запустилась ({' '.join(command)}): {e}")
        return RuntimeStatus.unavailable()

    if token is None:
        _, stderr = await process.communicate()
    else:
        winner, output = await first_settled(token.wait(), process.communicate())
        if winner == 0:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise UserCancelledError()
        _, stderr = output

    if process.returncode != 0:
        logger.info(f"Проверка среды завершилась с кодом {process.returncode}")
        return RuntimeStatus.unavailable()

    version = stderr.decode(errors="replace")
    logger.debug(f"Версия среды: {version.strip()}")
    return RuntimeStatus.available(version)
