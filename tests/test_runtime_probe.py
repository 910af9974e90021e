"""
Тесты проверки среды выполнения.

Вместо java используется текущий интерпретатор Python (sys.executable),
который имитирует поведение `java -version` (баннер в stderr).
"""

import asyncio
import sys
import time

import pytest

from jar_launcher.core.cancellation import CancellationToken
from jar_launcher.infrastructure.process.probe import probe_runtime
from jar_launcher.shared.exceptions import UserCancelledError

FAKE_BANNER = 'openjdk version "17.0.2" 2022-01-18'


@pytest.mark.asyncio
async def test_probe_reads_version_from_stderr():
    command = (
        sys.executable, "-c",
        f"import sys; print('ignored stdout'); sys.stderr.write({FAKE_BANNER!r})",
    )

    status = await probe_runtime(command)

    assert status.is_available
    assert status.version == FAKE_BANNER


@pytest.mark.asyncio
async def test_probe_nonzero_exit_is_unavailable():
    status = await probe_runtime((sys.executable, "-c", "import sys; sys.exit(3)"))

    assert not status.is_available
    assert status.version is None


@pytest.mark.asyncio
async def test_probe_missing_binary_is_unavailable():
    status = await probe_runtime(("definitely-not-a-real-runtime-7f3a", "-version"))

    assert not status.is_available


@pytest.mark.asyncio
async def test_probe_with_token_completes_normally():
    token = CancellationToken()

    status = await probe_runtime((sys.executable, "-c", "pass"), token)

    assert status.is_available
    assert status.version == ""


@pytest.mark.asyncio
async def test_probe_can_be_interrupted():
    """Зависшая проверка прерывается токеном, процесс убивается."""
    token = CancellationToken()
    asyncio.get_running_loop().call_later(0.2, token.cancel)
    started = time.monotonic()

    with pytest.raises(UserCancelledError):
        await probe_runtime((sys.executable, "-c", "import time; time.sleep(30)"), token)

    assert time.monotonic() - started < 10
