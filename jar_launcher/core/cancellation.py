"""
Примитивы отмены и гонки асинхронных операций.

- `CancellationToken`: единый токен отмены на весь процесс. Обработчик SIGINT
  только взводит токен, а каждая ожидающая операция сама за ним следит.
- `first_settled`: запускает несколько операций и возвращает результат той,
  что завершилась первой. Проигравшие отменяются и дожидаются, чтобы
  не оставалось висящих таймеров и чтений ввода.
- `countdown`: таймер обратного отсчета с колбэком на каждый тик.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from jar_launcher.shared.exceptions import UserCancelledError

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Токен отмены на базе `asyncio.Event`.

    Взводится один раз (Ctrl+C, SIGTERM или закрытый ввод) и больше не сбрасывается.
    """

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        if not self._event.is_set():
            logger.info("Получен запрос на отмену")
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        """Ждет взведения токена."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise UserCancelledError()


async def first_settled(*awaitables: Awaitable[Any]) -> Tuple[int, Any]:
    """
    Гонка "кто первый": ждет первую завершившуюся операцию.

    Остальные задачи отменяются и дожидаются до возврата, в том числе
    если отменили саму `first_settled`. При одновременном завершении
    побеждает операция, переданная раньше.

    Args:
        *awaitables: Корутины или future, участвующие в гонке.

    Returns:
        Tuple[int, Any]: Позиция победителя в списке аргументов и его результат.

    Raises:
        Exception: Исключение победителя пробрасывается как есть.
    """
    if not awaitables:
        raise ValueError("first_settled требует хотя бы одну операцию")

    tasks: List[asyncio.Future] = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    for position, task in enumerate(tasks):
        if task in done:
            return position, task.result()

    # asyncio.wait(FIRST_COMPLETED) всегда возвращает хотя бы одну задачу
    raise RuntimeError("first_settled: нет завершенных задач")


async def countdown(
    seconds: int,
    on_tick: Optional[Callable[[int], None]] = None,
    tick_interval: float = 1.0,
) -> None:
    """
    Обратный отсчет: `seconds` тиков длительностью `tick_interval` каждый.

    Перед каждым тиком вызывается `on_tick(remaining)` с оставшимся числом
    секунд (seconds, seconds-1, ..., 1). Отмена задачи прерывает отсчет сразу.
    """
    for remaining in range(seconds, 0, -1):
        if on_tick is not None:
            on_tick(remaining)
        await asyncio.sleep(tick_interval)
