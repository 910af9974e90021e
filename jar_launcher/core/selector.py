"""
Интерактивный селектор (выбор файла с таймером).

Машина состояний:
    IDLE -> AWAITING_CHOICE -> {RESOLVED, TIMED_OUT, CANCELLED}

В состоянии AWAITING_CHOICE одновременно идут три операции:
таймер обратного отсчета, чтение строки ввода и ожидание токена отмены.
Побеждает та, что завершилась первой, остальные отменяются.

Пункты меню:
    1 - ввести номер файла из списка;
    2 - запустить первый файл после нового отсчета;
    3 - выйти без запуска.
"""

import logging

from jar_launcher.core.cancellation import CancellationToken, countdown, first_settled
from jar_launcher.shared.exceptions import InvalidSelectionError
from jar_launcher.shared.interfaces import LauncherView, LineReader
from jar_launcher.shared.primitives import LaunchDecision, ScanResult, SelectorState

logger = logging.getLogger(__name__)

CHOICE_PICK_INDEX = "1"
CHOICE_LAUNCH_FIRST = "2"
CHOICE_EXIT = "3"

PROMPT_CHOICE = "Ваш выбор (1/2/3):"
PROMPT_INDEX = "Введите номер файла ({first}-{last}):"

# Позиции участников гонки в first_settled
_TOKEN, _TIMER, _INPUT = 0, 1, 2


class InteractiveSelector:
    """
    Разрешает выбор пользователя ровно в одно решение о запуске.

    Объект одноразовый: `run()` можно вызвать только один раз.

    Attributes:
        state (SelectorState): Текущее состояние машины.
    """

    def __init__(
        self,
        candidates: ScanResult,
        reader: LineReader,
        token: CancellationToken,
        view: LauncherView,
        countdown_seconds: int = 5,
        tick_interval: float = 1.0,
    ):
        """
        Args:
            candidates (ScanResult): Непустой список найденных файлов.
            reader (LineReader): Источник ввода.
            token (CancellationToken): Общий токен отмены.
            view (LauncherView): Слой отображения (меню, тики таймера).
            countdown_seconds (int): Длительность отсчета D в тиках.
            tick_interval (float): Длительность одного тика в секундах.

        Raises:
            ValueError: Если список кандидатов пуст.
        """
        if not candidates:
            raise ValueError("Селектор нельзя запустить без найденных файлов")

        self.candidates = candidates
        self.state = SelectorState.IDLE
        self._reader = reader
        self._token = token
        self._view = view
        self._countdown_seconds = countdown_seconds
        self._tick_interval = tick_interval

    async def run(self) -> LaunchDecision:
        """
        Показывает меню и ждет решения.

        Returns:
            LaunchDecision: TimedOutDefault, LaunchByIndex или Cancelled.

        Raises:
            InvalidSelectionError: Неверный пункт меню или номер вне диапазона.
                Запуска в этом случае нет, селектор переходит в CANCELLED.
        """
        if self.state != SelectorState.IDLE:
            raise RuntimeError("Селектор уже был запущен")

        self.state = SelectorState.AWAITING_CHOICE
        self._view.show_menu(self.candidates, self._countdown_seconds)

        try:
            winner, value = await first_settled(
                self._token.wait(),
                countdown(self._countdown_seconds, self._view.show_countdown, self._tick_interval),
                self._reader.read_line(PROMPT_CHOICE),
            )
            if winner == _TOKEN:
                return self._cancel()
            if winner == _TIMER:
                self._view.show_countdown_finished()
                return self._time_out()
            return await self._handle_choice(value)

        except InvalidSelectionError as e:
            logger.warning(f"Неверный выбор пользователя: {e.value!r}")
            self.state = SelectorState.CANCELLED
            raise

    async def _handle_choice(self, raw: str | None) -> LaunchDecision:
        if raw is None:
            # Ввод закрыт или Ctrl+C внутри приглашения
            self._token.cancel()
            return self._cancel()

        choice = raw.strip()
        logger.debug(f"Выбран пункт меню: {choice!r}")

        if choice == CHOICE_PICK_INDEX:
            return await self._pick_by_index()
        if choice == CHOICE_LAUNCH_FIRST:
            return await self._launch_first_after_countdown()
        if choice == CHOICE_EXIT:
            return self._cancel()

        raise InvalidSelectionError(choice)

    async def _pick_by_index(self) -> LaunchDecision:
        """Вторичный запрос: номер файла (с единицы)."""
        prompt = PROMPT_INDEX.format(first=1, last=len(self.candidates))
        winner, raw = await first_settled(self._token.wait(), self._reader.read_line(prompt))

        if winner == _TOKEN:
            return self._cancel()
        if raw is None:
            self._token.cancel()
            return self._cancel()

        text = raw.strip()
        try:
            number = int(text)
        except ValueError:
            raise InvalidSelectionError(text) from None

        if not 1 <= number <= len(self.candidates):
            raise InvalidSelectionError(text)

        self.state = SelectorState.RESOLVED
        return LaunchDecision.by_index(number - 1)

    async def _launch_first_after_countdown(self) -> LaunchDecision:
        """Новый, независимый отсчет, который всегда заканчивается запуском первого файла."""
        winner, _ = await first_settled(
            self._token.wait(),
            countdown(self._countdown_seconds, self._view.show_countdown, self._tick_interval),
        )
        if winner == _TOKEN:
            return self._cancel()

        self._view.show_countdown_finished()
        return self._time_out()

    def _cancel(self) -> LaunchDecision:
        self.state = SelectorState.CANCELLED
        return LaunchDecision.cancelled()

    def _time_out(self) -> LaunchDecision:
        self.state = SelectorState.TIMED_OUT
        return LaunchDecision.timed_out_default()
