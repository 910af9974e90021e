"""
Модуль базовых примитивов данных.

Содержит перечисления (Enums) и структуры данных (Dataclasses), которыми
обмениваются сканер, проверка среды, селектор и запускатель процессов.
Слой отображения (presenter) только читает эти структуры.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple


class DecisionKind(StrEnum):
    """
    Вид решения о запуске, которое выдает селектор (или разбор аргументов CLI).
    """
    LAUNCH_BY_INDEX = "BY_INDEX"        # Пользователь выбрал номер из списка
    LAUNCH_BY_PATH = "BY_PATH"          # Путь передан напрямую (--start)
    CANCELLED = "CANCELLED"             # Отмена, ничего не запускаем
    TIMED_OUT_DEFAULT = "TIMED_OUT"     # Истек таймер, запускаем первый файл


class SelectorState(StrEnum):
    """
    Состояния интерактивного селектора.

    IDLE -> AWAITING_CHOICE -> {RESOLVED, TIMED_OUT, CANCELLED}
    """
    IDLE = "IDLE"
    AWAITING_CHOICE = "AWAITING_CHOICE"
    RESOLVED = "RESOLVED"
    TIMED_OUT = "TIMED_OUT"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class CandidateFile:
    """
    Найденный JAR-файл.

    Attributes:
        path (Path): Абсолютный путь к файлу (уникален в пределах одного сканирования).
        name (str): Имя файла для отображения.
        size (int): Размер в байтах.
        modified_at (datetime): Время последнего изменения.
    """
    path: Path
    name: str
    size: int
    modified_at: datetime


@dataclass(frozen=True)
class ScanDirectoryUnreadable:
    """
    Запись о каталоге, который не удалось прочитать при сканировании.
    Ошибка не фатальна: каталог пропускается, обход продолжается.
    """
    path: Path
    reason: str


@dataclass
class ScanResult:
    """
    Результат сканирования.

    Порядок `files` это порядок обхода файловой системы (не сортировка).
    От него зависит, какой файл считается "первым" при запуске по умолчанию.
    """
    files: List[CandidateFile] = field(default_factory=list)
    skipped: List[ScanDirectoryUnreadable] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[CandidateFile]:
        return iter(self.files)

    def __getitem__(self, index: int) -> CandidateFile:
        return self.files[index]

    def __bool__(self) -> bool:
        return bool(self.files)


@dataclass(frozen=True)
class RuntimeStatus:
    """
    Результат проверки внешней среды выполнения (Java).

    Создается один раз за запуск процесса и нигде не сохраняется.
    """
    is_available: bool
    version: Optional[str] = None

    @classmethod
    def available(cls, version: str) -> "RuntimeStatus":
        return cls(is_available=True, version=version)

    @classmethod
    def unavailable(cls) -> "RuntimeStatus":
        return cls(is_available=False)


@dataclass(frozen=True)
class LaunchDecision:
    """
    Решение о запуске. Потребляется запускателем ровно один раз.

    Attributes:
        kind (DecisionKind): Вид решения.
        index (Optional[int]): Индекс (с нуля) в списке кандидатов.
        path (Optional[Path]): Путь к файлу для прямого запуска.
    """
    kind: DecisionKind
    index: Optional[int] = None
    path: Optional[Path] = None

    @classmethod
    def by_index(cls, index: int) -> "LaunchDecision":
        return cls(kind=DecisionKind.LAUNCH_BY_INDEX, index=index)

    @classmethod
    def by_path(cls, path: Path) -> "LaunchDecision":
        return cls(kind=DecisionKind.LAUNCH_BY_PATH, path=Path(path))

    @classmethod
    def cancelled(cls) -> "LaunchDecision":
        return cls(kind=DecisionKind.CANCELLED)

    @classmethod
    def timed_out_default(cls) -> "LaunchDecision":
        return cls(kind=DecisionKind.TIMED_OUT_DEFAULT, index=0)

    @property
    def is_cancelled(self) -> bool:
        return self.kind == DecisionKind.CANCELLED

    def resolve_path(self, candidates: ScanResult) -> Path:
        """
        Возвращает путь к файлу, который нужно запустить.

        Raises:
            ValueError: Если решение - отмена (запускать нечего).
        """
        if self.kind == DecisionKind.CANCELLED:
            raise ValueError("Отмененное решение не содержит файла для запуска")
        if self.kind == DecisionKind.LAUNCH_BY_PATH:
            return self.path
        return candidates[self.index].path


@dataclass(frozen=True)
class LaunchOutcome:
    """
    Итог работы дочернего процесса.

    Вывод процесса не буферизуется, а сразу пересылается в терминал,
    поэтому здесь хранятся только счетчики переданных байт.

    Attributes:
        command (Tuple[str, ...]): Фактически выполненная команда (argv).
        returncode (int): Код завершения. Отрицательный - процесс убит сигналом.
        stdout_bytes (int): Сколько байт stdout переслано в терминал.
        stderr_bytes (int): Сколько байт stderr переслано в терминал.
    """
    command: Tuple[str, ...]
    returncode: int
    stdout_bytes: int = 0
    stderr_bytes: int = 0

    @property
    def signal(self) -> Optional[int]:
        """Номер сигнала, если процесс был завершен сигналом (POSIX)."""
        return -self.returncode if self.returncode < 0 else None

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0
