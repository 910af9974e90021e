"""
Сканер файловой системы.

Обходит дерево каталогов в глубину (записи каждого каталога по имени)
и собирает JAR-файлы в `ScanResult`. Сами архивы не открываются.

Порядок результата - это порядок обхода (pre-order), а не общая сортировка:
файлы подкаталога идут на месте этого подкаталога среди соседей. Первый
найденный файл запускается по умолчанию, когда истекает таймер.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple, Union

from jar_launcher.shared.primitives import CandidateFile, ScanDirectoryUnreadable, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".jar"


def scan(
    root_dir: Union[str, Path],
    suffix: str = DEFAULT_SUFFIX,
    follow_symlinks: bool = False,
) -> ScanResult:
    """
    Находит все файлы с заданным расширением в дереве каталогов.

    Нечитаемые каталоги (нет прав, удалены во время обхода) пропускаются
    с предупреждением в лог и попадают в `ScanResult.skipped`. Функция
    никогда не падает из-за одного поддерева.

    Args:
        root_dir: Корневой каталог обхода.
        suffix (str): Расширение файлов (сравнение без учета регистра).
        follow_symlinks (bool): Переходить ли по символическим ссылкам.
            Если да, посещенные каталоги запоминаются по (st_dev, st_ino),
            чтобы петли ссылок не приводили к бесконечному обходу.

    Returns:
        ScanResult: Найденные файлы в порядке обхода и пропущенные каталоги.
    """
    result = ScanResult()
    visited: Set[Tuple[int, int]] = set()
    root = Path(os.path.abspath(root_dir))
    suffix = suffix.lower()

    logger.info(f"Сканирование каталога: {root}")

    # Стек итераторов по содержимому открытых каталогов (обход в глубину без рекурсии)
    stack: List[Iterator[os.DirEntry]] = []
    _enter_directory(root, follow_symlinks, visited, result, stack)

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if _is_dir(entry, follow_symlinks):
            _enter_directory(Path(entry.path), follow_symlinks, visited, result, stack)
            continue

        candidate = _to_candidate(entry, suffix, follow_symlinks)
        if candidate is not None:
            result.files.append(candidate)

    logger.info(f"Найдено файлов: {len(result)}, пропущено каталогов: {len(result.skipped)}")
    return result


def _enter_directory(
    directory: Path,
    follow_symlinks: bool,
    visited: Set[Tuple[int, int]],
    result: ScanResult,
    stack: List[Iterator[os.DirEntry]],
) -> None:
    """
    Читает содержимое каталога и кладет его на стек обхода.
    Записи сортируются по имени: порядок не зависит от файловой системы.
    """
    try:
        if follow_symlinks:
            stat = os.stat(directory)
            identity = (stat.st_dev, stat.st_ino)
            if identity in visited:
                logger.debug(f"Каталог уже посещен (петля ссылок): {directory}")
                return
            visited.add(identity)

        # Читаем содержимое целиком, чтобы ошибка в подкаталоге
        # не прерывала обход соседей
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)

    except OSError as e:
        reason = e.strerror or str(e)
        logger.warning(f"Не удалось просканировать каталог {directory}: {reason}")
        result.skipped.append(ScanDirectoryUnreadable(path=directory, reason=reason))
        return

    stack.append(iter(entries))


def _to_candidate(entry: os.DirEntry, suffix: str, follow_symlinks: bool) -> Optional[CandidateFile]:
    if not entry.name.lower().endswith(suffix) or not _is_file(entry, follow_symlinks):
        return None

    try:
        stat = entry.stat(follow_symlinks=follow_symlinks)
    except OSError as e:
        # Файл исчез между чтением каталога и stat
        logger.warning(f"Не удалось прочитать атрибуты файла {entry.path}: {e.strerror or e}")
        return None

    return CandidateFile(
        path=Path(entry.path),
        name=entry.name,
        size=stat.st_size,
        modified_at=datetime.fromtimestamp(stat.st_mtime),
    )


def _is_dir(entry: os.DirEntry, follow_symlinks: bool) -> bool:
    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _is_file(entry: os.DirEntry, follow_symlinks: bool) -> bool:
    try:
        return entry.is_file(follow_symlinks=follow_symlinks)
    except OSError:
        return False
