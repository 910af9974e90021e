"""
Иерархия исключений лаунчера.

Все фатальные для текущей операции ошибки наследуются от `LauncherError`,
чтобы CLI мог показать сообщение пользователю и выйти с нужным кодом.
Нечитаемые каталоги при сканировании исключением не являются
(см. `ScanDirectoryUnreadable` в primitives).
"""


class LauncherError(Exception):
    """
    Базовая ошибка лаунчера.

    Attributes:
        exit_code (int): Код завершения процесса для этой ошибки.
    """
    exit_code: int = 1


class RuntimeUnavailableError(LauncherError):
    """Java не найдена или `java -version` завершилась с ошибкой."""

    def __init__(self, runtime: str = "java"):
        self.runtime = runtime
        super().__init__(
            f"Не обнаружена среда выполнения '{runtime}'. "
            f"Установите Java Runtime Environment."
        )


class UnsupportedPlatformError(LauncherError):
    """Для текущей ОС нет шаблона команды запуска."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Неподдерживаемая операционная система: {platform}")


class LaunchFailedError(LauncherError):
    """
    Дочерний процесс не стартовал или завершился с ненулевым кодом.
    Повторных попыток не делаем.
    """

    def __init__(self, message: str, returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message)


class InvalidSelectionError(LauncherError):
    """Пользователь ввел неверный пункт меню или номер вне диапазона."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Неверный выбор: '{value}'")


class UserCancelledError(LauncherError):
    """
    Исключение, выбрасываемое при отмене пользователем (Ctrl+C).
    Отмена не считается ошибкой, поэтому код выхода 0.
    """
    exit_code = 0

    def __init__(self, message: str = "Запуск отменен пользователем"):
        super().__init__(message)
