"""
Модуль конфигурации приложения.

Этот модуль определяет класс `AppConfig` - все настройки лаунчера.
Он использует библиотеку `pydantic-settings` для:
1. Валидации типов данных (например, чтобы таймер был положительным числом).
2. Автоматического чтения переменных окружения (префикс `JAR_LAUNCHER_`) и файла `.env`.
3. Предоставления дефолтных значений, если переменные не заданы.

Экземпляр `config` инициализируется в конце файла и импортируется в другие модули.
"""

from pathlib import Path
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Основной класс конфигурации.

    Наследуется от `BaseSettings`, поэтому любое поле можно переопределить
    переменной окружения, например `JAR_LAUNCHER_COUNTDOWN_SECONDS=10`.
    """

    # --- Pydantic Config ---
    model_config = SettingsConfigDict(
        env_prefix="JAR_LAUNCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Игнорировать лишние переменные в .env
    )

    # 1. Среда выполнения (Runtime)

    RUNTIME_COMMAND: str = "java"
    RUNTIME_VERSION_FLAG: str = "-version"

    @property
    def PROBE_COMMAND(self) -> Tuple[str, ...]:
        """Команда проверки версии (`java -version`)."""
        return (self.RUNTIME_COMMAND, self.RUNTIME_VERSION_FLAG)

    # 2. Сканирование

    ARCHIVE_SUFFIX: str = ".jar"
    FOLLOW_SYMLINKS: bool = False  # Переходить ли по символическим ссылкам

    @property
    def SCAN_ROOT(self) -> Path:
        """Каталог сканирования по умолчанию - текущий рабочий каталог."""
        return Path.cwd()

    # 3. Интерактивный режим

    COUNTDOWN_SECONDS: int = Field(default=5, ge=1)  # Таймер до автозапуска
    COUNTDOWN_TICK_SECONDS: float = Field(default=1.0, gt=0)  # Длительность одного тика

    # 4. Управление дочерним процессом

    TERMINATE_GRACE_SECONDS: float = Field(default=3.0, gt=0)  # Ожидание перед kill

    # 5. Логирование

    LOG_LEVEL: str = "WARNING"


# Создаем единственный экземпляр, который будет импортироваться везде.
config = AppConfig()
