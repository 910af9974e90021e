"""
Основной пакет приложения JAR Launcher.

Находит исполняемые JAR-архивы в дереве каталогов и запускает
первый найденный (или выбранный пользователем) через `java -jar`.
"""

__version__ = "1.0.0"
