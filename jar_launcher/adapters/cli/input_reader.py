"""
Чтение пользовательского ввода через `questionary`.

Приглашение работает как корутина (`ask_async`), поэтому его можно
отменить, когда первым сработал таймер: чтение не остается висеть.
`patch_stdout=True` позволяет выводу таймера печататься над приглашением.
"""

import logging
from typing import Optional

import questionary

from jar_launcher.shared.interfaces import LineReader

logger = logging.getLogger(__name__)


class QuestionaryLineReader(LineReader):
    """
    Реализация `LineReader` для интерактивного терминала.
    """

    async def read_line(self, message: str) -> Optional[str]:
        """
        Returns:
            Optional[str]: Введенная строка или None, если пользователь нажал
                Ctrl+C внутри приглашения (questionary перехватывает его сам).
        """
        answer = await questionary.text(message, qmark="⌨️ ").ask_async(
            patch_stdout=True,
            kbi_msg="",
        )
        if answer is None:
            logger.debug("Ввод прерван пользователем")
        return answer
