"""Сборщик предупреждений расчёта."""

import logging

logger = logging.getLogger(__name__)


class Diagnostics:
    """Накапливает предупреждения в порядке поступления.

    Предупреждения не прерывают расчёт: результат возвращается всегда.
    """

    def __init__(self, source: str = "geotech"):
        self.source = source
        self._warnings: list[str] = []

    def warn(self, message: str) -> None:
        self._warnings.append(message)
        logger.debug("[%s] %s", self.source, message)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._warnings)
