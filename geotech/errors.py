"""Исключения расчётного ядра."""


class GeotechError(Exception):
    """Базовое исключение ядра."""


class InputValidationError(GeotechError):
    """Некорректные входные данные (HTTP 400, расчёт не выполняется)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PersistenceError(GeotechError):
    """Ошибка записи результата во внешнее хранилище."""
