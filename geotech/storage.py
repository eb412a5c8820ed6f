"""Сохранение результатов расчёта во внешнее хранилище.

Хранилище передаётся оркестратору явно (ResultStore). Ошибка записи
оборачивается в PersistenceError и не влияет на сам расчёт.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol

from geotech.config import Settings
from geotech.errors import PersistenceError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class ResultStore(Protocol):
    """Порт хранилища: одна операция save(record)."""

    def save(self, record: dict[str, Any]) -> None: ...


class NullStore:
    """Ничего не сохраняет."""

    def save(self, record: dict[str, Any]) -> None:
        logger.debug("Store disabled, record %s not saved", record.get("test_id"))


class MemoryStore:
    """Хранилище в памяти (для тестов и отладки)."""

    def __init__(self):
        self.records: list[dict[str, Any]] = []

    def save(self, record: dict[str, Any]) -> None:
        self.records.append(record)


class JsonFileStore:
    """Один JSON-файл на запись: <directory>/<test_id>.json."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, test_id: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', test_id)}.json"

    def save(self, record: dict[str, Any]) -> None:
        path = self.path_for(str(record["test_id"]))
        # Запись через временный файл: прежний результат не портится при сбое
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record, f, ensure_ascii=False, indent=2, default=str)
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(f"Failed to write {path}: {exc}") from exc
        logger.info("Saved result %s to %s", record["test_id"], path)


def build_store(settings: Settings) -> ResultStore:
    """Хранилище по настройкам (store_backend)."""
    if settings.store_backend == "json":
        return JsonFileStore(settings.store_dir)
    return NullStore()
