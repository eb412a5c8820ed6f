"""Настройки сервиса и логирование.

Настройки читаются из TOML-файла (путь в GEOTECH_CONFIG, по умолчанию
geotech.toml в рабочем каталоге; файл необязателен). Переменные окружения
GEOTECH_LOG_LEVEL, GEOTECH_STORE_BACKEND, GEOTECH_STORE_DIR имеют приоритет.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_CONFIG = "geotech.toml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ENV_OVERRIDES = {
    "log_level": "GEOTECH_LOG_LEVEL",
    "store_backend": "GEOTECH_STORE_BACKEND",
    "store_dir": "GEOTECH_STORE_DIR",
}


class Settings(BaseModel):
    """Настройки сервиса."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    store_backend: Literal["none", "json"] = "none"
    store_dir: str = Field(default="results", description="Каталог JSON-хранилища")
    cors_allow_origin: str = "*"


def load_settings(path: str | Path | None = None) -> Settings:
    """Загрузка настроек из TOML с учётом переменных окружения."""
    path = Path(path or os.environ.get("GEOTECH_CONFIG", DEFAULT_CONFIG))

    data: dict = {}
    if path.is_file():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        data = data.get("geotech", data)

    for key, env in _ENV_OVERRIDES.items():
        value = os.environ.get(env)
        if value:
            data[key] = value
    if "log_level" in data:
        data["log_level"] = str(data["log_level"]).upper()

    return Settings(**data)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
