# === FILE: page_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера PageScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

MONGODB_URI_ENV = "MONGODB_URI"


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска краулера."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Стартовый URL обхода.")
    budget: int = Field(500, ge=1, description="Максимум уникальных URL за один запуск.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    delay: float = Field(1.0, ge=0, description="Пауза между запросами (секунд).")
    user_agent: str = Field("PageScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    body_limit: int = Field(500, ge=1, description="Длина выдержки текста страницы (символов).")
    channel_size: int = Field(5, ge=1, description="Ёмкость очередей между стадиями.")
    html_parser: Literal["html.parser", "lxml"] = Field(
        "html.parser", description="Парсер BeautifulSoup."
    )

    sink: Literal["mongo", "jsonl", "memory"] = Field("mongo", description="Куда сохранять страницы.")
    mongodb_uri: Optional[str] = Field(None, description="Строка подключения MongoDB.")
    database: str = Field("page_scout", min_length=1)
    collection: str = Field("webpages", min_length=1)
    output_path: Path = Field(Path("pages.jsonl"), description="Файл для sink=jsonl.")

    @field_validator("seed_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        # путь не трогаем: от него зависит разрешение относительных ссылок
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="before")
    @classmethod
    def _mongodb_uri_from_env(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("mongodb_uri"):
            env_uri = os.getenv(MONGODB_URI_ENV)
            if env_uri:
                data = {**data, "mongodb_uri": env_uri}
        return data


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Перед проверкой подгружает .env, чтобы подхватить MONGODB_URI.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    load_dotenv(find_dotenv(usecwd=True))
    return CrawlerConfig(**data)


def apply_overrides(config: CrawlerConfig, **overrides: Any) -> CrawlerConfig:
    """Возвращает копию конфига с непустыми переопределениями (например, из CLI)."""
    values = {k: v for k, v in overrides.items() if v is not None}
    if not values:
        return config
    return CrawlerConfig(**{**config.model_dump(mode="json"), **values})


__all__ = ["CrawlerConfig", "ValidationError", "apply_overrides", "load_config"]
