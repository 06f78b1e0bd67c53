"""
Загрузка и валидация конфигурации генератора карты сайта SiteMapper.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class MapperConfig(BaseModel):
    """Конфигурация одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., description="Стартовый URL обхода.")
    timeout: float = Field(15.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SitemapGenerator/1.0", min_length=1, description="Заголовок User-Agent.")
    concurrency: int = Field(1, ge=1, description="Число параллельных загрузок.")
    verify_ssl: bool = Field(True, description="Проверять TLS-сертификаты.")
    sitemap_path: Path = Field(Path("sitemap.xml"), description="Куда писать sitemap.xml.")
    history_path: Path = Field(Path("sitemap_log.csv"), description="Журнал запусков.")

    @field_validator("start_url", mode="before")
    def _check_start_url(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        parts = urlsplit(v)
        if parts.scheme.lower() not in ("http", "https"):
            raise ValueError(f"start_url must be http(s), got {v!r}")
        if not parts.hostname:
            raise ValueError(f"start_url has no host: {v!r}")
        return v

    @property
    def lock_path(self) -> Path:
        """Advisory lock file guarding the sitemap and history artifacts."""
        return self.sitemap_path.with_name(self.sitemap_path.name + ".lock")


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


def load_config(path: Union[str, Path, None]) -> MapperConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект MapperConfig.
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

    try:
        return MapperConfig(**data)
    except ValidationError:
        raise
