# === FILE: news_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации NewsScout.
Используется Pydantic для описания схемы и проверки данных.

Конфигурация собирается один раз при старте (файл + опции CLI) и
передаётся явно в BatchRunner и validate_domain.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_scout.errors import InputError
from news_scout.logger import logger

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_REGION_CODE = "en-US"
ALL_REGIONS = "all"


class Region(BaseModel):
    """Локаль агрегатора: код языка (hl), страна (gl) и издание (ceid)."""

    model_config = ConfigDict(frozen=True)

    code: str
    gl: str
    ceid: str


REGIONS: Dict[str, Region] = {
    "en-US": Region(code="en-US", gl="US", ceid="US:en"),
    "es-ES": Region(code="es-ES", gl="ES", ceid="ES:es"),
    "fr-FR": Region(code="fr-FR", gl="FR", ceid="FR:fr"),
    "it-IT": Region(code="it-IT", gl="IT", ceid="IT:it"),
    "de-DE": Region(code="de-DE", gl="DE", ceid="DE:de"),
    "pt-BR": Region(code="pt-BR", gl="BR", ceid="BR:pt-419"),
}

REGION_CHOICES: Tuple[str, ...] = tuple(REGIONS) + (ALL_REGIONS,)


def resolve_regions(selector: str) -> List[Region]:
    """Возвращает регионы для селектора: код, ``all`` или fallback на en-US с предупреждением."""
    if selector == ALL_REGIONS:
        return list(REGIONS.values())
    if selector in REGIONS:
        return [REGIONS[selector]]
    logger.warning('Unknown region "%s", using %s', selector, DEFAULT_REGION_CODE)
    return [REGIONS[DEFAULT_REGION_CODE]]


class CheckerConfig(BaseModel):
    """Конфигурация одного прогона проверки доменов."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field("https://news.google.com", description="Корневой URL агрегатора.")
    regions: Tuple[Region, ...] = Field(
        (REGIONS[DEFAULT_REGION_CODE],), min_length=1, description="Регионы в порядке перебора."
    )
    strategies: Tuple[str, ...] = Field(
        ("Site query",), min_length=1, description="Имена стратегий поиска в порядке перебора."
    )
    indicators: Tuple[str, ...] = Field(
        ("no-results-banner",), min_length=1, description="Имена индикаторов в порядке проверки."
    )
    page_timeout: float = Field(30.0, gt=0, description="Таймаут загрузки одной страницы (секунд).")
    headless: bool = Field(True, description="Запускать браузер без окна.")
    engine: Literal["browser", "http"] = Field("browser", description="Способ загрузки страниц.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    concurrency: int = Field(1, ge=1, description="Сколько доменов проверять одновременно.")
    delay: float = Field(0.0, ge=0, description="Пауза между стартами доменов (секунд).")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("regions", mode="before")
    def _regions_from_codes(cls, v: Any) -> Any:
        # в YAML регионы удобно задавать строкой-кодом
        if isinstance(v, str):
            return resolve_regions(v)
        if isinstance(v, (list, tuple)):
            out: List[Any] = []
            for item in v:
                out.extend(resolve_regions(item) if isinstance(item, str) else [item])
            return out
        return v


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


def _read_config(path_obj: Path) -> CheckerConfig:
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CheckerConfig(**data)


def load_config(path: Union[str, Path, None]) -> CheckerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CheckerConfig.
    Без пути возвращает конфигурацию по умолчанию.

    Любая проблема с файлом (нет файла, синтаксис, схема) поднимается как
    InputError; исходное исключение доступно в ``__cause__``.
    """
    if path is None:
        return CheckerConfig()

    path_obj = Path(path).expanduser().resolve()
    try:
        return _read_config(path_obj)
    except (OSError, ValueError, TypeError) as exc:
        # pydantic.ValidationError тоже ValueError
        raise InputError(f"Invalid config {path_obj}: {exc}") from exc


__all__ = [
    "Region",
    "REGIONS",
    "REGION_CHOICES",
    "CheckerConfig",
    "resolve_regions",
    "load_config",
]
