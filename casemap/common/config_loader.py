"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from casemap.common.errors import ConfigError
from casemap.common.fs import read_yaml
from casemap.common.schema import validate_app_config

CONFIG_FILENAME = "casemap.yml"


@dataclass(frozen=True)
class SourceSettings:
    listing_url: str
    patterns: dict[str, str]
    local_filenames: dict[str, str]


@dataclass(frozen=True)
class SearchSettings:
    limit: int
    debounce_seconds: float


@dataclass(frozen=True)
class HttpSettings:
    connect_timeout: float
    read_timeout: float
    max_attempts: int
    max_wait: float


@dataclass(frozen=True)
class AppConfig:
    sources: SourceSettings
    search: SearchSettings
    http: HttpSettings


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def build_app_config(raw: dict, *, allow_unknown: bool = False) -> AppConfig:
    cfg = validate_app_config(raw, allow_unknown=allow_unknown)
    sources = cfg["sources"]
    search = cfg["search"]
    http = cfg["http"]
    return AppConfig(
        sources=SourceSettings(
            listing_url=sources["listing_url"],
            patterns=dict(sources["patterns"]),
            local_filenames=dict(sources["local_filenames"]),
        ),
        search=SearchSettings(
            limit=int(search["limit"]),
            debounce_seconds=float(search["debounce_seconds"]),
        ),
        http=HttpSettings(
            connect_timeout=float(http["connect_timeout"]),
            read_timeout=float(http["read_timeout"]),
            max_attempts=int(http["max_attempts"]),
            max_wait=float(http["max_wait"]),
        ),
    )


def load_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> AppConfig:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME
    raw = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    return build_app_config(raw, allow_unknown=allow_unknown)
