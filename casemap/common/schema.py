"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from casemap.common.constants import SERIES_TYPES
from casemap.common.errors import ConfigError


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_series_mapping(obj, ctx: str) -> None:
    _assert_mapping(obj, ctx)
    _assert_required_keys(obj, set(SERIES_TYPES), ctx)
    for series_type in SERIES_TYPES:
        value = obj[series_type]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{ctx}.{series_type} must be a non-empty string")


def validate_app_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "casemap config")
    top_known = {"sources", "search", "http"}
    _assert_required_keys(cfg, top_known, "casemap config")
    _assert_no_unknown_keys(cfg, top_known, "casemap config", allow_unknown)

    sources = cfg["sources"]
    _assert_mapping(sources, "sources")
    sources_known = {"listing_url", "patterns", "local_filenames"}
    _assert_required_keys(sources, sources_known, "sources")
    _assert_no_unknown_keys(sources, sources_known, "sources", allow_unknown)
    _assert_series_mapping(sources["patterns"], "sources.patterns")
    _assert_series_mapping(sources["local_filenames"], "sources.local_filenames")

    search = cfg["search"]
    _assert_mapping(search, "search")
    _assert_required_keys(search, {"limit", "debounce_seconds"}, "search")
    _assert_no_unknown_keys(search, {"limit", "debounce_seconds"}, "search", allow_unknown)
    if not isinstance(search["limit"], int) or search["limit"] <= 0:
        raise ConfigError("search.limit must be a positive integer")
    if not isinstance(search["debounce_seconds"], (int, float)) or search["debounce_seconds"] < 0:
        raise ConfigError("search.debounce_seconds must be a non-negative number")

    http = cfg["http"]
    _assert_mapping(http, "http")
    http_known = {"connect_timeout", "read_timeout", "max_attempts", "max_wait"}
    _assert_required_keys(http, http_known, "http")
    _assert_no_unknown_keys(http, http_known, "http", allow_unknown)
    if int(http["max_attempts"]) < 1:
        raise ConfigError("http.max_attempts must be at least 1")

    return cfg
