"""Substring search over region names."""

from __future__ import annotations

from typing import Iterable

from casemap.common.constants import SEARCH_RESULT_LIMIT
from casemap.common.models import RegionRecord


def normalise_query(query: str | None) -> str | None:
    if query is None:
        return None
    cleaned = query.strip().casefold()
    return cleaned or None


def _tokens(value: str | None) -> list[str]:
    if not value:
        return []
    return [token.strip().casefold() for token in value.split(",") if token.strip()]


def matches(record: RegionRecord, query: str) -> bool:
    """True when a comma-separated token of subregion or region contains ``query``."""
    needle = normalise_query(query)
    if needle is None:
        return False
    return any(needle in token for token in (*_tokens(record.subregion), *_tokens(record.region)))


def search(
    collection: Iterable[RegionRecord],
    query: str | None,
    *,
    limit: int = SEARCH_RESULT_LIMIT,
) -> list[RegionRecord] | None:
    needle = normalise_query(query)
    if needle is None:
        return None

    results: list[RegionRecord] = []
    for record in collection:
        if len(results) >= limit:
            break
        if matches(record, needle):
            results.append(record)
    return results
