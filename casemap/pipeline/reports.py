"""Summaries of a loaded collection for printing."""

from __future__ import annotations

from casemap.common.constants import SERIES_TYPES
from casemap.common.models import RegionCollection, RegionRecord


def format_count(value: int | None) -> str:
    if value is None:
        return "n/a"
    return f"{value:,}"


def describe_record(record: RegionRecord, *, days_ago: int = 0) -> dict:
    payload = {
        "subregion": record.subregion,
        "region": record.region,
        "label": record.display_name,
        "latitude": record.latitude,
        "longitude": record.longitude,
    }
    for series_type in SERIES_TYPES:
        value = record.latest(series_type, days_ago)
        payload[series_type] = value
        payload[f"{series_type}_label"] = format_count(value)
    return payload


def load_summary(collection: RegionCollection, *, top: int = 10, days_ago: int = 0) -> dict:
    status = "empty" if collection.is_empty else "loaded"
    return {
        "status": status,
        "region_count": len(collection),
        "max_confirmed": collection.max_confirmed,
        "stats": collection.stats.to_dict(),
        "top_regions": [describe_record(record, days_ago=days_ago) for record in collection.records[:top]],
    }


def search_summary(query: str, results: list[RegionRecord] | None) -> dict:
    return {
        "query": query,
        "active": results is not None,
        "results": None if results is None else [describe_record(record) for record in results],
    }
