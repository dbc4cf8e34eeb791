"""Discover and fetch the time-series CSVs from the GitHub contents listing."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Mapping

import requests

from casemap.common.constants import SERIES_TYPES
from casemap.common.errors import PipelineError, SourceUnavailableError
from casemap.common.http import HttpClient


def _csv_entries(listing) -> list[dict]:
    if not isinstance(listing, list):
        raise SourceUnavailableError("Contents listing is not a list of files")
    entries = [
        entry
        for entry in listing
        if isinstance(entry, dict) and "csv" in str(entry.get("name", "")) and entry.get("download_url")
    ]
    return sorted(entries, key=lambda entry: entry["name"])


def select_sources(listing, patterns: Mapping[str, str]) -> dict[str, str]:
    entries = _csv_entries(listing)
    urls: dict[str, str] = {}
    for series_type in SERIES_TYPES:
        needle = patterns[series_type].lower()
        for entry in entries:
            if needle in entry["name"].lower():
                urls[series_type] = entry["download_url"]
                break

    missing = tuple(series_type for series_type in SERIES_TYPES if series_type not in urls)
    if missing:
        raise SourceUnavailableError(
            f"No CSV found in listing for: {', '.join(missing)}",
            series_types=missing,
        )
    return urls


def discover_sources(client: HttpClient, listing_url: str, patterns: Mapping[str, str]) -> dict[str, str]:
    try:
        listing = client.get_json(listing_url)
    except (PipelineError, requests.RequestException) as exc:
        raise SourceUnavailableError(
            f"Contents listing unavailable: {exc}",
            series_types=SERIES_TYPES,
        ) from exc
    return select_sources(listing, patterns)


def fetch_payloads(client: HttpClient, urls: Mapping[str, str]) -> dict[str, str]:
    """Fetch every URL concurrently. Any failure fails the whole join."""
    payloads: dict[str, str] = {}
    failures: dict[str, str] = {}

    with ThreadPoolExecutor(max_workers=max(len(urls), 1)) as executor:
        future_to_type = {
            executor.submit(client.get_text, url): series_type
            for series_type, url in urls.items()
        }
        for future in as_completed(future_to_type):
            series_type = future_to_type[future]
            try:
                payloads[series_type] = future.result()
            except (PipelineError, requests.RequestException) as exc:
                failures[series_type] = str(exc)

    if failures:
        failed = tuple(sorted(failures))
        raise SourceUnavailableError(
            f"Failed to fetch: {', '.join(f'{name} ({failures[name]})' for name in failed)}",
            series_types=failed,
        )
    return payloads
