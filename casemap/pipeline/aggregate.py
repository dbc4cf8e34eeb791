"""Merge the three series payloads into a ranked region collection."""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Mapping

from casemap.common.constants import SERIES_TYPES
from casemap.common.errors import PayloadError
from casemap.common.logging import get_logger, log_event
from casemap.common.models import AggregateStats, RegionCollection, RegionRecord
from casemap.common.time_utils import elapsed_ms
from casemap.pipeline.parse import parse_payload


def _ordered_payloads(payloads: Mapping[str, str]) -> list[tuple[str, str]]:
    unknown = set(payloads) - set(SERIES_TYPES)
    if unknown:
        raise PayloadError(f"Unknown series types: {', '.join(sorted(unknown))}")
    return [(series_type, payloads[series_type]) for series_type in SERIES_TYPES if series_type in payloads]


def _latest_confirmed(record: RegionRecord) -> int | None:
    return record.latest("confirmed")


def _is_reportable(record: RegionRecord) -> bool:
    if not record.region:
        return False
    latest = _latest_confirmed(record)
    return latest is not None and latest > 0


def rank_records(records: list[RegionRecord]) -> list[RegionRecord]:
    """Drop regions without a positive latest confirmed count, then rank descending."""
    kept = [record for record in records if _is_reportable(record)]
    return sorted(kept, key=lambda record: _latest_confirmed(record), reverse=True)


def aggregate(payloads: Mapping[str, str], *, logger: logging.Logger | None = None) -> RegionCollection:
    logger = get_logger(logger)
    started_at = time.monotonic()

    identities: dict[tuple[str, str | None], dict] = {}
    series_by_key: dict[tuple[str, str | None], dict[str, tuple]] = defaultdict(dict)
    rows_in: dict[str, int] = {}
    malformed_rows: dict[str, int] = {}

    # Fixed series order keeps the merge independent of the mapping order.
    for series_type, text in _ordered_payloads(payloads):
        rows = parse_payload(text)
        rows_in[series_type] = len(rows)
        malformed_rows[series_type] = sum(1 for row in rows if row.malformed)

        for row in rows:
            identity = identities.get(row.key)
            if identity is None:
                identities[row.key] = {
                    "subregion": row.subregion,
                    "region": row.region,
                    "latitude": row.latitude,
                    "longitude": row.longitude,
                }
            else:
                if not identity["latitude"]:
                    identity["latitude"] = row.latitude
                if not identity["longitude"]:
                    identity["longitude"] = row.longitude
            series_by_key[row.key][series_type] = row.counts

    merged = [
        RegionRecord(**identity, **series_by_key[key])
        for key, identity in identities.items()
    ]
    ranked = rank_records(merged)

    stats = AggregateStats(
        rows_in=rows_in,
        malformed_rows=malformed_rows,
        merged_regions=len(merged),
        kept_regions=len(ranked),
    )
    log_event(
        logger,
        "aggregation complete",
        stage="aggregate",
        event="AGGREGATE_END",
        status="ok",
        duration_ms=elapsed_ms(started_at),
        rows_in=sum(rows_in.values()),
        rows_out=len(ranked),
    )
    if any(malformed_rows.values()):
        log_event(
            logger,
            "malformed rows absorbed during parsing",
            level=logging.WARNING,
            stage="aggregate",
            event="MALFORMED_ROWS",
            status="warning",
            rows_in=sum(malformed_rows.values()),
        )

    return RegionCollection(records=tuple(ranked), stats=stats)
