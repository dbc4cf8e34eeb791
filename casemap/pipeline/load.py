"""One load cycle: acquire the three payloads, then aggregate them."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from casemap.common.config_loader import AppConfig
from casemap.common.errors import LoadError
from casemap.common.http import HttpClient
from casemap.common.logging import get_logger, log_event
from casemap.common.models import RegionCollection
from casemap.common.time_utils import elapsed_ms
from casemap.harvest.github_source import discover_sources, fetch_payloads
from casemap.harvest.local_source import read_local_payloads
from casemap.pipeline.aggregate import aggregate


def acquire_payloads(
    config: AppConfig,
    *,
    client: HttpClient | None = None,
    payload_dir: Path | None = None,
) -> dict[str, str]:
    if payload_dir is not None:
        return read_local_payloads(payload_dir, config.sources.local_filenames)

    if client is None:
        with HttpClient.from_settings(config.http) as owned_client:
            return acquire_payloads(config, client=owned_client)

    urls = discover_sources(client, config.sources.listing_url, config.sources.patterns)
    return fetch_payloads(client, urls)


def load_collection(
    config: AppConfig,
    *,
    client: HttpClient | None = None,
    payload_dir: Path | None = None,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> RegionCollection:
    logger = get_logger(logger)
    source = str(payload_dir) if payload_dir is not None else config.sources.listing_url
    started_at = time.monotonic()
    log_event(logger, "load start", run_id=run_id, stage="load", source=source, event="LOAD_START", status="ok")

    try:
        payloads = acquire_payloads(config, client=client, payload_dir=payload_dir)
    except LoadError as exc:
        log_event(
            logger,
            f"load failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage="load",
            source=source,
            event="LOAD_FAIL",
            status="error",
            duration_ms=elapsed_ms(started_at),
            error_code=exc.error_code,
        )
        raise

    collection = aggregate(payloads, logger=logger)
    log_event(
        logger,
        "load end",
        run_id=run_id,
        stage="load",
        source=source,
        event="LOAD_END",
        status="ok",
        duration_ms=elapsed_ms(started_at),
        rows_out=len(collection),
    )
    return collection

