"""Query state for an interactive search box."""

from __future__ import annotations

import logging
import threading

from casemap.common.constants import DEBOUNCE_SECONDS, SEARCH_RESULT_LIMIT
from casemap.common.logging import get_logger, log_event
from casemap.common.models import RegionCollection, RegionRecord
from casemap.search.debounce import Debouncer, TimerFactory
from casemap.search.index import search


class SearchSession:
    """Holds the loaded collection and the results of the latest settled query.

    ``results`` is ``None`` while no search is active, including before the
    first collection arrives; an empty list means the search found nothing.
    """

    def __init__(
        self,
        collection: RegionCollection | None = None,
        *,
        limit: int = SEARCH_RESULT_LIMIT,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = threading.Timer,
        logger: logging.Logger | None = None,
    ) -> None:
        self.limit = limit
        self.logger = get_logger(logger)
        self.lock = threading.Lock()
        self._collection = collection
        self._query = ""
        self._settled_query: str | None = None
        self._results: list[RegionRecord] | None = None
        self._dispatch_count = 0
        self._version = 0
        self._debouncer: Debouncer[str] = Debouncer(
            debounce_seconds,
            self._on_settled,
            timer_factory=timer_factory,
        )

    @property
    def loaded(self) -> bool:
        return self._collection is not None

    @property
    def query(self) -> str:
        return self._query

    @property
    def settled_query(self) -> str | None:
        return self._settled_query

    @property
    def results(self) -> list[RegionRecord] | None:
        with self.lock:
            return None if self._results is None else list(self._results)

    @property
    def dispatch_count(self) -> int:
        return self._dispatch_count

    def set_collection(self, collection: RegionCollection) -> None:
        with self.lock:
            self._collection = collection
            self._version += 1
            rerun = self._settled_query is not None
        if rerun:
            self._run()

    def set_query(self, text: str) -> None:
        self._query = text
        self._debouncer.submit(text)

    def flush(self) -> bool:
        return self._debouncer.flush()

    def clear(self) -> None:
        self._debouncer.cancel()
        self._query = ""
        with self.lock:
            self._settled_query = None
            self._results = None
            self._version += 1

    def _on_settled(self, text: str) -> None:
        with self.lock:
            self._settled_query = text
            self._version += 1
        self._run()

    def _run(self) -> None:
        with self.lock:
            collection = self._collection
            text = self._settled_query
            version = self._version
        if collection is None or text is None:
            return
        results = search(collection, text, limit=self.limit)
        with self.lock:
            # A newer collection or query has been applied since the snapshot.
            if version != self._version:
                return
            self._results = results
            self._dispatch_count += 1
        log_event(
            self.logger,
            "search settled",
            level=logging.DEBUG,
            stage="search",
            event="SEARCH_SETTLED",
            status="inactive" if results is None else "ok",
            rows_in=len(collection),
            rows_out=0 if results is None else len(results),
        )
