"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator

from casemap.common.constants import SERIES_TYPES

Series = tuple[int | None, ...]


@dataclass(frozen=True)
class RegionRecord:
    """One location with its three daily series.

    A series is ``None`` when the matching source never mentioned the region.
    Inside a series, ``None`` marks a day whose count could not be parsed.
    """

    subregion: str
    region: str | None
    latitude: str
    longitude: str
    confirmed: Series | None = None
    deaths: Series | None = None
    recovered: Series | None = None

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.subregion, self.region)

    @property
    def display_name(self) -> str:
        return self.subregion or self.region or ""

    def series(self, name: str) -> Series | None:
        if name not in SERIES_TYPES:
            raise KeyError(f"Unknown series type: {name}")
        return getattr(self, name)

    def latest(self, name: str, days_ago: int = 0) -> int | None:
        values = self.series(name)
        if values is None or days_ago < 0:
            return None
        index = len(values) - 1 - days_ago
        if index < 0:
            return None
        return values[index]

    def coordinates(self) -> tuple[float | None, float | None]:
        try:
            return float(self.latitude), float(self.longitude)
        except ValueError:
            return None, None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        for name in SERIES_TYPES:
            values = payload[name]
            payload[name] = list(values) if values is not None else None
        return payload


@dataclass(frozen=True)
class AggregateStats:
    rows_in: dict[str, int] = field(default_factory=dict)
    malformed_rows: dict[str, int] = field(default_factory=dict)
    merged_regions: int = 0
    kept_regions: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RegionCollection:
    records: tuple[RegionRecord, ...] = ()
    stats: AggregateStats = field(default_factory=AggregateStats)

    @property
    def max_confirmed(self) -> int | None:
        if not self.records:
            return None
        return self.records[0].latest("confirmed")

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RegionRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> RegionRecord:
        return self.records[index]
