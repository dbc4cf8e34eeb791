"""Line-level parsing of the time-series CSV payloads.

Rows look like ``subregion,region,lat,lng,day0,day1,...``. Names containing a
comma arrive quoted (``,"Korea, South",35.9,127.7,...``). Each line is read
with its own ``csv.reader`` so an unbalanced quote cannot run into the
following rows.
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass

from casemap.common.constants import METADATA_COLUMNS

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class ParsedRow:
    subregion: str
    region: str | None
    latitude: str
    longitude: str
    counts: tuple[int | None, ...]
    malformed: bool = False

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.subregion, self.region)


def split_line(line: str) -> list[str]:
    try:
        return next(csv.reader([line.rstrip("\r\n")]), [""])
    except csv.Error:
        return [""]


def parse_count(text: str | None) -> int | None:
    """Leading-integer parse; ``None`` when the field has no digits to read."""
    if text is None:
        return None
    match = _LEADING_INT_RE.match(text)
    if not match:
        return None
    return int(match.group(1))


def parse_row(line: str) -> ParsedRow:
    columns = split_line(line) or [""]

    subregion = columns[0].strip()
    region = columns[1].strip() if len(columns) > 1 else ""
    latitude = columns[2].strip() if len(columns) > 2 else ""
    longitude = columns[3].strip() if len(columns) > 3 else ""
    counts = tuple(parse_count(value) for value in columns[METADATA_COLUMNS:])

    return ParsedRow(
        subregion=subregion,
        region=region or None,
        latitude=latitude,
        longitude=longitude,
        counts=counts,
        malformed=len(columns) <= METADATA_COLUMNS or not region,
    )


def parse_payload(text: str) -> list[ParsedRow]:
    lines = text.split("\n")
    # First line is the header.
    return [parse_row(line) for line in lines[1:] if line.strip()]
