"""Read the time-series CSVs from a local directory."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from casemap.common.constants import SERIES_TYPES
from casemap.common.errors import SourceUnavailableError
from casemap.common.fs import read_text


def read_local_payloads(directory: Path, filenames: Mapping[str, str]) -> dict[str, str]:
    missing = tuple(
        series_type
        for series_type in SERIES_TYPES
        if not (directory / filenames[series_type]).is_file()
    )
    if missing:
        raise SourceUnavailableError(
            f"Missing payload files in {directory}: {', '.join(filenames[name] for name in missing)}",
            series_types=missing,
        )

    payloads: dict[str, str] = {}
    for series_type in SERIES_TYPES:
        path = directory / filenames[series_type]
        try:
            payloads[series_type] = read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(
                f"Unreadable payload file {path}: {exc}",
                series_types=(series_type,),
            ) from exc
    return payloads
