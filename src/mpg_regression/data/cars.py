"""Loading and cleaning of the public cars dataset."""

from __future__ import annotations

import http.client
import json
import math
import urllib.error
import urllib.request
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from ..errors import NetworkError, ParseError

CARS_DATA_URL = "https://storage.googleapis.com/tfjs-tutorials/carsData.json"

MPG_FIELD = "Miles_per_Gallon"
HORSEPOWER_FIELD = "Horsepower"


@dataclass(frozen=True, slots=True)
class CleanRecord:
    """A car reduced to the two variables the regression uses."""

    mpg: float
    horsepower: float


def _as_number(record: Mapping[str, Any], field: str) -> float | None:
    value = record.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"{field} must be numeric, got {value!r}")
    if not math.isfinite(value):
        raise ParseError(f"{field} must be finite, got {value!r}")
    return float(value)


def clean_records(raw_records: Iterable[Mapping[str, Any]]) -> List[CleanRecord]:
    """Project raw records to ``(mpg, horsepower)`` and drop incomplete ones.

    Input order is preserved. Records missing either field, or holding
    ``null`` for it, are skipped rather than defaulted.
    """

    cleaned: List[CleanRecord] = []
    for index, record in enumerate(raw_records):
        if not isinstance(record, Mapping):
            raise ParseError(f"record {index} is not an object: {record!r}")
        mpg = _as_number(record, MPG_FIELD)
        horsepower = _as_number(record, HORSEPOWER_FIELD)
        if mpg is None or horsepower is None:
            continue
        cleaned.append(CleanRecord(mpg=mpg, horsepower=horsepower))
    return cleaned


def _parse_payload(payload: bytes | str) -> List[Mapping[str, Any]]:
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"dataset is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ParseError(f"expected a JSON array of records, got {type(data).__name__}")
    return data


def _fetch_payload(url: str, timeout: float | None) -> bytes:
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            return response.read()
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        raise NetworkError(f"failed to fetch {url}: {exc}") from exc


def fetch_raw_records(source_url: str, *, timeout: float | None = 30.0) -> List[Mapping[str, Any]]:
    """Retrieve and parse the JSON array behind ``source_url``."""

    return _parse_payload(_fetch_payload(source_url, timeout))


def fetch_clean_records(source_url: str = CARS_DATA_URL, *, timeout: float | None = 30.0) -> List[CleanRecord]:
    """Fetch the dataset and return only the complete ``(mpg, horsepower)`` records."""

    return clean_records(fetch_raw_records(source_url, timeout=timeout))


def load_clean_records(path: str | Path) -> List[CleanRecord]:
    """Read a locally cached copy of the dataset."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    return clean_records(_parse_payload(path.read_bytes()))


def download_dataset(
    url: str,
    destination: str | Path,
    *,
    force: bool = False,
    timeout: float | None = 30.0,
) -> bool:
    """Store the raw dataset at ``destination``.

    Returns ``False`` when the file already exists and ``force`` is not set.
    """

    destination = Path(destination)
    if destination.exists() and not force:
        return False
    destination.parent.mkdir(parents=True, exist_ok=True)
    payload = _fetch_payload(url, timeout)
    _parse_payload(payload)
    with destination.open("wb") as handle:
        handle.write(payload)
    return True


__all__ = [
    "CARS_DATA_URL",
    "CleanRecord",
    "clean_records",
    "download_dataset",
    "fetch_clean_records",
    "fetch_raw_records",
    "load_clean_records",
]
