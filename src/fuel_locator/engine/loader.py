"""Dataset ingestion — raw station records into the typed working set.

  1. ``read_records``   — JSON array or CSV (header row) → list of dicts
  2. ``clean_stations`` — validate coordinates, resolve flag encoding
  3. ``load_stations``  — both of the above

Rows without a name or without usable coordinates never enter the working
set.  They are skipped, counted and logged, never raised.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Literal

from fuel_locator.config.schema import ADDRESS_FIELDS, FEATURES, FUEL_CARDS, SURCHARGE_FIELDS
from fuel_locator.engine.filters import parse_flag
from fuel_locator.models.station import Station

logger = logging.getLogger(__name__)

DatasetFormat = Literal["json", "csv"]


# ═══════════════════════════════════════════════════════════════════════════
# Reading
# ═══════════════════════════════════════════════════════════════════════════

def read_records(
    source: str | Path | io.StringIO,
    fmt: DatasetFormat | None = None,
) -> list[dict[str, Any]]:
    """Read raw records from a file path or in-memory text.

    ``fmt`` defaults to the file suffix for paths; in-memory sources are
    sniffed (a leading ``[`` means JSON).
    """
    if isinstance(source, io.StringIO):
        source.seek(0)
        text = source.read()
        if fmt is None:
            fmt = "json" if text.lstrip().startswith("[") else "csv"
        return _parse_text(text, fmt)

    path = Path(source)
    if fmt is None:
        suffix = path.suffix.lower().lstrip(".")
        if suffix not in ("json", "csv"):
            raise ValueError(f"Unsupported dataset format: {path.suffix or '(none)'}")
        fmt = suffix  # type: ignore[assignment]
    with path.open(newline="", encoding="utf-8") as f:
        return _parse_text(f.read(), fmt)


def _parse_text(text: str, fmt: DatasetFormat) -> list[dict[str, Any]]:
    if fmt == "json":
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("JSON station dataset must be an array of objects")
        return [row for row in data if isinstance(row, dict)]
    return list(csv.DictReader(io.StringIO(text)))


# ═══════════════════════════════════════════════════════════════════════════
# Cleaning
# ═══════════════════════════════════════════════════════════════════════════

def parse_coordinate(value: Any) -> float | None:
    """Float from a number or numeric string; None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalise_surcharge(value: Any) -> str | None:
    """Trimmed string form of a surcharge value; None when there is no data."""
    if not value:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clean_station(record: Mapping[str, Any], index: int | None = None) -> Station | None:
    """Convert one raw record, or return None if it cannot be used."""
    name = _optional_text(record.get("name"))
    lat = parse_coordinate(record.get("lat"))
    lng = parse_coordinate(record.get("lng"))
    if name is None or lat is None or lng is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None

    surcharges: dict[str, str] = {}
    for field in SURCHARGE_FIELDS:
        value = normalise_surcharge(record.get(field))
        if value is not None:
            surcharges[field] = value

    return Station(
        name=name,
        lat=lat,
        lng=lng,
        accepted_cards=frozenset(c for c in FUEL_CARDS if parse_flag(record.get(c))),
        features=frozenset(f for f in FEATURES if parse_flag(record.get(f))),
        surcharges=surcharges,
        network=_optional_text(record.get("network")),
        index=index,
        **{f: _optional_text(record.get(f)) for f in ADDRESS_FIELDS},
    )


def clean_stations(records: Iterable[Mapping[str, Any]]) -> list[Station]:
    """Build the working set, numbering kept stations from 0."""
    stations: list[Station] = []
    skipped = 0
    for record in records:
        station = clean_station(record, index=len(stations))
        if station is None:
            skipped += 1
            logger.debug("[LOAD] skipping record without name/coordinates: %r", record.get("name"))
            continue
        stations.append(station)

    if skipped:
        logger.warning("[LOAD] skipped %d record(s) without a name or valid coordinates", skipped)
    return stations


def load_stations(
    source: str | Path | io.StringIO,
    fmt: DatasetFormat | None = None,
) -> list[Station]:
    """Read and clean a station dataset."""
    records = read_records(source, fmt)
    stations = clean_stations(records)
    logger.info("[LOAD] %d stations loaded from %d records", len(stations), len(records))
    return stations
