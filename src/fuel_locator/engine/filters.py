"""Filter primitives — independent predicates and transforms over stations.

Every ``filter_*`` function returns a new list and leaves its input alone.
An empty or unset selection makes the filter a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from fuel_locator.config.filters import DrawnPath, GeoPoint
from fuel_locator.config.schema import SEARCH_FIELDS
from fuel_locator.engine.geo import BufferMode, distance_miles, is_within_buffered_path
from fuel_locator.models.station import Station


# ═══════════════════════════════════════════════════════════════════════════
# Flag encoding
# ═══════════════════════════════════════════════════════════════════════════

def parse_flag(value: Any) -> bool:
    """Strict boolean-like test: only ``1``, ``1.0`` and ``"1"`` are true.

    ``True``, ``"yes"``, ``"true"`` and ``"1.0"`` are all false.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 1
    return value == "1"


# ═══════════════════════════════════════════════════════════════════════════
# Fuel cards, features, search
# ═══════════════════════════════════════════════════════════════════════════

def station_accepts_card(station: Station, card_id: str) -> bool:
    return card_id in station.accepted_cards


def station_has_feature(station: Station, feature: str) -> bool:
    return feature in station.features


def filter_by_cards(stations: Sequence[Station], cards: Iterable[str] | None) -> list[Station]:
    """Keep stations accepting at least one of ``cards`` (OR)."""
    wanted = set(cards or ())
    if not wanted:
        return list(stations)
    return [s for s in stations if not wanted.isdisjoint(s.accepted_cards)]


def filter_by_search(stations: Sequence[Station], term: str | None) -> list[Station]:
    """Case-insensitive substring match on name, address line 1, city or region."""
    if not term:
        return list(stations)
    needle = term.lower()
    return [
        s for s in stations
        if any(needle in (getattr(s, f) or "").lower() for f in SEARCH_FIELDS)
    ]


def filter_by_feature(stations: Sequence[Station], feature: str, enabled: bool) -> list[Station]:
    if not enabled:
        return list(stations)
    return [s for s in stations if station_has_feature(s, feature)]


# ═══════════════════════════════════════════════════════════════════════════
# Surcharges
# ═══════════════════════════════════════════════════════════════════════════

def filter_by_surcharge(
    stations: Sequence[Station],
    field: str,
    selected: Iterable[str] | None,
) -> list[Station]:
    """Keep stations whose trimmed ``field`` value is one of ``selected``.

    Once a selection is active, stations with no value for ``field`` are
    dropped regardless of what was selected.
    """
    wanted = {str(v).strip() for v in (selected or ())}
    if not wanted:
        return list(stations)
    return [s for s in stations if s.surcharges.get(field) in wanted]


def surcharge_values_for(stations: Iterable[Station], field: str) -> list[str]:
    """Sorted, deduplicated non-empty values of ``field`` across ``stations``."""
    values = {s.surcharges[field].strip() for s in stations if s.surcharges.get(field)}
    values.discard("")
    return sorted(values)


# ═══════════════════════════════════════════════════════════════════════════
# Spatial
# ═══════════════════════════════════════════════════════════════════════════

def filter_by_radius(
    stations: Sequence[Station],
    origin: GeoPoint | None,
    radius_miles: float | None,
) -> list[Station]:
    """Stations within ``radius_miles`` of ``origin``, nearest first.

    Survivors are copies carrying a fresh ``distance``.  Without an origin
    or with a zero/unset radius the input is returned as-is.
    """
    if origin is None or not radius_miles:
        return list(stations)

    within: list[Station] = []
    for s in stations:
        d = distance_miles(origin.lat, origin.lng, s.lat, s.lng)
        if d <= radius_miles:
            within.append(s.with_distance(d))
    within.sort(key=lambda s: s.distance)
    return within


def filter_by_paths(
    stations: Sequence[Station],
    paths: Iterable[DrawnPath],
    mode: BufferMode = "endpoint",
) -> list[Station]:
    """Stations inside the buffer of any active drawn path, in input order.

    With no active path the input is returned as-is.
    """
    active = [(p.coordinates, p.effective_buffer_meters) for p in paths if p.is_active]
    if not active:
        return list(stations)
    return [
        s for s in stations
        if any(
            is_within_buffered_path((s.lat, s.lng), coords, buffer, mode)
            for coords, buffer in active
        )
    ]
