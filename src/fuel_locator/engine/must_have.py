"""Must-have aggregation — cards accepted at every pinned station.

This is AND across stations, unlike the OR of ``filter_by_cards``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fuel_locator.config.schema import FUEL_CARDS
from fuel_locator.models.station import Station


def resolve_indices(all_stations: Sequence[Station], indices: Iterable[int]) -> list[Station]:
    """Stations at ``indices``; out-of-range and negative indices are skipped."""
    n = len(all_stations)
    return [all_stations[i] for i in indices if 0 <= i < n]


def cards_common_to_stations(
    all_stations: Sequence[Station],
    indices: Sequence[int] | None,
) -> list[str] | None:
    """Fuel cards accepted by every station in ``indices``.

    Returns ``None`` when nothing is pinned, which is different from ``[]``
    (stations are pinned but share no card, or none of the indices resolve).
    Cards come back in ``FUEL_CARDS`` order.
    """
    if not indices:
        return None

    pinned = resolve_indices(all_stations, indices)
    if not pinned:
        return []

    return [card for card in FUEL_CARDS if all(card in s.accepted_cards for s in pinned)]


def toggle_must_have(indices: Sequence[int], index: int) -> list[int]:
    """Return ``indices`` with ``index`` removed if present, else appended."""
    if index in indices:
        return [i for i in indices if i != index]
    return [*indices, index]
