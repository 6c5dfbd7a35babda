"""Card coverage reporting over a filtered station set.

  - ``card_coverage``         — share of stations accepting each card
  - ``top_cards_by_coverage`` — the best-covered cards by raw count
  - ``compare_cards``         — what switching from one card to another loses
"""

from __future__ import annotations

from collections.abc import Sequence

from fuel_locator.config.schema import FUEL_CARDS
from fuel_locator.engine.filters import station_accepts_card
from fuel_locator.models.results import CardComparison, CardCoverage, ComparisonStats
from fuel_locator.models.station import Station


def format_card_name(card_id: str) -> str:
    """``"uk-fuels"`` → ``"Uk Fuels"``."""
    return " ".join(word[:1].upper() + word[1:] for word in card_id.split("-"))


def _coverage_for(stations: Sequence[Station], card: str) -> CardCoverage:
    total = len(stations)
    count = sum(1 for s in stations if station_accepts_card(s, card))
    percentage = round(count / total * 100, 1) if total else 0.0
    return CardCoverage(card=card, count=count, total=total, percentage=percentage)


def card_coverage(
    stations: Sequence[Station],
    must_have_cards: Sequence[str] | None = None,
) -> list[CardCoverage]:
    """Coverage per card, highest percentage first.

    When ``must_have_cards`` is non-empty only those cards are reported.
    Cards no station accepts are left out.
    """
    if not stations:
        return []

    cards = must_have_cards if must_have_cards else FUEL_CARDS
    rows = [_coverage_for(stations, card) for card in cards]
    rows = [r for r in rows if r.count > 0]
    rows.sort(key=lambda r: r.percentage, reverse=True)
    return rows


def top_cards_by_coverage(stations: Sequence[Station], limit: int = 5) -> list[CardCoverage]:
    """The ``limit`` cards accepted at the most stations (zero counts included)."""
    rows = [_coverage_for(stations, card) for card in FUEL_CARDS]
    rows.sort(key=lambda r: r.count, reverse=True)
    return rows[:limit]


def compare_cards(
    stations: Sequence[Station],
    selected_card: str,
    comparison_card: str,
) -> CardComparison:
    """Stations reachable with ``comparison_card`` but not ``selected_card``."""
    stats = ComparisonStats()
    missing: list[Station] = []
    for s in stations:
        accepts_selected = station_accepts_card(s, selected_card)
        accepts_comparison = station_accepts_card(s, comparison_card)
        if accepts_selected and accepts_comparison:
            stats.both_cards += 1
        elif accepts_selected:
            stats.selected_only += 1
        elif accepts_comparison:
            stats.comparison_only += 1
            missing.append(s)

    return CardComparison(
        selected_card=selected_card,
        comparison_card=comparison_card,
        missing_stations=missing,
        stats=stats,
    )
