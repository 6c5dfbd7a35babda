"""Plain-text summary of a filter run — the body of a site-locator report.

Covers, in order:
  1. Search summary (stations found, location, radius or drawn routes)
  2. Must-have stations and the cards they share
  3. Active features, fuel cards and surcharges
  4. Top fuel cards by coverage
"""

from __future__ import annotations

from collections.abc import Sequence

from fuel_locator.config.filters import FilterState
from fuel_locator.config.schema import FEATURE_LABELS, FEATURES, SURCHARGE_FIELDS
from fuel_locator.engine.coverage import format_card_name, top_cards_by_coverage
from fuel_locator.engine.must_have import resolve_indices
from fuel_locator.models.results import FilterResult
from fuel_locator.models.station import Station


def _heading(title: str) -> list[str]:
    return ["=" * 60, title, "=" * 60]


def generate_summary(
    result: FilterResult,
    filter_state: FilterState,
    all_stations: Sequence[Station] = (),
) -> str:
    """Render ``result`` as a sectioned text report."""
    sections: list[str] = []

    # ── 1. Search summary ──
    sections += _heading("SEARCH SUMMARY")
    found = f"Total Stations Found: {result.total_matched}"
    if result.truncated:
        found += f" (showing first {len(result.stations)})"
    sections.append(found)

    paths = filter_state.active_paths
    if paths:
        sections.append(f"Drawn routes: {len(paths)}")
        for i, p in enumerate(paths, start=1):
            sections.append(f"  Route {i}: {len(p.points)} points, {p.effective_buffer_meters:.0f} m buffer")
    elif filter_state.origin is not None:
        sections.append(f"Search Location: {filter_state.origin.lat:.5f}, {filter_state.origin.lng:.5f}")
        if filter_state.radius_miles:
            sections.append(f"Search Radius: {filter_state.radius_miles:g} miles")

    # ── 2. Must-have ──
    if filter_state.must_have_indices:
        pinned = resolve_indices(all_stations, filter_state.must_have_indices)
        sections.append("")
        sections += _heading(f"MUST HAVE STATIONS ({len(filter_state.must_have_indices)})")
        for s in pinned:
            address = s.full_address
            sections.append(f"  - {s.name}" + (f" ({address})" if address else ""))
        if result.must_have_cards:
            names = ", ".join(format_card_name(c) for c in result.must_have_cards)
            sections.append(f"Cards accepted at all of them: {names}")
        else:
            sections.append("No fuel card is accepted at all of them.")

    # ── 3. Active filters ──
    enabled = [FEATURE_LABELS.get(f, f) for f in FEATURES if filter_state.features.get(f)]
    if enabled:
        sections.append("")
        sections += _heading("FEATURES")
        sections += [f"  ✓ {label}" for label in enabled]

    if filter_state.selected_cards:
        sections.append("")
        sections += _heading("FUEL CARDS")
        sections += [f"  - {format_card_name(c)}" for c in filter_state.selected_cards]

    selected_surcharges = [(f, filter_state.surcharges[f]) for f in SURCHARGE_FIELDS if filter_state.surcharges.get(f)]
    if selected_surcharges:
        sections.append("")
        sections += _heading("SURCHARGES")
        for field, values in selected_surcharges:
            sections.append(f"  {field}: {', '.join(values)}")

    if filter_state.search_term:
        sections.append("")
        sections.append(f"Search term: {filter_state.search_term!r}")

    # ── 4. Coverage ──
    if result.stations:
        sections.append("")
        sections += _heading("TOP FUEL CARDS BY COVERAGE")
        for row in top_cards_by_coverage(result.stations):
            sections.append(f"  {format_card_name(row.card):28s} {row.count:5d}  ({row.percentage:5.1f}%)")

    return "\n".join(sections)
