"""Filter pipeline — composes the primitives in a fixed precedence order.

Stages (each consumes the previous stage's output):
  1. Spatial        — drawn paths, else origin + radius, else pass-through
                      (or nothing at all when ``require_location`` is set)
  2. Must-have      — OR over the cards common to every pinned station
  3. Fuel cards     — OR over the user's selection
  4. Search text
  5. Features       — one stage per enabled toggle
  6. Surcharges     — one stage per field with a selection
  7. Result cap     — ``max_results``

Stages 2 and 3 run one after the other, so a station must pass both.
The pipeline is a pure function of (stations, filter state, config).

Entry points: ``compute_filtered_stations`` (list) and ``run_pipeline``
(``FilterResult`` with counts and must-have cards).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fuel_locator.config.filters import FilterState
from fuel_locator.config.pipeline import PipelineConfig
from fuel_locator.config.schema import FEATURES, SURCHARGE_FIELDS
from fuel_locator.engine.filters import (
    filter_by_cards,
    filter_by_feature,
    filter_by_paths,
    filter_by_radius,
    filter_by_search,
    filter_by_surcharge,
)
from fuel_locator.engine.must_have import cards_common_to_stations
from fuel_locator.models.results import ActiveFilterCounts, FilterResult
from fuel_locator.models.station import Station

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Public entry points
# ═══════════════════════════════════════════════════════════════════════════

def compute_filtered_stations(
    all_stations: Sequence[Station],
    filter_state: FilterState,
    config: PipelineConfig | None = None,
) -> list[Station]:
    """Visible stations for ``filter_state``, capped at ``config.max_results``."""
    config = config or PipelineConfig()
    matched = _apply_filters(all_stations, filter_state, config)
    if config.max_results is not None:
        return matched[: config.max_results]
    return matched


def run_pipeline(
    all_stations: Sequence[Station],
    filter_state: FilterState,
    config: PipelineConfig | None = None,
) -> FilterResult:
    """Run the pipeline and report what happened alongside the stations."""
    config = config or PipelineConfig()
    matched = _apply_filters(all_stations, filter_state, config)
    visible = matched[: config.max_results] if config.max_results is not None else matched
    return FilterResult(
        stations=visible,
        total_matched=len(matched),
        truncated=len(visible) < len(matched),
        must_have_cards=cards_common_to_stations(all_stations, filter_state.must_have_indices),
        active_filters=active_filter_counts(filter_state),
    )


def active_filter_counts(filter_state: FilterState) -> ActiveFilterCounts:
    """Per-group counts of the selections currently in effect."""
    return ActiveFilterCounts(
        features=sum(1 for enabled in filter_state.features.values() if enabled),
        fuel_cards=len(filter_state.selected_cards),
        surcharges=sum(len(v) for v in filter_state.surcharges.values()),
        must_have=len(filter_state.must_have_indices),
        search=1 if filter_state.search_term else 0,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Stages
# ═══════════════════════════════════════════════════════════════════════════

def _apply_filters(
    all_stations: Sequence[Station],
    state: FilterState,
    config: PipelineConfig,
) -> list[Station]:
    stations = _spatial_stage(all_stations, state, config)
    if stations is None:
        logger.debug("[PIPELINE] no location and require_location set, returning nothing")
        return []
    logger.debug("[PIPELINE] spatial: %d of %d", len(stations), len(all_stations))

    must_have_cards = cards_common_to_stations(all_stations, state.must_have_indices)
    if must_have_cards:
        stations = filter_by_cards(stations, must_have_cards)
        logger.debug("[PIPELINE] must-have %s: %d", must_have_cards, len(stations))

    if state.selected_cards:
        stations = filter_by_cards(stations, state.selected_cards)
        logger.debug("[PIPELINE] cards %s: %d", state.selected_cards, len(stations))

    if state.search_term:
        stations = filter_by_search(stations, state.search_term)
        logger.debug("[PIPELINE] search %r: %d", state.search_term, len(stations))

    for feature in FEATURES:
        if state.features.get(feature):
            stations = filter_by_feature(stations, feature, True)
            logger.debug("[PIPELINE] feature %s: %d", feature, len(stations))

    for field in SURCHARGE_FIELDS:
        selected = state.surcharges.get(field)
        if selected:
            stations = filter_by_surcharge(stations, field, selected)
            logger.debug("[PIPELINE] surcharge %s=%s: %d", field, selected, len(stations))

    return stations


def _spatial_stage(
    all_stations: Sequence[Station],
    state: FilterState,
    config: PipelineConfig,
) -> list[Station] | None:
    """Stage 1.  Returns ``None`` when a location is required but missing."""
    paths = state.active_paths
    if paths:
        return filter_by_paths(all_stations, paths, config.buffer_mode)

    if state.origin is not None and state.radius_miles:
        return filter_by_radius(all_stations, state.origin, state.radius_miles)

    if config.require_location:
        return None
    return list(all_stations)
