"""Engine — geometry, filter primitives, pipeline and reporting."""

from fuel_locator.engine.geo import distance_meters, distance_miles, is_within_buffered_path
from fuel_locator.engine.filters import (
    filter_by_cards,
    filter_by_feature,
    filter_by_paths,
    filter_by_radius,
    filter_by_search,
    filter_by_surcharge,
    parse_flag,
    station_accepts_card,
    station_has_feature,
    surcharge_values_for,
)
from fuel_locator.engine.must_have import cards_common_to_stations, toggle_must_have
from fuel_locator.engine.pipeline import active_filter_counts, compute_filtered_stations, run_pipeline
from fuel_locator.engine.coverage import card_coverage, compare_cards, format_card_name, top_cards_by_coverage
from fuel_locator.engine.loader import clean_stations, load_stations

__all__ = [
    "distance_miles",
    "distance_meters",
    "is_within_buffered_path",
    "parse_flag",
    "station_accepts_card",
    "station_has_feature",
    "filter_by_cards",
    "filter_by_search",
    "filter_by_feature",
    "filter_by_surcharge",
    "filter_by_radius",
    "filter_by_paths",
    "surcharge_values_for",
    "cards_common_to_stations",
    "toggle_must_have",
    "compute_filtered_stations",
    "run_pipeline",
    "active_filter_counts",
    "card_coverage",
    "top_cards_by_coverage",
    "compare_cards",
    "format_card_name",
    "clean_stations",
    "load_stations",
]
