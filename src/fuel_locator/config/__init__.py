"""Configuration models — filter inputs, pipeline contract, settings."""

from fuel_locator.config.filters import DrawnPath, FilterState, GeoPoint
from fuel_locator.config.pipeline import PipelineConfig
from fuel_locator.config.geocoding import GeocodingConfig
from fuel_locator.config.settings import Settings, load_settings
from fuel_locator.config.schema import FEATURES, FUEL_CARDS, SURCHARGE_FIELDS

__all__ = [
    "GeoPoint",
    "DrawnPath",
    "FilterState",
    "PipelineConfig",
    "GeocodingConfig",
    "Settings",
    "load_settings",
    "FUEL_CARDS",
    "FEATURES",
    "SURCHARGE_FIELDS",
]
