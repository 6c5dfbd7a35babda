"""Data and result models."""

from fuel_locator.models.station import Station
from fuel_locator.models.results import (
    ActiveFilterCounts,
    CardComparison,
    CardCoverage,
    ComparisonStats,
    FilterResult,
    GeocodeResult,
)

__all__ = [
    "Station",
    "ActiveFilterCounts",
    "CardComparison",
    "CardCoverage",
    "ComparisonStats",
    "FilterResult",
    "GeocodeResult",
]
