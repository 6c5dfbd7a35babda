"""Result types — the contract between the engine, the API and reports."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fuel_locator.models.station import Station


class ActiveFilterCounts(BaseModel):
    """Badge counts per filter group."""

    features: int = 0
    fuel_cards: int = 0
    surcharges: int = 0
    must_have: int = 0
    search: int = 0

    @property
    def total(self) -> int:
        return self.features + self.fuel_cards + self.surcharges + self.must_have + self.search


class FilterResult(BaseModel):
    """Output of one pipeline run."""

    stations: list[Station]
    total_matched: int
    """Stations surviving every filter, before the ``max_results`` cap."""
    truncated: bool = False
    must_have_cards: list[str] | None = None
    """Cards common to every must-have station; None when nothing is pinned."""
    active_filters: ActiveFilterCounts = Field(default_factory=ActiveFilterCounts)


class CardCoverage(BaseModel):
    """How many stations in a set accept one card."""

    card: str
    count: int
    total: int
    percentage: float
    """count / total × 100, rounded to one decimal place."""


class ComparisonStats(BaseModel):
    both_cards: int = 0
    selected_only: int = 0
    comparison_only: int = 0


class CardComparison(BaseModel):
    """Selected card vs comparison card over one station set."""

    selected_card: str
    comparison_card: str
    missing_stations: list[Station]
    """Stations accepting the comparison card but not the selected one."""
    stats: ComparisonStats


class GeocodeResult(BaseModel):
    """One place returned by the geocoding collaborator."""

    place_id: str | None = None
    display_name: str = ""
    lat: float
    lng: float
    address: dict[str, str] = Field(default_factory=dict)
    importance: float = 0.0
    has_postcode: bool = False
