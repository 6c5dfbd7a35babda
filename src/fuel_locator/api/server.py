"""FastAPI server — HTTP surface over the station filter engine.

Run with:
    uvicorn fuel_locator.api.server:app --reload --port 8000

Or:
    python -m fuel_locator.api.server

Endpoints:
    GET  /health              — liveness
    GET  /cards               — fixed fuel card list with display names
    GET  /surcharges/{field}  — selectable values for one surcharge field
    POST /stations/filter     — run the filter pipeline
    POST /stations/must-have  — cards common to pinned stations
    POST /stations/coverage   — filter, then card coverage
    POST /stations/compare    — filter, then compare two cards
    POST /stations/summary    — filter, then plain-text report
    GET  /geocode/search      — free text → candidate locations
    GET  /geocode/reverse     — coordinates → address
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from fuel_locator.api.narrative import generate_summary
from fuel_locator.config.filters import FilterState
from fuel_locator.config.pipeline import PipelineConfig
from fuel_locator.config.schema import FUEL_CARDS, SURCHARGE_FIELDS
from fuel_locator.config.settings import Settings, load_settings
from fuel_locator.engine.coverage import card_coverage, compare_cards, format_card_name, top_cards_by_coverage
from fuel_locator.engine.filters import surcharge_values_for
from fuel_locator.engine.loader import load_stations
from fuel_locator.engine.must_have import cards_common_to_stations
from fuel_locator.engine.pipeline import run_pipeline
from fuel_locator.models.results import CardComparison, CardCoverage, FilterResult, GeocodeResult
from fuel_locator.models.station import Station
from fuel_locator.services.geocoding import (
    GeocodingConfigError,
    GeocodingAuthError,
    GeocodingError,
    GeocodingRateLimitError,
    LocationIQClient,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Fuel Site Locator API",
    version="1.0",
    description=(
        "Filter a fuel station dataset by location (radius or drawn route), "
        "fuel card acceptance, features, surcharges and must-have stations."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def _load_dataset(path: str) -> tuple[Station, ...]:
    return tuple(load_stations(path))


def get_stations(settings: Settings = Depends(get_settings)) -> list[Station]:
    """The working station set, loaded once per dataset path."""
    if not settings.dataset_path:
        logger.warning("[API] FUEL_LOCATOR_DATASET is not set; serving an empty station set")
        return []
    return list(_load_dataset(settings.dataset_path))


def get_geocoder(settings: Settings = Depends(get_settings)) -> LocationIQClient:
    return LocationIQClient(settings.geocoding)


@app.exception_handler(GeocodingError)
def geocoding_error_handler(request: Request, exc: GeocodingError) -> JSONResponse:
    if isinstance(exc, GeocodingRateLimitError):
        status = 429
    elif isinstance(exc, (GeocodingConfigError, GeocodingAuthError)):
        status = 503
    else:
        status = 502
    logger.warning("[API] geocoding failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class FilterRequest(BaseModel):
    """Request body for the /stations/* endpoints. Missing fields use defaults."""
    filters: FilterState = Field(default_factory=FilterState)
    config: PipelineConfig | None = Field(
        default=None,
        description="Per-call pipeline contract. None = server default.",
    )


class MustHaveRequest(BaseModel):
    indices: list[int] = Field(default_factory=list)


class MustHaveResponse(BaseModel):
    cards: list[str] | None


class CompareRequest(FilterRequest):
    selected_card: str
    comparison_card: str

    @field_validator("selected_card", "comparison_card")
    @classmethod
    def _known_card(cls, v: str) -> str:
        if v not in FUEL_CARDS:
            raise ValueError(f"unknown fuel card: {v}")
        return v


class CardInfo(BaseModel):
    id: str
    name: str


class CoverageResponse(BaseModel):
    coverage: list[CardCoverage]
    top_cards: list[CardCoverage]
    total_stations: int


class SummaryResponse(BaseModel):
    summary: str
    total_matched: int


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _run(req: FilterRequest, stations: list[Station], settings: Settings) -> FilterResult:
    return run_pipeline(stations, req.filters, req.config or settings.pipeline)


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Fuel Site Locator API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/cards", response_model=list[CardInfo])
def list_cards():
    """The fixed fuel card list, in canonical order."""
    return [CardInfo(id=c, name=format_card_name(c)) for c in FUEL_CARDS]


@app.get("/surcharges/{field}", response_model=list[str])
def list_surcharge_values(field: str, stations: list[Station] = Depends(get_stations)):
    """Sorted, deduplicated values seen for one surcharge field."""
    if field not in SURCHARGE_FIELDS:
        raise HTTPException(status_code=404, detail=f"Unknown surcharge field: {field}")
    return surcharge_values_for(stations, field)


@app.post("/stations/filter", response_model=FilterResult)
def filter_stations(
    req: FilterRequest,
    stations: list[Station] = Depends(get_stations),
    settings: Settings = Depends(get_settings),
):
    """Run the full filter pipeline.

    Example request:
    ```json
    {"filters": {"origin": {"lat": 51.5, "lng": -0.12}, "radius_miles": 5,
                 "selected_cards": ["uk-fuels"]}}
    ```
    """
    return _run(req, stations, settings)


@app.post("/stations/must-have", response_model=MustHaveResponse)
def must_have_cards(req: MustHaveRequest, stations: list[Station] = Depends(get_stations)):
    """Cards accepted at every pinned station; ``null`` when nothing is pinned."""
    return MustHaveResponse(cards=cards_common_to_stations(stations, req.indices))


@app.post("/stations/coverage", response_model=CoverageResponse)
def station_coverage(
    req: FilterRequest,
    stations: list[Station] = Depends(get_stations),
    settings: Settings = Depends(get_settings),
):
    result = _run(req, stations, settings)
    return CoverageResponse(
        coverage=card_coverage(result.stations, result.must_have_cards),
        top_cards=top_cards_by_coverage(result.stations),
        total_stations=len(result.stations),
    )


@app.post("/stations/compare", response_model=CardComparison)
def station_compare(
    req: CompareRequest,
    stations: list[Station] = Depends(get_stations),
    settings: Settings = Depends(get_settings),
):
    """Stations lost by choosing ``selected_card`` over ``comparison_card``."""
    result = _run(req, stations, settings)
    return compare_cards(result.stations, req.selected_card, req.comparison_card)


@app.post("/stations/summary", response_model=SummaryResponse)
def station_summary(
    req: FilterRequest,
    stations: list[Station] = Depends(get_stations),
    settings: Settings = Depends(get_settings),
):
    result = _run(req, stations, settings)
    return SummaryResponse(
        summary=generate_summary(result, req.filters, stations),
        total_matched=result.total_matched,
    )


@app.get("/geocode/search", response_model=list[GeocodeResult])
def geocode_search(
    q: str = Query(..., description="Address, place name or UK postcode"),
    geocoder: LocationIQClient = Depends(get_geocoder),
):
    # Short queries return nothing rather than spending an API call
    if len(q.strip()) < 3:
        return []
    return geocoder.search(q)


@app.get("/geocode/reverse", response_model=GeocodeResult)
def geocode_reverse(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    geocoder: LocationIQClient = Depends(get_geocoder),
):
    return geocoder.reverse(lat, lng)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "fuel_locator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
