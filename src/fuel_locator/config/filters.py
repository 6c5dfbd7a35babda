"""Filter state — everything a client can select to narrow the station list."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from fuel_locator.config.schema import (
    DEFAULT_PATH_BUFFER_METERS,
    FEATURES,
    FUEL_CARDS,
    SURCHARGE_FIELDS,
)


class GeoPoint(BaseModel):
    """A WGS84 coordinate in degrees.

    Accepts either ``{"lat": .., "lng": ..}`` or a ``[lat, lng]`` pair.
    """

    lat: float = Field(ge=-90.0, le=90.0, description="Latitude (degrees)")
    lng: float = Field(ge=-180.0, le=180.0, description="Longitude (degrees)")

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {"lat": data[0], "lng": data[1]}
        return data

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class DrawnPath(BaseModel):
    """A freehand route with a buffer tolerance.

    A path with fewer than two points is inactive and never matches.
    """

    points: list[GeoPoint] = Field(default_factory=list, description="Ordered vertices of the polyline")
    buffer_meters: float | None = Field(
        default=None,
        description="Corridor half-width in meters. Unset, non-finite or "
                    "non-positive values fall back to 1000 m.",
    )

    @property
    def is_active(self) -> bool:
        return len(self.points) >= 2

    @property
    def effective_buffer_meters(self) -> float:
        b = self.buffer_meters
        if b is None or not math.isfinite(b) or b <= 0:
            return DEFAULT_PATH_BUFFER_METERS
        return b

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        return [p.as_tuple() for p in self.points]


class FilterState(BaseModel):
    """Currently active predicates.

    Card selection is OR within the group; surcharge selection is OR within
    a category.  ``drawn_paths`` take precedence over ``origin`` + ``radius_miles``.
    """

    selected_cards: list[str] = Field(
        default_factory=list,
        description="Fuel card ids; a station must accept at least one of them",
    )
    search_term: str = Field(default="", description="Case-insensitive text matched against name and address")
    features: dict[str, bool] = Field(
        default_factory=dict,
        description="Feature toggles keyed by feature id, e.g. {'hgv': true}",
    )
    surcharges: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Selected surcharge values per surcharge field",
    )
    origin: GeoPoint | None = Field(default=None, description="Centre of the radius search")
    radius_miles: float | None = Field(default=None, ge=0, description="Radius search distance (miles)")
    drawn_paths: list[DrawnPath] = Field(default_factory=list)
    must_have_indices: list[int] = Field(
        default_factory=list,
        description="Indices into the full station list pinned as must-have",
    )

    @field_validator("selected_cards")
    @classmethod
    def _known_cards(cls, v: list[str]) -> list[str]:
        unknown = [c for c in v if c not in FUEL_CARDS]
        if unknown:
            raise ValueError(f"unknown fuel card(s): {', '.join(unknown)}")
        return v

    @field_validator("features")
    @classmethod
    def _known_features(cls, v: dict[str, bool]) -> dict[str, bool]:
        unknown = [f for f in v if f not in FEATURES]
        if unknown:
            raise ValueError(f"unknown feature(s): {', '.join(unknown)}")
        return v

    @field_validator("surcharges")
    @classmethod
    def _known_surcharge_fields(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = [f for f in v if f not in SURCHARGE_FIELDS]
        if unknown:
            raise ValueError(f"unknown surcharge field(s): {', '.join(unknown)}")
        return v

    @property
    def active_paths(self) -> list[DrawnPath]:
        return [p for p in self.drawn_paths if p.is_active]
