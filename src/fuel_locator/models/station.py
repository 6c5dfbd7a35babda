"""Station record — the cleaned, typed form of one dataset row."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_serializer

from fuel_locator.config.schema import ADDRESS_FIELDS


class Station(BaseModel):
    """One fuel station in the working set.

    Built by ``engine.loader.clean_stations``; raw ``1``/``1.0``/``"1"`` flags
    are already resolved into ``accepted_cards`` and ``features``.
    """

    name: str = Field(min_length=1)
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    accepted_cards: frozenset[str] = Field(default_factory=frozenset)
    """Fuel card ids this station accepts (subset of ``FUEL_CARDS``)."""

    features: frozenset[str] = Field(default_factory=frozenset)
    """Feature ids this station offers (subset of ``FEATURES``)."""

    surcharges: dict[str, str] = Field(default_factory=dict)
    """Surcharge field → trimmed value.  Fields without data are absent."""

    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    region: str | None = None
    zip: str | None = None
    network: str | None = None

    index: int | None = None
    """Position in the loaded working set; must-have selections refer to it."""

    distance: float | None = None
    """Miles from the origin of the radius search that produced this copy."""

    @field_serializer("accepted_cards", "features")
    def _sorted_ids(self, v: frozenset[str]) -> list[str]:
        return sorted(v)

    @property
    def full_address(self) -> str:
        parts = [getattr(self, f) for f in ADDRESS_FIELDS]
        return ", ".join(p for p in parts if p)

    def with_distance(self, miles: float) -> Station:
        """Return a copy annotated with ``distance``; ``self`` is untouched."""
        return self.model_copy(update={"distance": miles})
