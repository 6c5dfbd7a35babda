"""Geocoding collaborator settings (LocationIQ)."""

from pydantic import BaseModel, Field

LOCATIONIQ_BASE_URL = "https://us1.locationiq.com/v1"
LOCATIONIQ_EU_URL = "https://eu1.locationiq.com/v1"


class GeocodingConfig(BaseModel):
    """Connection settings for the LocationIQ forward/reverse geocoder."""

    api_key: str = Field(default="", description="LocationIQ API key. Empty = geocoding disabled.")
    base_url: str = Field(default=LOCATIONIQ_BASE_URL, description="API root; use the EU host inside Europe")
    country_codes: str = Field(default="gb", description="Comma-separated ISO country codes to restrict results to")
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP timeout per request (s)")
    max_results: int = Field(default=10, ge=1, le=50, description="Results returned by a forward search")
