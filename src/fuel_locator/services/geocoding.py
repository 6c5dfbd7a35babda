"""LocationIQ geocoding — turns free text into an origin point.

This is the only part of the package that does network I/O.  Failures are
raised as ``GeocodingError`` subclasses here, at the boundary; the filter
engine only ever sees the resolved coordinates.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import requests

from fuel_locator.config.geocoding import GeocodingConfig
from fuel_locator.engine.loader import parse_coordinate
from fuel_locator.models.results import GeocodeResult

logger = logging.getLogger(__name__)

# e.g. SW1A 1AA, M1 1AA, B33 8TH, W1A 0AX
_UK_POSTCODE_RE = re.compile(r"^[A-Z]{1,2}[0-9]{1,2}[A-Z]?\s?[0-9][A-Z]{2}$", re.IGNORECASE)

POSTCODE_SEARCH_LIMIT = 20
DEFAULT_SEARCH_LIMIT = 10


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GeocodingError(Exception):
    """The geocoder could not produce a result."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeocodingConfigError(GeocodingError):
    """No API key configured."""


class GeocodingAuthError(GeocodingError):
    """The API key was rejected (HTTP 401)."""


class GeocodingRateLimitError(GeocodingError):
    """Too many requests (HTTP 429)."""


# ---------------------------------------------------------------------------
# Postcode helpers
# ---------------------------------------------------------------------------


def is_uk_postcode(query: str) -> bool:
    return bool(_UK_POSTCODE_RE.match(query.strip()))


def has_matching_postcode(address: dict[str, Any], query: str) -> bool:
    """True if ``address['postcode']`` equals the query or starts with its outward code."""
    postcode = str(address.get("postcode") or "").upper()
    if not postcode:
        return False
    normalised = re.sub(r"\s+", " ", query.strip().upper())
    return postcode == normalised or postcode.startswith(normalised.split(" ")[0])


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class LocationIQClient:
    """Forward and reverse geocoding against LocationIQ.

    Holds one ``requests.Session`` so the TLS connection is reused.
    """

    def __init__(self, config: GeocodingConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def search(self, query: str) -> list[GeocodeResult]:
        """Places matching ``query``, postcode matches first, then by importance."""
        if not query or not query.strip():
            return []

        limit = POSTCODE_SEARCH_LIMIT if is_uk_postcode(query) else DEFAULT_SEARCH_LIMIT
        data = self._get(
            "search.php",
            {
                "q": query,
                "format": "json",
                "limit": limit,
                "addressdetails": 1,
                "normalizeaddress": 1,
                "countrycodes": self.config.country_codes,
            },
        )

        rows = data if isinstance(data, list) else [data]
        results: list[GeocodeResult] = []
        for row in rows:
            result = _to_result(row, query)
            if result is not None:
                results.append(result)

        results.sort(key=lambda r: (not r.has_postcode, -r.importance))
        logger.info("[GEOCODE] %r -> %d result(s)", query, len(results))
        return results[: self.config.max_results]

    def reverse(self, lat: float, lng: float) -> GeocodeResult:
        """The address at (``lat``, ``lng``)."""
        data = self._get(
            "reverse.php",
            {"lat": lat, "lon": lng, "format": "json", "addressdetails": 1},
        )
        result = _to_result(data if isinstance(data, dict) else {}, None)
        if result is None:
            raise GeocodingError("Reverse geocoding returned no coordinates")
        return result

    def _get(self, endpoint: str, params: dict[str, Any]) -> Any:
        if not self.config.api_key:
            raise GeocodingConfigError(
                "LocationIQ API key is not configured; set LOCATIONIQ_API_KEY"
            )

        url = f"{self.config.base_url.rstrip('/')}/{endpoint}"
        try:
            response = self.session.get(
                url,
                params={"key": self.config.api_key, **params},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("[GEOCODE] request to %s failed: %s", endpoint, exc)
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc

        status = response.status_code
        if status == 401:
            raise GeocodingAuthError("Invalid API key. Please check your LocationIQ API key.", status)
        if status == 429:
            raise GeocodingRateLimitError("Rate limit exceeded. Please try again later.", status)
        if not response.ok:
            raise GeocodingError(f"Geocoding API error: {status}", status)

        try:
            return response.json()
        except ValueError as exc:
            raise GeocodingError("Geocoding API returned invalid JSON", status) from exc


def _to_result(row: dict[str, Any], query: str | None) -> GeocodeResult | None:
    lat = parse_coordinate(row.get("lat"))
    lng = parse_coordinate(row.get("lon"))
    if lat is None or lng is None:
        return None
    address = {str(k): str(v) for k, v in (row.get("address") or {}).items()}
    place_id = row.get("place_id")
    return GeocodeResult(
        place_id=str(place_id) if place_id is not None else None,
        display_name=row.get("display_name") or "",
        lat=lat,
        lng=lng,
        address=address,
        importance=float(row.get("importance") or 0),
        has_postcode=has_matching_postcode(address, query) if query else False,
    )
