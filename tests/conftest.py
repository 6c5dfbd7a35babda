"""Shared test fixtures — a small London-area station dataset."""

from __future__ import annotations

import pytest

from fuel_locator.config.filters import GeoPoint
from fuel_locator.engine.loader import clean_station, clean_stations
from fuel_locator.models.station import Station

LONDON = (51.5074, -0.1278)
MANCHESTER = (53.4808, -2.2426)


def make_station(name: str = "Test Station", lat: float = 51.5, lng: float = -0.12, **fields) -> Station:
    """Build a Station from raw-record style fields (``"uk-fuels": 1`` etc.)."""
    station = clean_station({"name": name, "lat": lat, "lng": lng, **fields})
    assert station is not None
    return station


@pytest.fixture
def london() -> GeoPoint:
    return GeoPoint(lat=LONDON[0], lng=LONDON[1])


@pytest.fixture
def raw_records() -> list[dict]:
    return [
        {
            "name": "Central Service Station",
            "lat": "51.5080",
            "lng": "-0.1280",
            "address1": "1 Strand",
            "city": "London",
            "region": "Greater London",
            "zip": "WC2N 5HR",
            "uk-fuels": 1,
            "keyfuels": "1",
            "hgv": 1,
            "uk_fuels_surcharge": "A",
        },
        {
            "name": "Croydon Fuels",
            "lat": 51.3762,
            "lng": -0.0982,
            "address1": "London Road",
            "city": "Croydon",
            "region": "Surrey",
            "shell-crt": 1.0,
            "24-7": "1",
            "keyfuels_surcharge": " 2p ",
        },
        {
            "name": "Manchester Truckstop",
            "lat": MANCHESTER[0],
            "lng": MANCHESTER[1],
            "city": "Manchester",
            "region": "Greater Manchester",
            "uk-fuels": "1",
            "esso-fleet": 1,
        },
        {
            "name": "Watford Services",
            "lat": 51.6565,
            "lng": -0.3903,
            "city": "Watford",
            "region": "Hertfordshire",
            "keyfuels": 1,
            "fastfuels": 1,
            "hgv": "1",
            "24-7": 1,
            "uk_fuels_surcharge": "B",
        },
    ]


@pytest.fixture
def stations(raw_records) -> list[Station]:
    return clean_stations(raw_records)
