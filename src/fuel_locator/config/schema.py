"""Static station schema — the single source for card, feature and surcharge ids.

Every component that enumerates fuel cards, feature flags or surcharge
categories reads these tuples.  They are fixed and never derived from data.
"""

from __future__ import annotations

FUEL_CARDS: tuple[str, ...] = (
    "esso-fleet",
    "esso-maxx",
    "fastfuels",
    "fuelgenie",
    "keyfuels",
    "shell-crt",
    "shell-fleet",
    "uk-fuels",
    "shell-crt-ev",
    "shell-fleet-ev",
    "shell-adblue-sites",
    "maxx-control-pre-pay",
)

FEATURES: tuple[str, ...] = (
    "hgv",
    "24-7",
)

FEATURE_LABELS: dict[str, str] = {
    "hgv": "HGV Access",
    "24-7": "24/7 Access",
}

SURCHARGE_FIELDS: tuple[str, ...] = (
    "uk_fuels_surcharge",
    "keyfuels_surcharge",
    "fastfuels_surcharge",
    "shell_crt_core_non_core",
)

# Address parts in display order
ADDRESS_FIELDS: tuple[str, ...] = ("address1", "address2", "city", "region", "zip")

# Fields scanned by the free-text search
SEARCH_FIELDS: tuple[str, ...] = ("name", "address1", "city", "region")

EARTH_RADIUS_MILES = 3959.0
EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_PATH_BUFFER_METERS = 1000.0
DEFAULT_RADIUS_MILES = 10.0
