"""Tests for dataset ingestion.

Covers:
  - JSON and CSV parsing (files and in-memory)
  - Coordinate validation and row skipping
  - Strict flag conversion into card/feature sets
  - Surcharge and address normalisation
"""

from __future__ import annotations

import io
import json
import math

import pytest

from fuel_locator.engine.loader import (
    clean_station,
    clean_stations,
    load_stations,
    normalise_surcharge,
    parse_coordinate,
    read_records,
)


STATIONS_CSV = """\
name,lat,lng,address1,city,uk-fuels,keyfuels,hgv,24-7,uk_fuels_surcharge
Alpha,51.50,-0.12,1 High St,London,1,0,1,,A
Beta,abc,-0.12,2 High St,London,1,1,,,
,51.52,-0.10,3 High St,London,1,1,,,
Gamma,51.53,-0.11,,Slough,1.0,1,,1,  B 
"""


# ═══════════════════════════════════════════════════════════════════════════
# Coordinate parsing
# ═══════════════════════════════════════════════════════════════════════════

class TestParseCoordinate:

    @pytest.mark.parametrize("value,expected", [("51.5", 51.5), (51.5, 51.5), (" -0.12 ", -0.12), (0, 0.0), ("0", 0.0)])
    def test_valid(self, value, expected):
        assert parse_coordinate(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf", float("nan"), True, [51.5]])
    def test_invalid(self, value):
        assert parse_coordinate(value) is None


# ═══════════════════════════════════════════════════════════════════════════
# Record cleaning
# ═══════════════════════════════════════════════════════════════════════════

class TestCleanStation:

    def test_string_coordinates(self):
        s = clean_station({"name": "X", "lat": "51.5", "lng": "-0.12"})
        assert s is not None
        assert s.lat == 51.5
        assert s.lng == -0.12

    @pytest.mark.parametrize("record", [
        {"lat": 51.5, "lng": -0.1},
        {"name": "", "lat": 51.5, "lng": -0.1},
        {"name": "   ", "lat": 51.5, "lng": -0.1},
        {"name": "X", "lng": -0.1},
        {"name": "X", "lat": 51.5},
        {"name": "X", "lat": "north", "lng": -0.1},
        {"name": "X", "lat": 95.0, "lng": -0.1},
        {"name": "X", "lat": 51.5, "lng": 181.0},
    ])
    def test_unusable_records(self, record):
        assert clean_station(record) is None

    def test_flags_are_strict(self):
        s = clean_station({
            "name": "Flags",
            "lat": 51.5,
            "lng": -0.1,
            "uk-fuels": 1,
            "keyfuels": 1.0,
            "fastfuels": "1",
            "esso-fleet": True,
            "esso-maxx": "yes",
            "shell-crt": "1.0",
            "hgv": "true",
            "24-7": 1,
        })
        assert s.accepted_cards == {"uk-fuels", "keyfuels", "fastfuels"}
        assert s.features == {"24-7"}

    def test_unknown_card_columns_ignored(self):
        s = clean_station({"name": "X", "lat": 51.5, "lng": -0.1, "made-up-card": 1})
        assert s.accepted_cards == frozenset()

    def test_surcharges(self):
        s = clean_station({
            "name": "X",
            "lat": 51.5,
            "lng": -0.1,
            "uk_fuels_surcharge": " A ",
            "keyfuels_surcharge": 0,
            "fastfuels_surcharge": 2.0,
            "shell_crt_core_non_core": "   ",
        })
        assert s.surcharges == {"uk_fuels_surcharge": "A", "fastfuels_surcharge": "2"}

    def test_address(self):
        s = clean_station({
            "name": "X",
            "lat": 51.5,
            "lng": -0.1,
            "address1": "1 High St",
            "address2": "",
            "city": "London",
            "region": None,
            "zip": "SW1A 1AA",
        })
        assert s.address2 is None
        assert s.full_address == "1 High St, London, SW1A 1AA"


class TestNormaliseSurcharge:

    @pytest.mark.parametrize("value,expected", [
        ("A", "A"), (" B ", "B"), (1.5, "1.5"), (3.0, "3"), (2, "2"),
        (None, None), ("", None), (0, None), (False, None), ("  ", None),
    ])
    def test_values(self, value, expected):
        assert normalise_surcharge(value) == expected


class TestCleanStations:

    def test_indices_follow_kept_rows(self):
        stations = clean_stations([
            {"name": "A", "lat": 51.5, "lng": -0.1},
            {"name": "bad"},
            {"name": "B", "lat": 51.6, "lng": -0.2},
        ])
        assert [(s.name, s.index) for s in stations] == [("A", 0), ("B", 1)]

    def test_empty(self):
        assert clean_stations([]) == []


# ═══════════════════════════════════════════════════════════════════════════
# Reading
# ═══════════════════════════════════════════════════════════════════════════

class TestReadAndLoad:

    def test_csv_in_memory(self):
        stations = load_stations(io.StringIO(STATIONS_CSV))
        assert [s.name for s in stations] == ["Alpha", "Gamma"]
        alpha, gamma = stations
        assert alpha.accepted_cards == {"uk-fuels"}
        assert alpha.features == {"hgv"}
        assert alpha.surcharges == {"uk_fuels_surcharge": "A"}
        # CSV text "1.0" is not one of the accepted encodings
        assert gamma.accepted_cards == {"keyfuels"}
        assert gamma.features == {"24-7"}
        assert gamma.surcharges == {"uk_fuels_surcharge": "B"}
        assert gamma.address1 is None

    def test_json_in_memory(self, raw_records):
        stations = load_stations(io.StringIO(json.dumps(raw_records)))
        assert len(stations) == 4
        assert stations[0].accepted_cards == {"uk-fuels", "keyfuels"}

    def test_json_file(self, tmp_path, raw_records):
        path = tmp_path / "stations.json"
        path.write_text(json.dumps(raw_records + [{"name": "No coords"}]), encoding="utf-8")
        stations = load_stations(path)
        assert len(stations) == 4
        assert stations[-1].index == 3

    def test_csv_file(self, tmp_path):
        path = tmp_path / "stations.csv"
        path.write_text(STATIONS_CSV, encoding="utf-8")
        assert [s.name for s in load_stations(str(path))] == ["Alpha", "Gamma"]

    def test_explicit_format_overrides_sniffing(self):
        records = read_records(io.StringIO("name,lat,lng\nA,1,2\n"), fmt="csv")
        assert records == [{"name": "A", "lat": "1", "lng": "2"}]

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "stations.xlsx"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            load_stations(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_stations(tmp_path / "missing.json")

    def test_json_must_be_array(self):
        with pytest.raises(ValueError):
            read_records(io.StringIO('{"name": "A"}'), fmt="json")

    def test_non_object_rows_dropped(self):
        assert read_records(io.StringIO('[1, "x", {"name": "A"}]')) == [{"name": "A"}]

    def test_nan_coordinates_skipped(self):
        assert clean_stations([{"name": "X", "lat": math.nan, "lng": 0.0}]) == []
