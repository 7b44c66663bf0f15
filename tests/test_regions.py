from __future__ import annotations

import pytest

from config import defaults
from core.errors import InvalidRegionError, UserError
from core.regions import RegionTable, parse_region_param


@pytest.fixture
def table() -> RegionTable:
    return RegionTable(defaults.REGIONS)


def test_default_table_covers_218_distinct_locations(table: RegionTable) -> None:
    cities = table.cities_for_regions(["americas", "apac", "emea"])
    assert len(cities) == 218
    assert len(set(cities)) == len(cities)


def test_latam_is_part_of_americas(table: RegionTable) -> None:
    assert set(table.cities("latam")) <= set(table.cities("americas"))
    assert table.cities_for_regions(["americas", "latam"]) == table.cities_for_regions(["americas"])


def test_cities_for_regions_is_order_insensitive_as_a_set(table: RegionTable) -> None:
    forward = table.cities_for_regions(["emea", "apac"])
    backward = table.cities_for_regions(["apac", "emea"])
    assert set(forward) == set(backward)
    assert forward[0] == table.cities("emea")[0]


def test_matches_region_is_case_insensitive_substring(table: RegionTable) -> None:
    assert table.matches_region("Home based - EMEA, London, United Kingdom", "emea")
    assert table.matches_region("home based - emea, london, united kingdom", "emea")
    assert table.matches_region("Home based - EMEA, London, United Kingdom (Remote)", "emea")
    assert not table.matches_region("Home based - EMEA, London, United Kingdom", "apac")


def test_matches_region_escapes_location_text() -> None:
    table = RegionTable({"odd": ["Remote (US)"]})
    assert table.matches_region("Remote (US) - anywhere", "odd")
    assert not table.matches_region("Remote US", "odd")


def test_is_known_location(table: RegionTable) -> None:
    assert table.is_known_location("Home based - APAC, Tokyo, Japan")
    assert not table.is_known_location("Atlantis")


def test_unknown_region_raises_with_available_names(table: RegionTable) -> None:
    with pytest.raises(InvalidRegionError) as excinfo:
        table.cities("mars")
    assert "americas, latam, apac, emea" in str(excinfo.value)
    assert isinstance(excinfo.value, UserError)


def test_case_mismatched_region_is_rejected(table: RegionTable) -> None:
    with pytest.raises(InvalidRegionError):
        table.cities_for_regions(["LATAM"])
    with pytest.raises(InvalidRegionError):
        table.matches_region("Home based - Americas, São Paulo, Brazil", "Latam")


def test_parse_region_param_dedupes_and_trims(table: RegionTable) -> None:
    assert parse_region_param(" emea, apac ,emea,", table) == ["emea", "apac"]


def test_parse_region_param_rejects_unknown(table: RegionTable) -> None:
    with pytest.raises(InvalidRegionError):
        parse_region_param("emea,europe", table)
