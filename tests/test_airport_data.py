"""공항 카탈로그 로딩·검증 테스트."""

import copy
import json

import pytest

from app.core.airport_data import (
    AirportDataError,
    get_airport_data,
    load_airport_data,
    parse_airport_data,
)
from app.core.config import get_settings


def _minimal_payload() -> dict:
    return {
        "pois": [
            {
                "id": "cafe-1",
                "name": "Cafe",
                "category": "cafe",
                "terminal": "T1",
                "zone": "t1-departures",
                "x": 0,
                "y": 10,
                "openingHours": "24/7",
                "avgWaitTime": [1, 3],
                "priceLevel": 1,
            }
        ],
        "zones": [{"id": "t1-arrivals", "terminal": "T1", "name": "Arrivals", "x": 0, "y": 100}],
        "navGraph": {
            "nodes": [{"id": "n1", "x": 0, "y": 0}, {"id": "n2", "x": 30, "y": 40}],
            "edges": [{"from": "n1", "to": "n2", "weight": 50}],
            "poiLinks": [{"poiId": "cafe-1", "nodeId": "n1", "weight": 10}],
        },
    }


class TestDefaultCatalog:
    """번들 카탈로그 테스트."""

    def test_loads_bundled_catalog(self):
        airport = load_airport_data()

        assert len(airport.pois) == 26
        assert len(airport.zones) == 19
        assert airport.get_poi("brew-haven").name == "Brew Haven"
        assert airport.get_poi("missing") is None

    def test_recommendable_pois_exclude_routing_only_categories(self):
        airport = load_airport_data()
        categories = {poi.category for poi in airport.recommendable_pois}

        assert "wc" not in categories
        assert "gate" not in categories
        assert len(airport.recommendable_pois) == 15

    def test_zone_coordinates(self):
        airport = load_airport_data()
        location = airport.get_zone_coordinates("t1-security")

        assert (location.x, location.y, location.terminal) == (180, 360, "T1")
        assert airport.get_zone_coordinates("t9-security") is None

    def test_gate_coordinates_offset_by_number(self):
        airport = load_airport_data()

        b10 = airport.get_gate_coordinates("B10")
        assert (b10.x, b10.y, b10.terminal) == (190, 186, "T1")

        d7 = airport.get_gate_coordinates("d7")
        assert (d7.x, d7.y, d7.terminal) == (390, 143, "T3")

    @pytest.mark.parametrize("gate_id", ["Z1", "gate", "A", "12"])
    def test_unresolvable_gate_returns_none(self, gate_id):
        assert load_airport_data().get_gate_coordinates(gate_id) is None


class TestCatalogValidation:
    """카탈로그 불변식 검증 테스트."""

    def test_minimal_payload_is_valid(self):
        airport = parse_airport_data(_minimal_payload())
        assert [node.id for node in airport.nav_graph.nodes] == ["n1", "n2"]

    def test_bundled_weights_match_straight_lines(self):
        assert load_airport_data().padded_edges == []

    def test_padded_weights_are_reported(self):
        payload = _minimal_payload()
        payload["navGraph"]["edges"][0]["weight"] = 75
        payload["navGraph"]["poiLinks"][0]["weight"] = 12

        airport = parse_airport_data(payload)

        assert airport.padded_edges == ["n1 -> n2", "poi:cafe-1 -> n1"]

    def test_edge_to_unknown_node(self):
        payload = _minimal_payload()
        payload["navGraph"]["edges"].append({"from": "n1", "to": "ghost", "weight": 100})

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)

    def test_weight_shorter_than_straight_line(self):
        payload = _minimal_payload()
        payload["navGraph"]["edges"][0]["weight"] = 49

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)

    def test_duplicate_poi_link(self):
        payload = _minimal_payload()
        payload["navGraph"]["poiLinks"].append({"poiId": "cafe-1", "nodeId": "n2", "weight": 60})

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)

    def test_corridor_id_with_poi_prefix(self):
        payload = _minimal_payload()
        payload["navGraph"]["nodes"].append({"id": "poi:x", "x": 0, "y": 0})

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)

    def test_duplicate_poi_ids(self):
        payload = _minimal_payload()
        payload["pois"].append(copy.deepcopy(payload["pois"][0]))

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)

    def test_invalid_opening_hours(self):
        payload = _minimal_payload()
        payload["pois"][0]["openingHours"] = "22:00-26:00"

        with pytest.raises(AirportDataError):
            parse_airport_data(payload)


class TestLoadFromSettings:
    """설정 경로 기반 로딩 테스트."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AirportDataError):
            load_airport_data(tmp_path / "missing.json")

    def test_uses_configured_path(self, monkeypatch, tmp_path):
        path = tmp_path / "airport.json"
        path.write_text(json.dumps(_minimal_payload()), encoding="utf-8")
        monkeypatch.setenv("AIRPORT_DATA_PATH", str(path))
        get_settings.cache_clear()
        get_airport_data.cache_clear()

        try:
            airport = get_airport_data()
            assert [poi.id for poi in airport.pois] == ["cafe-1"]
        finally:
            get_settings.cache_clear()
            get_airport_data.cache_clear()
