"""정적 공항 카탈로그 로딩 및 조회 유틸리티.

카탈로그는 프로세스 시작 시 한 번 읽고 이후 변경하지 않습니다. 코어 계산 함수는
전역 상태 대신 `AirportData`를 인자로 주입받습니다.
"""

from __future__ import annotations

import json
import math
import re
from functools import cached_property, lru_cache
from pathlib import Path

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.logger import get_logger
from app.schemas.airport import (
    ROUTING_ONLY_CATEGORIES,
    AirportCatalog,
    Location,
    NavGraph,
    NavNode,
    PointOfInterest,
    Zone,
)

logger = get_logger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "airport.json"

_GATE_ID_PATTERN = re.compile(r"^([A-Z])(\d+)$")

# 게이트 ID의 첫 글자(pier) -> (터미널, 게이트 구역)
_PIER_MAP: dict[str, tuple[str, str]] = {
    "A": ("T1", "t1-gates-a"),
    "B": ("T1", "t1-gates-b"),
    "C": ("T2", "t2-gates-c"),
    "D": ("T3", "t3-gates-d"),
}

# 수치 오차 허용치
_WEIGHT_TOLERANCE = 1e-6


class AirportDataError(ValueError):
    """카탈로그 데이터가 불변식을 위반할 때 발생합니다."""


class AirportData:
    """검증된 공항 카탈로그와 ID 기반 조회 인덱스."""

    def __init__(self, catalog: AirportCatalog) -> None:
        self.catalog = catalog
        self._pois = {poi.id: poi for poi in catalog.pois}
        self._zones = {zone.id: zone for zone in catalog.zones}
        self.padded_edges = _validate_nav_graph(catalog.nav_graph, self._pois)
        if self.padded_edges:
            logger.warning(
                "Edge weights exceed straight-line length, route cost will differ from segment distances: %s",
                self.padded_edges,
            )

    @property
    def pois(self) -> list[PointOfInterest]:
        return self.catalog.pois

    @property
    def zones(self) -> list[Zone]:
        return self.catalog.zones

    @property
    def nav_graph(self) -> NavGraph:
        return self.catalog.nav_graph

    @cached_property
    def recommendable_pois(self) -> list[PointOfInterest]:
        """경로 전용 카테고리(화장실, 게이트)를 제외한 추천 대상 POI."""
        return [poi for poi in self.catalog.pois if poi.category not in ROUTING_ONLY_CATEGORIES]

    def get_poi(self, poi_id: str) -> PointOfInterest | None:
        return self._pois.get(poi_id)

    def get_zone(self, zone_id: str) -> Zone | None:
        return self._zones.get(zone_id)

    def get_zone_coordinates(self, zone_id: str) -> Location | None:
        """구역 ID의 대표 좌표를 반환합니다. 없으면 None입니다."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return None
        return zone.location

    def get_gate_coordinates(self, gate_id: str) -> Location | None:
        """게이트 ID(예: `A12`)의 좌표를 추정합니다.

        pier 문자로 터미널과 게이트 구역을 찾고, 게이트 번호로 구역 좌표에 오프셋을 줍니다.
        형식이 맞지 않거나 pier/구역을 찾지 못하면 None을 반환합니다.
        """
        match = _GATE_ID_PATTERN.match(gate_id.strip().upper())
        if not match:
            return None

        pier, number_text = match.groups()
        pier_info = _PIER_MAP.get(pier)
        if pier_info is None:
            return None

        terminal, zone_id = pier_info
        zone = self._zones.get(zone_id)
        if zone is None:
            return None

        number = int(number_text)
        return Location(
            x=zone.x + (number % 5) * 5,
            y=zone.y + (number // 5) * 3,
            terminal=terminal,
        )


def _validate_nav_graph(graph: NavGraph, pois: dict[str, PointOfInterest]) -> list[str]:
    """간선 끝점 존재 여부, 접근 간선 유일성, 가중치 허용성(admissibility)을 검증합니다.

    가중치가 직선 거리보다 긴 간선의 라벨 목록을 반환합니다.
    """
    padded: list[str] = []
    nodes: dict[str, NavNode] = {}
    for node in graph.nodes:
        if node.id in nodes:
            raise AirportDataError(f"내비게이션 정점 ID가 중복되었습니다: {node.id}")
        if node.id.startswith("poi:"):
            raise AirportDataError(f"복도 정점 ID는 `poi:`로 시작할 수 없습니다: {node.id}")
        nodes[node.id] = node

    for edge in graph.edges:
        start = nodes.get(edge.from_id)
        end = nodes.get(edge.to_id)
        if start is None or end is None:
            raise AirportDataError(f"존재하지 않는 정점을 잇는 간선입니다: {edge.from_id} -> {edge.to_id}")
        if _check_admissible(edge.weight, start.x, start.y, end.x, end.y, f"{edge.from_id} -> {edge.to_id}"):
            padded.append(f"{edge.from_id} -> {edge.to_id}")

    linked: set[str] = set()
    for link in graph.poi_links:
        poi = pois.get(link.poi_id)
        node = nodes.get(link.node_id)
        if poi is None or node is None:
            raise AirportDataError(f"존재하지 않는 POI 또는 정점에 대한 접근 간선입니다: {link.poi_id} -> {link.node_id}")
        if link.poi_id in linked:
            raise AirportDataError(f"POI 접근 간선은 하나만 허용됩니다: {link.poi_id}")
        linked.add(link.poi_id)
        if _check_admissible(link.weight, poi.x, poi.y, node.x, node.y, f"poi:{link.poi_id} -> {link.node_id}"):
            padded.append(f"poi:{link.poi_id} -> {link.node_id}")

    return padded


def _check_admissible(weight: float, x1: float, y1: float, x2: float, y2: float, label: str) -> bool:
    """가중치가 직선 거리보다 짧으면 오류를 내고, 길면 True를 반환합니다."""
    straight = math.hypot(x2 - x1, y2 - y1)
    if weight + _WEIGHT_TOLERANCE < straight:
        raise AirportDataError(f"간선 가중치가 직선 거리보다 작습니다: {label} weight={weight} distance={straight:.3f}")
    return weight - _WEIGHT_TOLERANCE > straight


def parse_airport_data(payload: dict) -> AirportData:
    """JSON 객체를 검증하여 `AirportData`로 변환합니다."""
    try:
        catalog = AirportCatalog.model_validate(payload)
    except ValidationError as exc:
        raise AirportDataError(f"카탈로그 스키마 검증에 실패했습니다: {exc}") from exc
    return AirportData(catalog)


def load_airport_data(path: str | Path | None = None) -> AirportData:
    """파일에서 카탈로그를 읽어 검증합니다."""
    resolved = Path(path) if path else DEFAULT_DATA_PATH
    try:
        payload = json.loads(resolved.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise AirportDataError(f"카탈로그 파일을 읽을 수 없습니다: {resolved}") from exc

    data = parse_airport_data(payload)
    logger.info(
        "Airport catalog loaded: path=%s pois=%d zones=%d nodes=%d",
        resolved,
        len(data.pois),
        len(data.zones),
        len(data.nav_graph.nodes),
    )
    return data


@lru_cache
def get_airport_data() -> AirportData:
    """설정된 경로의 카탈로그를 반환한다. 최초 호출 시에만 로드되고 이후 캐싱된다."""
    return load_airport_data(get_settings().AIRPORT_DATA_PATH)
