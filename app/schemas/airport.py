"""정적 공항 카탈로그(POI, 구역, 내비게이션 그래프) 스키마."""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_OPENING_HOURS_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d-([01]\d|2[0-3]):[0-5]\d$")


class PoiCategory(StrEnum):
    """POI 카테고리.

    `WC`와 `GATE`는 경로 탐색에서 경유지/출도착 지점으로만 쓰이며 추천 대상이 아닙니다.
    """

    CAFE = "cafe"
    RESTAURANT = "restaurant"
    BAR = "bar"
    SHOP = "shop"
    LOUNGE = "lounge"
    SERVICE = "service"
    WC = "wc"
    GATE = "gate"


ROUTING_ONLY_CATEGORIES = frozenset({PoiCategory.WC, PoiCategory.GATE})


class CatalogModel(BaseModel):
    """카탈로그 JSON의 camelCase 키와 snake_case 필드를 모두 허용하는 불변 모델."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Location(CatalogModel):
    """터미널 정보가 포함된 평면 좌표."""

    x: float = Field(..., description="X 좌표")
    y: float = Field(..., description="Y 좌표")
    terminal: str = Field(..., description="터미널 ID (예: T1)")


class PointOfInterest(CatalogModel):
    """공항 내 편의시설(POI) 카탈로그 항목."""

    id: str = Field(..., description="POI 고유 ID")
    name: str = Field(..., description="표시 이름")
    category: PoiCategory = Field(..., description="카테고리")
    terminal: str = Field(..., description="소속 터미널")
    zone: str = Field(..., description="소속 구역 ID")
    x: float = Field(..., description="X 좌표")
    y: float = Field(..., description="Y 좌표")
    opening_hours: str = Field(..., alias="openingHours", description="`24/7` 또는 `HH:MM-HH:MM`")
    avg_wait_time: tuple[float, float] = Field(..., alias="avgWaitTime", description="평균 대기시간 구간(분)")
    price_level: int = Field(..., ge=0, le=3, alias="priceLevel", description="가격대 (0=무료 ~ 3=프리미엄)")
    tags: list[str] = Field(default_factory=list, description="식단/식사 유형/편의 태그")
    menu: list[str] = Field(default_factory=list, description="대표 메뉴")
    description: str = Field(default="", description="설명")

    @field_validator("opening_hours")
    @classmethod
    def validate_opening_hours(cls, value: str) -> str:
        if value == "24/7" or _OPENING_HOURS_PATTERN.match(value):
            return value
        raise ValueError(f"영업시간 형식이 올바르지 않습니다: {value}")

    @field_validator("avg_wait_time")
    @classmethod
    def validate_avg_wait_time(cls, value: tuple[float, float]) -> tuple[float, float]:
        low, high = value
        if low < 0 or low > high:
            raise ValueError(f"평균 대기시간 구간이 올바르지 않습니다: {value}")
        return value

    @property
    def location(self) -> Location:
        return Location(x=self.x, y=self.y, terminal=self.terminal)

    @property
    def service_time(self) -> float:
        """평균 대기시간 구간의 중간값(분)."""
        low, high = self.avg_wait_time
        return (low + high) / 2


class AnnotatedPOI(PointOfInterest):
    """추천 엔진이 이동시간과 총 소요시간을 덧붙인 POI."""

    travel_time: int = Field(..., description="현재 위치에서의 이동시간(분)")
    total_time: float = Field(..., description="이동시간 + 평균 서비스 시간(분)")

    @classmethod
    def from_poi(cls, poi: PointOfInterest, travel_time: int) -> AnnotatedPOI:
        return cls.model_validate(
            {**poi.model_dump(), "travel_time": travel_time, "total_time": travel_time + poi.service_time}
        )


class Zone(CatalogModel):
    """터미널 내 구역."""

    id: str = Field(..., description="구역 ID (예: t1-baggage)")
    terminal: str = Field(..., description="소속 터미널")
    name: str = Field(..., description="표시 이름")
    x: float = Field(..., description="대표 X 좌표")
    y: float = Field(..., description="대표 Y 좌표")

    @property
    def location(self) -> Location:
        return Location(x=self.x, y=self.y, terminal=self.terminal)


class NavNode(CatalogModel):
    """복도 그래프의 정점."""

    id: str
    x: float
    y: float
    name: str = ""


class NavEdge(CatalogModel):
    """복도 간 간선. 양방향으로 삽입됩니다."""

    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    weight: float = Field(..., ge=0)


class PoiLink(CatalogModel):
    """POI를 복도 정점에 연결하는 접근 간선."""

    poi_id: str = Field(..., alias="poiId")
    node_id: str = Field(..., alias="nodeId")
    weight: float = Field(..., ge=0)


class NavGraph(CatalogModel):
    """정적 내비게이션 그래프."""

    nodes: list[NavNode] = Field(default_factory=list)
    edges: list[NavEdge] = Field(default_factory=list)
    poi_links: list[PoiLink] = Field(default_factory=list, alias="poiLinks")


class AirportCatalog(CatalogModel):
    """`airport.json` 전체 구조."""

    pois: list[PointOfInterest] = Field(default_factory=list)
    zones: list[Zone] = Field(default_factory=list)
    nav_graph: NavGraph = Field(default_factory=NavGraph, alias="navGraph")

    @model_validator(mode="after")
    def validate_unique_ids(self) -> AirportCatalog:
        poi_ids = [poi.id for poi in self.pois]
        if len(poi_ids) != len(set(poi_ids)):
            raise ValueError("POI ID가 중복되었습니다.")
        zone_ids = [zone.id for zone in self.zones]
        if len(zone_ids) != len(set(zone_ids)):
            raise ValueError("구역 ID가 중복되었습니다.")
        return self
