"""게이트 간 경로 탐색 결과 스키마."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Coordinate = tuple[float, float]


class RoutePreferences(BaseModel):
    """자유 입력 문장에서 추출한 경유 선호."""

    must_visit: list[str] = Field(default_factory=list, description="반드시 들를 카테고리")
    optional_visit: list[str] = Field(default_factory=list, description="여유가 되면 들를 카테고리")
    max_stops: int = Field(default=2, description="경유지 최대 개수")
    max_detour_cost: float = Field(default=300, description="허용 우회 비용 (선언만 되어 있고 아직 강제하지 않음)")


class RoutePoint(BaseModel):
    """경로 상의 정점."""

    x: float
    y: float
    name: str
    type: Literal["corridor", "poi"]
    poi_id: str | None = None


class RouteSegment(BaseModel):
    """인접한 두 정점을 잇는 구간. 직렬화 시 `from`/`to` 키를 사용합니다."""

    model_config = ConfigDict(populate_by_name=True)

    from_point: RoutePoint = Field(..., alias="from")
    to_point: RoutePoint = Field(..., alias="to")
    distance: float
    polyline: list[Coordinate]


class VisitRecord(BaseModel):
    """선호 경유지의 방문/누락 기록."""

    visited: list[str] = Field(default_factory=list, description="실제 경유한 POI ID")
    skipped: list[str] = Field(default_factory=list, description="요청됐지만 경유하지 못한 카테고리")


class RoutingResult(BaseModel):
    """경로 탐색 결과. `stops`가 비어 있으면 경로 탐색 실패입니다."""

    total_distance: float
    stops: list[RoutePoint] = Field(default_factory=list)
    segments: list[RouteSegment] = Field(default_factory=list)
    polyline: list[Coordinate] = Field(default_factory=list)
    preferences: VisitRecord = Field(default_factory=VisitRecord)

    @property
    def is_reachable(self) -> bool:
        return bool(self.stops) and math.isfinite(self.total_distance)

    @classmethod
    def empty(cls, total_distance: float = 0.0) -> RoutingResult:
        return cls(total_distance=total_distance)
