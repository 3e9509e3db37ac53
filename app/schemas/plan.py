"""플랜 API 요청/응답 스키마."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from app.schemas.airport import AnnotatedPOI, Location
from app.schemas.route import Coordinate, RoutePoint, RouteSegment, RoutingResult, VisitRecord
from app.schemas.trip import TimelineStep, TripDetails, UserPreferences


class PlanSession(BaseModel):
    """요청 단위 세션. 서버는 이 객체를 저장하지 않습니다.

    Fields:
        `trip`: 여행 정보
        `preferences`: 사용자 선호
        `selected_poi_ids`: 사용자가 직접 고른 POI ID 목록 (없으면 자동 선택)
        `now`: 기준 시각 (없으면 도착 시각)
    """

    trip: TripDetails = Field(..., description="여행 정보")
    preferences: UserPreferences = Field(default_factory=UserPreferences, description="사용자 선호")
    selected_poi_ids: list[str] | None = Field(default=None, description="직접 선택한 POI ID 목록")
    now: datetime | None = Field(default=None, description="기준 시각")

    @model_validator(mode="after")
    def validate_now_timezone(self) -> PlanSession:
        if self.now is None:
            return self
        if (self.now.tzinfo is not None) != (self.trip.arrival_time.tzinfo is not None):
            raise ValueError("기준 시각은 여행 정보의 시각과 시간대 포함 여부가 같아야 합니다.")
        return self

    @property
    def reference_time(self) -> datetime:
        return self.now or self.trip.arrival_time


class RecommendationRequest(BaseModel):
    """POI 추천 요청."""

    location: Location = Field(..., description="현재 위치")
    preferences: UserPreferences = Field(default_factory=UserPreferences, description="사용자 선호")
    now: datetime = Field(..., description="영업 여부 판단 기준 시각")
    available_minutes: float | None = Field(default=None, ge=0, description="가용 시간(분)")


class RecommendationResponse(BaseModel):
    """POI 추천 응답."""

    results: list[AnnotatedPOI] = Field(default_factory=list, description="추천 POI 목록 (최대 20개)")


class TimelineRequest(BaseModel):
    """타임라인 생성 요청."""

    trip: TripDetails = Field(..., description="여행 정보")
    preferences: UserPreferences = Field(default_factory=UserPreferences, description="사용자 선호")
    selected_poi_ids: list[str] = Field(default_factory=list, description="방문 순서대로 나열한 POI ID")


class TimelineResponse(BaseModel):
    """타임라인 생성 응답."""

    steps: list[TimelineStep] = Field(default_factory=list, description="시간순 스텝")
    unknown_poi_ids: list[str] = Field(default_factory=list, description="카탈로그에 없어 제외된 POI ID")


class RouteRequest(BaseModel):
    """게이트 간 경로 요청."""

    arrival_gate_id: str = Field(..., min_length=1, description="도착 게이트 ID")
    departure_gate_id: str = Field(..., min_length=1, description="출발 게이트 ID")
    preference_text: str = Field(default="", description="자유 입력 선호 문장")


class RouteResponse(BaseModel):
    """경로 응답. 경로가 없으면 `total_distance`는 null, `stops`는 빈 목록입니다."""

    total_distance: float | None = Field(default=None, description="총 경로 비용")
    stops: list[RoutePoint] = Field(default_factory=list)
    segments: list[RouteSegment] = Field(default_factory=list)
    polyline: list[Coordinate] = Field(default_factory=list)
    preferences: VisitRecord = Field(default_factory=VisitRecord)

    @classmethod
    def from_result(cls, result: RoutingResult) -> RouteResponse:
        finite = math.isfinite(result.total_distance)
        return cls(
            total_distance=result.total_distance if finite else None,
            stops=result.stops,
            segments=result.segments,
            polyline=result.polyline,
            preferences=result.preferences,
        )


class PlanResponse(BaseModel):
    """플랜 워크플로우 응답."""

    recommendations: list[AnnotatedPOI] = Field(default_factory=list, description="도착 구역 기준 추천 POI")
    selected_poi_ids: list[str] = Field(default_factory=list, description="타임라인에 포함된 POI ID")
    timeline: list[TimelineStep] = Field(default_factory=list, description="타임라인")
    route: RouteResponse | None = Field(default=None, description="게이트 간 경로 (게이트 정보가 있을 때)")
    minutes_until_boarding: int | None = Field(default=None, description="탑승 마감까지 남은 분")
