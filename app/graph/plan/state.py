"""플랜 그래프 상태 정의."""

from datetime import datetime
from typing import TypedDict

from app.schemas.airport import AnnotatedPOI, Location, PointOfInterest
from app.schemas.route import RoutingResult
from app.schemas.trip import TimelineStep, TripDetails, UserPreferences


class PlanState(TypedDict, total=False):
    """플랜 생성 그래프 상태.

    Keys:
        trip: 여행 정보
        preferences: 사용자 선호
        now: 기준 시각
        requested_poi_ids: 사용자가 직접 고른 POI ID (None이면 자동 선택)
        origin: 추천 기준 위치 (도착 구역)
        available_minutes: 탑승 전 가용 시간(분)
        recommendations: 추천 POI 목록
        selected_pois: 타임라인에 넣을 POI
        timeline: 타임라인 스텝
        route: 게이트 간 경로
        warnings: 처리 중 생략된 항목 안내
    """

    trip: TripDetails
    preferences: UserPreferences
    now: datetime
    requested_poi_ids: list[str] | None
    origin: Location
    available_minutes: int
    recommendations: list[AnnotatedPOI]
    selected_pois: list[PointOfInterest]
    timeline: list[TimelineStep]
    route: RoutingResult | None
    warnings: list[str]
