"""추천·타임라인·경로·플랜 API."""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_airport, require_service_secret
from app.core.airport_data import AirportData
from app.core.logger import get_logger
from app.schemas.plan import (
    PlanResponse,
    PlanSession,
    RecommendationRequest,
    RecommendationResponse,
    RouteRequest,
    RouteResponse,
    TimelineRequest,
    TimelineResponse,
)
from app.services.plan_service import run_plan_pipeline
from app.services.recommendation_service import recommend_pois
from app.services.routing_service import compute_route
from app.services.timeline_service import build_timeline

router = APIRouter(prefix="/api/v1", tags=["plan"], dependencies=[Depends(require_service_secret)])
logger = get_logger(__name__)

PLAN_RESPONSE_EXAMPLES = {
    "domestic_connection": {
        "summary": "국내선 환승",
        "description": "다음 항공편과 출발 게이트가 있는 경우 보안 검색과 게이트 스텝이 포함됨",
        "value": {
            "recommendations": [],
            "selected_poi_ids": [],
            "timeline": [
                {
                    "id": "security",
                    "type": "checkpoint",
                    "name": "Security Checkpoint",
                    "location": "t1-security",
                    "start_time": "2026-01-31T10:00:00",
                    "duration": 10,
                    "travel_time": 4,
                    "status": "safe",
                    "description": "Security screening. Estimated wait: 10 min",
                }
            ],
            "route": None,
            "minutes_until_boarding": 210,
        },
    }
}


@router.post("/recommendations", response_model=RecommendationResponse)
def recommend(
    request: RecommendationRequest,
    airport: AirportData = Depends(get_airport),  # noqa: B008
) -> RecommendationResponse:
    """현재 위치와 선호를 기준으로 POI를 추천합니다."""
    results = recommend_pois(
        request.location,
        request.preferences,
        request.now,
        request.available_minutes,
        pois=airport.recommendable_pois,
    )
    return RecommendationResponse(results=results)


@router.post("/timeline", response_model=TimelineResponse)
def timeline(
    request: TimelineRequest,
    airport: AirportData = Depends(get_airport),  # noqa: B008
) -> TimelineResponse:
    """여행 정보와 선택한 POI로 타임라인을 생성합니다. 알 수 없는 POI ID는 제외합니다."""
    selected = []
    unknown: list[str] = []
    for poi_id in request.selected_poi_ids:
        poi = airport.get_poi(poi_id)
        if poi is None:
            unknown.append(poi_id)
        else:
            selected.append(poi)

    if unknown:
        logger.warning("Timeline request has unknown POI ids: %s", unknown)

    steps = build_timeline(request.trip, request.preferences, selected, airport=airport)
    return TimelineResponse(steps=steps, unknown_poi_ids=unknown)


@router.post("/route", response_model=RouteResponse)
def route(
    request: RouteRequest,
    airport: AirportData = Depends(get_airport),  # noqa: B008
) -> RouteResponse:
    """도착 게이트에서 출발 게이트까지 경로를 계산합니다. 실패 시 `stops`가 비어 있습니다."""
    result = compute_route(
        request.arrival_gate_id,
        request.departure_gate_id,
        request.preference_text,
        airport=airport,
    )
    return RouteResponse.from_result(result)


@router.post(
    "/plan",
    response_model=PlanResponse,
    responses={
        200: {
            "description": "플랜 생성 결과",
            "content": {"application/json": {"examples": PLAN_RESPONSE_EXAMPLES}},
        },
    },
)
def plan(
    session: PlanSession,
    airport: AirportData = Depends(get_airport),  # noqa: B008
) -> PlanResponse:
    """추천, 경유지 선택, 타임라인, 경로를 한 번에 계산합니다."""
    logger.info(
        "Plan request received: terminal=%s domestic=%s next_flight=%s",
        session.trip.terminal,
        session.trip.is_domestic,
        session.trip.next_flight_time,
    )
    return run_plan_pipeline(session, airport)
