"""플랜 생성 요청 처리 서비스."""

from __future__ import annotations

from app.core.airport_data import AirportData, get_airport_data
from app.core.geometry import format_duration, minutes_until_boarding
from app.core.logger import get_logger
from app.graph.plan.workflow import compiled_plan_graph
from app.schemas.plan import PlanResponse, PlanSession, RouteResponse

logger = get_logger(__name__)


def run_plan_pipeline(session: PlanSession, airport: AirportData | None = None) -> PlanResponse:
    """플랜 그래프를 실행하고 응답 모델로 변환합니다.

    세션은 요청마다 새로 전달되며, 타임라인은 매번 처음부터 다시 계산됩니다.
    """
    resolved_airport = airport or get_airport_data()
    initial_state = {
        "trip": session.trip,
        "preferences": session.preferences,
        "now": session.reference_time,
        "requested_poi_ids": session.selected_poi_ids,
        "warnings": [],
    }
    result = compiled_plan_graph.invoke(initial_state, config={"configurable": {"airport": resolved_airport}})

    for warning in result.get("warnings", []):
        logger.warning("Plan warning: %s", warning)

    route = result.get("route")
    trip = session.trip
    remaining = (
        minutes_until_boarding(trip.next_flight_time, session.reference_time)
        if trip.next_flight_time is not None
        else None
    )
    logger.info(
        "Plan built: steps=%d selected=%d boarding_in=%s",
        len(result.get("timeline", [])),
        len(result.get("selected_pois", [])),
        format_duration(remaining) if remaining is not None else "-",
    )
    return PlanResponse(
        recommendations=result.get("recommendations", []),
        selected_poi_ids=[poi.id for poi in result.get("selected_pois", [])],
        timeline=result.get("timeline", []),
        route=RouteResponse.from_result(route) if route is not None else None,
        minutes_until_boarding=remaining,
    )
