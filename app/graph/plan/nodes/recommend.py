"""출발 맥락 구성 및 주변 POI 추천 노드."""

from __future__ import annotations

from typing import Any

from langchain_core.runnables import RunnableConfig

from app.core.config import get_settings
from app.core.geometry import minutes_until_boarding
from app.graph.plan.state import PlanState
from app.graph.plan.utils import get_airport
from app.services.recommendation_service import recommend_pois
from app.services.timeline_service import resolve_origin


def prepare_context(state: PlanState, config: RunnableConfig) -> dict[str, Any]:
    """도착 구역 좌표와 탑승 전 가용 시간을 계산합니다."""
    airport = get_airport(config)
    trip = state["trip"]
    now = state.get("now") or trip.arrival_time

    if trip.next_flight_time is not None:
        available = minutes_until_boarding(trip.next_flight_time, now)
    else:
        available = get_settings().PLAN_DEFAULT_AVAILABLE_MINUTES

    return {"now": now, "origin": resolve_origin(trip, airport), "available_minutes": available}


def recommend_nearby(state: PlanState, config: RunnableConfig) -> dict[str, Any]:
    """도착 구역 기준으로 추천 POI 목록을 만듭니다."""
    airport = get_airport(config)
    recommendations = recommend_pois(
        state["origin"],
        state["preferences"],
        state["now"],
        pois=airport.recommendable_pois,
    )
    return {"recommendations": recommendations}
