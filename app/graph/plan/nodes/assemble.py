"""타임라인 및 게이트 간 경로 생성 노드."""

from __future__ import annotations

from typing import Any

from langchain_core.runnables import RunnableConfig

from app.core.logger import get_logger
from app.graph.plan.state import PlanState
from app.graph.plan.utils import append_warning, get_airport
from app.services.routing_service import compute_route
from app.services.timeline_service import build_timeline

logger = get_logger(__name__)


def build_plan_timeline(state: PlanState, config: RunnableConfig) -> dict[str, Any]:
    """선택된 POI로 타임라인을 새로 만듭니다."""
    timeline = build_timeline(
        state["trip"],
        state["preferences"],
        state.get("selected_pois", []),
        airport=get_airport(config),
    )
    return {"timeline": timeline}


def plan_route(state: PlanState, config: RunnableConfig) -> dict[str, Any]:
    """도착/출발 게이트가 모두 있으면 선호 경유지를 포함한 경로를 계산합니다."""
    trip = state["trip"]
    if not trip.arriving_gate or not trip.gate_number:
        return {"route": None}

    route = compute_route(
        trip.arriving_gate,
        trip.gate_number,
        state["preferences"].custom_preferences,
        airport=get_airport(config),
    )
    if not route.stops:
        return {"route": route, "warnings": append_warning(state, "route_unavailable")}
    return {"route": route}
