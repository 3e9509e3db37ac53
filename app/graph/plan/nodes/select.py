"""타임라인에 넣을 POI 선택 노드."""

from __future__ import annotations

from typing import Any

from langchain_core.runnables import RunnableConfig

from app.core.config import get_settings
from app.core.logger import get_logger
from app.graph.plan.state import PlanState
from app.graph.plan.utils import get_airport

logger = get_logger(__name__)


def select_stops(state: PlanState, config: RunnableConfig) -> dict[str, Any]:
    """직접 고른 POI가 있으면 그대로, 없으면 추천 결과에서 시간 안에 들를 곳을 고릅니다.

    자동 선택은 사용자가 자유 입력 선호를 남긴 경우에만 수행하며, 탑승 전 가용 시간에서
    여유 버퍼를 뺀 시간 안에 끝나는 추천 POI를 상위부터 최대 N개 고릅니다.
    """
    requested = state.get("requested_poi_ids")
    if requested is not None:
        airport = get_airport(config)
        selected = []
        warnings = list(state.get("warnings", []))
        for poi_id in requested:
            poi = airport.get_poi(poi_id)
            if poi is None:
                logger.warning("Selected POI not found, skipped: poi=%s", poi_id)
                warnings.append(f"unknown_poi:{poi_id}")
                continue
            selected.append(poi)
        return {"selected_pois": selected, "warnings": warnings}

    if not state["preferences"].has_custom_preferences:
        return {"selected_pois": []}

    settings = get_settings()
    budget = state.get("available_minutes", 0) - settings.PLAN_SUGGESTION_BUFFER_MINUTES
    selected = [poi for poi in state.get("recommendations", []) if poi.total_time < budget]
    selected = selected[: settings.PLAN_MAX_SUGGESTED_POIS]

    logger.info("Plan stops auto-selected: budget=%s selected=%s", budget, [poi.id for poi in selected])
    return {"selected_pois": selected}
