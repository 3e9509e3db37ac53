"""플랜 그래프 노드 모음."""

from app.graph.plan.nodes.assemble import build_plan_timeline, plan_route
from app.graph.plan.nodes.recommend import prepare_context, recommend_nearby
from app.graph.plan.nodes.select import select_stops

__all__ = ["prepare_context", "recommend_nearby", "select_stops", "build_plan_timeline", "plan_route"]
