"""플랜 그래프 워크플로우 구성."""

from langgraph.graph import END, StateGraph

from app.graph.plan.nodes import (
    build_plan_timeline,
    plan_route,
    prepare_context,
    recommend_nearby,
    select_stops,
)
from app.graph.plan.state import PlanState


def _create_plan_workflow() -> StateGraph:
    """플랜 그래프 워크플로우를 생성합니다."""
    workflow = StateGraph(PlanState)

    workflow.add_node("prepare_context", prepare_context)
    workflow.add_node("recommend_nearby", recommend_nearby)
    workflow.add_node("select_stops", select_stops)
    workflow.add_node("build_plan_timeline", build_plan_timeline)
    workflow.add_node("plan_route", plan_route)

    workflow.set_entry_point("prepare_context")
    workflow.add_edge("prepare_context", "recommend_nearby")
    workflow.add_edge("recommend_nearby", "select_stops")
    workflow.add_edge("select_stops", "build_plan_timeline")
    workflow.add_edge("build_plan_timeline", "plan_route")
    workflow.add_edge("plan_route", END)

    return workflow


compiled_plan_graph = _create_plan_workflow().compile()
