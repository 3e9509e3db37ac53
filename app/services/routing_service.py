"""내비게이션 그래프 기반 게이트 간 경로 탐색 서비스.

복도 정점과 POI 정점(`poi:<id>`)으로 가중 그래프를 만들고, 자유 입력 선호에서 뽑은
경유지를 A* 구간 탐색으로 이어 붙입니다.
"""

from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field

from app.core.airport_data import AirportData
from app.core.geometry import distance
from app.core.logger import get_logger
from app.schemas.airport import NavNode, PointOfInterest
from app.schemas.route import RoutePoint, RoutePreferences, RouteSegment, RoutingResult, VisitRecord

logger = get_logger(__name__)

POI_NODE_PREFIX = "poi:"
MAX_PREFERENCE_STOPS = 2
MAX_DETOUR_COST = 300

_MUST_VISIT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "wc": ("wc", "restroom", "bathroom", "toilet"),
}

# 선언 순서가 경유지 우선순위다.
_OPTIONAL_VISIT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "cafe": ("cafe", "coffee", "drink"),
    "shop": ("shop", "shopping", "buy"),
    "restaurant": ("hungry", "eat", "food", "restaurant"),
}


def poi_node_id(poi_id: str) -> str:
    return f"{POI_NODE_PREFIX}{poi_id}"


def parse_preferences(text: str | None) -> RoutePreferences:
    """자유 입력 문장에서 키워드(부분 문자열)로 경유 카테고리를 추출합니다."""
    lowered = (text or "").lower()

    def _matches(keywords: tuple[str, ...]) -> bool:
        return any(keyword in lowered for keyword in keywords)

    return RoutePreferences(
        must_visit=[category for category, words in _MUST_VISIT_KEYWORDS.items() if _matches(words)],
        optional_visit=[category for category, words in _OPTIONAL_VISIT_KEYWORDS.items() if _matches(words)],
        max_stops=MAX_PREFERENCE_STOPS,
        max_detour_cost=MAX_DETOUR_COST,
    )


@dataclass(slots=True)
class NavigationGraph:
    """양방향 가중 그래프. 인접 리스트는 (이웃 ID, 가중치) 목록입니다."""

    nodes: dict[str, NavNode] = field(default_factory=dict)
    adjacency: dict[str, list[tuple[str, float]]] = field(default_factory=dict)

    @classmethod
    def from_airport(cls, airport: AirportData) -> NavigationGraph:
        graph = cls()
        for node in airport.nav_graph.nodes:
            graph.add_node(node)
        for poi in airport.pois:
            graph.add_node(NavNode(id=poi_node_id(poi.id), x=poi.x, y=poi.y, name=poi.name))
        for edge in airport.nav_graph.edges:
            graph.connect(edge.from_id, edge.to_id, edge.weight)
        for link in airport.nav_graph.poi_links:
            graph.connect(poi_node_id(link.poi_id), link.node_id, link.weight)
        return graph

    def add_node(self, node: NavNode) -> None:
        self.nodes[node.id] = node
        self.adjacency.setdefault(node.id, [])

    def connect(self, a: str, b: str, weight: float) -> None:
        self.adjacency.setdefault(a, []).append((b, weight))
        self.adjacency.setdefault(b, []).append((a, weight))

    def heuristic(self, node_id: str, goal_id: str) -> float:
        node = self.nodes.get(node_id)
        goal = self.nodes.get(goal_id)
        if node is None or goal is None:
            return 0.0
        return distance(node, goal)

    def shortest_path(self, start_id: str, goal_id: str) -> tuple[list[str], float]:
        """A*로 최단 경로를 찾습니다. 도달할 수 없으면 `([], inf)`를 반환합니다.

        휴리스틱은 목표 정점까지의 직선 거리입니다. f 점수가 같은 정점은 삽입 순서대로
        꺼내며, 이 순서에는 의미를 두지 않습니다.
        """
        if start_id not in self.nodes or goal_id not in self.nodes:
            return [], math.inf

        counter = itertools.count()
        g_score: dict[str, float] = {start_id: 0.0}
        came_from: dict[str, str] = {}
        open_heap = [(self.heuristic(start_id, goal_id), next(counter), start_id)]
        closed: set[str] = set()

        while open_heap:
            _, _, current = heapq.heappop(open_heap)
            if current in closed:
                continue
            if current == goal_id:
                return _reconstruct_path(came_from, current), g_score[current]
            closed.add(current)

            for neighbor, weight in self.adjacency.get(current, ()):
                if neighbor in closed:
                    continue
                tentative = g_score[current] + weight
                if tentative < g_score.get(neighbor, math.inf):
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative
                    f_score = tentative + self.heuristic(neighbor, goal_id)
                    heapq.heappush(open_heap, (f_score, next(counter), neighbor))

        return [], math.inf


def _reconstruct_path(came_from: dict[str, str], current: str) -> list[str]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def select_waypoints(
    preferences: RoutePreferences, pois: list[PointOfInterest]
) -> tuple[list[PointOfInterest], list[str]]:
    """카테고리별 첫 번째 POI를 경유지로 고릅니다.

    필수 카테고리는 모두 시도하고, 선택 카테고리는 경유지 수가 `max_stops` 미만일 때만 추가합니다.
    고르지 못한 카테고리는 두 번째 반환값으로 돌려줍니다.
    """
    chosen: list[PointOfInterest] = []
    skipped: list[str] = []

    def _first_in(category: str) -> PointOfInterest | None:
        return next((poi for poi in pois if poi.category == category and poi not in chosen), None)

    for category in preferences.must_visit:
        poi = _first_in(category)
        if poi is None:
            skipped.append(category)
        else:
            chosen.append(poi)

    for category in preferences.optional_visit:
        if len(chosen) >= preferences.max_stops:
            skipped.append(category)
            continue
        poi = _first_in(category)
        if poi is None:
            skipped.append(category)
        else:
            chosen.append(poi)

    return chosen, skipped


def _to_route_point(node_id: str, node: NavNode) -> RoutePoint:
    if node_id.startswith(POI_NODE_PREFIX):
        return RoutePoint(x=node.x, y=node.y, name=node.name, type="poi", poi_id=node_id[len(POI_NODE_PREFIX) :])
    return RoutePoint(x=node.x, y=node.y, name=node.name, type="corridor")


def _assemble_result(graph: NavigationGraph, path: list[str], cost: float, record: VisitRecord) -> RoutingResult:
    stops = [_to_route_point(node_id, graph.nodes[node_id]) for node_id in path]
    segments = [
        RouteSegment(
            from_point=start,
            to_point=end,
            distance=distance(start, end),
            polyline=[(start.x, start.y), (end.x, end.y)],
        )
        for start, end in zip(stops, stops[1:])
    ]
    return RoutingResult(
        total_distance=cost,
        stops=stops,
        segments=segments,
        polyline=[(stop.x, stop.y) for stop in stops],
        preferences=record,
    )


def compute_route(
    arrival_gate_id: str,
    departure_gate_id: str,
    preference_text: str | None = None,
    *,
    airport: AirportData,
) -> RoutingResult:
    """도착 게이트에서 출발 게이트까지 선호 경유지를 포함한 경로를 계산합니다.

    출발/도착 게이트가 그래프에 없으면 비어 있는 0 비용 결과를, 도달할 수 없으면 비어 있는
    무한대 비용 결과를 반환합니다. 호출자는 `stops`가 비어 있는지로 실패를 판단해야 합니다.
    """
    preferences = parse_preferences(preference_text)
    graph = NavigationGraph.from_airport(airport)

    start_id = poi_node_id(arrival_gate_id)
    end_id = poi_node_id(departure_gate_id)
    if start_id not in graph.nodes or end_id not in graph.nodes:
        logger.warning("Route gate not found: arrival=%s departure=%s", arrival_gate_id, departure_gate_id)
        return RoutingResult.empty()

    waypoints, skipped = select_waypoints(preferences, airport.pois)
    visited: list[str] = []
    path = [start_id]
    cost = 0.0
    current = start_id

    for poi in waypoints:
        leg_path, leg_cost = graph.shortest_path(current, poi_node_id(poi.id))
        if not leg_path:
            logger.warning("Route waypoint unreachable, skipped: poi=%s", poi.id)
            skipped.append(poi.category.value)
            continue
        path.extend(leg_path[1:])
        cost += leg_cost
        current = poi_node_id(poi.id)
        visited.append(poi.id)

    final_path, final_cost = graph.shortest_path(current, end_id)
    if not final_path:
        logger.warning("Route destination unreachable: arrival=%s departure=%s", arrival_gate_id, departure_gate_id)
        return RoutingResult(total_distance=math.inf, preferences=VisitRecord(visited=[], skipped=skipped))

    path.extend(final_path[1:])
    cost += final_cost

    result = _assemble_result(graph, path, cost, VisitRecord(visited=visited, skipped=skipped))
    logger.info(
        "Route computed: arrival=%s departure=%s distance=%.1f stops=%d visited=%s",
        arrival_gate_id,
        departure_gate_id,
        cost,
        len(result.stops),
        visited,
    )
    return result
