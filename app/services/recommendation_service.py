"""위치·선호·시간 예산 기반 POI 추천 서비스."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from app.core.geometry import TerminalPoint, is_open, travel_time
from app.core.logger import get_logger
from app.schemas.airport import AnnotatedPOI, PoiCategory, PointOfInterest
from app.schemas.trip import UserPreferences

logger = get_logger(__name__)

MAX_RECOMMENDATIONS = 20
DIETARY_MATCH_SCORE = 1000
MEAL_TYPE_MATCH_SCORE = 500


def _passes_filters(poi: PointOfInterest, preferences: UserPreferences, now: datetime) -> bool:
    if preferences.budget is not None and poi.price_level > preferences.budget:
        return False

    # 라운지 이용 가능 사용자는 영업시간과 무관하게 라운지를 항상 볼 수 있다.
    if preferences.lounge_access and poi.category == PoiCategory.LOUNGE:
        return True

    return is_open(poi, now)


def score_poi(poi: AnnotatedPOI, preferences: UserPreferences) -> float:
    """식단/식사 유형 일치 가점에서 총 소요시간을 뺀 점수를 반환합니다."""
    score = 0.0
    tags = set(poi.tags)

    if any(diet.lower() in tags for diet in preferences.dietary):
        score += DIETARY_MATCH_SCORE
    if preferences.meal_type and preferences.meal_type in tags:
        score += MEAL_TYPE_MATCH_SCORE

    return score - poi.total_time


def recommend_pois(
    location: TerminalPoint,
    preferences: UserPreferences,
    now: datetime,
    available_minutes: float | None = None,
    *,
    pois: Iterable[PointOfInterest],
) -> list[AnnotatedPOI]:
    """추천 POI 목록을 점수 내림차순으로 최대 20개 반환합니다.

    Args:
        location: 현재 위치 (좌표 + 터미널).
        preferences: 사용자 선호.
        now: 영업 여부 판단 기준 시각.
        available_minutes: 가용 시간(분). 주어지면 총 소요시간이 이를 넘는 POI를 제외합니다.
        pois: 후보 카탈로그.

    Returns:
        이동시간과 총 소요시간이 덧붙은 `AnnotatedPOI` 목록.
    """
    candidates = [
        AnnotatedPOI.from_poi(poi, travel_time(location, poi, preferences.mobility))
        for poi in pois
        if _passes_filters(poi, preferences, now)
    ]

    if available_minutes is not None:
        candidates = [poi for poi in candidates if poi.total_time <= available_minutes]

    # 안정 정렬이므로 동점은 카탈로그 순서를 유지한다.
    candidates.sort(key=lambda poi: score_poi(poi, preferences), reverse=True)
    recommendations = candidates[:MAX_RECOMMENDATIONS]

    logger.info(
        "POI recommendation completed: terminal=%s candidates=%d returned=%d",
        location.terminal,
        len(candidates),
        len(recommendations),
    )
    return recommendations
