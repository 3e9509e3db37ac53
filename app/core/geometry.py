"""공항 평면 좌표계 기반 거리·이동시간·대기시간 계산 유틸리티."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from app.schemas.airport import PointOfInterest

MobilityMode = Literal["normal", "reduced"]
CheckpointKind = Literal["security", "passport", "baggage"]

METERS_PER_UNIT = 2.0
TERMINAL_CHANGE_PENALTY_SECONDS = 600
BOARDING_LEAD_MINUTES = 30
ALWAYS_OPEN = "24/7"

_WALKING_SPEED_MPS: dict[str, float] = {"normal": 1.3, "reduced": 0.8}

# (peak, off-peak) minutes
_QUEUE_MINUTES: dict[str, tuple[int, int]] = {
    "security": (20, 10),
    "passport": (25, 15),
    "baggage": (20, 15),
}

_PEAK_HOURS = ((6, 9), (16, 19))


class Point(Protocol):
    x: float
    y: float


class TerminalPoint(Point, Protocol):
    terminal: str


def distance(p1: Point, p2: Point) -> float:
    """두 점 사이의 평면 유클리드 거리를 반환합니다."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def travel_time(origin: TerminalPoint, destination: TerminalPoint, mobility: MobilityMode = "normal") -> int:
    """두 위치 간 도보 이동시간(분)을 올림하여 반환합니다.

    좌표 거리에 `METERS_PER_UNIT`를 곱해 미터로 환산하고, 이동 약자 모드는 더 느린
    보행 속도를 사용합니다. 터미널이 다르면 환승 페널티(600초)를 더합니다.
    """
    meters = distance(origin, destination) * METERS_PER_UNIT
    speed = _WALKING_SPEED_MPS.get(mobility, _WALKING_SPEED_MPS["normal"])
    seconds = meters / speed

    if origin.terminal != destination.terminal:
        seconds += TERMINAL_CHANGE_PENALTY_SECONDS

    return math.ceil(seconds / 60)


def is_peak_hour(time: datetime) -> bool:
    """06~09시, 16~19시(시 단위, 양 끝 포함)를 혼잡 시간대로 판단합니다."""
    return any(start <= time.hour <= end for start, end in _PEAK_HOURS)


def queue_time(time: datetime, terminal: str, kind: CheckpointKind, is_domestic: bool) -> int:
    """체크포인트 종류와 혼잡 여부로 대기시간(분)을 추정합니다.

    `terminal`은 현재 추정치에 영향을 주지 않지만 호출 규약상 함께 받습니다.
    """
    if kind == "passport" and is_domestic:
        return 0

    peak, off_peak = _QUEUE_MINUTES[kind]
    return peak if is_peak_hour(time) else off_peak


def parse_clock_minutes(value: str) -> int:
    """`HH:MM` 문자열을 자정 기준 분으로 변환합니다."""
    hour_text, minute_text = value.strip().split(":")
    return int(hour_text) * 60 + int(minute_text)


def parse_opening_hours(value: str) -> tuple[int, int] | None:
    """영업시간 문자열을 (open, close) 분 단위로 파싱합니다. 24/7이면 None입니다."""
    if value == ALWAYS_OPEN:
        return None
    open_text, close_text = value.split("-")
    return parse_clock_minutes(open_text), parse_clock_minutes(close_text)


def is_open(poi: PointOfInterest, time: datetime) -> bool:
    """POI가 주어진 시각에 영업 중인지 반환합니다.

    자정을 넘기는 영업시간(예: 22:00-02:00)은 지원하지 않습니다.
    """
    window = parse_opening_hours(poi.opening_hours)
    if window is None:
        return True

    open_minutes, close_minutes = window
    current = time.hour * 60 + time.minute
    return open_minutes <= current <= close_minutes


def boarding_deadline(next_flight_time: datetime) -> datetime:
    """탑승 마감 시각(출발 30분 전)을 반환합니다."""
    return next_flight_time - timedelta(minutes=BOARDING_LEAD_MINUTES)


def minutes_until_boarding(next_flight_time: datetime, now: datetime) -> int:
    """현재 시각부터 탑승 마감까지 남은 분을 반환합니다. 지난 경우 0입니다."""
    remaining = boarding_deadline(next_flight_time) - now
    return max(0, math.floor(remaining.total_seconds() / 60))


def format_duration(minutes: int | float) -> str:
    """분 단위 시간을 `45m`, `2h 5m`, `2h` 형식으로 포맷합니다."""
    total = int(minutes)
    if total < 60:
        return f"{total}m"
    hours, mins = divmod(total, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
