"""도착부터 탑승까지의 타임라인 생성 서비스.

입력(여행 정보, 선호, 선택 POI)이 바뀌면 타임라인을 처음부터 다시 만듭니다.
부분 갱신이나 캐싱은 하지 않습니다.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from app.core.airport_data import AirportData
from app.core.geometry import CheckpointKind, boarding_deadline, queue_time, travel_time
from app.core.logger import get_logger
from app.schemas.airport import Location, PointOfInterest
from app.schemas.trip import StepStatus, TimelineStep, TripDetails, UserPreferences

logger = get_logger(__name__)

TIGHT_MARGIN_MINUTES = 15

# 도착 구역 좌표가 없을 때 사용하는 기본 출발 좌표
_FALLBACK_ORIGIN = (100.0, 100.0)

_CHECKPOINTS: dict[str, tuple[str, str]] = {
    "baggage": ("Baggage Claim", "Collect your luggage. Estimated wait: {minutes} min"),
    "passport": ("Passport Control", "Immigration checkpoint. Estimated wait: {minutes} min"),
    "security": ("Security Checkpoint", "Security screening. Estimated wait: {minutes} min"),
}


def _advance(clock: datetime, minutes: float) -> datetime:
    return clock + timedelta(minutes=minutes)


class _TimelineCursor:
    """타임라인을 앞으로 훑으며 현재 시각과 위치를 추적합니다."""

    def __init__(self, trip: TripDetails, preferences: UserPreferences, origin: Location) -> None:
        self.trip = trip
        self.preferences = preferences
        self.clock = trip.arrival_time
        self.location = origin
        self.steps: list[TimelineStep] = []

    def add(
        self,
        *,
        step_id: str,
        step_type: str,
        name: str,
        label: str,
        destination: Location,
        duration: float,
        description: str,
    ) -> TimelineStep:
        minutes = travel_time(self.location, destination, self.preferences.mobility)
        step = TimelineStep(
            id=step_id,
            type=step_type,
            name=name,
            location=label,
            start_time=self.clock,
            duration=duration,
            travel_time=minutes,
            description=description,
        )
        self.steps.append(step)
        self.clock = _advance(self.clock, minutes + duration)
        self.location = destination
        return step

    def add_checkpoint(self, kind: CheckpointKind, airport: AirportData) -> None:
        zone_id = f"{self.trip.terminal.lower()}-{kind}"
        destination = airport.get_zone_coordinates(zone_id)
        if destination is None:
            logger.warning("Timeline step skipped, zone not found: step=%s zone=%s", kind, zone_id)
            return

        # 대기시간은 체크포인트로 출발하는 시점 기준으로 추정한다.
        minutes = queue_time(self.clock, self.trip.terminal, kind, self.trip.is_domestic)
        name, template = _CHECKPOINTS[kind]
        self.add(
            step_id=kind,
            step_type="checkpoint",
            name=name,
            label=zone_id,
            destination=destination,
            duration=minutes,
            description=template.format(minutes=minutes),
        )


def resolve_origin(trip: TripDetails, airport: AirportData) -> Location:
    zone_id = f"{trip.terminal.lower()}-arrivals"
    origin = airport.get_zone_coordinates(zone_id)
    if origin is not None:
        return origin

    logger.warning("Arrivals zone not found, using fallback origin: zone=%s", zone_id)
    x, y = _FALLBACK_ORIGIN
    return Location(x=x, y=y, terminal=trip.terminal)


def classify_status(slack_minutes: float, remaining_minutes: float) -> StepStatus:
    """탑승 마감까지의 여유와 남은 스텝 소요시간을 비교해 위험도를 판정합니다."""
    if slack_minutes < remaining_minutes:
        return "risky"
    if slack_minutes < remaining_minutes + TIGHT_MARGIN_MINUTES:
        return "tight"
    return "safe"


def annotate_status(steps: list[TimelineStep], next_flight_time: datetime) -> list[TimelineStep]:
    """각 스텝 완료 후 남은 계획이 탑승 마감 전에 끝나는지로 상태를 다시 매깁니다."""
    deadline = boarding_deadline(next_flight_time)
    annotated: list[TimelineStep] = []

    for index, step in enumerate(steps):
        completion = _advance(step.start_time, step.total_minutes)
        slack = (deadline - completion).total_seconds() / 60
        remaining = sum(later.total_minutes for later in steps[index + 1 :])
        annotated.append(step.model_copy(update={"status": classify_status(slack, remaining)}))

    return annotated


def build_timeline(
    trip: TripDetails,
    preferences: UserPreferences,
    selected_pois: Sequence[PointOfInterest] = (),
    *,
    airport: AirportData,
) -> list[TimelineStep]:
    """여행 정보와 선택한 POI로 시간순 타임라인을 생성합니다.

    순서는 수하물 수령(위탁 수하물이 있을 때), 출입국 심사(국제선일 때), 선택 POI(호출자 순서),
    보안 검색과 탑승 게이트(다음 항공편이 있을 때)입니다. 구역이나 게이트 조회에 실패한 스텝은
    오류 없이 생략합니다.
    """
    cursor = _TimelineCursor(trip, preferences, resolve_origin(trip, airport))

    if trip.has_baggage:
        cursor.add_checkpoint("baggage", airport)

    if not trip.is_domestic:
        cursor.add_checkpoint("passport", airport)

    for index, poi in enumerate(selected_pois):
        cursor.add(
            step_id=f"poi-{index}",
            step_type="poi",
            name=poi.name,
            label=poi.zone,
            destination=poi.location,
            duration=poi.service_time,
            description=poi.description,
        )

    if trip.next_flight_time is None:
        logger.info("Timeline built without next flight: steps=%d", len(cursor.steps))
        return cursor.steps

    cursor.add_checkpoint("security", airport)

    if trip.gate_number:
        gate_location = airport.get_gate_coordinates(trip.gate_number)
        if gate_location is None:
            logger.warning("Timeline gate step skipped, gate not found: gate=%s", trip.gate_number)
        else:
            boarding = boarding_deadline(trip.next_flight_time)
            cursor.add(
                step_id="gate",
                step_type="gate",
                name=f"Gate {trip.gate_number}",
                label=trip.gate_number,
                destination=gate_location,
                duration=0,
                description=f"Arrive at gate. Boarding starts at {boarding.strftime('%H:%M')}",
            )

    steps = annotate_status(cursor.steps, trip.next_flight_time)
    logger.info(
        "Timeline built: steps=%d risky=%d tight=%d",
        len(steps),
        sum(1 for step in steps if step.status == "risky"),
        sum(1 for step in steps if step.status == "tight"),
    )
    return steps
