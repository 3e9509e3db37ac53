"""여행 정보, 사용자 선호, 타임라인 스텝 스키마."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MealType = Literal["quick-bite", "sit-down"]
Mobility = Literal["normal", "reduced"]
StepType = Literal["checkpoint", "poi", "gate"]
StepStatus = Literal["safe", "tight", "risky"]


class TripDetails(BaseModel):
    """온보딩 완료 시 확정되는 여행 정보. 변경 시 통째로 교체합니다."""

    model_config = ConfigDict(frozen=True)

    arrival_time: datetime = Field(..., description="도착 시각")
    terminal: str = Field(..., description="도착 터미널 (예: T1)")
    arriving_gate: str | None = Field(default=None, description="도착 게이트 ID")
    is_domestic: bool = Field(default=False, description="국내선 여부")
    has_baggage: bool = Field(default=False, description="위탁 수하물 수령 여부")
    next_flight_time: datetime | None = Field(default=None, description="다음 항공편 출발 시각")
    gate_number: str | None = Field(default=None, description="출발 게이트 ID")
    has_connecting_flight: bool | None = Field(default=None, description="연결 항공편 여부")

    @field_validator("terminal")
    @classmethod
    def normalize_terminal(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("arriving_gate", "gate_number")
    @classmethod
    def normalize_gate(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip().upper()
        return stripped or None

    @model_validator(mode="after")
    def validate_timezone_consistency(self):
        if self.next_flight_time is None:
            return self
        arrival_aware = self.arrival_time.tzinfo is not None
        flight_aware = self.next_flight_time.tzinfo is not None
        if arrival_aware != flight_aware:
            raise ValueError("도착 시각과 다음 항공편 시각은 모두 시간대를 포함하거나 모두 생략해야 합니다.")
        return self


class UserPreferences(BaseModel):
    """사용자 선호 설정."""

    model_config = ConfigDict(frozen=True)

    budget: Literal[1, 2, 3] | None = Field(default=None, description="예산 등급 (1=€ ~ 3=€€€)")
    dietary: list[str] = Field(default_factory=list, description="식단 제한 태그 (예: vegan)")
    meal_type: MealType | None = Field(default=None, description="식사 유형 선호")
    mobility: Mobility = Field(default="normal", description="이동 모드")
    lounge_access: bool = Field(default=False, description="라운지 이용 가능 여부")
    custom_preferences: str | None = Field(default=None, description="자유 입력 선호 문장")

    @property
    def has_custom_preferences(self) -> bool:
        return bool(self.custom_preferences and self.custom_preferences.strip())


class TimelineStep(BaseModel):
    """타임라인의 단일 스텝."""

    id: str = Field(..., description="스텝 ID (baggage, passport, poi-0, security, gate)")
    type: StepType = Field(..., description="스텝 유형")
    name: str = Field(..., description="표시 이름")
    location: str = Field(..., description="위치 라벨 (구역 ID 또는 게이트 ID)")
    start_time: datetime = Field(..., description="시작 시각")
    duration: float = Field(..., ge=0, description="체류/대기 시간(분)")
    travel_time: int = Field(..., ge=0, description="직전 스텝에서의 이동시간(분)")
    status: StepStatus = Field(default="safe", description="위험도")
    description: str = Field(default="", description="설명")

    @property
    def total_minutes(self) -> float:
        return self.travel_time + self.duration
