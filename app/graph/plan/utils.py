"""플랜 그래프 공통 유틸리티."""

from langchain_core.runnables import RunnableConfig

from app.core.airport_data import AirportData, get_airport_data


def get_airport(config: RunnableConfig | None) -> AirportData:
    """실행 설정에 주입된 카탈로그를 반환합니다. 없으면 기본 카탈로그를 사용합니다."""
    airport = (config or {}).get("configurable", {}).get("airport")
    return airport if airport is not None else get_airport_data()


def append_warning(state: dict, message: str) -> list[str]:
    """기존 경고 목록에 메시지를 덧붙인 새 목록을 반환합니다."""
    return [*state.get("warnings", []), message]
