"""API 의존성 모음."""

from fastapi import Header, HTTPException, status

from app.core.airport_data import AirportData, AirportDataError, get_airport_data
from app.core.config import get_settings
from app.core.logger import get_logger

logger = get_logger(__name__)


def require_service_secret(
    x_service_secret: str | None = Header(default=None, alias="x-service-secret"),
) -> None:
    """서비스 간 인증을 위한 시크릿 헤더를 검증한다."""
    settings = get_settings()
    if not settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="서비스 시크릿 설정이 없습니다.",
        )

    if x_service_secret is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="서비스 시크릿 헤더가 누락되었습니다.",
        )

    if x_service_secret != settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 서비스 시크릿입니다.",
        )


def get_airport() -> AirportData:
    """검증된 공항 카탈로그를 제공한다. 로드에 실패하면 503을 반환한다."""
    try:
        return get_airport_data()
    except AirportDataError as exc:
        logger.error("Airport catalog unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="공항 데이터를 불러올 수 없습니다.",
        ) from exc
