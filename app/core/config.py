"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    SERVICE_SECRET: str = ""
    AIRPORT_DATA_PATH: str | None = None
    PLAN_MAX_SUGGESTED_POIS: int = 2
    PLAN_SUGGESTION_BUFFER_MINUTES: int = 60
    PLAN_DEFAULT_AVAILABLE_MINUTES: int = 120
    APP_ENV: str = "development"
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type,x-service-secret"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True
    PROXY_HEADERS_ENABLED: bool = True
    PROXY_TRUSTED_HOSTS: str = "127.0.0.1"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("PLAN_MAX_SUGGESTED_POIS", mode="before")
    @classmethod
    def _clamp_plan_max_suggested_pois(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 2
        except (TypeError, ValueError):
            numeric = 2
        return min(5, max(0, numeric))

    @field_validator("PLAN_SUGGESTION_BUFFER_MINUTES", "PLAN_DEFAULT_AVAILABLE_MINUTES", mode="before")
    @classmethod
    def _non_negative_minutes(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 0
        except (TypeError, ValueError):
            numeric = 0
        return max(0, numeric)


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
