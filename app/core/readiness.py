"""애플리케이션 준비성(readiness) 체크 유틸."""

from __future__ import annotations

import asyncio

from app.core.airport_data import AirportDataError, get_airport_data
from app.core.config import Settings, get_settings

ReadinessCheck = dict[str, str | bool]


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


async def _check_airport_data_readiness() -> ReadinessCheck:
    try:
        airport = await asyncio.to_thread(get_airport_data)
    except AirportDataError as exc:
        return _fail(f"공항 데이터 로드 실패: {exc}")

    return _ok(
        f"공항 데이터 로드 완료 (POI {len(airport.pois)}개, 구역 {len(airport.zones)}개, "
        f"노드 {len(airport.nav_graph.nodes)}개)"
    )


def _check_service_secret(settings: Settings) -> ReadinessCheck:
    if not settings.SERVICE_SECRET:
        return _fail("SERVICE_SECRET이 설정되지 않았습니다.")
    return _ok("SERVICE_SECRET 설정 확인 완료")


async def collect_readiness_status() -> dict[str, object]:
    """공항 카탈로그와 인증 설정의 준비 상태를 점검합니다."""
    settings = get_settings()

    checks: dict[str, ReadinessCheck] = {
        "airport_data": await _check_airport_data_readiness(),
        "service_secret": _check_service_secret(settings),
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
