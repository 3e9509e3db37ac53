"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.responses import JSONResponse, Response
from starlette.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api import plan
from app.api.dependencies import require_service_secret
from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.readiness import collect_readiness_status

configure_logging()
logger = get_logger(__name__)
settings = get_settings()

DOCS_MODES = ("disabled", "secret", "public")

# 경로 안내 응답은 사용자 여정마다 달라 캐싱하지 않는다.
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Cache-Control": "no-store",
}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized not in DOCS_MODES:
        logger.warning("유효하지 않은 DOCS_MODE 값입니다. disabled로 대체합니다: %s", mode)
        return "disabled"
    return normalized


def _install_middleware(app_: FastAPI) -> None:
    """프록시 헤더와 CORS 미들웨어를 설정값에 따라 등록합니다."""
    if settings.PROXY_HEADERS_ENABLED:
        proxies = _split_csv(settings.PROXY_TRUSTED_HOSTS) or ["127.0.0.1"]
        app_.add_middleware(ProxyHeadersMiddleware, trusted_hosts=proxies)

    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if "*" in origins and allow_credentials:
        logger.warning("CORS_ALLOW_ORIGINS='*'에서는 자격 증명을 허용할 수 없어 allow_credentials를 끕니다.")
        allow_credentials = False

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_split_csv(settings.CORS_ALLOW_METHODS) or ["GET", "POST"],
        allow_headers=_split_csv(settings.CORS_ALLOW_HEADERS) or ["Content-Type", "x-service-secret"],
    )


def _register_secret_docs(app_: FastAPI) -> None:
    """서비스 시크릿으로 보호되는 문서 엔드포인트를 등록합니다."""
    guard = [Depends(require_service_secret)]

    @app_.get("/openapi.json", include_in_schema=False, dependencies=guard)
    def openapi_json() -> JSONResponse:
        return JSONResponse(app_.openapi())

    @app_.get("/docs", include_in_schema=False, dependencies=guard)
    def swagger_ui() -> Response:
        return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app_.title} - Swagger UI")

    @app_.get("/redoc", include_in_schema=False, dependencies=guard)
    def redoc_ui() -> Response:
        return get_redoc_html(openapi_url="/openapi.json", title=f"{app_.title} - ReDoc")


docs_mode = _resolve_docs_mode(settings.DOCS_MODE)
public_docs = docs_mode == "public"

app = FastAPI(
    title="GateBuddy AI",
    description="공항 환승 동선 추천, 타임라인, 경로 안내 API",
    docs_url="/docs" if public_docs else None,
    redoc_url="/redoc" if public_docs else None,
    openapi_url="/openapi.json" if public_docs else None,
)

_install_middleware(app)
app.include_router(plan.router)
if docs_mode == "secret":
    _register_secret_docs(app)

logger.info("GateBuddy AI configured: env=%s docs_mode=%s", settings.APP_ENV, docs_mode)


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    """기본 보안 헤더를 응답에 추가합니다."""
    response = await call_next(request)
    if settings.SECURITY_HEADERS_ENABLED:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외를 표준 형식으로 처리합니다."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "내부 서버 오류가 발생했습니다."
    return JSONResponse(status_code=500, content={"detail": message})


@app.get("/")
def health_check() -> dict:
    """헬스 체크 엔드포인트."""
    return {"status": "ok", "message": "GateBuddy AI Server is running"}


@app.get("/health/ready")
async def readiness_check() -> JSONResponse:
    """공항 카탈로그 로드 여부를 포함한 준비 상태를 반환합니다. 준비되지 않았으면 503입니다."""
    result = await collect_readiness_status()
    return JSONResponse(status_code=200 if result["status"] == "ready" else 503, content=result)
