"""
Norikae Navi Backend - FastAPI Application

일본 乗換案内 경로 검색 중계 서버
업스트림 경로 응답을 구간(도보/승차) 단위로 정규화해서 제공
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from norikae.core.config import settings
from norikae.api.deps import get_transit_client
from norikae.api.v1.router import api_router

# 성능 모니터링
from norikae.middleware.performance_monitoring import (
    PerformanceMonitoringMiddleware,
    RequestLoggingMiddleware,
    get_metrics_collector,
)

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 종료 시 업스트림 httpx 클라이언트 연결 정리
    """
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} 시작 (v{settings.VERSION})")
    logger.info(f"경로 검색 API: {settings.NAVI_BASE_URL}")
    logger.info(f"역 조회 API: {settings.POI_BASE_URL}")
    logger.info("=" * 60)

    yield

    logger.info(f"{settings.PROJECT_NAME} 종료 중...")
    try:
        await get_transit_client().aclose()
        logger.info("✓ 업스트림 클라이언트 종료 완료")
    except Exception as e:
        logger.error(f"❌ 종료 중 오류: {e}", exc_info=True)


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 乗換案内 경로 검색 API

    ### 주요 기능
    - 🚃 경로 검색 (출발/도착/첫차/막차 기준)
    - 🚶 입구/출구/환승 도보 구간 구분
    - 🔁 구간 상세가 없는 경로는 경유역 정보로 구간 재구성
    - 🏷️ 최속 / 乗換少 / 최안 배지
    - 🚉 역 이름 일괄 조회 / 역 자동완성
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
# allow_credentials=True일 때는 allow_origins에 ["*"]를 사용할 수 없음
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 성능 모니터링 미들웨어 추가
if settings.ENABLE_PERFORMANCE_MONITORING:
    app.add_middleware(PerformanceMonitoringMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    logger.info("✓ 성능 모니터링 미들웨어 활성화")

# API 라우터 등록
app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """서비스 기본 정보"""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "endpoints": {
            "search": "POST /v1/search",
            "station_names": "GET /v1/stations/names?codes=",
            "station_suggest": "GET /v1/stations/suggest?q=",
        },
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """
    헬스 체크 엔드포인트

    업스트림은 비공개 API라서 직접 호출하지 않음 (프로세스 상태만 확인)
    """
    response_content = {
        "status": "healthy",
        "version": settings.VERSION,
        "timestamp": time.time(),
    }

    if settings.ENABLE_PERFORMANCE_MONITORING:
        response_content["performance"] = get_metrics_collector().get_summary()

    return response_content


@app.get("/v1/metrics")
async def get_metrics():
    """
    성능 메트릭 엔드포인트

    애플리케이션 성능 통계 조회
    """
    if not settings.ENABLE_PERFORMANCE_MONITORING:
        return {"message": "성능 모니터링이 비활성화되어 있습니다"}

    try:
        metrics = get_metrics_collector()

        return {
            "summary": metrics.get_summary(),
            "top_paths": metrics.get_path_stats(top_n=10),
            "configuration": {
                "slow_request_threshold_ms": settings.SLOW_REQUEST_THRESHOLD_MS,
                "monitoring_enabled": settings.ENABLE_PERFORMANCE_MONITORING,
                "route_metrics_enabled": settings.ENABLE_ROUTE_METRICS,
            },
        }

    except Exception as e:
        logger.error(f"메트릭 조회 실패: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"메트릭 조회 실패: {str(e)}")


# ========== Exception Handlers ==========


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "norikae.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
        timeout_keep_alive=30,
    )
