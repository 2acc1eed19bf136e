# 성능 모니터링 미들웨어

import time
import logging
import json
from typing import Callable, Dict
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from norikae.core.config import settings

logger = logging.getLogger(__name__)


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    성능 모니터링 미들웨어

    모든 HTTP 요청의 응답 시간을 측정해서 로깅하고 MetricsCollector에 기록
    경로 검색은 역 이름 조회가 붙으면 느려지므로 threshold 초과 요청은 경고로 로깅
    """

    def __init__(self, app: ASGIApp, collector: "MetricsCollector" = None):
        super().__init__(app)
        self.enabled = settings.ENABLE_PERFORMANCE_MONITORING
        self.slow_threshold_ms = settings.SLOW_REQUEST_THRESHOLD_MS
        self.collector = collector or get_metrics_collector()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled:
            return await call_next(request)

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_time_ms = (time.time() - start_time) * 1000
            self.collector.record_request(
                path=request.url.path,
                method=request.method,
                status_code=500,
                elapsed_time_ms=elapsed_time_ms,
            )
            logger.error(
                f"요청 처리 중 예외 발생: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms, 예외={str(e)}",
                exc_info=True,
            )
            raise

        elapsed_time_ms = (time.time() - start_time) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed_time_ms:.2f}"

        is_slow = elapsed_time_ms > self.slow_threshold_ms
        self.collector.record_request(
            path=request.url.path,
            method=request.method,
            status_code=response.status_code,
            elapsed_time_ms=elapsed_time_ms,
            is_slow=is_slow,
        )
        self._log_performance_metrics(request, response, elapsed_time_ms, is_slow)

        return response

    def _log_performance_metrics(
        self,
        request: Request,
        response: Response,
        elapsed_time_ms: float,
        is_slow: bool,
    ) -> None:
        metrics = {
            "event": "http_request",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "elapsed_time_ms": round(elapsed_time_ms, 2),
            "slow_request": is_slow,
        }

        # 역 코드 목록 등 쿼리 파라미터 (민감 정보 없음)
        if request.query_params:
            metrics["query_params"] = dict(request.query_params)

        if request.client:
            metrics["client_host"] = request.client.host

        if is_slow:
            logger.warning(
                f"⚠️ 느린 요청 감지: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms (기준: {self.slow_threshold_ms}ms)"
            )

        logger.info(f"PERFORMANCE: {json.dumps(metrics, ensure_ascii=False)}")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 로깅 미들웨어"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.info(
            f"→ {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        response = await call_next(request)

        # 502 (업스트림 실패)도 ERROR로 남김
        log_level = logging.INFO if response.status_code < 400 else logging.ERROR
        logger.log(
            log_level,
            f"← {request.method} {request.url.path} "
            f"status={response.status_code}",
        )

        return response


class MetricsCollector:
    """
    메트릭 수집기 (프로세스 메모리)

    요청 수 / 평균 응답시간 / 느린 요청 / 오류 / 업스트림 실패(502) 집계
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.request_count = 0
        self.total_elapsed_time_ms = 0.0
        self.slow_request_count = 0
        self.error_count = 0
        self.upstream_error_count = 0

        # 경로별 통계
        self.path_stats: Dict[str, dict] = {}

    def record_request(
        self,
        path: str,
        method: str,
        status_code: int,
        elapsed_time_ms: float,
        is_slow: bool = False,
    ):
        self.request_count += 1
        self.total_elapsed_time_ms += elapsed_time_ms

        if is_slow:
            self.slow_request_count += 1
        if status_code >= 400:
            self.error_count += 1
        if status_code == 502:
            self.upstream_error_count += 1

        path_key = f"{method} {path}"
        stats = self.path_stats.setdefault(
            path_key,
            {"count": 0, "total_time_ms": 0.0, "slow_count": 0, "error_count": 0},
        )
        stats["count"] += 1
        stats["total_time_ms"] += elapsed_time_ms
        if is_slow:
            stats["slow_count"] += 1
        if status_code >= 400:
            stats["error_count"] += 1

    def get_summary(self) -> dict:
        """전체 메트릭 요약"""

        if self.request_count == 0:
            return {
                "total_requests": 0,
                "average_elapsed_time_ms": 0,
                "slow_requests": 0,
                "error_requests": 0,
                "upstream_errors": 0,
                "success_rate": 0,
            }

        return {
            "total_requests": self.request_count,
            "average_elapsed_time_ms": round(
                self.total_elapsed_time_ms / self.request_count, 2
            ),
            "slow_requests": self.slow_request_count,
            "error_requests": self.error_count,
            "upstream_errors": self.upstream_error_count,
            "success_rate": round(
                (self.request_count - self.error_count) / self.request_count * 100, 2
            ),
        }

    def get_path_stats(self, top_n: int = 10) -> list:
        """경로별 통계 (요청 수 상위 N개)"""

        sorted_paths = sorted(
            self.path_stats.items(), key=lambda x: x[1]["count"], reverse=True
        )

        return [
            {
                "path": path,
                "count": stats["count"],
                "avg_time_ms": round(stats["total_time_ms"] / stats["count"], 2),
                "slow_count": stats["slow_count"],
                "error_count": stats["error_count"],
            }
            for path, stats in sorted_paths[:top_n]
        ]


# 전역 메트릭 수집기 인스턴스
_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """메트릭 수집기 인스턴스 반환"""
    return _metrics_collector
