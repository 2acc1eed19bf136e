"""
업스트림 乗換案内 API 클라이언트 (비공개 엔드포인트)

- 경로 검색: {NAVI_BASE_URL}/v3/naviSearch
- 역/POI 조회: {POI_BASE_URL}/v1/poiSearch, /v1/assist

재시도 없음 => 실패는 호출 측에 예외로 전달
"""

import logging
from typing import Any, Dict, Optional

import httpx

from norikae.core.config import settings
from norikae.core.exceptions import StationLookupException, UpstreamSearchException

logger = logging.getLogger(__name__)

# 역 상세 검색용 고정 필터 (앱에서 사용하는 값 그대로)
STATION_FILTER_KEY = "X_transit_BinaryFilterCustom1:64eb1163b0f13dacfd3a5cb96b333a53"


def clean_params(params: Dict[str, Any]) -> Dict[str, str]:
    """None / 빈 문자열 파라미터 제거 후 문자열로 변환"""
    return {
        key: str(value)
        for key, value in params.items()
        if value is not None and value != ""
    }


class TransitClient:
    def __init__(
        self,
        navi_base_url: Optional[str] = None,
        poi_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"User-Agent": settings.USER_AGENT, "Accept": "application/json"}
        timeout = timeout or settings.UPSTREAM_TIMEOUT_SECONDS

        self.navi_client = httpx.AsyncClient(
            base_url=navi_base_url or settings.NAVI_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self.poi_client = httpx.AsyncClient(
            base_url=poi_base_url or settings.POI_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def search_routes(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        경로 검색 (GET /v3/naviSearch)

        detail=full => 구간 상세(Edge) 데이터 요청 (업스트림이 항상 주는 것은 아님)

        Raises:
            UpstreamSearchException: 통신 실패, 2xx 이외 응답, JSON 파싱 실패
        """
        query = clean_params({"output": "json", "detail": "full", **params})
        try:
            response = await self.navi_client.get("/v3/naviSearch", params=query)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"경로 검색 실패: status={status}, query={query}")
            raise UpstreamSearchException(
                f"経路検索に失敗しました (HTTP {status})", status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"경로 검색 통신 오류: {e}")
            raise UpstreamSearchException(f"経路検索に失敗しました: {e}") from e
        except ValueError as e:
            logger.error(f"경로 검색 응답 파싱 실패: {e}")
            raise UpstreamSearchException("経路検索の応答が不正です") from e

    async def lookup_station(self, station_id: str) -> Dict[str, Any]:
        """
        역 ID로 역 상세 조회 (GET /v1/poiSearch)

        Raises:
            StationLookupException: 통신 실패, 2xx 이외 응답, JSON 파싱 실패
        """
        params = {
            "x_binary_filter": (
                f"{STATION_FILTER_KEY} AND X_transit_BinaryFilterCustom2:{station_id}"
            ),
            ".src": "transit_app_stationdetail",
            "results": "1",
            "detail": "navi",
        }
        try:
            response = await self.poi_client.get("/v1/poiSearch", params=params)
            response.raise_for_status()
            return response.json()

        except (httpx.HTTPError, ValueError) as e:
            raise StationLookupException(
                station_id, f"駅情報の取得に失敗しました ({e})"
            ) from e

    async def search_stations(self, query: str, results: int = 10) -> Dict[str, Any]:
        """
        역/정류장 입력 보완 (GET /v1/assist)

        Raises:
            UpstreamSearchException: 통신 실패, 2xx 이외 응답, JSON 파싱 실패
        """
        try:
            response = await self.poi_client.get(
                "/v1/assist",
                params=clean_params(
                    {"query": query, "results": results, "output": "json"}
                ),
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise UpstreamSearchException(
                f"駅検索に失敗しました (HTTP {status})", status_code=status
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamSearchException(f"駅検索に失敗しました: {e}") from e

    async def aclose(self) -> None:
        await self.navi_client.aclose()
        await self.poi_client.aclose()
