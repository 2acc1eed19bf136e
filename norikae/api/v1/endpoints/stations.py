"""
역 정보 REST API 엔드포인트
"""

from fastapi import APIRouter, Query, HTTPException, Depends
import logging

from norikae.api.deps import get_search_service
from norikae.core.exceptions import NorikaeException, UpstreamSearchException
from norikae.models.responses import StationNamesResponse, StationSuggestResponse
from norikae.services.search_service import RouteSearchService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/names", response_model=StationNamesResponse)
async def get_station_names(
    codes: str = Query(..., min_length=1, description="역 코드 (쉼표 구분, 최대 100개)"),
    service: RouteSearchService = Depends(get_search_service),
):
    """
    역 코드 => 역 이름/노선/회사 일괄 조회

    조회 실패한 역은 이름 자리에 역 코드를 그대로 돌려줌

    Example:
        GET /v1/stations/names?codes=22828,22671
    """
    try:
        return await service.station_names(codes)
    except NorikaeException as e:
        logger.warning(f"역 이름 조회 요청 오류: {e.message}")
        raise HTTPException(
            status_code=400, detail={"message": e.message, "code": e.code}
        )


@router.get("/suggest", response_model=StationSuggestResponse)
async def suggest_stations(
    q: str = Query(..., description="검색 키워드", min_length=1, max_length=50),
    limit: int = Query(10, ge=1, le=50, description="최대 결과 수"),
    service: RouteSearchService = Depends(get_search_service),
):
    """
    역/정류장 검색 (자동완성용)

    - **q**: 검색 키워드 (1-50자)
    - **limit**: 최대 결과 수 (1-50, 기본값 10)

    Example:
        GET /v1/stations/suggest?q=しぶや&limit=5
    """
    try:
        logger.info(f"역 검색: keyword={q}, limit={limit}")
        return await service.suggest(q, results=limit)
    except UpstreamSearchException as e:
        logger.error(f"역 검색 실패: {e.message}")
        raise HTTPException(
            status_code=502, detail={"message": e.message, "code": e.code}
        )
