"""
경로 검색 REST API 엔드포인트
"""

from fastapi import APIRouter, HTTPException, Depends
import logging

from norikae.api.deps import get_search_service
from norikae.core.exceptions import NorikaeException, UpstreamSearchException
from norikae.models.requests import SearchRequest
from norikae.models.responses import SearchResponse
from norikae.services.search_service import RouteSearchService


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=SearchResponse)
async def search_routes(
    request: SearchRequest,
    service: RouteSearchService = Depends(get_search_service),
):
    """
    경로 검색

    - **from**: 출발지 이름
    - **to**: 목적지 이름
    - **fcode** / **tcode**: 역/정류장 코드 (자동완성 결과의 id)
    - **date**: 기준 일시 YYYYMMDDHHmm (생략 시 현재)
    - **type**: 1=출발, 2=도착, 3=첫차, 4=막차, 5=현재
    - **sort**: 0=빠른순, 1=환승적은순, 2=저렴한순

    Example:
        POST /v1/search
        {
            "from": "渋谷",
            "to": "新宿",
            "date": "202602251425",
            "type": 1
        }
    """
    try:
        logger.info(
            f"경로 검색: {request.from_} → {request.to}, "
            f"date={request.date}, type={request.type}, sort={request.sort}"
        )
        return await service.search(request)

    except UpstreamSearchException as e:
        logger.error(f"경로 검색 실패: {e.message}")
        raise HTTPException(
            status_code=502, detail={"message": e.message, "code": e.code}
        )
    except NorikaeException as e:
        logger.error(f"경로 검색 요청 오류: {e.message}")
        raise HTTPException(
            status_code=400, detail={"message": e.message, "code": e.code}
        )
