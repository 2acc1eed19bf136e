from functools import lru_cache

from norikae.services.transit_client import TransitClient
from norikae.services.station_name_resolver import StationNameResolver
from norikae.services.route_normalizer import RouteNormalizer
from norikae.services.search_service import RouteSearchService


# lru_cache 사용하여 싱글톤 패턴과 유사한 효과, 의존성 주입
# httpx 연결 풀은 프로세스 전체에서 공유 (역 이름 조회 결과는 요청마다 새로 만듦)
@lru_cache()
def get_transit_client() -> TransitClient:
    return TransitClient()


@lru_cache()
def get_search_service() -> RouteSearchService:
    client = get_transit_client()
    normalizer = RouteNormalizer(StationNameResolver(client))
    return RouteSearchService(client, normalizer)
