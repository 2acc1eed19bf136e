"""
외부 API 호출 / 경로 정규화 / 검색 서비스
"""

from norikae.services.transit_client import TransitClient
from norikae.services.station_name_resolver import StationNameResolver
from norikae.services.route_normalizer import RouteNormalizer
from norikae.services.search_service import RouteSearchService

__all__ = [
    "TransitClient",
    "StationNameResolver",
    "RouteNormalizer",
    "RouteSearchService",
]
