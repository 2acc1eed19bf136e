"""
pydantic models for 요청, 응답 / dataclass 도메인 객체
"""


from norikae.models.requests import SearchRequest
from norikae.models.responses import (
    SearchResponse,
    StationNamesResponse,
    StationSuggestResponse,
    ErrorResponse,
)
from norikae.models.domain import (
    Badge,
    RouteCandidate,
    SearchContext,
    StationNameInfo,
    TransitLeg,
    WalkLeg,
)

__all__ = [
    "SearchRequest",
    "SearchResponse",
    "StationNamesResponse",
    "StationSuggestResponse",
    "ErrorResponse",
    "Badge",
    "RouteCandidate",
    "SearchContext",
    "StationNameInfo",
    "TransitLeg",
    "WalkLeg",
]
