from dataclasses import asdict
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from norikae.models.domain import RouteCandidate, Stop, TransitLeg, WalkLeg
from norikae.algorithms.color_codec import to_css

# service 별 응답 구조 정의


def _stop_to_dict(stop: Stop) -> Dict[str, Any]:
    return {
        "name": stop.name,
        "code": stop.code,
        "arrival_time": stop.arrival_time,
        "departure_time": stop.departure_time,
    }


def leg_to_dict(leg) -> Dict[str, Any]:
    if isinstance(leg, WalkLeg):
        return {
            "type": leg.type,
            "role": leg.role.value,
            "from_label": leg.from_label,
            "to_label": leg.to_label,
            "minutes": leg.minutes,
            "exit_label": leg.exit_label,
            "departure_time": leg.departure_time,
            "arrival_time": leg.arrival_time,
        }

    if isinstance(leg, TransitLeg):
        return {
            "type": leg.type,
            "line_name": leg.line_name,
            "color": to_css(leg.color),
            "train_kind": leg.train_kind,
            "destination": leg.destination,
            "train_number": leg.train_number,
            "car_count": leg.car_count,
            "departure_platform": leg.departure_platform,
            "arrival_platform": leg.arrival_platform,
            "departure_time": leg.departure_time,
            "arrival_time": leg.arrival_time,
            "company_name": leg.company_name,
            "is_bus": leg.is_bus,
            "transfer_from_previous": leg.transfer_from_previous,
            "estimated": leg.estimated,
            "stops": [_stop_to_dict(stop) for stop in leg.stops],
        }

    raise TypeError(f"알 수 없는 구간 타입: {type(leg).__name__}")


def route_to_dict(
    route: RouteCandidate,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    index: int = 0,
) -> Dict[str, Any]:
    """RouteCandidate => JSON 응답용 dict"""
    return {
        "name": route.name,
        "departure_time": route.departure_time,
        "arrival_time": route.arrival_time,
        "total_minutes": route.total_minutes,
        "total_on_board_minutes": route.total_on_board_minutes,
        "transfer_wait_minutes": route.transfer_wait_minutes,
        "total_walk_minutes": route.total_walk_minutes,
        "unattributed_walk_minutes": route.unattributed_walk_minutes,
        "transfer_count": route.transfer_count,
        "fare": asdict(route.fare),
        "pass_station_ids": list(route.pass_station_ids),
        "distance_km": route.distance_km,
        "co2_grams": route.co2_grams,
        "badge": route.badge.value,
        "badge_label": route.badge.label,
        "legs": (
            [leg_to_dict(leg) for leg in route.legs] if route.legs is not None else None
        ),
        "raw_sections": (
            [asdict(section) for section in route.raw_sections]
            if route.raw_sections is not None
            else None
        ),
        "summary": route.summary(origin, destination, index),
    }


# 경로 검색 응답
class SearchResponse(BaseModel):
    origin: str = Field(..., description="출발지")
    destination: str = Field(..., description="목적지")
    search_date: str = Field(..., description="검색 기준 일시 (YYYYMMDDHHmm)")
    count: int = Field(..., description="경로 수")
    routes: List[Dict] = Field(default_factory=list, description="경로 리스트")


# 역 이름 일괄 조회 응답
class StationNamesResponse(BaseModel):
    count: int = Field(..., description="조회한 역 수")
    stations: Dict[str, Dict] = Field(
        default_factory=dict, description="역 코드 => 역 정보"
    )


# 역 검색 응답 (자동완성)
class StationSuggestResponse(BaseModel):
    keyword: str = Field(..., description="검색 키워드")
    count: int = Field(..., description="검색 결과 수")
    results: List[Dict] = Field(default_factory=list, description="역 정보 리스트")


# 에러 응답
class ErrorResponse(BaseModel):
    error: str = Field(..., description="에러 메시지")
    code: Optional[str] = Field(None, description="에러 코드")
