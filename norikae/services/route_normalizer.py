"""
업스트림 경로 Feature => RouteCandidate 변환

경로마다 변환 전략을 한 번만 결정:
1. Edge 데이터 있음 => 구간 그대로 변환 (정확)
2. 경유역 코드 있음 => 역 이름 조회 후 구간 재구성 (추정)
3. Section만 있음 => 레거시 구간 그대로 전달
4. 아무것도 없음 => legs 없음 (요약 정보만)

필드 누락은 예외 없이 기본값 처리 (숫자 0, 문자열 None)
"""

import logging
from typing import Any, List, Optional, Tuple

from norikae.core.config import settings
from norikae.models.domain import (
    Fare,
    Leg,
    RouteCandidate,
    SearchContext,
    Section,
    TimeType,
)
from norikae.algorithms.badge import classify_badge
from norikae.algorithms.edge_segments import build_edge_legs, edge_route_times
from norikae.algorithms.raw_fields import (
    as_dict,
    as_list,
    split_codes,
    text,
    to_float,
    to_int,
)
from norikae.algorithms.segment_reconstructor import reconstruct_legs
from norikae.algorithms.time_codec import add_minutes, minutes_between, to_hhmm
from norikae.algorithms.walk_boundary import WalkBoundary, classify_walk_boundary

logger = logging.getLogger(__name__)


def parse_fare(raw: Any) -> Fare:
    fare = as_dict(raw)
    return Fare(
        total=to_int(fare.get("Total"), default=None),
        teiki1=text(fare.get("Teiki1")),
        teiki3=text(fare.get("Teiki3")),
        teiki6=text(fare.get("Teiki6")),
    )


def parse_section(raw: Any) -> Section:
    section = as_dict(raw)
    origin = as_dict(section.get("from"))
    target = as_dict(section.get("to"))
    line = as_dict(section.get("line"))
    return Section(
        type=to_int(section.get("type"), default=None),
        name=text(section.get("name")),
        minutes=to_int(section.get("time"), default=None),
        distance=to_float(section.get("distance"), default=None),
        from_name=text(origin.get("name")),
        from_code=text(origin.get("code")),
        from_time=to_hhmm(text(origin.get("time"))),
        to_name=text(target.get("name")),
        to_code=text(target.get("code")),
        to_time=to_hhmm(text(target.get("time"))),
        line_name=text(line.get("name")),
        line_color=text(line.get("color")),
        train_type=text(line.get("trainType")),
    )


def resolve_route_times(
    departure: Optional[str],
    arrival: Optional[str],
    total_minutes: int,
    context: SearchContext,
) -> Tuple[Optional[str], Optional[str]]:
    """
    경로 출발/도착 시각 ("YYYYMMDDHHmm") 결정

    한쪽만 있으면 총 소요시간으로 나머지 계산
    둘 다 없으면 검색 기준 시각 사용 (도착 기준 검색이면 기준 시각 = 도착 시각)
    """
    if departure and not arrival:
        arrival = add_minutes(departure, total_minutes)
    elif arrival and not departure:
        departure = add_minutes(arrival, -total_minutes)
    elif not departure and not arrival and context.reference_time:
        if context.time_type == TimeType.ARRIVAL:
            arrival = context.reference_time
            departure = add_minutes(arrival, -total_minutes)
        else:
            departure = context.reference_time
            arrival = add_minutes(departure, total_minutes)
    return departure, arrival


class RouteNormalizer:
    def __init__(self, resolver, max_station_codes: Optional[int] = None):
        self.resolver = resolver
        self.max_station_codes = max_station_codes or settings.STATION_LOOKUP_MAX_CODES

    async def normalize(
        self, features: List[Any], context: SearchContext
    ) -> List[RouteCandidate]:
        """업스트림 경로 목록 변환 (순서 유지, 경로 하나의 데이터 오류가 전체를 실패시키지 않음)"""
        candidates = []
        for feature in as_list(features):
            candidates.append(await self.normalize_feature(feature, context))
        return candidates

    async def normalize_feature(
        self, feature: Any, context: SearchContext
    ) -> RouteCandidate:
        route_info = as_dict(as_dict(feature).get("RouteInfo"))
        prop = as_dict(route_info.get("Property"))

        on_board = to_int(prop.get("TotalTime"))
        wait = to_int(prop.get("TimeOther"))
        walk = to_int(prop.get("TimeWalk"))
        transfer_count = max(0, to_int(prop.get("TransferCount")))
        pass_station_ids = split_codes(prop.get("PassStation"))
        edges = as_list(route_info.get("Edge"))
        sections = as_list(prop.get("Section"))

        departure = text(prop.get("DepartureDatetime"))
        arrival = text(prop.get("ArrivalDatetime"))
        if edges:
            edge_departure, edge_arrival = edge_route_times(edges)
            departure = edge_departure or departure
            arrival = edge_arrival or arrival
        departure, arrival = resolve_route_times(
            departure, arrival, on_board + wait, context
        )

        legs: Optional[List[Leg]] = None
        raw_sections: Optional[Tuple[Section, ...]] = None
        unattributed = 0

        if edges:
            legs = build_edge_legs(
                edges, context.origin_label, context.destination_label
            )
        elif pass_station_ids and len(pass_station_ids) <= self.max_station_codes:
            legs, unattributed = await self._reconstruct(
                pass_station_ids,
                transfer_count,
                walk,
                departure,
                arrival,
                on_board + wait,
                context,
            )
        elif pass_station_ids:
            logger.warning(
                f"경유역 수 초과로 구간 재구성 생략: "
                f"{len(pass_station_ids)} > {self.max_station_codes}"
            )
            unattributed = walk
        elif sections:
            raw_sections = tuple(parse_section(section) for section in sections)

        return RouteCandidate(
            name=text(as_dict(feature).get("Name")),
            total_on_board_minutes=on_board,
            transfer_wait_minutes=wait,
            total_walk_minutes=walk,
            transfer_count=transfer_count,
            fare=parse_fare(prop.get("Fare")),
            pass_station_ids=tuple(pass_station_ids),
            distance_km=to_float(prop.get("Distance")),
            co2_grams=to_float(prop.get("Co2")),
            badge=classify_badge(prop),
            departure_time=to_hhmm(departure),
            arrival_time=to_hhmm(arrival),
            legs=tuple(legs) if legs is not None else None,
            raw_sections=raw_sections,
            unattributed_walk_minutes=unattributed,
        )

    async def _reconstruct(
        self,
        codes: List[str],
        transfer_count: int,
        walk_minutes: int,
        departure: Optional[str],
        arrival: Optional[str],
        total_minutes: int,
        context: SearchContext,
    ) -> Tuple[List[Leg], int]:
        # 재구성 전에 경로의 모든 역 조회가 끝나야 함 (실패한 역은 코드로 대체됨)
        names = await self.resolver.resolve(codes)

        first = names.get(codes[0])
        last = names.get(codes[-1])
        boundary: WalkBoundary = classify_walk_boundary(
            walk_minutes,
            context.origin_label,
            context.destination_label,
            first.name if first else codes[0],
            last.name if last else codes[-1],
        )

        # 승차 구간 시각 = 경로 시각에서 입구/출구 도보 시간 제외
        transit_departure = (
            add_minutes(departure, boundary.entry_minutes) if departure else None
        )
        transit_arrival = (
            add_minutes(arrival, -boundary.exit_minutes) if arrival else None
        )
        on_board_span = minutes_between(transit_departure, transit_arrival)
        if on_board_span is None or on_board_span < 0:
            on_board_span = total_minutes

        legs = reconstruct_legs(
            codes,
            names,
            transfer_count,
            boundary,
            origin_label=context.origin_label,
            destination_label=context.destination_label,
            departure_datetime=transit_departure,
            arrival_datetime=transit_arrival,
            total_on_board_minutes=on_board_span,
        )
        return legs, boundary.unattributed_minutes
