"""
Edge 데이터 => 구간(Leg) 목록 변환

detail=full 검색 시 업스트림이 구간별 상세(노선/시각/정차역)를 Edge 배열로 제공
=> 추정 없이 그대로 변환 (순서 변경/중복 제거 없음)
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from norikae.core.config import WALK_LINE_NAME
from norikae.models.domain import Leg, Stop, TransitLeg, WalkLeg, WalkRole
from norikae.algorithms.color_codec import decode_color, is_walk_color
from norikae.algorithms.raw_fields import as_dict, as_list, text
from norikae.algorithms.segment_reconstructor import is_bus_operator
from norikae.algorithms.time_codec import minutes_between, to_hhmm

logger = logging.getLogger(__name__)


def parse_stops(edge: Dict[str, Any]) -> Tuple[Stop, ...]:
    stops = []
    for raw in as_list(edge.get("Station")):
        station = as_dict(raw)
        stops.append(
            Stop(
                name=text(station.get("Name")) or "",
                code=text(station.get("Id")),
                arrival_time=to_hhmm(text(station.get("ArrivalTime"))),
                departure_time=to_hhmm(text(station.get("DepartureTime"))),
            )
        )
    return tuple(stops)


def is_walk_edge(line_name: Optional[str], color) -> bool:
    return line_name == WALK_LINE_NAME or is_walk_color(color)


def edge_route_times(edges: List[Any]) -> Tuple[Optional[str], Optional[str]]:
    """첫 구간 출발 / 마지막 구간 도착 원본 시각 ("YYYYMMDDHHmm")"""
    if not edges:
        return None, None
    first = as_dict(as_dict(edges[0]).get("Property"))
    last = as_dict(as_dict(edges[-1]).get("Property"))
    return text(first.get("DepartureDatetime")), text(last.get("ArrivalDatetime"))


def build_edge_legs(
    edges: List[Any],
    origin_label: Optional[str] = None,
    destination_label: Optional[str] = None,
) -> List[Leg]:
    parsed = []
    for raw in edges:
        edge = as_dict(raw)
        prop = as_dict(edge.get("Property"))
        line_name = text(prop.get("RailName"))
        color = decode_color(prop.get("Color"))
        parsed.append(
            (
                prop,
                line_name,
                color,
                is_walk_edge(line_name, color),
                parse_stops(edge),
            )
        )

    transit_indices = [i for i, entry in enumerate(parsed) if not entry[3]]
    first_transit = transit_indices[0] if transit_indices else None
    last_transit = transit_indices[-1] if transit_indices else None
    last_idx = len(parsed) - 1

    legs: List[Leg] = []
    for idx, (prop, line_name, color, is_walk, stops) in enumerate(parsed):
        departure = text(prop.get("DepartureDatetime"))
        arrival = text(prop.get("ArrivalDatetime"))

        if is_walk:
            # 도보인데 노선명 자리에 다른 값이 있으면 출구명으로 보존
            exit_label = (
                line_name if line_name and line_name != WALK_LINE_NAME else None
            )
            from_label = exit_label or (stops[0].name if stops else None)
            to_label = stops[-1].name if stops else None
            if not from_label and idx == 0:
                from_label = origin_label
            if not to_label and idx == last_idx:
                to_label = destination_label

            if first_transit is None or idx < first_transit:
                role = WalkRole.ENTRY
            elif idx > last_transit:
                role = WalkRole.EXIT
            else:
                role = WalkRole.TRANSFER

            legs.append(
                WalkLeg(
                    from_label=from_label or None,
                    to_label=to_label or None,
                    minutes=minutes_between(departure, arrival),
                    exit_label=exit_label,
                    departure_time=to_hhmm(departure),
                    arrival_time=to_hhmm(arrival),
                    role=role,
                )
            )
            continue

        legs.append(
            TransitLeg(
                line_name=line_name,
                color=color,
                train_kind=text(prop.get("TrainKind")),
                destination=text(prop.get("Destination")),
                train_number=text(prop.get("TrainNo")),
                car_count=text(prop.get("NumOfCar")),
                departure_platform=text(prop.get("DepartureTrackNumber")),
                arrival_platform=text(prop.get("ArrivalTrackNumber")),
                departure_time=to_hhmm(departure),
                arrival_time=to_hhmm(arrival),
                stops=stops,
                is_bus=is_bus_operator(line_name),
                transfer_from_previous=bool(legs) and isinstance(legs[-1], TransitLeg),
            )
        )

    logger.debug(
        f"Edge 구간 변환: 전체={len(legs)}, 승차={len(transit_indices)}"
    )
    return legs
