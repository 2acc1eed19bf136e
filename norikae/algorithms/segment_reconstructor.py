"""
역 목록 기반 구간 재구성 (Edge 데이터가 없을 때의 fallback)

업스트림 기본 응답은 경유역 코드 배열 + 환승 횟수만 제공함
=> 역별로 조회한 노선명을 다수결로 모아서 구간 경계를 추정

- 환승 0회: 전체가 한 구간, 노선명은 중간역(출발/도착역 제외) 최다 노선
- 환승 N회: 중간역 사이에서 노선명이 바뀌는 지점을 앞에서부터 최대 N개 찾아 분할,
            분할 후 구간마다 소속 역 전체로 다시 다수결
  (대형 터미널 역은 다른 노선 정보를 돌려주는 경우가 많아서 출발/도착역은 경계 탐색에서 제외)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from norikae.core.config import BUS_MARKERS
from norikae.models.domain import (
    Leg,
    Stop,
    StationNameInfo,
    TransitLeg,
    WalkLeg,
    WalkRole,
)
from norikae.algorithms.time_codec import add_minutes, to_hhmm
from norikae.algorithms.walk_boundary import WalkBoundary

logger = logging.getLogger(__name__)


@dataclass
class TrainSegment:
    """연속된 같은 노선 역들의 묶음 (pass station 인덱스 기준)"""

    station_indices: List[int] = field(default_factory=list)
    line_name: Optional[str] = None
    company_name: Optional[str] = None

    @property
    def is_bus(self) -> bool:
        return is_bus_operator(self.company_name)


def is_bus_operator(name: Optional[str]) -> bool:
    if not name:
        return False
    lowered = name.lower()
    return any(marker.lower() in lowered for marker in BUS_MARKERS)


def dominant_line(
    codes: Sequence[str], names: Dict[str, StationNameInfo]
) -> Tuple[Optional[str], Optional[str]]:
    """
    역 코드 목록에서 가장 많이 등장한 노선명과 그 회사명 반환

    동률이면 먼저 등장한 노선 우선
    회사명은 해당 노선이 처음 등장한 역의 값 사용
    """
    counts: Dict[str, int] = {}
    companies: Dict[str, Optional[str]] = {}
    for code in codes:
        info = names.get(code)
        line_name = info.line_name if info else None
        if not line_name:
            continue
        if line_name not in counts:
            counts[line_name] = 0
            companies[line_name] = info.company_name
        counts[line_name] += 1

    if not counts:
        return None, None

    best = max(counts, key=lambda name: counts[name])
    return best, companies[best]


def find_change_points(
    codes: Sequence[str], names: Dict[str, StationNameInfo]
) -> List[int]:
    """
    노선명이 바뀌는 지점 (codes[i]와 codes[i+1] 사이 => i) 목록

    첫 경계(출발역-다음역)와 마지막 경계(직전역-도착역)는 제외
    노선명이 없는 역과의 경계는 변화로 보지 않음
    """
    points = []
    for i in range(1, len(codes) - 2):
        current = names.get(codes[i])
        following = names.get(codes[i + 1])
        current_line = current.line_name if current else None
        following_line = following.line_name if following else None
        if current_line and following_line and current_line != following_line:
            points.append(i)
    return points


def build_segments(
    codes: Sequence[str],
    names: Dict[str, StationNameInfo],
    transfer_count: int,
) -> List[TrainSegment]:
    if not codes:
        return []

    if transfer_count <= 0:
        # 직통: 중간역 최다 노선명 사용
        line_name, company_name = dominant_line(codes[1:-1], names)
        return [
            TrainSegment(
                station_indices=list(range(len(codes))),
                line_name=line_name,
                company_name=company_name,
            )
        ]

    change_points = find_change_points(codes, names)
    if len(change_points) != transfer_count:
        # 업스트림 환승 횟수와 실제 변화 지점 수가 다름 => 찾은 만큼만 사용 (오류 아님)
        logger.info(
            f"환승 횟수 불일치: 업스트림={transfer_count}, "
            f"노선 변화 지점={len(change_points)}, 역 수={len(codes)}"
        )
    split_after = set(change_points[:transfer_count])

    segments: List[TrainSegment] = []
    for idx in range(len(codes)):
        if not segments or (idx - 1) in split_after:
            segments.append(TrainSegment(station_indices=[idx]))
        else:
            segments[-1].station_indices.append(idx)

    # 구간별로 다시 다수결 (경계역이 떠나는 노선 정보를 주는 경우 보정)
    for segment in segments:
        segment.line_name, segment.company_name = dominant_line(
            [codes[i] for i in segment.station_indices], names
        )

    return segments


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def estimate_stop_times(
    station_count: int,
    departure_datetime: Optional[str],
    arrival_datetime: Optional[str],
    total_on_board_minutes: int,
) -> List[Optional[str]]:
    """
    출발 시각 + 역 간 평균 소요시간으로 각 역 도착 시각 추정 ("HH:mm")

    마지막 역은 업스트림 도착 시각이 있으면 그 값 사용
    """
    times: List[Optional[str]] = [None] * station_count
    if station_count == 0:
        return times

    per_stop = (
        total_on_board_minutes / (station_count - 1) if station_count > 1 else 0
    )
    if departure_datetime and per_stop:
        for idx in range(station_count):
            times[idx] = to_hhmm(
                add_minutes(departure_datetime, _round_half_up(idx * per_stop))
            )

    if arrival_datetime:
        times[-1] = to_hhmm(arrival_datetime)
    return times


def reconstruct_legs(
    codes: Sequence[str],
    names: Dict[str, StationNameInfo],
    transfer_count: int,
    boundary: WalkBoundary,
    origin_label: Optional[str] = None,
    destination_label: Optional[str] = None,
    departure_datetime: Optional[str] = None,
    arrival_datetime: Optional[str] = None,
    total_on_board_minutes: int = 0,
) -> List[Leg]:
    """
    경유역 목록 => [입구 도보] + 승차 구간들 + [출구 도보]

    도보 구간은 맨 앞/맨 뒤에만 붙임 (중간 도보는 재구성 불가)
    """
    segments = build_segments(codes, names, transfer_count)
    if not segments:
        return []

    first_raw = names.get(codes[0])
    last_raw = names.get(codes[-1])
    first_raw_name = first_raw.name if first_raw else codes[0]
    last_raw_name = last_raw.name if last_raw else codes[-1]

    # 도보가 없는 쪽은 검색 입력값(출발지/목적지 이름)을 역 이름으로 우선 표시
    display_names = [
        names[code].name if code in names else code for code in codes
    ]
    if origin_label and not boundary.has_entry_walk:
        display_names[0] = origin_label
    if destination_label and not boundary.has_exit_walk:
        display_names[-1] = destination_label

    times = estimate_stop_times(
        len(codes), departure_datetime, arrival_datetime, total_on_board_minutes
    )

    legs: List[Leg] = []
    if boundary.has_entry_walk:
        legs.append(
            WalkLeg(
                from_label=origin_label,
                to_label=first_raw_name,
                minutes=boundary.entry_minutes,
                role=WalkRole.ENTRY,
            )
        )

    for seg_idx, segment in enumerate(segments):
        stops = tuple(
            Stop(
                name=display_names[i],
                code=codes[i],
                arrival_time=times[i] if i > 0 else None,
                departure_time=times[i] if i < len(codes) - 1 else None,
            )
            for i in segment.station_indices
        )
        legs.append(
            TransitLeg(
                line_name=segment.line_name,
                company_name=segment.company_name,
                is_bus=segment.is_bus,
                departure_time=times[segment.station_indices[0]],
                arrival_time=times[segment.station_indices[-1]],
                stops=stops,
                # 재구성 경로는 구간 사이 도보가 없으므로 두 번째 구간부터 모두 환승
                transfer_from_previous=seg_idx > 0,
                estimated=True,
            )
        )

    if boundary.has_exit_walk:
        legs.append(
            WalkLeg(
                from_label=last_raw_name,
                to_label=destination_label,
                minutes=boundary.exit_minutes,
                role=WalkRole.EXIT,
            )
        )

    return legs
