"""
도보 구간 위치 추정 (역 목록 기반 재구성 경로 전용)

Edge 데이터가 없으면 업스트림은 총 도보 시간만 알려주고 어느 구간이 도보인지 알려주지 않음
=> 검색 시 입력한 출발지/목적지 이름과 첫/마지막 경유역 이름을 비교해서
   이름이 다르면 그쪽에 도보 구간이 있다고 판단 (휴리스틱)
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WalkBoundary:
    has_entry_walk: bool = False
    has_exit_walk: bool = False
    entry_minutes: int = 0
    exit_minutes: int = 0
    # 도보 시간은 있지만 입구/출구 어느 쪽에도 배정하지 못한 분
    unattributed_minutes: int = 0


def _differs(label: Optional[str], station_name: Optional[str]) -> bool:
    # 어느 한쪽이라도 비어 있으면 비교 불가 => 도보 없음으로 처리
    if not label or not station_name:
        return False
    return label.strip() != station_name.strip()


def classify_walk_boundary(
    total_walk_minutes: int,
    origin_label: Optional[str],
    destination_label: Optional[str],
    first_station_name: Optional[str],
    last_station_name: Optional[str],
) -> WalkBoundary:
    """
    총 도보 시간을 입구 도보 / 출구 도보로 배분

    - 총 도보 0분 => 도보 구간 없음
    - 출발지 이름 != 첫 역 이름 => 입구 도보
    - 목적지 이름 != 마지막 역 이름 => 출구 도보
    - 양쪽 모두 => 입구 ceil(total/2), 출구 floor(total/2)
    - 어느 쪽도 아님 => 미배정 도보 시간으로 보고
    """
    total = total_walk_minutes or 0
    if total <= 0:
        return WalkBoundary()

    has_entry = _differs(origin_label, first_station_name)
    has_exit = _differs(destination_label, last_station_name)

    if has_entry and has_exit:
        return WalkBoundary(
            has_entry_walk=True,
            has_exit_walk=True,
            entry_minutes=total - total // 2,
            exit_minutes=total // 2,
        )
    if has_entry:
        return WalkBoundary(has_entry_walk=True, entry_minutes=total)
    if has_exit:
        return WalkBoundary(has_exit_walk=True, exit_minutes=total)
    return WalkBoundary(unattributed_minutes=total)
