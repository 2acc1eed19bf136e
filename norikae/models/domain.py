from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from norikae.core.config import BADGE_LABELS

# domain 정의
# 검색 요청마다 새로 생성되고 생성 후에는 변경하지 않음 (frozen)

RGB = Tuple[int, int, int]


class Badge(str, Enum):
    FASTEST = "fastest"
    FEWEST_TRANSFERS = "fewestTransfers"
    CHEAPEST = "cheapest"
    NONE = "none"

    @property
    def label(self) -> Optional[str]:
        return BADGE_LABELS.get(self.value)


class TimeType(int, Enum):
    DEPARTURE = 1
    ARRIVAL = 2
    FIRST_TRAIN = 3
    LAST_TRAIN = 4
    NOW = 5


class WalkRole(str, Enum):
    ENTRY = "entry"  # 첫 승차 전 도보
    EXIT = "exit"  # 마지막 하차 후 도보
    TRANSFER = "transfer"  # 승차 구간 사이 도보 (Edge 데이터에서만 발생)


@dataclass(frozen=True)
class Stop:
    name: str
    code: Optional[str] = None
    arrival_time: Optional[str] = None  # "HH:mm"
    departure_time: Optional[str] = None  # "HH:mm"


@dataclass(frozen=True)
class WalkLeg:
    from_label: Optional[str] = None
    to_label: Optional[str] = None
    minutes: Optional[int] = None
    # 도보 구간인데 노선명 자리에 출구명("JR東口" 등)이 들어온 경우
    exit_label: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    role: WalkRole = WalkRole.ENTRY
    type: str = field(default="walk", init=False)


@dataclass(frozen=True)
class TransitLeg:
    line_name: Optional[str]
    color: Optional[RGB] = None
    train_kind: Optional[str] = None
    destination: Optional[str] = None
    train_number: Optional[str] = None
    car_count: Optional[str] = None
    departure_platform: Optional[str] = None
    arrival_platform: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    stops: Tuple[Stop, ...] = ()
    company_name: Optional[str] = None
    is_bus: bool = False
    # 직전 구간도 승차 구간 => 같은 역에서 환승 (프론트에서 환승 마커 표시)
    transfer_from_previous: bool = False
    # 역 목록 기반 재구성 결과 (시각은 추정치)
    estimated: bool = False
    type: str = field(default="transit", init=False)


Leg = Union[WalkLeg, TransitLeg]


@dataclass(frozen=True)
class Fare:
    total: Optional[int] = None
    teiki1: Optional[str] = None  # 1개월 정기권
    teiki3: Optional[str] = None  # 3개월 정기권
    teiki6: Optional[str] = None  # 6개월 정기권


@dataclass(frozen=True)
class Section:
    """레거시 구간 포맷 (Edge 데이터가 없을 때 업스트림이 주는 형태)"""

    type: Optional[int] = None  # 0=도보, 1=철도, 3=환승 도보
    name: Optional[str] = None
    minutes: Optional[int] = None
    distance: Optional[float] = None
    from_name: Optional[str] = None
    from_code: Optional[str] = None
    from_time: Optional[str] = None
    to_name: Optional[str] = None
    to_code: Optional[str] = None
    to_time: Optional[str] = None
    line_name: Optional[str] = None
    line_color: Optional[str] = None
    train_type: Optional[str] = None


@dataclass(frozen=True)
class StationNameInfo:
    name: str
    line_name: Optional[str] = None
    company_name: Optional[str] = None
    yomi: Optional[str] = None
    platform_number: Optional[str] = None


@dataclass(frozen=True)
class SearchContext:
    origin_label: Optional[str] = None
    destination_label: Optional[str] = None
    reference_time: Optional[str] = None  # "YYYYMMDDHHmm"
    time_type: int = 1  # 1=출발, 2=도착, 3=첫차, 4=막차, 5=현재


@dataclass(frozen=True)
class RouteCandidate:
    name: Optional[str] = None
    total_on_board_minutes: int = 0
    transfer_wait_minutes: int = 0
    total_walk_minutes: int = 0
    transfer_count: int = 0
    fare: Fare = field(default_factory=Fare)
    pass_station_ids: Tuple[str, ...] = ()
    distance_km: float = 0
    co2_grams: float = 0
    badge: Badge = Badge.NONE
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    legs: Optional[Tuple[Leg, ...]] = None
    raw_sections: Optional[Tuple[Section, ...]] = None
    # 도보 시간이 있지만 입구/출구 어느 쪽인지 판단할 수 없는 경우
    unattributed_walk_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return self.total_on_board_minutes + self.transfer_wait_minutes

    @property
    def is_direct(self) -> bool:
        return self.transfer_count == 0

    @property
    def leg_walk_minutes(self) -> int:
        if not self.legs:
            return 0
        return sum(
            leg.minutes or 0 for leg in self.legs if isinstance(leg, WalkLeg)
        )

    def summary(
        self,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        index: int = 0,
    ) -> str:
        """경로 요약 텍스트 (클립보드 복사용)"""
        wait = (
            f" 乗換待{self.transfer_wait_minutes}分含"
            if self.transfer_wait_minutes
            else ""
        )
        parts = [
            f"【経路 {index + 1}】{origin or '出発地'} → {destination or '目的地'}",
            f"{self.departure_time or ''} → {self.arrival_time or ''} "
            f"({self.total_minutes}分{wait})",
            "直通" if self.is_direct else f"乗換{self.transfer_count}回",
            f"¥{self.fare.total:,}" if self.fare.total else "",
            f"{len(self.pass_station_ids)}駅経由" if self.pass_station_ids else "",
        ]
        return " | ".join(p for p in parts if p)
