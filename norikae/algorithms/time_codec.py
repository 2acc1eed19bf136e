"""
업스트림 시각 표기 => "HH:mm" 변환

업스트림은 두 가지 형식을 섞어서 사용함
- 구간/경로 단위 시각: "YYYYMMDDHHmm" (12자리)
- 정차역 시각: "HMM" 또는 "HHMM" (4자리 이하, 앞자리 0 생략)

시간대 변환 없음 => 모두 업스트림 현지 시각 그대로 사용
"""

from datetime import datetime, timedelta
from typing import Optional, Union

DATETIME_FORMAT = "%Y%m%d%H%M"
DATETIME_LENGTH = 12


def format_datetime(value: Optional[str]) -> Optional[str]:
    """'YYYYMMDDHHmm' → 'HH:mm'"""
    if not value or len(value) < DATETIME_LENGTH:
        return None
    return f"{value[8:10]}:{value[10:12]}"


def format_packed_time(value: Union[str, int, None]) -> Optional[str]:
    """'915' → '09:15', '1425' → '14:25'"""
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    padded = raw.zfill(4)
    return f"{padded[0:2]}:{padded[2:4]}"


def to_hhmm(value: Union[str, int, None]) -> Optional[str]:
    """길이로 형식을 판별하여 'HH:mm' 반환 (빈 값 => None)"""
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    if len(raw) >= DATETIME_LENGTH:
        return format_datetime(raw)
    return format_packed_time(raw)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value or len(value) < DATETIME_LENGTH:
        return None
    try:
        return datetime.strptime(value[:DATETIME_LENGTH], DATETIME_FORMAT)
    except ValueError:
        return None


def add_minutes(value: Optional[str], minutes: int) -> Optional[str]:
    """'YYYYMMDDHHmm'에 분을 더해 같은 형식으로 반환 (자정/월말 넘김 처리)"""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return (parsed + timedelta(minutes=minutes)).strftime(DATETIME_FORMAT)


def minutes_between(start: Optional[str], end: Optional[str]) -> Optional[int]:
    """두 'YYYYMMDDHHmm' 사이의 분 (어느 한쪽이라도 없으면 None)"""
    start_dt = parse_datetime(start)
    end_dt = parse_datetime(end)
    if start_dt is None or end_dt is None:
        return None
    return int((end_dt - start_dt).total_seconds() // 60)
