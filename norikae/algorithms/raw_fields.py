"""
업스트림 원본 JSON 필드 방어적 추출

업스트림 응답은 키 누락/타입 불일치가 잦음 => 예외 없이 기본값으로 처리
(숫자 => 0, 문자열 => None)
"""

from typing import Any, Dict, List, Optional


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        # 요소가 1개일 때 배열이 아닌 객체로 오는 경우가 있음
        return [value]
    return []


def text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    result = str(value).strip()
    return result or None


def to_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(str(value).replace(",", "")))
    except (ValueError, OverflowError):
        return default


def to_float(value: Any, default: Optional[float] = 0) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(str(value).replace(",", ""))
    except ValueError:
        return default


def is_truthy(value: Any) -> bool:
    """업스트림 boolean 유사값: True / 1 / "1" / "true" """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return False


def split_codes(value: Any) -> List[str]:
    """경유역 코드: "a,b,c" 또는 ["a", "b", "c"]"""
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = value
    else:
        return []
    return [code for code in (text(item) for item in items) if code]
