"""
노선 색상 디코딩

업스트림은 RGB를 10진수 하나로 묶어서 보냄 (RRRGGGBBB, 채널별 3자리 0 패딩)
예: 230230230 => (230, 230, 230)
부호가 붙어서 오는 경우가 있음 => 절댓값 사용
"""

from typing import Optional, Union

from norikae.core.config import WALK_COLOR
from norikae.models.domain import RGB


def decode_color(value: Union[str, int, None]) -> Optional[RGB]:
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    try:
        number = abs(int(raw))
    except ValueError:
        return None

    # 앞에서부터 3자리씩 자름 (0-255 범위 검증은 하지 않음)
    digits = str(number).zfill(9)
    return (int(digits[0:3]), int(digits[3:6]), int(digits[6:9]))


def to_css(rgb: Optional[RGB]) -> Optional[str]:
    if rgb is None:
        return None
    return "rgb({},{},{})".format(*rgb)


def is_walk_color(rgb: Optional[RGB]) -> bool:
    return rgb == WALK_COLOR
