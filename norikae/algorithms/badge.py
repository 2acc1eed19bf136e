from typing import Any, Dict

from norikae.models.domain import Badge
from norikae.algorithms.raw_fields import is_truthy

# 우선순위 고정: 최속 > 환승 최소 > 최저가 (경로당 배지는 1개)
BADGE_PRIORITY = (
    ("IsFast", Badge.FASTEST),
    ("IsEasy", Badge.FEWEST_TRANSFERS),
    ("IsCheap", Badge.CHEAPEST),
)


def classify_badge(flags: Dict[str, Any]) -> Badge:
    for key, badge in BADGE_PRIORITY:
        if is_truthy(flags.get(key)):
            return badge
    return Badge.NONE
