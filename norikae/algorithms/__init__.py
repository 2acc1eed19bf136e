"""
경로 정규화 알고리즘 (동기 / 순수 함수)
"""

from norikae.algorithms.badge import classify_badge
from norikae.algorithms.color_codec import decode_color
from norikae.algorithms.edge_segments import build_edge_legs
from norikae.algorithms.segment_reconstructor import (
    build_segments,
    dominant_line,
    reconstruct_legs,
)
from norikae.algorithms.time_codec import to_hhmm
from norikae.algorithms.walk_boundary import classify_walk_boundary

__all__ = [
    "classify_badge",
    "decode_color",
    "build_edge_legs",
    "build_segments",
    "dominant_line",
    "reconstruct_legs",
    "to_hhmm",
    "classify_walk_boundary",
]
