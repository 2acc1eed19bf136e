"""
Core 설정 및 utilities, 커스텀 예외
"""

from norikae.core.config import settings

from norikae.core.exceptions import (
    NorikaeException,
    UpstreamSearchException,
    StationLookupException,
    InvalidSearchRequestException,
)

__all__ = [
    "settings",
    "NorikaeException",
    "UpstreamSearchException",
    "StationLookupException",
    "InvalidSearchRequestException",
]
