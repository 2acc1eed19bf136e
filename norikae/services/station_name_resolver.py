"""
역 코드 => 역 이름/노선/회사 정보 일괄 조회

- 동시 요청 수 제한 (Semaphore, 기본 5개)
- 역 1건 실패는 전체를 실패시키지 않음 => {name: 역 코드} 로 대체
- 요청 단위로만 사용 (요청 간 캐시 없음)
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from norikae.core.config import settings
from norikae.core.exceptions import StationLookupException
from norikae.models.domain import StationNameInfo
from norikae.algorithms.raw_fields import as_dict, as_list, text

logger = logging.getLogger(__name__)


def parse_station_record(station_id: str, payload: Any) -> StationNameInfo:
    """
    POI 검색 응답의 첫 번째 Feature => StationNameInfo

    Raises:
        StationLookupException: 결과 없음 / 이름 없음 (형식 오류 포함)
    """
    features = as_list(as_dict(payload).get("Feature"))
    if not features:
        raise StationLookupException(station_id, "駅が見つかりません")

    feature = as_dict(features[0])
    name = text(feature.get("Name"))
    if not name:
        raise StationLookupException(station_id, "駅名がありません")

    detail = as_dict(as_dict(feature.get("TransitSearchInfo")).get("Detail"))
    station_info = as_dict(detail.get("StationInfo"))

    # 노선명: 운행정보(DiaInfo) 우선, 없으면 RailInfo
    line_name = None
    for entry in as_list(station_info.get("DiaInfo")):
        line_name = text(as_dict(entry).get("railName"))
        if line_name:
            break
    if not line_name:
        for entry in as_list(station_info.get("RailInfo")):
            line_name = text(as_dict(entry).get("name"))
            if line_name:
                break

    return StationNameInfo(
        name=name,
        line_name=line_name or text(detail.get("railSubName")),
        company_name=text(detail.get("companyName")),
        yomi=text(feature.get("Yomi")),
        platform_number=text(detail.get("platformNo")),
    )


class StationNameResolver:
    def __init__(self, client, concurrency: Optional[int] = None):
        self.client = client
        self.concurrency = concurrency or settings.STATION_LOOKUP_CONCURRENCY

    async def resolve(self, station_ids: Iterable[str]) -> Dict[str, StationNameInfo]:
        """
        역 코드 목록 조회 (중복 제거)

        개수 제한(최대 100개)은 호출 측 책임
        모든 코드가 성공 또는 대체값으로 채워진 뒤 반환
        """
        unique_ids = list(dict.fromkeys(sid for sid in station_ids if sid))
        if not unique_ids:
            return {}

        # 호출마다 새 semaphore => 요청 간 공유 없음
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _resolve_one(station_id: str) -> Tuple[str, StationNameInfo]:
            async with semaphore:
                try:
                    payload = await self.client.lookup_station(station_id)
                    return station_id, parse_station_record(station_id, payload)
                except StationLookupException as e:
                    logger.warning(f"역 조회 실패 (코드로 대체): {e.message}")
                except Exception as e:
                    logger.warning(
                        f"역 조회 중 예상치 못한 오류 (코드로 대체): "
                        f"station_id={station_id}, 오류: {e}"
                    )
                return station_id, StationNameInfo(name=station_id)

        results = await asyncio.gather(*(_resolve_one(sid) for sid in unique_ids))

        failed = sum(1 for sid, info in results if info.name == sid)
        logger.debug(f"역 이름 조회 완료: 전체={len(unique_ids)}, 대체={failed}")
        return dict(results)
