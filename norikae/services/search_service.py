"""
경로 검색 서비스

검색 요청 => 업스트림 경로 검색 => RouteNormalizer => 응답 dict
역 이름 일괄 조회 / 역 자동완성도 함께 제공
"""

import json
import logging
import time
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List

from norikae.core.config import settings
from norikae.core.exceptions import InvalidSearchRequestException
from norikae.models.domain import RouteCandidate, SearchContext, TransitLeg
from norikae.models.requests import SearchRequest
from norikae.models.responses import route_to_dict
from norikae.algorithms.raw_fields import as_dict, as_list, split_codes, text
from norikae.algorithms.time_codec import DATETIME_FORMAT

logger = logging.getLogger(__name__)


def route_strategy(route: RouteCandidate) -> str:
    """경로가 어떤 방식으로 구성되었는지 (메트릭용)"""
    if route.legs is not None:
        estimated = any(
            isinstance(leg, TransitLeg) and leg.estimated for leg in route.legs
        )
        return "reconstructed" if estimated else "precise"
    if route.raw_sections is not None:
        return "sections"
    return "summary_only"


class RouteSearchService:
    def __init__(self, client, normalizer):
        self.client = client
        self.normalizer = normalizer

    async def search(self, request: SearchRequest) -> Dict[str, Any]:
        """
        경로 검색

        Raises:
            UpstreamSearchException: 업스트림 경로 검색 자체가 실패한 경우
        """
        start_time = time.time()
        search_date = request.date or datetime.now().strftime(DATETIME_FORMAT)

        payload = await self.client.search_routes(
            request.to_upstream_params(search_date)
        )
        features = as_list(as_dict(payload).get("Feature"))

        context = SearchContext(
            origin_label=request.from_,
            destination_label=request.to,
            reference_time=search_date,
            time_type=request.type,
        )
        routes = await self.normalizer.normalize(features, context)

        elapsed_ms = (time.time() - start_time) * 1000
        self._log_search_metrics(request, routes, elapsed_ms)

        return {
            "origin": request.from_,
            "destination": request.to,
            "search_date": search_date,
            "count": len(routes),
            "routes": [
                route_to_dict(route, request.from_, request.to, index)
                for index, route in enumerate(routes)
            ],
        }

    async def station_names(self, codes: str) -> Dict[str, Any]:
        """
        역 코드 목록 => 역 정보 (쉼표 구분, 최대 100개)

        Raises:
            InvalidSearchRequestException: 코드 없음 / 최대 개수 초과
        """
        code_list = list(dict.fromkeys(split_codes(codes)))
        if not code_list:
            raise InvalidSearchRequestException("駅コードを指定してください")
        if len(code_list) > settings.STATION_LOOKUP_MAX_CODES:
            raise InvalidSearchRequestException(
                f"駅コードは最大{settings.STATION_LOOKUP_MAX_CODES}件までです "
                f"(指定: {len(code_list)}件)"
            )

        names = await self.normalizer.resolver.resolve(code_list)
        return {
            "count": len(names),
            "stations": {code: asdict(info) for code, info in names.items()},
        }

    async def suggest(self, query: str, results: int = 10) -> Dict[str, Any]:
        """역/정류장 이름 자동완성"""
        keyword = query.strip()
        if not keyword:
            return {"keyword": query, "count": 0, "results": []}

        payload = await self.client.search_stations(keyword, results=results)
        items: List[Dict[str, Any]] = []
        for raw in as_list(as_dict(payload).get("Result")):
            entry = as_dict(raw)
            name = text(entry.get("name"))
            if not name:
                continue
            items.append(
                {
                    "id": text(entry.get("id")),
                    "name": name,
                    "yomi": text(entry.get("yomi")),
                    "category": text(entry.get("category")),
                }
            )
        return {"keyword": keyword, "count": len(items), "results": items}

    def _log_search_metrics(
        self, request: SearchRequest, routes: List[RouteCandidate], elapsed_ms: float
    ) -> None:
        if not settings.ENABLE_ROUTE_METRICS:
            return

        strategies: Dict[str, int] = {}
        for route in routes:
            key = route_strategy(route)
            strategies[key] = strategies.get(key, 0) + 1

        metrics = {
            "event": "route_search",
            "origin": request.from_,
            "destination": request.to,
            "time_type": request.type,
            "sort": request.sort,
            "route_count": len(routes),
            "strategies": strategies,
            "unattributed_walk_routes": sum(
                1 for route in routes if route.unattributed_walk_minutes
            ),
            "elapsed_time_ms": round(elapsed_ms, 2),
        }
        logger.info(f"METRICS: {json.dumps(metrics, ensure_ascii=False)}")
