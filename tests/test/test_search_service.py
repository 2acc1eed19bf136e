"""
RouteSearchService 테스트
"""

import logging

import pytest

from norikae.core.exceptions import InvalidSearchRequestException
from norikae.models.domain import RouteCandidate, SearchContext
from norikae.models.requests import SearchRequest
from norikae.services.route_normalizer import RouteNormalizer
from norikae.services.search_service import RouteSearchService, route_strategy
from norikae.services.station_name_resolver import StationNameResolver


def _service(client):
    return RouteSearchService(client, RouteNormalizer(StationNameResolver(client)))


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_builds_response(self, make_client, edge_feature):
        client = make_client(routes={"Feature": [edge_feature]})
        request = SearchRequest(**{"from": "渋谷", "to": "永田町", "date": "202602251400"})

        result = await _service(client).search(request)

        assert result["origin"] == "渋谷"
        assert result["destination"] == "永田町"
        assert result["search_date"] == "202602251400"
        assert result["count"] == 1
        route = result["routes"][0]
        assert route["badge"] == "fastest"
        assert route["badge_label"] == "最速"
        assert route["total_minutes"] == 28
        assert [leg["type"] for leg in route["legs"]] == [
            "walk",
            "transit",
            "transit",
            "walk",
        ]
        assert route["legs"][0]["role"] == "entry"
        assert route["legs"][1]["color"] == "rgb(255,165,0)"
        assert route["legs"][2]["transfer_from_previous"] is True
        assert route["summary"].startswith("【経路 1】渋谷 → 永田町")

        assert client.search_params["from"] == "渋谷"
        assert client.search_params["date"] == "202602251400"

    @pytest.mark.asyncio
    async def test_default_date_is_now(self, make_client):
        client = make_client()
        request = SearchRequest(**{"from": "渋谷", "to": "新宿"})

        result = await _service(client).search(request)

        assert len(result["search_date"]) == 12
        assert result["search_date"].isdigit()
        assert result["routes"] == []

    @pytest.mark.asyncio
    async def test_metrics_log(self, make_client, edge_feature, caplog):
        client = make_client(routes={"Feature": [edge_feature]})
        request = SearchRequest(**{"from": "渋谷", "to": "永田町"})

        with caplog.at_level(logging.INFO):
            await _service(client).search(request)

        assert "METRICS:" in caplog.text
        assert '"precise": 1' in caplog.text


class TestStationNames:
    @pytest.mark.asyncio
    async def test_resolves_codes(self, make_client, make_poi_payload):
        client = make_client(stations={"a": make_poi_payload("渋谷", "山手線")})

        result = await _service(client).station_names("a, b")

        assert result["count"] == 2
        assert result["stations"]["a"]["name"] == "渋谷"
        assert result["stations"]["a"]["line_name"] == "山手線"
        assert result["stations"]["b"]["name"] == "b"

    @pytest.mark.asyncio
    async def test_rejects_more_than_100(self, make_client):
        codes = ",".join(str(i) for i in range(101))
        client = make_client()

        with pytest.raises(InvalidSearchRequestException):
            await _service(client).station_names(codes)

        assert client.lookup_calls == []

    @pytest.mark.asyncio
    async def test_rejects_empty(self, make_client):
        with pytest.raises(InvalidSearchRequestException):
            await _service(make_client()).station_names(" , ")


class TestSuggest:
    @pytest.mark.asyncio
    async def test_suggest(self, make_client):
        client = make_client(
            suggest={
                "Result": [
                    {"id": "22715", "name": "渋谷", "yomi": "しぶや", "category": "st"},
                    {"id": "x"},
                ]
            }
        )
        result = await _service(client).suggest("しぶや")

        assert result["count"] == 1
        assert result["results"][0]["name"] == "渋谷"

    @pytest.mark.asyncio
    async def test_blank_query(self, make_client):
        result = await _service(make_client()).suggest("  ")
        assert result["count"] == 0


class TestRouteStrategy:
    def test_summary_only(self):
        assert route_strategy(RouteCandidate()) == "summary_only"

    def test_summary_text(self):
        route = RouteCandidate(
            total_on_board_minutes=20,
            transfer_wait_minutes=3,
            transfer_count=1,
            departure_time="10:00",
            arrival_time="10:23",
            pass_station_ids=("a", "b", "c"),
        )
        text = route.summary("渋谷", "新宿", 1)

        assert text.startswith("【経路 2】渋谷 → 新宿")
        assert "10:00 → 10:23 (23分 乗換待3分含)" in text
        assert "乗換1回" in text
        assert "3駅経由" in text

    def test_context_defaults(self):
        assert SearchContext().time_type == 1
