"""
Pytest 설정 및 공통 Fixture
"""

import asyncio
import os
import pytest
import sys
from pathlib import Path

# 테스트 중에는 메트릭 로그/미들웨어 설정을 고정 (모듈 임포트 전에 설정해야 함)
os.environ.setdefault("ENABLE_ROUTE_METRICS", "true")
os.environ.setdefault("ENABLE_PERFORMANCE_MONITORING", "true")

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from norikae.core.exceptions import StationLookupException  # noqa: E402
from norikae.models.domain import StationNameInfo  # noqa: E402


class FakeTransitClient:
    """
    TransitClient 대체 (네트워크 없음)

    역 조회 동시 실행 수를 기록 => 동시성 제한 검증용
    """

    def __init__(self, stations=None, failing=(), delay=0.0, routes=None, suggest=None):
        self.stations = stations or {}
        self.failing = set(failing)
        self.delay = delay
        self.routes_payload = routes if routes is not None else {"Feature": []}
        self.suggest_payload = suggest if suggest is not None else {"Result": []}
        self.in_flight = 0
        self.max_in_flight = 0
        self.lookup_calls = []
        self.search_params = None
        self.search_error = None

    async def lookup_station(self, station_id):
        self.lookup_calls.append(station_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if station_id in self.failing:
                raise StationLookupException(station_id, "timeout")
            return self.stations.get(station_id, {"Feature": []})
        finally:
            self.in_flight -= 1

    async def search_routes(self, params):
        self.search_params = params
        if self.search_error is not None:
            raise self.search_error
        return self.routes_payload

    async def search_stations(self, query, results=10):
        return self.suggest_payload


def _poi_payload(name, line=None, company=None, yomi=None, platform=None):
    detail = {"StationInfo": {}}
    if line:
        detail["StationInfo"]["DiaInfo"] = [{"railName": line}]
    if company:
        detail["companyName"] = company
    if platform:
        detail["platformNo"] = platform
    return {
        "Feature": [
            {"Name": name, "Yomi": yomi, "TransitSearchInfo": {"Detail": detail}}
        ]
    }


@pytest.fixture
def make_poi_payload():
    """POI 검색 응답 생성 함수"""
    return _poi_payload


@pytest.fixture
def make_client():
    """FakeTransitClient 생성 함수"""
    return FakeTransitClient


@pytest.fixture
def line_stations():
    """
    6개 역: 출발 터미널은 다른 노선 정보를 돌려줌, 중간에서 노선 1번 변경

    s1(山手線*) s2(銀座線) s3(銀座線) | s4(半蔵門線) s5(半蔵門線) s6(半蔵門線)
    """
    return {
        "s1": _poi_payload("渋谷", "山手線", "JR東日本"),
        "s2": _poi_payload("表参道", "銀座線", "東京メトロ"),
        "s3": _poi_payload("青山一丁目", "銀座線", "東京メトロ"),
        "s4": _poi_payload("永田町", "半蔵門線", "東京メトロ"),
        "s5": _poi_payload("半蔵門", "半蔵門線", "東京メトロ"),
        "s6": _poi_payload("九段下", "半蔵門線", "東京メトロ"),
    }


@pytest.fixture
def direct_stations():
    """환승 없는 5개 역 (출발/도착 터미널은 다른 노선 정보)"""
    return {
        "d1": _poi_payload("新宿", "中央線", "JR東日本", yomi="しんじゅく"),
        "d2": _poi_payload("新大久保", "山手線", "JR東日本"),
        "d3": _poi_payload("高田馬場", "山手線", "JR東日本"),
        "d4": _poi_payload("目白", "山手線", "JR東日本"),
        "d5": _poi_payload("池袋", "丸ノ内線", "東京メトロ"),
    }


@pytest.fixture
def station_names():
    """역 코드 => StationNameInfo (resolver 결과 형태)"""

    def _build(mapping):
        return {
            code: StationNameInfo(name=name, line_name=line, company_name=company)
            for code, (name, line, company) in mapping.items()
        }

    return _build


@pytest.fixture
def edge_feature():
    """
    Edge 데이터가 있는 경로
    입구 도보 => 銀座線 => 半蔵門線 (같은 역 환승) => 출구 도보 (노선명 자리에 출구명)
    """
    return {
        "Name": "ルート1",
        "RouteInfo": {
            "Property": {
                "TotalTime": 25,
                "TimeOther": 3,
                "TimeWalk": 9,
                "TransferCount": 1,
                "Fare": {"Total": 210, "Teiki1": "7,960", "Teiki3": "22,690"},
                "PassStation": "s1,s2,s3,s4",
                "Distance": "6.4",
                "Co2": 120,
                "IsFast": "1",
            },
            "Edge": [
                {
                    "Property": {
                        "RailName": "徒歩",
                        "Color": "230230230",
                        "DepartureDatetime": "202602251400",
                        "ArrivalDatetime": "202602251405",
                    },
                    "Station": [],
                },
                {
                    "Property": {
                        "RailName": "東京メトロ銀座線",
                        "Color": "255165000",
                        "TrainKind": "各駅停車",
                        "Destination": "浅草",
                        "TrainNo": "A1402",
                        "NumOfCar": "6",
                        "DepartureTrackNumber": "1",
                        "ArrivalTrackNumber": "2",
                        "DepartureDatetime": "202602251405",
                        "ArrivalDatetime": "202602251412",
                    },
                    "Station": [
                        {"Name": "渋谷", "Id": "s1", "DepartureTime": "1405"},
                        {
                            "Name": "表参道",
                            "Id": "s2",
                            "ArrivalTime": "1407",
                            "DepartureTime": "1408",
                        },
                        {"Name": "青山一丁目", "Id": "s3", "ArrivalTime": "1412"},
                    ],
                },
                {
                    "Property": {
                        "RailName": "東京メトロ半蔵門線",
                        "Color": "-143112203",
                        "DepartureDatetime": "202602251415",
                        "ArrivalDatetime": "202602251421",
                    },
                    "Station": [
                        {"Name": "青山一丁目", "Id": "s3", "DepartureTime": "1415"},
                        {"Name": "永田町", "Id": "s4", "ArrivalTime": "1421"},
                    ],
                },
                {
                    "Property": {
                        "RailName": "4番出口",
                        "Color": 230230230,
                        "DepartureDatetime": "202602251421",
                        "ArrivalDatetime": "202602251425",
                    },
                    "Station": [],
                },
            ],
        },
    }


@pytest.fixture
def pass_station_feature():
    """Edge 데이터 없이 경유역 코드 + 환승 횟수만 있는 경로"""

    def _build(codes, transfer_count=0, walk=0, **extra):
        prop = {
            "TotalTime": extra.pop("total_time", 20),
            "TimeOther": extra.pop("time_other", 0),
            "TimeWalk": walk,
            "TransferCount": transfer_count,
            "PassStation": ",".join(codes),
            "Fare": {"Total": 200},
        }
        prop.update(extra)
        return {"Name": "ルート", "RouteInfo": {"Property": prop}}

    return _build
