"""
REST API 엔드포인트 테스트
norikae/api/v1/endpoints/*.py 및 main.py
"""

import pytest
from fastapi.testclient import TestClient

from norikae.api.deps import get_search_service
from norikae.core.exceptions import UpstreamSearchException
from norikae.main import app
from norikae.services.route_normalizer import RouteNormalizer
from norikae.services.search_service import RouteSearchService
from norikae.services.station_name_resolver import StationNameResolver


@pytest.fixture
def fake_client(make_client, edge_feature, make_poi_payload):
    return make_client(
        routes={"Feature": [edge_feature]},
        stations={"22715": make_poi_payload("渋谷", "JR山手線", "JR東日本")},
        suggest={"Result": [{"id": "22715", "name": "渋谷", "yomi": "しぶや"}]},
    )


@pytest.fixture
def client(fake_client):
    """FastAPI TestClient fixture (업스트림은 FakeTransitClient로 대체)"""
    service = RouteSearchService(
        fake_client, RouteNormalizer(StationNameResolver(fake_client))
    )
    app.dependency_overrides[get_search_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestSearchEndpoint:
    def test_search_success(self, client):
        response = client.post(
            "/v1/search",
            json={"from": "渋谷", "to": "永田町", "date": "202602251400"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["routes"][0]["departure_time"] == "14:00"
        assert len(data["routes"][0]["legs"]) == 4

    def test_invalid_date(self, client):
        response = client.post(
            "/v1/search", json={"from": "渋谷", "to": "新宿", "date": "2026-02-25"}
        )
        assert response.status_code == 422

    def test_invalid_type(self, client):
        response = client.post(
            "/v1/search", json={"from": "渋谷", "to": "新宿", "type": 9}
        )
        assert response.status_code == 422

    def test_upstream_failure_is_502(self, client, fake_client):
        fake_client.search_error = UpstreamSearchException(status_code=500)

        response = client.post("/v1/search", json={"from": "渋谷", "to": "新宿"})

        assert response.status_code == 502
        assert response.json()["detail"]["code"] == "SEARCH_FAILED"


class TestStationEndpoints:
    def test_station_names(self, client):
        response = client.get("/v1/stations/names", params={"codes": "22715,00000"})

        assert response.status_code == 200
        data = response.json()
        assert data["stations"]["22715"]["name"] == "渋谷"
        assert data["stations"]["00000"]["name"] == "00000"

    def test_station_names_limit(self, client):
        codes = ",".join(str(i) for i in range(101))

        response = client.get("/v1/stations/names", params={"codes": codes})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_REQUEST"

    def test_suggest(self, client):
        response = client.get("/v1/stations/suggest", params={"q": "しぶや"})

        assert response.status_code == 200
        assert response.json()["results"][0]["id"] == "22715"

    def test_suggest_requires_query(self, client):
        response = client.get("/v1/stations/suggest")
        assert response.status_code == 422


class TestServiceEndpoints:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_metrics(self, client):
        client.get("/health")
        response = client.get("/v1/metrics")

        assert response.status_code == 200
        assert response.json()["summary"]["total_requests"] >= 1
