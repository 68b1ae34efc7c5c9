import pytest
from fastapi.testclient import TestClient

from src.evacroute.main import create_app
from src.evacroute.models.domain import Coordinate, EvacuationTarget
from src.evacroute.services.routing.errors import NoRouteFound, ProviderError, ProviderUnavailable

CURRENT = {"lng": -118.2437, "lat": 34.0522}


def _raw_route(distance: float, duration: float) -> dict:
    return {
        "distance": distance,
        "duration": duration,
        "geometry": {"type": "LineString", "coordinates": [[-118.2437, 34.0522], [-118.30, 34.00]]},
        "legs": [
            {
                "summary": "US-101",
                "steps": [
                    {"distance": 500.0, "duration": 60.0, "maneuver": {"instruction": "Head west", "type": "depart"}},
                    {"distance": 0.0, "duration": 0.0, "maneuver": {"instruction": "You have arrived", "type": "arrive"}},
                ],
            }
        ],
    }


class DummyDirections:
    """Directions client keyed by destination longitude."""

    traffic_aware = True

    def __init__(self, outcomes: dict):
        self.outcomes = outcomes

    def route(self, start, end, options=None):
        outcome = self.outcomes[end.longitude]
        if isinstance(outcome, Exception):
            raise outcome
        return {"code": "Ok", "routes": [_raw_route(duration * 14, duration) for duration in outcome]}


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def use_directions(monkeypatch: pytest.MonkeyPatch):
    from src.evacroute.services.routing import service as routing_service

    def _install(outcomes: dict) -> None:
        monkeypatch.setattr(routing_service, "DirectionsClient", lambda *args, **kwargs: DummyDirections(outcomes))

    return _install


def test_health_endpoint(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compute_routes_endpoint(api_client: TestClient, use_directions):
    use_directions({-118.30: [900, 1000]})

    response = api_client.post(
        "/api/routes/compute",
        json={"start": CURRENT, "end": {"lng": -118.30, "lat": 34.00}, "options": {"alternatives": True}},
    )

    assert response.status_code == 200
    routes = response.json()["routes"]
    assert [route["is_primary"] for route in routes] == [True, False]
    assert routes[0]["duration_minutes"] == 15.0
    assert routes[0]["geometry"]["type"] == "LineString"
    assert routes[0]["traffic_aware"] is True


@pytest.mark.parametrize(
    "error, expected_status",
    [
        (NoRouteFound("no route"), 404),
        (ProviderError(429, "Too Many Requests"), 502),
        (ProviderUnavailable("offline"), 503),
    ],
)
def test_compute_routes_error_mapping(api_client: TestClient, use_directions, error, expected_status):
    use_directions({-118.30: error})

    response = api_client.post("/api/routes/compute", json={"start": CURRENT, "end": {"lng": -118.30, "lat": 34.00}})

    assert response.status_code == expected_status


def test_compute_routes_rejects_invalid_coordinates(api_client: TestClient, use_directions):
    use_directions({})

    response = api_client.post("/api/routes/compute", json={"start": {"lng": 200, "lat": 0}, "end": CURRENT})

    assert response.status_code == 422


def test_instructions_endpoint(api_client: TestClient, use_directions):
    use_directions({-118.30: [900, 1000]})

    response = api_client.post(
        "/api/routes/instructions",
        json={"start": CURRENT, "end": {"lng": -118.30, "lat": 34.00}, "route_id": 1},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["route_id"] == 1
    assert [item["step"] for item in payload["instructions"]] == [1, 2]
    assert payload["instructions"][0]["instruction"] == "Head west"
    assert payload["instructions"][0]["distance"] == "0.3 mi"
    assert payload["instructions"][0]["duration"] == "1.0 min"

    missing = api_client.post(
        "/api/routes/instructions",
        json={"start": CURRENT, "end": {"lng": -118.30, "lat": 34.00}, "route_id": 5},
    )
    assert missing.status_code == 404


def test_rank_endpoint_partial_success(api_client: TestClient, use_directions):
    use_directions({-118.20: [300], -118.30: [120], -118.25: ProviderError(500, "boom")})

    response = api_client.post(
        "/api/evacuation/rank",
        json={
            "current_location": CURRENT,
            "evacuation_points": [
                {"name": "North Shelter", "lng": -118.20, "lat": 34.10, "type": "Shelter"},
                {"name": "County Hospital", "lng": -118.30, "lat": 34.00, "type": "Medical"},
                {"name": "Closed Stadium", "lng": -118.25, "lat": 34.20},
            ],
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "partial"
    assert payload["requested"] == 3
    assert payload["dropped"] == 1
    assert [item["destination"] for item in payload["destinations"]] == ["County Hospital", "North Shelter"]
    assert payload["destinations"][0]["type"] == "Medical"


def test_rank_endpoint_total_failure_is_not_an_error(api_client: TestClient, use_directions):
    use_directions({-118.20: ProviderUnavailable("offline")})

    response = api_client.post(
        "/api/evacuation/rank",
        json={"current_location": CURRENT, "evacuation_points": [{"name": "A", "lng": -118.20, "lat": 34.10}]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "none"
    assert payload["destinations"] == []


def test_rank_endpoint_uses_catalogue_when_no_points_given(api_client: TestClient, use_directions, monkeypatch):
    from src.evacroute.services.routing import service as routing_service

    catalogue = [
        EvacuationTarget(name="Catalogue Shelter", coordinate=Coordinate(longitude=-118.20, latitude=34.10)),
    ]
    monkeypatch.setattr(routing_service, "find_evacuation_points", lambda names=None: catalogue)
    use_directions({-118.20: [300]})

    response = api_client.post("/api/evacuation/rank", json={"current_location": CURRENT})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["destinations"][0]["destination"] == "Catalogue Shelter"
    assert payload["destinations"][0]["type"] == "Evacuation Point"


def test_nearest_endpoint(api_client: TestClient, use_directions):
    use_directions({-118.20: [300], -118.30: [120]})
    body = {
        "current_location": CURRENT,
        "evacuation_points": [
            {"name": "North Shelter", "lng": -118.20, "lat": 34.10},
            {"name": "County Hospital", "lng": -118.30, "lat": 34.00},
        ],
    }

    response = api_client.post("/api/evacuation/nearest", json=body)

    assert response.status_code == 200
    assert response.json()["destination"] == "County Hospital"


def test_nearest_endpoint_not_found(api_client: TestClient, use_directions):
    use_directions({-118.20: NoRouteFound("island")})

    response = api_client.post(
        "/api/evacuation/nearest",
        json={"current_location": CURRENT, "evacuation_points": [{"name": "A", "lng": -118.20, "lat": 34.10}]},
    )

    assert response.status_code == 404


def test_rank_csv_and_geojson_exports(api_client: TestClient, use_directions):
    use_directions({-118.20: [300, 360]})
    body = {"current_location": CURRENT, "evacuation_points": [{"name": "A", "lng": -118.20, "lat": 34.10}]}

    csv_response = api_client.post("/api/evacuation/rank/csv", json=body)
    geojson_response = api_client.post("/api/evacuation/rank/geojson", json=body)

    assert csv_response.status_code == 200
    lines = csv_response.text.strip().splitlines()
    assert lines[0].startswith("rank,destination,type,route_id")
    assert len(lines) == 3
    assert geojson_response.status_code == 200
    features = geojson_response.json()["features"]
    assert [feature["properties"]["route_id"] for feature in features] == [0, 1]
    assert features[0]["properties"]["is_primary"] is True


def test_directions_health_endpoint(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.evacroute.services.routing import directions_client

    monkeypatch.setattr(directions_client, "check_health", lambda: True)

    response = api_client.get("/api/health/directions")

    assert response.status_code == 200
    assert response.json() == {"service": "directions", "healthy": True}


def test_rank_endpoint_with_explicit_empty_points_skips_catalogue(api_client: TestClient, use_directions, monkeypatch):
    from src.evacroute.services.routing import service as routing_service

    def fail_catalogue(names=None):
        raise AssertionError("catalogue should not be consulted")

    monkeypatch.setattr(routing_service, "find_evacuation_points", fail_catalogue)
    use_directions({})

    response = api_client.post("/api/evacuation/rank", json={"current_location": CURRENT, "evacuation_points": []})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "none"
    assert payload["requested"] == 0
    assert payload["dropped"] == 0
    assert payload["destinations"] == []


@pytest.mark.parametrize("path", ["/api/evacuation/rank/geojson", "/api/evacuation/rank/csv"])
def test_rank_exports_report_unexpected_errors(api_client: TestClient, monkeypatch, path):
    from src.evacroute.api.routes import evacuation as evacuation_routes

    def explode(payload):
        raise RuntimeError("formatter crashed")

    monkeypatch.setattr(evacuation_routes, "ranked_evacuation_points", explode)

    response = api_client.post(path, json={"current_location": CURRENT, "evacuation_points": []})

    assert response.status_code == 500
    assert "formatter crashed" in response.json()["detail"]
