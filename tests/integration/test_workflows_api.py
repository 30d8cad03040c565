"""
Integration tests for the workflow and lookup endpoints.
"""
import json

from core.domain.exceptions import CollaboratorError
from tests.mocks.fake_collaborators import make_settings


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_reports_keys(client, settings):
    response = client.get("/health/ready")

    body = response.json()
    assert body["status"] == "ready"
    assert body["checks"]["execution_store"] == "ok"
    assert body["checks"]["openai_api_key"] == "configured"


def test_location_workflow_completes(client):
    response = client.post("/api/v1/workflows/location", json={"ip": "8.8.8.8"})

    assert response.status_code == 200
    body = response.json()
    assert body["workflow"] == "location"
    assert body["status"] == "completed"
    assert [s["name"] for s in body["steps"]] == ["Validate IP Address", "Get Location from IP"]
    assert json.loads(body["result"])["city"] == "Paris"
    assert body["id"].startswith("exec_")


def test_location_workflow_invalid_ip_is_a_failed_execution(client):
    response = client.post("/api/v1/workflows/location", json={"ip": "999.1.1.1"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "failed"
    assert body["error"] == "Invalid IP address: 999.1.1.1"
    assert len(body["steps"]) == 1


def test_location_workflow_requires_ip(client):
    response = client.post("/api/v1/workflows/location", json={})

    assert response.status_code == 422


def test_weather_workflow(client, weather):
    response = client.post("/api/v1/workflows/weather", json={"ip": "8.8.8.8"})

    body = response.json()
    assert body["status"] == "completed"
    assert json.loads(body["result"])["temperature"] == 18.5
    assert weather.calls[0]["method"] == "get_weather"


def test_travel_planning_workflow(client):
    response = client.post(
        "/api/v1/workflows/travel-planning",
        json={"destination": "Rome", "start_date": "2024-06-01", "end_date": "2024-06-03"},
    )

    body = response.json()
    assert body["status"] == "completed"
    plan = json.loads(body["result"])
    assert plan["destination"] == "Rome"
    assert plan["current_weather"]["location"] == "Rome"


def test_travel_planning_rejects_reversed_dates(client):
    response = client.post(
        "/api/v1/workflows/travel-planning",
        json={"destination": "Rome", "start_date": "2024-06-05", "end_date": "2024-06-01"},
    )

    assert response.status_code == 422


def test_ai_travel_planning_workflow(client):
    response = client.post(
        "/api/v1/workflows/ai-travel-planning",
        json={
            "destination": "Paris, France",
            "start_date": "2024-06-01",
            "end_date": "2024-06-05",
            "user_profile": {"interests": ["art"]},
        },
    )

    body = response.json()
    assert body["status"] == "completed"
    assert len(body["steps"]) == 5
    assert "Get Location from IP" not in [s["name"] for s in body["steps"]]
    plan = json.loads(body["result"])
    assert plan["partial_failures"] == []


def test_background_run_answers_202(client):
    response = client.post("/api/v1/workflows/location", json={"ip": "8.8.8.8", "background": True})

    assert response.status_code == 202
    body = response.json()
    assert body["status"] == "pending"
    assert body["steps"] == []


def test_location_lookup(client):
    response = client.get("/api/v1/locations/8.8.8.8")

    assert response.status_code == 200
    assert response.json()["city"] == "Paris"


def test_location_lookup_invalid_ip_is_400(client):
    response = client.get("/api/v1/locations/not-an-ip")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid IP address: not-an-ip"


def test_location_lookup_without_key_is_503(client):
    from api.dependencies import get_settings
    from api.main import app

    app.dependency_overrides[get_settings] = lambda: make_settings(ipgeolocation_key=None)

    response = client.get("/api/v1/locations/8.8.8.8")

    assert response.status_code == 503


def test_weather_lookup_by_city(client, weather):
    response = client.get("/api/v1/weather", params={"city": "Lisbon", "country": "PT"})

    assert response.status_code == 200
    assert response.json()["location"] == "Lisbon"
    assert weather.calls[-1] == {"method": "get_weather_by_city", "city": "Lisbon", "country": "PT"}


def test_weather_lookup_needs_coordinates_or_city(client):
    response = client.get("/api/v1/weather")

    assert response.status_code == 400


def test_weather_lookup_upstream_failure_is_502(client, weather):
    weather.error = CollaboratorError("Weather API error: 500")

    response = client.get("/api/v1/weather", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 502
    assert response.json()["detail"] == "Weather API error: 500"


def test_forecast_lookup(client, weather):
    response = client.get("/api/v1/weather/forecast", params={"lat": 48.85, "lon": 2.35})

    assert response.status_code == 200
    assert response.json()[0]["date"] == "2024-06-01"
    assert weather.calls[-1] == {"method": "get_forecast", "lat": 48.85, "lon": 2.35}


def test_forecast_lookup_needs_coordinates(client):
    response = client.get("/api/v1/weather/forecast", params={"lat": 48.85})

    assert response.status_code == 422


def test_forecast_lookup_upstream_failure_is_502(client, weather):
    weather.forecast_error = CollaboratorError("Failed to get weather forecast: timed out")

    response = client.get("/api/v1/weather/forecast", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 502


def test_list_workflows(client):
    response = client.get("/api/v1/workflows")

    assert response.status_code == 200
    assert response.json() == ["ai_travel_planning", "location", "travel_planning", "weather"]


def test_travel_planning_from_ip_fills_forecast(client):
    response = client.post(
        "/api/v1/workflows/travel-planning",
        json={"ip": "8.8.8.8", "start_date": "2024-06-01", "end_date": "2024-06-02"},
    )

    plan = json.loads(response.json()["result"])
    assert plan["weather_forecast"][0]["description"] == "few clouds"
