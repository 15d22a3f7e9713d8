import math

import httpx
import pytest
from fastapi.testclient import TestClient

from exprcalc.config import Settings
from exprcalc.registry import AngleMode
from exprcalc.server import (
    EvaluateRequest,
    EvaluateResponse,
    app,
    get_settings,
    run_evaluation,
)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRunEvaluation:
    def test_ok(self, settings):
        response = run_evaluation("2+3*4", None, settings)
        assert response == EvaluateResponse(status="ok", value=14.0, display="14")

    def test_default_mode_comes_from_settings(self):
        response = run_evaluation("sin(90)", None, Settings(angle_mode=AngleMode.DEGREES))
        assert math.isclose(response.value, 1.0)

    def test_request_mode_overrides_settings(self):
        response = run_evaluation("sin(pi/2)", AngleMode.RADIANS, Settings(angle_mode=AngleMode.DEGREES))
        assert math.isclose(response.value, 1.0)

    def test_non_finite_value_has_display_only(self, settings):
        response = run_evaluation("1/0", None, settings)
        assert response.status == "ok"
        assert response.value is None
        assert response.display == "inf"

    def test_empty(self, settings):
        assert run_evaluation("  ", None, settings) == EvaluateResponse(status="empty")

    def test_error(self, settings):
        response = run_evaluation("foo(1)", None, settings)
        assert response.status == "error"
        assert response.message == "At position 1: Unknown identifier 'foo'"
        assert response.position == 0

    def test_error_at_end_of_input(self, settings):
        response = run_evaluation("(2+3", None, settings)
        assert response.status == "error"
        assert response.position is None
        assert "end of input" in response.message

    def test_length_bound_from_settings(self):
        response = run_evaluation("1+1+1", None, Settings(max_input_length=3))
        assert response.status == "error"
        assert response.position == 3


class TestEndpoints:
    def test_post_evaluate(self, client):
        response = client.post("/evaluate", json={"expression": "2^3^2"})
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "value": 64.0,
            "display": "64",
            "message": None,
            "position": None,
        }

    def test_post_evaluate_degrees(self, client):
        response = client.post("/evaluate", json={"expression": "sin(90)", "angle_mode": "degrees"})
        assert response.status_code == 200
        assert math.isclose(response.json()["value"], 1.0)

    def test_post_evaluate_invalid_angle_mode(self, client):
        response = client.post("/evaluate", json={"expression": "1", "angle_mode": "gradians"})
        assert response.status_code == 422

    def test_post_evaluate_missing_expression(self, client):
        response = client.post("/evaluate", json={})
        assert response.status_code == 422

    def test_post_evaluate_parse_error(self, client):
        response = client.post("/evaluate", json={"expression": "2 +"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "error"
        assert data["position"] is None
        assert data["message"] == "At end of input: Expected '(', number, constant or function"

    def test_post_evaluate_nan(self, client):
        response = client.post("/evaluate", json={"expression": "sqrt(-1)"})
        data = response.json()
        assert data["status"] == "ok"
        assert data["value"] is None
        assert data["display"] == "nan"

    def test_get_evaluate(self, client):
        response = client.get("/evaluate", params={"expression": "1+2", "angle_mode": "radians"})
        assert response.status_code == 200
        assert response.json()["value"] == 3.0

    def test_get_evaluate_empty(self, client):
        response = client.get("/evaluate", params={"expression": ""})
        assert response.status_code == 200
        assert response.json()["status"] == "empty"

    def test_get_evaluate_requires_expression(self, client):
        response = client.get("/evaluate")
        assert response.status_code == 422

    def test_functions(self, client):
        response = client.get("/functions")
        assert response.status_code == 200
        data = response.json()
        assert data["constants"] == ["pi"]
        assert "sqrt" in data["functions"]
        assert "arctan" in data["functions"]

    def test_request_model(self):
        request = EvaluateRequest(expression="1")
        assert request.angle_mode is None


@pytest.mark.asyncio
async def test_concurrent_requests_keep_their_own_mode(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            degrees = await ac.post("/evaluate", json={"expression": "sin(90)", "angle_mode": "degrees"})
            radians = await ac.post("/evaluate", json={"expression": "sin(90)", "angle_mode": "radians"})
    finally:
        app.dependency_overrides.clear()
    assert math.isclose(degrees.json()["value"], 1.0)
    assert math.isclose(radians.json()["value"], math.sin(90))
