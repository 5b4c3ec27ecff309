"""Integration tests for the formgate HTTP API."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


FORMS_DIR = Path(__file__).resolve().parents[1] / "forms"


@pytest.fixture
def client(monkeypatch):
    """Create a test client serving the bundled forms."""
    monkeypatch.setenv("FORMGATE_FORMS_PATH", str(FORMS_DIR))

    # Import app after setting env vars
    from formgate.api.app import app

    with TestClient(app) as client:
        yield client


class TestListForms:
    def test_lists_bundled_forms(self, client):
        response = client.get("/api/forms")
        assert response.status_code == 200
        forms = {f["name"]: f for f in response.json()["forms"]}
        assert set(forms) == {"contact", "signup"}
        assert forms["signup"] == {"name": "signup", "displayName": "Sign up", "inputCount": 10}


class TestGetForm:
    def test_includes_parsed_rules(self, client):
        response = client.get("/api/forms/signup")
        assert response.status_code == 200
        data = response.json()
        assert data["displayName"] == "Sign up"
        fields = {f["name"]: f for f in data["fields"]}
        assert fields["username"]["rules"] == [
            {"rule": "req"},
            {"rule": "len", "min": 5, "max": 16},
            {"rule": "regex", "preset": "username"},
        ]
        assert fields["plan"]["kind"] == "radio"

    def test_unknown_form(self, client):
        response = client.get("/api/forms/survey")
        assert response.status_code == 404


class TestValidateForm:
    def test_valid_submission(self, client):
        response = client.post(
            "/api/forms/contact/validate",
            json={
                "values": {
                    "name": "Alice",
                    "email": "alice@example.com",
                    "message": "Please call me back",
                }
            },
        )
        assert response.status_code == 200
        assert response.json()["valid"] is True

    def test_invalid_submission(self, client):
        response = client.post(
            "/api/forms/signup/validate",
            json={"values": {"username": "al", "topics": ["news"]}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is False
        fields = {f["name"]: f for f in body["fields"]}
        assert fields["username"] == {
            "name": "username",
            "valid": False,
            "message": "Must be longer than 4 characters",
        }
        assert fields["topics"]["valid"] is True
        assert fields["country"]["message"] == "Required"

    def test_empty_body_runs_initial_pass(self, client):
        response = client.post("/api/forms/signup/validate", json={})
        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_each_request_uses_a_fresh_form(self, client):
        client.post("/api/forms/signup/validate", json={"values": {"username": "alice_01"}})
        response = client.post("/api/forms/signup/validate", json={"values": {}})
        fields = {f["name"]: f for f in response.json()["fields"]}
        assert fields["username"]["message"] == "Required"

    def test_value_of_wrong_shape(self, client):
        response = client.post(
            "/api/forms/signup/validate", json={"values": {"plan": "gold"}}
        )
        assert response.status_code == 422
        assert "gold" in response.json()["detail"]

    def test_unknown_form(self, client):
        response = client.post("/api/forms/survey/validate", json={"values": {}})
        assert response.status_code == 404
