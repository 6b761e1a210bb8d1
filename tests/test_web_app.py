"""
Tests for the HTTP API.

Each test gets its own store, seeded with the reference properties.
"""

import logging

import pytest
from fastapi.testclient import TestClient

import web.app
from pd_checker.facts import PropertyFactStore, create_sample_properties


@pytest.fixture
def store(monkeypatch):
    store = PropertyFactStore()
    create_sample_properties(store)
    monkeypatch.setattr(web.app, "_store", store)
    return store


@pytest.fixture
def client(store):
    return TestClient(web.app.app)


class TestMetaEndpoints:
    """Test health and rule listing."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "properties": 6}

    def test_rules(self, client):
        """Test rules are listed in evaluation order."""
        response = client.get("/api/rules")
        data = response.json()

        assert response.status_code == 200
        assert data["count"] == 9
        assert data["rules"][0]["name"] == "Article 4 Direction"
        assert data["rules"][0]["severity"] == "blocking"
        priorities = [r["priority"] for r in data["rules"]]
        assert priorities == sorted(priorities, reverse=True)

    def test_store_seeded_from_path(self, monkeypatch, tmp_path):
        """Test the store is created from the configured path."""
        path = tmp_path / "properties.json"
        monkeypatch.setenv("PROPERTY_FACTS_PATH", str(path))
        monkeypatch.setattr(web.app, "_store", None)

        response = TestClient(web.app.app).get("/api/health")

        assert response.json()["properties"] == 6
        assert path.exists()


class TestPropertyEndpoints:
    """Test stored property management."""

    def test_list(self, client):
        response = client.get("/api/properties")

        assert response.status_code == 200
        assert response.json()["count"] == 6

    def test_list_filtered(self, client):
        response = client.get("/api/properties", params={"property_type": "flat"})
        data = response.json()

        assert data["count"] == 1
        assert data["properties"][0]["postcode"] == "BN1 3CD"

    def test_list_invalid_type(self, client):
        response = client.get("/api/properties", params={"property_type": "castle"})
        assert response.status_code == 400

    def test_create(self, client, store):
        payload = {
            "address": "9 Harbour Row, St Ives",
            "postcode": "TR26 1LU",
            "local_authority": "Cornwall Council",
            "constraints": {"conservation_area": True, "aonb": True},
        }
        response = client.post("/api/properties", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["property_type"] == "house"
        assert data["constraints"]["aonb"] is True
        assert store.count() == 7

    def test_create_duplicate(self, client):
        response = client.post("/api/properties", json={"address": "45 Georgian Square, Bath"})
        assert response.status_code == 400

    def test_get(self, client):
        response = client.get("/api/properties/15 Mill Street, Stratford-upon-Avon")

        assert response.status_code == 200
        assert response.json()["constraints"]["listed_building"] is True

    def test_get_missing(self, client):
        response = client.get("/api/properties/1 Nowhere Close")
        assert response.status_code == 404

    def test_update(self, client, store):
        payload = {
            "address": "ignored",
            "postcode": "SW1A 1AA",
            "local_authority": "Westminster City Council",
            "constraints": {"article_4_direction": True},
        }
        response = client.put("/api/properties/123 High Street, Westminster, London", json=payload)

        assert response.status_code == 200
        assert response.json()["address"] == "123 High Street, Westminster, London"
        assert store.get("123 High Street, Westminster, London").constraints.article_4_direction is True

    def test_update_missing(self, client):
        response = client.put("/api/properties/1 Nowhere Close", json={"address": "1 Nowhere Close"})
        assert response.status_code == 400

    def test_delete(self, client, store):
        response = client.delete("/api/properties/45 Georgian Square, Bath")

        assert response.status_code == 200
        assert store.count() == 5
        assert client.delete("/api/properties/45 Georgian Square, Bath").status_code == 404

    def test_create_invalid_type(self, client):
        payload = {"address": "1 Lighthouse Lane", "property_type": "castle"}
        response = client.post("/api/properties", json=payload)
        assert response.status_code == 400


class TestCheckEndpoint:
    """Test the planning rights check."""

    def test_known_property(self, client):
        response = client.post(
            "/api/check-planning-rights",
            json={"address": "Flat 2B, Victoria Mansions, Brighton"},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["has_permitted_development_rights"] is False
        assert data["local_authority"] == "Brighton & Hove City Council"
        assert data["is_fallback"] is False
        assert data["checks"][0]["type"] == "Article 4 Direction"
        assert "Property Type - Flat/Maisonette" in data["summary"]

    def test_coordinates_echoed(self, client):
        response = client.post(
            "/api/check-planning-rights",
            json={"address": "123 High Street, Westminster", "latitude": 51.5, "longitude": -0.14},
        )
        data = response.json()

        assert data["has_permitted_development_rights"] is True
        assert data["coordinates"] == {"latitude": 51.5, "longitude": -0.14}

    def test_unknown_property_falls_back(self, client):
        response = client.post(
            "/api/check-planning-rights",
            json={"address": "10 Downing Street, London"},
        )
        data = response.json()

        assert response.status_code == 200
        assert data["is_fallback"] is True
        assert data["confidence"] == 75.0
        assert all(c["low_confidence"] for c in data["checks"])

    def test_blank_address(self, client):
        response = client.post("/api/check-planning-rights", json={"address": "   "})
        assert response.status_code == 400

    def test_missing_address(self, client):
        response = client.post("/api/check-planning-rights", json={})
        assert response.status_code == 422


class TestLogLevel:
    """Test log level configuration."""

    @pytest.mark.parametrize("value,expected", [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("loud", logging.INFO),
        ("", logging.INFO),
    ])
    def test_log_level_from_env(self, monkeypatch, value, expected):
        monkeypatch.setenv("PD_CHECKER_LOG_LEVEL", value)
        assert web.app.get_log_level() == expected

    def test_log_level_default(self, monkeypatch):
        monkeypatch.delenv("PD_CHECKER_LOG_LEVEL", raising=False)
        assert web.app.get_log_level() == logging.INFO
