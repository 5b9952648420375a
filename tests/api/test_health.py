"""Tests for health check endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from api.app import app


client = TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self):
        """Health response should have correct structure."""
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    @patch("api.routes.health.get_settings")
    def test_ready_when_configured(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "key"
        mock_settings.return_value.jwt_secret = "secret"

        response = client.get("/api/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "database": "configured",
            "signer": "configured",
        }

    @patch("api.routes.health.get_settings")
    def test_not_ready_without_signing_key(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "key"
        mock_settings.return_value.jwt_secret = ""

        response = client.get("/api/ready")

        assert response.status_code == 503
        assert response.json()["signer"] == "missing"

    @patch("api.routes.health.get_settings")
    def test_not_ready_without_database(self, mock_settings):
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_service_role_key = ""
        mock_settings.return_value.jwt_secret = "secret"

        response = client.get("/api/ready")

        assert response.status_code == 503
        assert response.json()["database"] == "missing"
