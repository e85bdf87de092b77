"""
Integration tests for health, readiness and metrics endpoints.
"""
import pytest
from django.urls import reverse


@pytest.mark.integration
class TestHealthEndpoints:
    """Tests for health endpoints."""

    def test_health(self, client):
        response = client.get(reverse("health"))

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "django-blueprint"}

    @pytest.mark.django_db
    def test_health_db(self, client):
        response = client.get(reverse("health-db"))

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_health_cache(self, client):
        response = client.get(reverse("health-cache"))

        assert response.status_code == 200
        assert response.json()["cache"] == "connected"

    @pytest.mark.django_db
    def test_ready(self, client):
        response = client.get(reverse("ready"))

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"database": True, "cache": True}}

    def test_ready_when_cache_down(self, client, monkeypatch):
        monkeypatch.setattr("core.views.check_database", lambda: True)
        monkeypatch.setattr("core.views.check_cache", lambda: False)

        response = client.get(reverse("ready"))

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    def test_metrics(self, client):
        client.get(reverse("health"))

        response = client.get(reverse("metrics"))

        assert response.status_code == 200
        body = response.content.decode()
        assert "http_requests_total" in body
        assert 'endpoint="/health/"' in body
