"""Tests for the app factory, catalog, stats, health and error handling."""

import pytest

from zaiboost_api.app.core.config import Settings
from zaiboost_api.app.main import create_app
from zaiboost_api.app.services.catalog_service import CatalogService


class TestSettings:

    def test_missing_secrets_fail_startup(self, ledger):
        config = Settings(jwt_secret="", encryption_key="")

        with pytest.raises(RuntimeError) as exc_info:
            create_app(ledger=ledger, config=config)

        assert "JWT_SECRET" in str(exc_info.value)
        assert "ENCRYPTION_KEY" in str(exc_info.value)

    def test_single_missing_secret_named(self):
        with pytest.raises(RuntimeError, match="ENCRYPTION_KEY"):
            Settings(jwt_secret="x", encryption_key="").validate()

    def test_configured_secrets_pass(self):
        Settings(jwt_secret="x", encryption_key="y").validate()


class TestCatalog:

    def test_public_listing(self, client):
        response = client.get("/api/v1/services")

        assert response.status_code == 200
        services = response.json()
        assert len(services) == 18
        assert services[0]["unit_name"] == "hari"

    def test_filters(self, client):
        response = client.get("/api/v1/services", params={"game": "wuwa", "category": "endgame"})

        names = [s["name"] for s in response.json()]
        assert names == ["WuWa: Tower of Adversity (30/30 Stars)", "WuWa: Hologram Calamity (Difficulty 6)"]


class TestStats:

    def test_requires_admin(self, client, customer_headers):
        assert client.get("/api/v1/admin/stats", headers=customer_headers).status_code == 403

    def test_empty_ledger(self, client, customer, admin_headers):
        response = client.get("/api/v1/admin/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"revenue": 0, "active_orders": 0, "total_users": 1, "completed_orders": 0}


class TestHealth:

    def test_reports_uptime(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["uptime"] >= 0


class TestErrorHandling:

    def test_unhandled_error_is_500_json(self, client, monkeypatch):
        async def broken(cls, game=None, category=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(CatalogService, "list_services", classmethod(broken))

        response = client.get("/api/v1/services")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
