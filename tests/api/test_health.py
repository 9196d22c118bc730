"""Health, readiness and error envelope tests."""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError

from org_hierarchy.config import settings
from org_hierarchy.main import app
from org_hierarchy.middleware import RequestContextLogFilter


class TestProbes:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == settings.SERVICE_NAME
        assert body["uptime"] >= 0

    @pytest.mark.asyncio
    async def test_ready(self, client: AsyncClient):
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    @pytest.mark.asyncio
    async def test_not_ready_when_database_fails(self, client: AsyncClient):
        with patch(
            "org_hierarchy.main.ping_db",
            AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down"))),
        ):
            response = await client.get("/ready")
        assert response.status_code == 503
        assert response.json() == {"status": "not ready", "error": "Database unavailable"}


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Route not found"}

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_500(self, client: AsyncClient):
        with patch(
            "org_hierarchy.services.organization_service.OrganizationService.list_organizations",
            AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("password=hunter2"))),
        ):
            response = await client.get("/api/organizations")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Database operation failed"}

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_generic_500(self, client: AsyncClient):
        with patch(
            "org_hierarchy.services.organization_service.OrganizationService.get_organization",
            AsyncMock(side_effect=RuntimeError("boom")),
        ):
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                response = await ac.get(
                    "/api/organizations/anything", headers={"X-Correlation-ID": "trace-500"}
                )
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}
        assert response.headers["X-Correlation-ID"] == "trace-500"
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_correlation_headers(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Correlation-ID": "abc123"})
        assert response.headers["X-Correlation-ID"] == "abc123"
        assert response.headers["X-Request-ID"]
        assert "Server-Timing" in response.headers


class TestPrincipal:

    @pytest.mark.asyncio
    async def test_anonymous_allowed_by_default(self, client: AsyncClient):
        response = await client.get("/api/organizations")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_principal_required(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "REQUIRE_PRINCIPAL", True)
        response = await client.post("/api/organizations", json={"name": "x"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Authentication required"}

    @pytest.mark.asyncio
    async def test_principal_header_accepted(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "REQUIRE_PRINCIPAL", True)
        response = await client.post(
            "/api/organizations",
            json={"name": "Gateway Org", "contact": {"email": "ops@gateway.test"}},
            headers={"X-User-Id": "user-1", "X-User-Roles": "admin, ops"},
        )
        assert response.status_code == 201


class TestRequestContext:

    @pytest.mark.asyncio
    async def test_ids_generated_when_absent(self, client: AsyncClient):
        response = await client.get("/api/organizations")
        assert len(response.headers["X-Request-ID"]) == 12
        assert response.headers["X-Correlation-ID"] != response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_log_records_carry_request_and_actor(self, client: AsyncClient, caplog):
        caplog.handler.addFilter(RequestContextLogFilter())
        with caplog.at_level(logging.INFO, logger="org_hierarchy"):
            await client.post(
                "/api/organizations",
                json={"name": "Traced", "contact": {"email": "ops@traced.test"}},
                headers={"X-Request-ID": "req-42", "X-User-Id": "user-7"},
            )
        created = [r for r in caplog.records if r.getMessage().startswith("Created organization")]
        assert created
        assert created[0].request_id == "req-42"
        assert created[0].actor == "user-7"

    def test_filter_outside_a_request(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        RequestContextLogFilter().filter(record)
        assert record.request_id == "-"
        assert record.actor == "-"
