"""Tests for the organizations API endpoints (/api/organizations)."""

from datetime import datetime

import pytest
from httpx import AsyncClient

from org_hierarchy.config import settings
from tests.factories import BrandFactory, BusinessFactory, OrganizationFactory

ORGANIZATIONS_PREFIX = "/api/organizations"


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCreateOrganization:

    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, client: AsyncClient):
        response = await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory(name="  Acme Group  "))
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["name"] == "Acme Group"
        assert data["isActive"] is True
        assert data["subscription"] == {
            "plan": "basic",
            "status": "trial",
            "trialEndsAt": None,
            "billingCycle": "monthly",
        }
        assert data["limits"] == {"brands": 1, "businesses": 5, "users": 10, "storage": 1024}
        assert data["settings"]["timezone"] == "UTC"
        assert data["id"]
        assert data["createdAt"] == data["updatedAt"]

    @pytest.mark.asyncio
    async def test_create_requires_name(self, client: AsyncClient):
        payload = OrganizationFactory()
        payload.pop("name")
        response = await client.post(ORGANIZATIONS_PREFIX, json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "name is required"}

    @pytest.mark.asyncio
    async def test_create_requires_contact_email(self, client: AsyncClient):
        response = await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory(contact={"phone": "555"}))
        assert response.status_code == 400
        assert "contact.email is required" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_plan(self, client: AsyncClient):
        payload = OrganizationFactory(subscription={"plan": "platinum"})
        response = await client.post(ORGANIZATIONS_PREFIX, json=payload)
        assert response.status_code == 400
        assert "subscription.plan" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_duplicate_domain_conflicts(self, client: AsyncClient, organization: dict):
        response = await client.post(
            ORGANIZATIONS_PREFIX, json=OrganizationFactory(domain=organization["domain"].upper())
        )
        assert response.status_code == 409
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_non_object_body_is_bad_request(self, client: AsyncClient):
        response = await client.post(ORGANIZATIONS_PREFIX, json=["not", "an", "object"])
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestGetOrganization:

    @pytest.mark.asyncio
    async def test_get_includes_active_counts(self, client: AsyncClient, organization: dict, business: dict):
        response = await client.get(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["brandCount"] == 1
        assert data["businessCount"] == 1

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, client: AsyncClient):
        response = await client.get(f"{ORGANIZATIONS_PREFIX}/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Organization not found"}

    @pytest.mark.asyncio
    async def test_soft_deleted_is_still_readable(self, client: AsyncClient, organization: dict):
        await client.put(f"{ORGANIZATIONS_PREFIX}/{organization['id']}", json={"isActive": False})
        response = await client.get(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["isActive"] is False


class TestListOrganizations:

    @pytest.mark.asyncio
    async def test_list_returns_count(self, client: AsyncClient):
        for _ in range(3):
            await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory())
        response = await client.get(ORGANIZATIONS_PREFIX)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 3
        assert len(body["data"]) == 3
        assert all(item["brandCount"] == 0 for item in body["data"])

    @pytest.mark.asyncio
    async def test_list_paginates(self, client: AsyncClient):
        for _ in range(5):
            await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory())
        first = (await client.get(ORGANIZATIONS_PREFIX, params={"limit": 2})).json()
        rest = (await client.get(ORGANIZATIONS_PREFIX, params={"limit": 10, "offset": 2})).json()
        assert first["count"] == 2
        assert rest["count"] == 3
        ids = {item["id"] for item in first["data"]} | {item["id"] for item in rest["data"]}
        assert len(ids) == 5

    @pytest.mark.asyncio
    async def test_list_filters_by_active_flag(self, client: AsyncClient, organization: dict):
        other = (await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory())).json()["data"]
        await client.put(f"{ORGANIZATIONS_PREFIX}/{other['id']}", json={"isActive": False})

        active = (await client.get(ORGANIZATIONS_PREFIX, params={"isActive": "true"})).json()
        inactive = (await client.get(ORGANIZATIONS_PREFIX, params={"isActive": "false"})).json()
        assert [item["id"] for item in active["data"]] == [organization["id"]]
        assert [item["id"] for item in inactive["data"]] == [other["id"]]

    @pytest.mark.asyncio
    async def test_malformed_limit_is_bad_request(self, client: AsyncClient):
        response = await client.get(ORGANIZATIONS_PREFIX, params={"limit": "ten"})
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestUpdateOrganization:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_absent_fields(self, client: AsyncClient, organization: dict):
        response = await client.put(
            f"{ORGANIZATIONS_PREFIX}/{organization['id']}",
            json={"settings": {"currency": "EUR"}, "limits": {"brands": None}},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == organization["name"]
        assert data["contact"] == organization["contact"]
        assert data["settings"]["currency"] == "EUR"
        assert data["settings"]["timezone"] == "UTC"
        assert data["limits"]["brands"] is None
        assert data["limits"]["businesses"] == 5

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at_only(self, client: AsyncClient, organization: dict):
        response = await client.put(
            f"{ORGANIZATIONS_PREFIX}/{organization['id']}", json={"description": "Renamed"}
        )
        data = response.json()["data"]
        assert data["createdAt"] == organization["createdAt"]
        assert _parse(data["updatedAt"]) > _parse(organization["updatedAt"])

    @pytest.mark.asyncio
    async def test_update_revalidates_required_fields(self, client: AsyncClient, organization: dict):
        response = await client.put(f"{ORGANIZATIONS_PREFIX}/{organization['id']}", json={"name": "   "})
        assert response.status_code == 400
        assert response.json()["error"] == "name is required"

    @pytest.mark.asyncio
    async def test_update_missing_returns_404(self, client: AsyncClient):
        response = await client.put(f"{ORGANIZATIONS_PREFIX}/missing", json={"name": "x"})
        assert response.status_code == 404


class TestDeleteOrganization:

    @pytest.mark.asyncio
    async def test_delete_empty_organization(self, client: AsyncClient, organization: dict):
        response = await client.delete(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 200
        assert response.json()["data"] == {"id": organization["id"], "deleted": True}
        assert (await client.get(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_blocked_by_active_children(self, client: AsyncClient, organization: dict, brand: dict):
        response = await client.delete(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 409
        assert "1 active brands" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_delete_removes_soft_deleted_children(self, client: AsyncClient, organization: dict, brand: dict):
        await client.put(f"/api/brands/{brand['id']}", json={"isActive": False})
        response = await client.delete(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 200
        assert (await client.get(f"/api/brands/{brand['id']}")).status_code == 404


class TestOrganizationUsage:

    @pytest.mark.asyncio
    async def test_usage_reports_counts_against_limits(self, client: AsyncClient, organization: dict, brand: dict):
        response = await client.get(f"{ORGANIZATIONS_PREFIX}/{organization['id']}/usage")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["entityId"] == organization["id"]
        assert data["usage"] == {"brands": 1, "businesses": 0}
        assert data["withinLimits"] == {"brands": False, "businesses": True}

    @pytest.mark.asyncio
    async def test_brand_quota_enforced_when_enabled(
        self, client: AsyncClient, organization: dict, brand: dict, monkeypatch
    ):
        monkeypatch.setattr(settings, "ENFORCE_LIMITS", True)
        response = await client.post("/api/brands", json=BrandFactory(organization_id=organization["id"]))
        assert response.status_code == 409
        assert "brands" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_quota_not_enforced_by_default(self, client: AsyncClient, organization: dict, brand: dict):
        response = await client.post("/api/brands", json=BrandFactory(organization_id=organization["id"]))
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_unlimited_quota(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "ENFORCE_LIMITS", True)
        org = (await client.post(ORGANIZATIONS_PREFIX, json=OrganizationFactory(limits={"businesses": None}))).json()["data"]
        for _ in range(7):
            response = await client.post("/api/businesses", json=BusinessFactory(organization_id=org["id"]))
            assert response.status_code == 201


class TestDeleteOrganizationCascade:

    @pytest.mark.asyncio
    async def test_active_franchise_under_inactive_business_blocks_delete(
        self, client: AsyncClient, organization: dict, brand: dict, business: dict, franchise: dict
    ):
        await client.put(f"/api/businesses/{business['id']}", json={"isActive": False})
        await client.put(f"/api/brands/{brand['id']}", json={"isActive": False})

        response = await client.delete(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Organization has 1 active franchises"}
        assert (await client.get(f"/api/franchises/{franchise['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_inactive_franchises_go_with_the_organization(
        self, client: AsyncClient, organization: dict, brand: dict, business: dict, franchise: dict
    ):
        await client.put(f"/api/franchises/{franchise['id']}", json={"isActive": False})
        await client.put(f"/api/businesses/{business['id']}", json={"isActive": False})
        await client.put(f"/api/brands/{brand['id']}", json={"isActive": False})

        response = await client.delete(f"{ORGANIZATIONS_PREFIX}/{organization['id']}")
        assert response.status_code == 200
        assert (await client.get(f"/api/franchises/{franchise['id']}")).status_code == 404
