"""
HTTP-level tests: status codes, the response envelope, and the
organization/user lifecycle through the API.
"""
import pytest
from httpx import AsyncClient

from app.models.organization import Organization
from app.models.user import User


class TestOrganizationEndpoints:

    @pytest.mark.asyncio
    async def test_create_organization(self, client: AsyncClient):
        response = await client.post(
            "/organizations", json={"name": "Acme", "address": "1 Main St"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "Organization created successfully"
        assert isinstance(body["data"]["org_id"], int)
        assert body["data"]["created_at"]
        assert "users" not in body["data"]
        assert "errors" not in body

    @pytest.mark.asyncio
    async def test_create_organization_validation(self, client: AsyncClient):
        response = await client.post("/organizations", json={"name": " ", "address": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Validation failed"
        assert {"field": "name", "message": "Organization name is required"} in body["errors"]
        assert {"field": "address", "message": "Organization address is required"} in body["errors"]

    @pytest.mark.asyncio
    async def test_list_organizations(
        self, client: AsyncClient, test_organization: Organization, test_user: User
    ):
        response = await client.get("/organizations")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["name"] == "Acme"
        assert data[0]["users"] == [
            {"user_id": test_user.user_id, "name": "Jo", "email": "jo@acme.com", "role": "Member"}
        ]

    @pytest.mark.asyncio
    async def test_get_organization_not_found(self, client: AsyncClient):
        response = await client.get("/organizations/999")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Organization not found"}

    @pytest.mark.asyncio
    async def test_non_integer_id_is_validation_error(self, client: AsyncClient):
        response = await client.get("/organizations/abc")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "org_id"

    @pytest.mark.asyncio
    async def test_ids_beyond_key_range_are_not_found(self, client: AsyncClient):
        too_big = 2**64
        assert (await client.get(f"/organizations/{too_big}")).status_code == 404
        response = await client.put(
            f"/organizations/{too_big}", json={"name": "x", "address": "y"}
        )
        assert response.status_code == 404
        response = await client.delete(f"/organizations/{too_big}")
        assert response.status_code == 404
        assert response.json()["message"] == "Organization not found"

    @pytest.mark.asyncio
    async def test_update_organization(self, client: AsyncClient, test_organization: Organization):
        org_id = test_organization.org_id
        original = (await client.get(f"/organizations/{org_id}")).json()["data"]

        response = await client.put(
            f"/organizations/{org_id}", json={"name": "Acme Ltd", "address": "9 High St"}
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Organization updated successfully"

        fetched = (await client.get(f"/organizations/{org_id}")).json()["data"]
        assert fetched["name"] == "Acme Ltd"
        assert fetched["address"] == "9 High St"
        assert fetched["org_id"] == org_id
        assert fetched["created_at"] == original["created_at"]

    @pytest.mark.asyncio
    async def test_update_missing_organization(self, client: AsyncClient):
        response = await client.put("/organizations/77", json={"name": "x", "address": "y"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_organization(self, client: AsyncClient):
        response = await client.delete("/organizations/77")
        assert response.status_code == 404


class TestUserEndpoints:

    @pytest.mark.asyncio
    async def test_create_user(self, client: AsyncClient, test_organization: Organization):
        org_id = test_organization.org_id
        response = await client.post(
            "/users",
            json={"name": "Ann", "email": "ann@acme.com", "role": "Admin", "org_id": org_id},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["role"] == "Admin"
        assert body["data"]["organization"] == {"org_id": org_id, "name": "Acme"}

    @pytest.mark.asyncio
    async def test_create_user_unknown_organization_is_400(self, client: AsyncClient):
        response = await client.post(
            "/users", json={"name": "Ann", "email": "ann@acme.com", "org_id": 404}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Organization not found"
        assert (await client.get("/users")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email_is_400(
        self, client: AsyncClient, test_user: User
    ):
        org_id = test_user.org_id
        response = await client.post(
            "/users", json={"name": "Copy", "email": "jo@acme.com", "org_id": org_id}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Email already exists"
        assert len((await client.get("/users")).json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_create_user_validation(self, client: AsyncClient):
        response = await client.post(
            "/users", json={"name": "", "email": "nope", "role": "Owner", "org_id": "x"}
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"name", "email", "role", "org_id"}

    @pytest.mark.asyncio
    async def test_users_by_organization_route(
        self, client: AsyncClient, test_organization: Organization, test_user: User
    ):
        org_id = test_organization.org_id
        response = await client.get(f"/users/organization/{org_id}")
        assert response.status_code == 200
        assert [u["email"] for u in response.json()["data"]] == ["jo@acme.com"]

        empty = await client.get("/users/organization/999")
        assert empty.status_code == 200
        assert empty.json()["data"] == []

    @pytest.mark.asyncio
    async def test_update_user_keeps_own_email(self, client: AsyncClient, test_user: User):
        user_id, org_id = test_user.user_id, test_user.org_id
        response = await client.put(
            f"/users/{user_id}",
            json={"name": "Joanna", "email": "jo@acme.com", "role": "Admin", "org_id": org_id},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Joanna"
        assert data["role"] == "Admin"

    @pytest.mark.asyncio
    async def test_get_and_delete_missing_user(self, client: AsyncClient):
        assert (await client.get("/users/5")).status_code == 404
        assert (await client.delete("/users/5")).status_code == 404
        response = await client.put(
            "/users/5", json={"name": "x", "email": "x@acme.com", "org_id": 1}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_ids_beyond_key_range(self, client: AsyncClient):
        too_big = 2**64
        assert (await client.get(f"/users/{too_big}")).status_code == 404
        assert (await client.delete(f"/users/{too_big}")).status_code == 404

        listed = await client.get(f"/users/organization/{too_big}")
        assert listed.status_code == 200
        assert listed.json()["data"] == []

        response = await client.post(
            "/users", json={"name": "Ann", "email": "ann@acme.com", "org_id": too_big}
        )
        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "org_id", "message": "Valid organization ID is required"}
        ]


class TestLifecycleScenario:

    @pytest.mark.asyncio
    async def test_organization_with_user_cannot_be_deleted_until_empty(
        self, client: AsyncClient
    ):
        created = await client.post(
            "/organizations", json={"name": "Acme", "address": "1 Main St"}
        )
        assert created.status_code == 201
        org = created.json()["data"]
        assert isinstance(org["org_id"], int)
        assert org["created_at"]

        user = await client.post(
            "/users",
            json={"name": "Jo", "email": "jo@acme.com", "role": "Member", "org_id": org["org_id"]},
        )
        assert user.status_code == 201
        user_id = user.json()["data"]["user_id"]

        refused = await client.delete(f"/organizations/{org['org_id']}")
        assert refused.status_code == 400
        assert refused.json()["status"] == "error"
        assert (await client.get(f"/organizations/{org['org_id']}")).status_code == 200

        deleted_user = await client.delete(f"/users/{user_id}")
        assert deleted_user.status_code == 200
        assert deleted_user.json() == {"status": "success", "message": "User deleted successfully"}

        deleted_org = await client.delete(f"/organizations/{org['org_id']}")
        assert deleted_org.status_code == 200
        assert deleted_org.json()["message"] == "Organization deleted successfully"
        assert (await client.get(f"/organizations/{org['org_id']}")).status_code == 404


class TestMisc:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, client: AsyncClient):
        response = await client.get("/nowhere")
        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Not Found"}

    @pytest.mark.asyncio
    async def test_malformed_json_body_is_validation_error(self, client: AsyncClient):
        response = await client.post(
            "/organizations",
            content='{"name": "Acme", ',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"
        assert [e["field"] for e in response.json()["errors"]] == ["body"]
