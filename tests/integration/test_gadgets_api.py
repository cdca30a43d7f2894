"""Integration tests for /gadgets endpoints."""

import re
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from gadgetops.config import Settings
from gadgetops.database import Database
from gadgetops.kernel.identity.jwt import TokenService
from gadgetops.kernel.repositories.gadgets import GadgetRepository
from gadgetops.main import create_app

CODE_PATTERN = re.compile(r"^[A-Z0-9]{6}$")


async def _create(client: AsyncClient, headers: dict) -> dict:
    response = await client.post("/gadgets", headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["gadget"]


async def _list(client: AsyncClient, headers: dict, **params) -> list[dict]:
    response = await client.get("/gadgets", headers=headers, params=params)
    assert response.status_code == 200, response.text
    return response.json()


class TestAuthentication:

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/gadgets")

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get("/gadgets", headers={"token": "forged.token.value"})

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_bearer_scheme_is_not_accepted(self, client: AsyncClient, admin_headers: dict):
        response = await client.get(
            "/gadgets",
            headers={"Authorization": f"Bearer {admin_headers['token']}"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"

    @pytest.mark.asyncio
    async def test_auth_runs_before_body_handling(self, client: AsyncClient):
        response = await client.patch(f"/gadgets/{uuid.uuid4()}", json={"foo": "bar"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_deleted_or_unknown_user(self, client: AsyncClient, token_service: TokenService):
        headers = {"token": token_service.issue(uuid.uuid4())}

        # Listing only authenticates, so it works
        assert (await client.get("/gadgets", headers=headers)).status_code == 200
        # Mutations look the user up
        response = await client.post("/gadgets", headers=headers)
        assert response.status_code == 404
        assert response.json()["code"] == "user_not_found"


class TestCreate:

    @pytest.mark.asyncio
    async def test_basic_user_is_forbidden(self, client: AsyncClient, basic_headers: dict):
        response = await client.post("/gadgets", headers=basic_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"
        assert await _list(client, basic_headers) == []

    @pytest.mark.asyncio
    async def test_admin_creates_available_gadget(self, client: AsyncClient, admin_headers: dict):
        response = await client.post("/gadgets", headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Gadget added successfully"
        gadget = body["gadget"]
        assert gadget["status"] == "AVAILABLE"
        assert 0 <= gadget["successProbability"] <= 100
        assert len(gadget["name"].split(" ")) == 2
        assert uuid.UUID(gadget["id"])

    @pytest.mark.asyncio
    async def test_request_body_is_ignored(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/gadgets",
            headers=admin_headers,
            json={"name": "Chosen Name", "status": "DESTROYED", "successProbability": 100},
        )

        assert response.status_code == 201
        assert response.json()["gadget"]["status"] == "AVAILABLE"


class TestList:

    @pytest.mark.asyncio
    async def test_basic_user_can_list(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        gadgets = await _list(client, basic_headers)

        assert len(gadgets) == 4
        assert set(gadgets[0]) >= {"id", "name", "successProbability", "status"}

    @pytest.mark.asyncio
    async def test_exact_probability_window(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        gadgets = await _list(client, basic_headers, minSuccessProbability=50, maxSuccessProbability=50)

        assert len(gadgets) == 2
        assert all(g["successProbability"] == 50 for g in gadgets)

    @pytest.mark.asyncio
    async def test_status_and_name_filters(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        by_status = await _list(client, basic_headers, status="DECOMMISSIONED")
        by_name = await _list(client, basic_headers, name="falcon")

        assert [g["name"] for g in by_status] == ["Frozen Falcon"]
        assert sorted(g["name"] for g in by_name) == ["Frozen Falcon", "Silent Falcon"]

    @pytest.mark.asyncio
    async def test_malformed_bound(self, client: AsyncClient, basic_headers: dict):
        response = await client.get("/gadgets", headers=basic_headers, params={"minSuccessProbability": "high"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_filter"

    @pytest.mark.asyncio
    async def test_oversized_bounds(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        above = await _list(client, basic_headers, minSuccessProbability="9" * 30)
        below = await _list(client, basic_headers, maxSuccessProbability="-" + "9" * 30)
        wide = await _list(client, basic_headers, minSuccessProbability="-" + "9" * 30, maxSuccessProbability="9" * 30)

        assert above == []
        assert below == []
        assert len(wide) == 4

    @pytest.mark.asyncio
    async def test_underscored_integer_is_rejected(self, client: AsyncClient, basic_headers: dict):
        response = await client.get("/gadgets", headers=basic_headers, params={"maxSuccessProbability": "1_0"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_filter"

    @pytest.mark.asyncio
    async def test_unknown_status(self, client: AsyncClient, basic_headers: dict):
        response = await client.get("/gadgets", headers=basic_headers, params={"status": "MISSING"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_filter"


class TestUpdate:

    @pytest.mark.asyncio
    async def test_no_valid_fields(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.patch(f"/gadgets/{gadget['id']}", headers=admin_headers, json={"foo": "bar"})

        assert response.status_code == 400
        assert response.json()["code"] == "no_valid_fields"

    @pytest.mark.asyncio
    async def test_status_patch_persists(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.patch(
            f"/gadgets/{gadget['id']}",
            headers=admin_headers,
            json={"status": "DECOMMISSIONED", "foo": "bar"},
        )

        assert response.status_code == 200
        assert response.json()["gadget"]["status"] == "DECOMMISSIONED"
        listed = await _list(client, admin_headers, status="DECOMMISSIONED")
        assert [g["id"] for g in listed] == [gadget["id"]]

    @pytest.mark.asyncio
    async def test_partial_update_leaves_other_fields(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.patch(
            f"/gadgets/{gadget['id']}",
            headers=admin_headers,
            json={"successProbability": 99},
        )

        updated = response.json()["gadget"]
        assert updated["successProbability"] == 99
        assert updated["name"] == gadget["name"]
        assert updated["status"] == "AVAILABLE"

    @pytest.mark.asyncio
    async def test_out_of_range_probability(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.patch(
            f"/gadgets/{gadget['id']}",
            headers=admin_headers,
            json={"successProbability": 150},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "invalid_field_value"
        assert body["errors"][0]["field"] == "successProbability"

    @pytest.mark.asyncio
    async def test_unknown_gadget(self, client: AsyncClient, admin_headers: dict):
        response = await client.patch(f"/gadgets/{uuid.uuid4()}", headers=admin_headers, json={"name": "X"})

        assert response.status_code == 404
        assert response.json()["code"] == "gadget_not_found"

    @pytest.mark.asyncio
    async def test_basic_user_is_forbidden(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        response = await client.patch(
            f"/gadgets/{sample_gadgets[0].id}",
            headers=basic_headers,
            json={"name": "Hijacked"},
        )

        assert response.status_code == 403


class TestDecommission:

    @pytest.mark.asyncio
    async def test_record_is_kept(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.delete(f"/gadgets/{gadget['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["gadget"]["status"] == "DECOMMISSIONED"
        listed = await _list(client, admin_headers)
        assert [(g["id"], g["status"]) for g in listed] == [(gadget["id"], "DECOMMISSIONED")]

    @pytest.mark.asyncio
    async def test_unknown_gadget(self, client: AsyncClient, admin_headers: dict):
        response = await client.delete(f"/gadgets/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id(self, client: AsyncClient, admin_headers: dict):
        response = await client.delete("/gadgets/not-a-uuid", headers=admin_headers)

        assert response.status_code == 422


class TestSelfDestruct:

    @pytest.mark.asyncio
    async def test_returns_code_and_destroys(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)

        response = await client.post(f"/gadgets/{gadget['id']}/self-destruct", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Self-destruct initiated"
        assert CODE_PATTERN.match(body["confirmationCode"])
        listed = await _list(client, admin_headers, status="DESTROYED")
        assert [g["id"] for g in listed] == [gadget["id"]]

    @pytest.mark.asyncio
    async def test_twice_succeeds(self, client: AsyncClient, admin_headers: dict):
        gadget = await _create(client, admin_headers)
        url = f"/gadgets/{gadget['id']}/self-destruct"

        first = await client.post(url, headers=admin_headers)
        second = await client.post(url, headers=admin_headers)

        assert first.status_code == second.status_code == 200
        assert CODE_PATTERN.match(second.json()["confirmationCode"])
        listed = await _list(client, admin_headers)
        assert listed[0]["status"] == "DESTROYED"

    @pytest.mark.asyncio
    async def test_basic_user_is_forbidden(self, client: AsyncClient, basic_headers: dict, sample_gadgets):
        response = await client.post(f"/gadgets/{sample_gadgets[0].id}/self-destruct", headers=basic_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_gadget(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(f"/gadgets/{uuid.uuid4()}/self-destruct", headers=admin_headers)

        assert response.status_code == 404


class TestInternalErrors:

    @pytest.mark.asyncio
    async def test_store_failure_is_a_generic_500(
        self,
        test_settings: Settings,
        database: Database,
        basic_headers: dict,
        monkeypatch,
    ):
        async def failing_find(self, filters):
            raise RuntimeError("connection to 10.0.0.5 refused")

        monkeypatch.setattr(GadgetRepository, "find", failing_find)
        app = create_app(test_settings)
        app.state.database = database

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            response = await ac.get("/gadgets", headers=basic_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == "Internal server error"
        assert body["code"] == "internal_error"
        assert set(body) <= {"detail", "code", "request_id"}
        assert "10.0.0.5" not in response.text
        assert "RuntimeError" not in response.text
