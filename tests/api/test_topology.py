"""Hierarchy API over in-memory stores: status codes, bodies, headers."""

import pytest
from httpx import AsyncClient

from tests.conftest import CUSTOMER_ID, TENANT_ID

BASE = "/api/v1/topology"
ADMIN = {"X-Tenant-ID": TENANT_ID}
CUSTOMER = {"X-Tenant-ID": TENANT_ID, "X-Customer-ID": CUSTOMER_ID}


async def _create(client: AsyncClient, path: str, name: str, **extra) -> dict:
    response = await client.post(f"{BASE}{path}", json={"name": name, **extra}, headers=ADMIN)
    assert response.status_code == 201, response.text
    return response.json()


class TestCrud:
    async def test_create_path_down_to_device(self, api_client: AsyncClient) -> None:
        t = await _create(api_client, "/territory", "North")
        b = await _create(api_client, f"/territory/{t['id']}/building", "HQ")
        r = await _create(api_client, f"/territory/{t['id']}/building/{b['id']}/room", "Lab")
        d = await _create(
            api_client,
            f"/territory/{t['id']}/building/{b['id']}/room/{r['id']}/device",
            "Thermostat",
        )

        response = await api_client.get(
            f"{BASE}/territory/{t['id']}/building/{b['id']}/room/{r['id']}/device/{d['id']}",
            headers=ADMIN,
        )
        assert response.status_code == 200
        assert response.json()["id"] == d["id"]
        assert response.json()["name"] == "Thermostat"

    async def test_update_returns_200(self, api_client: AsyncClient) -> None:
        t = await _create(api_client, "/territory", "North")
        response = await api_client.post(
            f"{BASE}/territory", json={"id": t["id"], "name": "South"}, headers=ADMIN
        )
        assert response.status_code == 200
        assert response.json() == {"id": t["id"], "name": "South"}

    async def test_delete_returns_204(self, api_client: AsyncClient, tree) -> None:
        t, b, _, _ = tree
        response = await api_client.delete(
            f"{BASE}/territory/{t.id}/building/{b.id}", headers=ADMIN
        )
        assert response.status_code == 204
        response = await api_client.get(f"{BASE}/territory/{t.id}/buildings", headers=ADMIN)
        assert response.json() == []


class TestListings:
    async def test_unpaged_list(self, api_client: AsyncClient, tree) -> None:
        t, b, r, d = tree
        response = await api_client.get(
            f"{BASE}/territory/{t.id}/building/{b.id}/room/{r.id}/devices", headers=ADMIN
        )
        assert response.status_code == 200
        assert response.json() == [{"id": d.id, "name": "Thermostat"}]

    async def test_paged_list(self, api_client: AsyncClient, stores, tree) -> None:
        t = tree[0]
        stores.relations.link(t, stores.assets.seed(TENANT_ID, "Annex", "Building"))
        response = await api_client.get(
            f"{BASE}/territory/{t.id}/buildings",
            params={"page_size": 1, "sort_property": "name"},
            headers=ADMIN,
        )
        assert response.status_code == 200
        body = response.json()
        assert [item["name"] for item in body["data"]] == ["Annex"]
        assert body["total_elements"] == 2
        assert body["total_pages"] == 2
        assert body["has_next"] is True

    async def test_territories(self, api_client: AsyncClient, tree) -> None:
        response = await api_client.get(f"{BASE}/territories", headers=ADMIN)
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [tree[0].id]

    async def test_text_search_alone_pages_with_default_size(
        self, api_client: AsyncClient, tree
    ) -> None:
        response = await api_client.get(
            f"{BASE}/territories", params={"text_search": "nor"}, headers=ADMIN
        )
        assert response.status_code == 200
        body = response.json()
        assert [item["name"] for item in body["data"]] == ["North"]
        assert body["has_next"] is False

    async def test_page_size_above_limit_is_400(self, api_client: AsyncClient) -> None:
        response = await api_client.get(
            f"{BASE}/territories", params={"page_size": 100000}, headers=ADMIN
        )
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "page_size"}

    async def test_unknown_sort_property_is_400(self, api_client: AsyncClient) -> None:
        response = await api_client.get(
            f"{BASE}/territories",
            params={"page_size": 10, "sort_property": "tenant_id"},
            headers=ADMIN,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestErrors:
    async def test_broken_chain_is_404_with_pair(self, api_client: AsyncClient, stores, tree) -> None:
        _, b, _, _ = tree
        other = stores.assets.seed(TENANT_ID, "South", "Territory")
        response = await api_client.get(
            f"{BASE}/territory/{other.id}/building/{b.id}", headers=ADMIN
        )
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "BROKEN_CHAIN"
        assert body["details"] == {"from_id": other.id, "to_id": b.id}

    async def test_missing_territory_is_resource_not_found(self, api_client: AsyncClient) -> None:
        response = await api_client.get(f"{BASE}/territory/nope", headers=ADMIN)
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_conflicting_device_type_is_409(self, api_client: AsyncClient, stores, tree) -> None:
        t, b, r, _ = tree
        response = await api_client.post(
            f"{BASE}/territory/{t.id}/building/{b.id}/room/{r.id}/device",
            json={"name": "Meter", "type": "Sensor"},
            headers=ADMIN,
        )
        assert response.status_code == 409
        assert response.json()["error"] == "TYPE_MISMATCH"
        assert stores.devices.writes == 0

    async def test_customer_cannot_delete(self, api_client: AsyncClient, stores) -> None:
        own = stores.assets.seed(TENANT_ID, "Mine", "Territory", customer_id=CUSTOMER_ID)
        response = await api_client.delete(f"{BASE}/territory/{own.id}", headers=CUSTOMER)
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"

    async def test_customer_cannot_build_under_unassigned_territory(
        self, api_client: AsyncClient, stores, tree
    ) -> None:
        response = await api_client.post(
            f"{BASE}/territory/{tree[0].id}/building", json={"name": "Intruder"}, headers=CUSTOMER
        )
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"
        assert stores.assets.writes == 0

    async def test_store_fault_during_chain_check_is_503(
        self, api_client: AsyncClient, stores, tree
    ) -> None:
        t, b, _, _ = tree
        stores.assets.fail_reads = True
        response = await api_client.get(f"{BASE}/territory/{t.id}/building/{b.id}", headers=ADMIN)
        assert response.status_code == 503
        assert response.json()["error"] == "CHAIN_CHECK_FAILED"

    async def test_customer_cannot_read_unassigned(self, api_client: AsyncClient, tree) -> None:
        response = await api_client.get(f"{BASE}/territory/{tree[0].id}", headers=CUSTOMER)
        assert response.status_code == 403

    async def test_other_tenant_sees_nothing(self, api_client: AsyncClient, tree) -> None:
        response = await api_client.get(
            f"{BASE}/territory/{tree[0].id}", headers={"X-Tenant-ID": "tenant-b"}
        )
        assert response.status_code == 404

    async def test_edge_failure_is_503_and_leaves_no_entity(
        self, api_client: AsyncClient, stores, tree
    ) -> None:
        t = tree[0]
        stores.relations.fail_create = True
        response = await api_client.post(
            f"{BASE}/territory/{t.id}/building", json={"name": "Orphan"}, headers=ADMIN
        )
        assert response.status_code == 503
        assert response.json()["error"] == "STORE_UNAVAILABLE"
        assert [e.name for e in stores.assets.rows.values() if e.entity_type == "Building"] == [
            "HQ"
        ]

    @pytest.mark.parametrize(
        "headers", [{}, {"X-Tenant-ID": "bad tenant!"}], ids=["missing", "malformed"]
    )
    async def test_tenant_header_required(self, api_client: AsyncClient, headers) -> None:
        response = await api_client.get(f"{BASE}/territories", headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "HTTP_ERROR"

    async def test_blank_name_is_422(self, api_client: AsyncClient) -> None:
        response = await api_client.post(f"{BASE}/territory", json={"name": ""}, headers=ADMIN)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"


async def test_without_database_is_503(client: AsyncClient, without_database) -> None:
    response = await client.get(f"{BASE}/territories", headers=ADMIN)
    assert response.status_code == 503
    assert response.json()["error"] == "SERVICE_UNAVAILABLE"
