"""
Tests for the HTTP API.

Covers: health, literature listing, order CRUD, status changes and the
{"error": ...} error contract.
"""
import pytest
from sqlalchemy import func, select

from literature_orders.models import OrderItem


async def post_order(client, **body):
    body.setdefault("title", "Заказ на собрание")
    body.setdefault("createdBy", "Группа Рассвет")
    return await client.post("/api/orders", json=body)


async def move(client, order_id, *statuses):
    response = None
    for status in statuses:
        response = await client.put(f"/api/orders/{order_id}/status", json={"status": status})
        assert response.status_code == 200, response.json()
    return response


class TestHealthEndpoint:
    """Tests for GET /api/health."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/api/nothing")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_wrong_method_is_not_found(self, client):
        response = await client.patch("/api/orders/1", json={"title": "x"})
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


class TestLiteratureEndpoint:
    """Tests for GET /api/literature."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_sorted_by_sort_order(self, client, literature):
        response = await client.get("/api/literature")

        assert response.status_code == 200
        data = response.json()
        assert [item["sortOrder"] for item in data] == [1, 2, 3]
        assert data[0]["title"] == "Информационный буклет"
        assert data[0]["price"] == 2500
        assert {"id", "type", "title", "price", "sortOrder", "createdAt", "updatedAt"} <= set(data[0])

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_empty_catalog(self, client):
        response = await client.get("/api/literature")
        assert response.json() == []


class TestCreateOrder:
    """Tests for POST /api/orders."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_created_with_items(self, client, literature):
        book, booklet, _ = literature

        response = await post_order(client, priority="high", unit="шт", quantity=12, items=[
            {"literatureId": book.id, "quantity": 2},
            {"literatureId": booklet.id, "quantity": 4},
        ])

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "new"
        assert data["priority"] == "high"
        assert data["createdBy"] == "Группа Рассвет"
        assert data["quantity"] == 12
        assert data["unit"] == "шт"
        # Позиции в порядке каталога: буклет (1), книга (2)
        assert [item["literatureId"] for item in data["items"]] == [booklet.id, book.id]
        assert [item["lineTotal"] for item in data["items"]] == [10000, 300000]
        assert data["totalAmount"] == 310000
        assert data["items"][0]["literature"]["title"] == "Информационный буклет"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_defaults_and_blank_optionals(self, client):
        response = await post_order(client, title="  Заказ  ", description="   ", unit="")

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Заказ"
        assert data["description"] is None
        assert data["unit"] is None
        assert data["priority"] == "medium"
        assert data["items"] == []
        assert data["totalAmount"] == 0

    @pytest.mark.api
    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", [1, 100])
    async def test_title_boundary_accepted(self, client, length):
        response = await post_order(client, title="т" * length)
        assert response.status_code == 201

    @pytest.mark.api
    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", [0, 101])
    async def test_title_boundary_rejected(self, client, length):
        response = await post_order(client, title="т" * length)
        assert response.status_code == 400
        assert response.json() == {"error": "title must be between 1 and 100 characters"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_missing_created_by(self, client):
        response = await client.post("/api/orders", json={"title": "Заказ"})
        assert response.status_code == 400
        assert response.json() == {"error": "createdBy must be a string"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_duplicate_literature_rejected(self, client, literature):
        response = await post_order(client, items=[
            {"literatureId": literature[0].id, "quantity": 1},
            {"literatureId": literature[0].id, "quantity": 3},
        ])
        assert response.status_code == 400
        assert response.json() == {"error": "Duplicate literatureId in items payload"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_missing_literature_is_atomic(self, client, session_maker, literature):
        response = await post_order(client, items=[
            {"literatureId": literature[0].id, "quantity": 2},
            {"literatureId": 999999, "quantity": 1},
        ])

        assert response.status_code == 400
        assert response.json() == {"error": "One or more literature items were not found"}
        assert (await client.get("/api/orders")).json() == []
        async with session_maker() as session:
            assert await session.scalar(select(func.count(OrderItem.id))) == 0

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_invalid_item_quantity(self, client, literature):
        response = await post_order(client, items=[{"literatureId": literature[0].id, "quantity": 0}])
        assert response.status_code == 400
        assert response.json() == {"error": "items[0].quantity must be a positive integer"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        response = await client.post(
            "/api/orders", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_array_body(self, client):
        response = await client.post("/api/orders", json=[])
        assert response.status_code == 400
        assert response.json() == {"error": "title must be a string"}

    @pytest.mark.api
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [b"", b"null"])
    async def test_empty_or_null_body(self, client, content):
        response = await client.post(
            "/api/orders", content=content, headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "title must be a string"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_non_ascii_literature_id(self, client, literature):
        response = await post_order(client, items=[{"literatureId": "1_0", "quantity": 1}])
        assert response.status_code == 400
        assert response.json() == {"error": "items[0].literatureId must be a positive integer"}


class TestGetOrder:
    """Tests for GET /api/orders/{id}."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_same_shape_as_create(self, client, literature):
        created = (await post_order(client, items=[{"literatureId": literature[2].id, "quantity": 3}])).json()

        response = await client.get(f"/api/orders/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.get("/api/orders/12345")
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    @pytest.mark.api
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["abc", "0", "-5", "1.5", "1_0", "١"])
    async def test_invalid_id(self, client, raw_id):
        response = await client.get(f"/api/orders/{raw_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid order id"}


class TestListOrders:
    """Tests for GET /api/orders."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_newest_first_with_totals(self, client, literature):
        first = (await post_order(client, title="Первый")).json()
        second = (await post_order(
            client, title="Второй", items=[{"literatureId": literature[1].id, "quantity": 2}]
        )).json()

        data = (await client.get("/api/orders")).json()

        assert [o["id"] for o in data] == [second["id"], first["id"]]
        assert data[0]["totalAmount"] == 5000
        assert data[0]["items"][0]["lineTotal"] == 5000

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_filter_by_status(self, client):
        new_order = (await post_order(client)).json()
        moved = (await post_order(client)).json()
        await move(client, moved["id"], "in_progress")

        data = (await client.get("/api/orders", params={"status": "new"})).json()

        assert [o["id"] for o in data] == [new_order["id"]]
        assert all(o["status"] == "new" for o in data)

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_filter_by_created_by(self, client):
        await post_order(client, createdBy="Группа А")
        await post_order(client, createdBy="Группа Б")

        data = (await client.get("/api/orders", params={"createdBy": "Группа Б"})).json()

        assert [o["createdBy"] for o in data] == ["Группа Б"]

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_multi_valued_status_rejected(self, client):
        response = await client.get("/api/orders?status=new&status=done")
        assert response.status_code == 400
        assert response.json() == {"error": "status must be a single value"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_multi_valued_created_by_rejected(self, client):
        response = await client.get("/api/orders?createdBy=a&createdBy=b")
        assert response.status_code == 400
        assert response.json() == {"error": "createdBy must be a single value"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, client):
        response = await client.get("/api/orders", params={"status": "archived"})
        assert response.status_code == 400
        assert response.json() == {"error": "status must be one of: new, in_progress, done, closed"}


class TestUpdateOrder:
    """Tests for PUT /api/orders/{id}."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_partial_update(self, client, literature):
        created = (await post_order(
            client, description="Описание", unit="шт", quantity=3,
            items=[{"literatureId": literature[0].id, "quantity": 1}],
        )).json()

        response = await client.put(f"/api/orders/{created['id']}", json={
            "title": "Исправленный",
            "description": None,
            "quantity": None,
            "priority": "low",
            "items": [{"literatureId": literature[1].id, "quantity": 9}],
        })

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Исправленный"
        assert data["description"] is None
        assert data["quantity"] is None
        assert data["unit"] == "шт"
        assert data["priority"] == "low"
        assert data["items"] == created["items"]
        assert data["totalAmount"] == created["totalAmount"]

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_no_fields(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "No valid fields provided for update"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.put("/api/orders/999", json={"title": "x"})
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_invalid_field(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}", json={"unit": "x" * 51})
        assert response.status_code == 400
        assert response.json() == {"error": "unit must be at most 50 characters"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_array_body_has_no_fields(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}", json=[])
        assert response.status_code == 400
        assert response.json() == {"error": "No valid fields provided for update"}


class TestOrderStatus:
    """Tests for PUT /api/orders/{id}/status and GET /api/orders/transitions."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_transition_table(self, client):
        response = await client.get("/api/orders/transitions")
        assert response.status_code == 200
        assert response.json() == {
            "new": ["in_progress", "closed"],
            "in_progress": ["done", "closed"],
            "done": ["closed"],
            "closed": [],
        }

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_new_to_closed(self, client):
        created = (await post_order(client)).json()
        response = await move(client, created["id"], "closed")
        assert response.json()["status"] == "closed"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_closed_to_new_fails(self, client):
        created = (await post_order(client)).json()
        await move(client, created["id"], "closed")

        response = await client.put(f"/api/orders/{created['id']}/status", json={"status": "new"})

        assert response.status_code == 400
        assert response.json() == {"error": "Cannot transition status from closed to new"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_done_to_in_progress_fails(self, client):
        created = (await post_order(client)).json()
        await move(client, created["id"], "in_progress", "done")

        response = await client.put(f"/api/orders/{created['id']}/status", json={"status": "in_progress"})

        assert response.status_code == 400
        assert response.json() == {"error": "Cannot transition status from done to in_progress"}
        assert (await client.get(f"/api/orders/{created['id']}")).json()["status"] == "done"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_skip_fails(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}/status", json={"status": "done"})
        assert response.status_code == 400

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_returns_enriched_order(self, client, literature):
        created = (await post_order(client, items=[{"literatureId": literature[0].id, "quantity": 2}])).json()
        data = (await move(client, created["id"], "in_progress")).json()
        assert data["totalAmount"] == 300000
        assert data["items"][0]["lineTotal"] == 300000

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unknown_status_value(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}/status", json={"status": "archived"})
        assert response.status_code == 400
        assert response.json() == {"error": "status must be one of: new, in_progress, done, closed"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_missing_body(self, client):
        created = (await post_order(client)).json()
        response = await client.put(f"/api/orders/{created['id']}/status")
        assert response.status_code == 400
        assert response.json() == {"error": "status must be a string"}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.put("/api/orders/4242/status", json={"status": "closed"})
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}


class TestDeleteOrder:
    """Tests for DELETE /api/orders/{id}."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_delete_removes_order_and_items(self, client, session_maker, literature):
        created = (await post_order(client, items=[{"literatureId": literature[0].id, "quantity": 1}])).json()

        response = await client.delete(f"/api/orders/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert (await client.get("/api/orders")).json() == []
        assert (await client.get(f"/api/orders/{created['id']}")).status_code == 404
        async with session_maker() as session:
            assert await session.scalar(select(func.count(OrderItem.id))) == 0

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_delete_not_found(self, client):
        response = await client.delete("/api/orders/31337")
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}
