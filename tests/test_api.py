import uuid
from datetime import datetime, timezone
from decimal import Decimal

from reseller_orders.application.get_orders import GetOrderDetailUseCase

from conftest import Catalog


def _create_payload(**overrides):
    payload = {
        "reseller_id": str(uuid.uuid4()),
        "customer_id": str(uuid.uuid4()),
        "status_id": str(Catalog.STATUS_CREATED),
        "items": [
            {
                "product_id": str(Catalog.PRODUCT_MAILBOX),
                "service_id": str(Catalog.SERVICE_EMAIL),
                "quantity": 2,
            }
        ],
    }
    payload.update(overrides)
    return payload


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_list_orders(client, add_order):
    first = await add_order(1)
    second = await add_order(3)

    response = await client.get("/api/orders")

    assert response.status_code == 200
    body = response.json()
    assert [o["id"] for o in body] == [str(second), str(first)]
    assert Decimal(str(body[0]["total_cost"])) == Decimal("2.4")
    assert Decimal(str(body[0]["total_price"])) == Decimal("2.7")
    assert body[0]["item_count"] == 1
    assert body[0]["status_name"] == "Created"


async def test_get_order(client, add_order):
    order_id = await add_order(2)

    response = await client.get(f"/api/orders/{order_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(order_id)
    assert Decimal(str(body["total_cost"])) == Decimal("1.6")
    assert len(body["items"]) == 1
    assert body["items"][0]["product_name"] == "100GB Mailbox"


async def test_get_unknown_order(client):
    response = await client.get(f"/api/orders/{uuid.uuid4()}")
    assert response.status_code == 404


async def test_orders_by_status(client, add_order):
    failed = await add_order(1, Catalog.STATUS_FAILED)
    await add_order(1, Catalog.STATUS_CREATED)

    response = await client.get("/api/orders/status/Failed")

    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == [str(failed)]


async def test_orders_by_status_none_found(client, add_order):
    await add_order(1, Catalog.STATUS_CREATED)

    response = await client.get("/api/orders/status/Completed")

    assert response.status_code == 404


async def test_orders_by_unknown_status(client):
    response = await client.get("/api/orders/status/Shipped")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["status"] == 400
    assert body["errors"] == {"status_name": ["Order status 'Shipped' does not exist."]}
    assert body["instance"] == "/api/orders/status/Shipped"


async def test_update_status(client, add_order):
    order_id = await add_order(1, Catalog.STATUS_CREATED)

    response = await client.patch(f"/api/orders/{order_id}/status/In Progress")

    assert response.status_code == 200
    body = response.json()
    assert body["status_id"] == str(Catalog.STATUS_IN_PROGRESS)
    assert body["status_name"] == "In Progress"


async def test_update_status_of_unknown_order(client):
    response = await client.patch(f"/api/orders/{uuid.uuid4()}/status/Completed")

    assert response.status_code == 400
    assert "order_id" in response.json()["errors"]


async def test_update_status_of_order_gone_before_read_back(client, add_order, monkeypatch):
    order_id = await add_order(1)

    async def vanished(self, order_id):
        return None

    monkeypatch.setattr(GetOrderDetailUseCase, "__call__", vanished)

    response = await client.patch(f"/api/orders/{order_id}/status/Completed")

    assert response.status_code == 404
    assert response.json() == {"detail": "Order not found"}


async def test_update_status_with_malformed_order_id(client):
    response = await client.patch("/api/orders/not-a-guid/status/Completed")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["status"] == 400
    assert body["instance"] == "/api/orders/not-a-guid/status/Completed"
    assert list(body["errors"]) == ["order_id"]


async def test_create_order(client):
    response = await client.post("/api/orders", json=_create_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["status_name"] == "Created"
    assert body["item_count"] == 1
    assert Decimal(str(body["total_cost"])) == Decimal("1.6")
    assert Decimal(str(body["total_price"])) == Decimal("1.8")

    fetched = await client.get(f"/api/orders/{body['id']}")
    assert fetched.status_code == 200


async def test_create_order_rejects_invalid_items(client):
    payload = _create_payload(
        status_id=str(uuid.uuid4()),
        items=[{"product_id": str(uuid.uuid4()), "service_id": str(Catalog.SERVICE_EMAIL), "quantity": 0}],
    )

    response = await client.post("/api/orders", json=payload)

    assert response.status_code == 400
    errors = response.json()["errors"]
    assert set(errors) == {"status_id", "items[0].product_id", "items[0].quantity"}

    listing = await client.get("/api/orders")
    assert listing.json() == []


async def test_create_order_without_items(client):
    response = await client.post("/api/orders", json=_create_payload(items=[]))

    assert response.status_code == 400
    assert response.json()["errors"] == {"items": ["Order must contain at least one item."]}


async def test_create_order_with_malformed_uuid(client):
    response = await client.post("/api/orders", json=_create_payload(reseller_id="not-a-uuid"))

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["title"] == "One or more validation errors occurred."
    assert list(body["errors"]) == ["reseller_id"]


async def test_create_order_with_non_integer_quantity(client):
    items = [{"product_id": str(Catalog.PRODUCT_MAILBOX), "service_id": str(Catalog.SERVICE_EMAIL), "quantity": "two"}]

    response = await client.post("/api/orders", json=_create_payload(items=items))

    assert response.status_code == 400
    assert list(response.json()["errors"]) == ["items[0].quantity"]

    listing = await client.get("/api/orders")
    assert listing.json() == []


async def test_monthly_profits(client, add_order):
    await add_order(10, Catalog.STATUS_COMPLETED, datetime(2024, 5, 2, tzinfo=timezone.utc))
    await add_order(3, Catalog.STATUS_COMPLETED, datetime(2024, 4, 28, tzinfo=timezone.utc))
    await add_order(7, Catalog.STATUS_IN_PROGRESS, datetime(2024, 5, 3, tzinfo=timezone.utc))

    response = await client.get("/api/orders/monthly-profits")

    assert response.status_code == 200
    body = response.json()
    assert [(p["year"], p["month"]) for p in body] == [(2024, 4), (2024, 5)]
    assert Decimal(str(body[0]["profit"])) == Decimal("0.3")
    assert Decimal(str(body[1]["profit"])) == Decimal("1.0")
