"""API tests for stock movement endpoints."""

from datetime import datetime, timedelta, timezone


async def _move(client, product_id: int, movement_type: str, quantity, reason=None):
    payload = {"product_id": product_id, "movement_type": movement_type, "quantity": quantity}
    if reason is not None:
        payload["reason"] = reason
    return await client.post("/api/movements", json=payload)


async def _quantity(client, product_id: int) -> int:
    response = await client.get(f"/api/products/{product_id}")
    return response.json()["quantity"]


class TestRecordMovement:
    async def test_sale_updates_quantity(self, client, widget):
        response = await _move(client, widget["id"], "sale", 30, "Order 1")

        assert response.status_code == 201
        data = response.json()
        assert data["movement_type"] == "sale"
        assert data["quantity"] == 30
        assert data["reason"] == "Order 1"
        assert await _quantity(client, widget["id"]) == 70

    async def test_adjustment_sets_absolute_quantity(self, client, widget):
        response = await _move(client, widget["id"], "adjustment", 40)

        assert response.json()["quantity"] == 40
        assert await _quantity(client, widget["id"]) == 40

    async def test_insufficient_stock(self, client, widget):
        response = await _move(client, widget["id"], "sale", 150)

        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "INSUFFICIENT_STOCK"
        assert data["message"] == "Insufficient stock: current 100, requested 150"
        assert "current=100" in data["detail"]
        assert await _quantity(client, widget["id"]) == 100

    async def test_unknown_type(self, client, widget):
        response = await _move(client, widget["id"], "refund", 1)

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MOVEMENT_TYPE"

    async def test_non_positive_quantity(self, client, widget):
        response = await _move(client, widget["id"], "purchase", 0)

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MOVEMENT_QUANTITY"

    async def test_unknown_product(self, client):
        response = await _move(client, 9999, "purchase", 1)

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestMovementAlerts:
    async def test_low_stock_sale_alerts_recipients(self, client, services, broadcaster, widget):
        await _move(client, widget["id"], "sale", 85)
        await services.dispatcher.drain()

        events = broadcaster.events("broadcast")
        assert "stock:movement" in events
        assert "notification:stock_low" in events

        for user_id in ("1", "2"):
            count = await client.get(
                "/api/notifications/unread-count", headers={"X-User-Id": user_id}
            )
            assert count.json()["count"] == 1

    async def test_critical_sale(self, client, services, broadcaster, widget):
        await _move(client, widget["id"], "sale", 98)
        await services.dispatcher.drain()

        assert "notification:stock_critical" in broadcaster.events("broadcast")
        unread = await client.get("/api/notifications/unread", headers={"X-User-Id": "1"})
        assert unread.json()["notifications"][0]["type"] == "stock_critical"

    async def test_repeated_low_stock_is_not_duplicated(self, client, services, widget):
        await _move(client, widget["id"], "sale", 85)
        await services.dispatcher.drain()
        await _move(client, widget["id"], "sale", 1)
        await services.dispatcher.drain()

        count = await client.get("/api/notifications/unread-count", headers={"X-User-Id": "1"})
        assert count.json()["count"] == 1

    async def test_healthy_movement_no_alert(self, client, services, broadcaster, widget):
        await _move(client, widget["id"], "purchase", 5)
        await services.dispatcher.drain()

        events = broadcaster.events()
        assert "stock:movement" in events
        assert not any(e.startswith("notification:stock") for e in events)


class TestMovementQueries:
    async def test_history_summary_and_totals(self, client, widget):
        await _move(client, widget["id"], "sale", 10)
        await _move(client, widget["id"], "return", 2)
        await _move(client, widget["id"], "damage", 1)

        history = await client.get(f"/api/movements/product/{widget['id']}")
        types = [m["movement_type"] for m in history.json()["movements"]]
        assert types == ["damage", "return", "sale", "purchase"]

        summary = await client.get(f"/api/movements/product/{widget['id']}/summary")
        assert summary.json()["counts"] == {
            "purchase": 1,
            "sale": 1,
            "adjustment": 0,
            "return": 1,
            "damage": 1,
        }

        totals = await client.get(f"/api/movements/product/{widget['id']}/totals")
        assert totals.json() == {
            "product_id": widget["id"],
            "total_in": 102,
            "total_out": 11,
            "net": 91,
        }

    async def test_queries_for_missing_product(self, client):
        for suffix in ("", "/summary", "/totals"):
            response = await client.get(f"/api/movements/product/9999{suffix}")
            assert response.status_code == 404

    async def test_list_all_and_by_range(self, client, widget):
        await _move(client, widget["id"], "sale", 1)

        everything = await client.get("/api/movements")
        assert everything.json()["total"] == 2

        now = datetime.now(timezone.utc)
        in_range = await client.get(
            "/api/movements",
            params={
                "start": (now - timedelta(hours=1)).isoformat(),
                "end": (now + timedelta(hours=1)).isoformat(),
            },
        )
        assert in_range.json()["total"] == 2

        future = await client.get(
            "/api/movements", params={"start": (now + timedelta(days=1)).isoformat()}
        )
        assert future.status_code == 400

    async def test_inverted_range(self, client, widget):
        now = datetime.now(timezone.utc)
        response = await client.get(
            "/api/movements",
            params={"start": now.isoformat(), "end": (now - timedelta(days=1)).isoformat()},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
