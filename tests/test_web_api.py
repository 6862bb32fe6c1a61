"""웹 API 엔드포인트 테스트"""

from datetime import timedelta

import pytest

from tests.fakes import BASE_TIME


def _add(client, label="milk", item_type="dairy", expiration=None, **extra):
    body = {"label": label, "type": item_type}
    if expiration is not None:
        body["expiration"] = expiration
    body.update(extra)
    return client.post("/api/inventory/items", json=body)


class TestItemsAPI:
    """재고 추가/조회/꺼내기 API 테스트"""

    def test_list_empty(self, client):
        resp = client.get("/api/inventory/items")
        assert resp.status_code == 200
        assert resp.get_json() == {"total": 0, "items": []}

    def test_add_item(self, client):
        resp = _add(client, expiration="2026-10-20T09:00:00")
        assert resp.status_code == 201
        assert resp.get_json()["item"] == {
            "label": "milk", "type": "dairy", "expiration": "2026-10-20T09:00:00",
        }

        data = client.get("/api/inventory/items").get_json()
        assert data["total"] == 1
        assert data["items"][0]["label"] == "milk"

    def test_add_with_expires_in_seconds(self, client, inventory):
        resp = _add(client, expires_in_seconds=30)
        assert resp.status_code == 201
        assert len(inventory) == 1

    def test_add_timezone_aware_expiration_is_normalized(self, client, inventory):
        resp = _add(client, expiration="2026-10-20T09:00:00+00:00")
        assert resp.status_code == 201
        assert inventory.list_items()[0].expiration.tzinfo is None

    def test_add_missing_label(self, client):
        resp = client.post("/api/inventory/items", json={"expiration": "2026-10-20T09:00:00"})
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "INVALID_ITEM"

    def test_add_missing_expiration(self, client):
        resp = _add(client)
        assert resp.status_code == 400

    def test_add_bad_expiration(self, client, inventory):
        resp = _add(client, expiration="tomorrow")
        assert resp.status_code == 400
        assert len(inventory) == 0

    @pytest.mark.parametrize("seconds", ["nan", "inf", "-inf", 1e20, "abc", [1]])
    def test_add_bad_expires_in_seconds(self, client, inventory, seconds):
        """숫자가 아니거나 범위를 벗어난 값 → 400"""
        resp = _add(client, expires_in_seconds=seconds)
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "INVALID_ITEM"
        assert len(inventory) == 0

    def test_add_non_json_body(self, client):
        resp = client.post("/api/inventory/items", data="milk", content_type="text/plain")
        assert resp.status_code == 400

    def test_add_default_type(self, client):
        resp = client.post(
            "/api/inventory/items",
            json={"label": "milk", "expiration": "2026-10-20T09:00:00"},
        )
        assert resp.get_json()["item"]["type"] == "general"

    def test_remove_item(self, client):
        _add(client, expiration="2026-10-20T09:00:00")

        resp = client.delete("/api/inventory/items/milk")
        assert resp.status_code == 200
        assert resp.get_json()["item"]["label"] == "milk"

        resp = client.delete("/api/inventory/items/milk")
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "NOT_FOUND"

    def test_remove_label_with_space(self, client):
        _add(client, label="first item", expiration="2026-10-20T09:00:00")
        resp = client.delete("/api/inventory/items/first%20item")
        assert resp.status_code == 200


class TestNotificationsAPI:

    def test_removed_notification(self, client):
        _add(client, expiration="2026-10-20T09:00:00")
        client.delete("/api/inventory/items/milk")

        data = client.get("/api/inventory/notifications").get_json()
        assert data["total"] == 1
        assert data["notifications"] == ["Item removed: milk, dairy, 2026-10-20T09:00:00"]

    def test_unknown_label_no_notification(self, client):
        client.delete("/api/inventory/items/ghost")
        data = client.get("/api/inventory/notifications").get_json()
        assert data["total"] == 0

    def test_expired_notification_detail(self, client, fake_clock, fake_timer):
        expiration = BASE_TIME + timedelta(minutes=1)
        _add(client, expiration=expiration.isoformat())
        fake_timer.run_until(fake_clock, expiration)

        data = client.get("/api/inventory/notifications?detail=1").get_json()
        assert data["total"] == 1
        record = data["notifications"][0]
        assert record["kind"] == "expired"
        assert record["text"].startswith("Item expired: milk")


class TestStatusAPI:

    def test_status_idle(self, client):
        data = client.get("/api/inventory/status").get_json()
        assert data == {"item_count": 0, "scheduler_state": "idle", "next_expiration": None}

    def test_status_armed(self, client):
        _add(client, label="a", expiration="2026-10-21T09:00:00")
        _add(client, label="b", expiration="2026-10-20T09:00:00")

        data = client.get("/api/inventory/status").get_json()
        assert data["item_count"] == 2
        assert data["scheduler_state"] == "armed"
        assert data["next_expiration"] == "2026-10-20T09:00:00"


class TestAppBehavior:

    def test_index_page(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"/api/inventory" in resp.data

    def test_unknown_route_json_404(self, client):
        resp = client.get("/api/unknown")
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "NOT_FOUND"

    def test_method_not_allowed(self, client):
        resp = client.put("/api/inventory/items")
        assert resp.status_code == 405
        assert resp.get_json()["code"] == "METHOD_NOT_ALLOWED"

    def test_security_headers(self, client):
        resp = client.get("/api/inventory/status")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
