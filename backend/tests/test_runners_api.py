"""Tests for runner API routes: login, presence, claims and delivery progress."""

from decimal import Decimal

from fastapi.testclient import TestClient

from app.models.order import OrderStatus


API = "/api/v1"


class TestRunnerSession:
    def test_demo_login(self, client: TestClient, runner):
        res = client.post(f"{API}/runner/login", json={"runner_code": "ANY-CODE"})
        assert res.status_code == 200
        assert res.json() == {"runner_id": "runner1"}

    def test_login_without_demo_runner(self, client: TestClient):
        res = client.post(f"{API}/runner/login", json={"runner_code": "ANY-CODE"})
        assert res.status_code == 401

    def test_login_requires_code(self, client: TestClient, runner):
        assert client.post(f"{API}/runner/login", json={"runner_code": ""}).status_code == 422
        assert client.post(f"{API}/runner/login", json={"runner_code": "   "}).status_code == 400

    def test_me(self, client: TestClient, runner):
        res = client.get(f"{API}/runner/me", params={"runner_id": runner.id})
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Alex Johnson"
        assert data["is_online"] is True
        assert data["current_section"] == "105"
        assert data["active_order_ids"] == []

    def test_me_unknown_runner(self, client: TestClient):
        res = client.get(f"{API}/runner/me", params={"runner_id": "ghost"})
        assert res.status_code == 404

    def test_go_offline_and_online(self, client: TestClient, runner):
        res = client.patch(f"{API}/runner/status", json={"runner_id": runner.id, "is_online": False})
        assert res.status_code == 200
        assert res.json()["is_online"] is False

        res = client.patch(f"{API}/runner/status", json={"runner_id": runner.id, "is_online": True})
        assert res.json()["is_online"] is True

    def test_status_must_be_boolean(self, client: TestClient, runner):
        res = client.patch(f"{API}/runner/status", json={"runner_id": runner.id, "is_online": "yes"})
        assert res.status_code == 422

    def test_status_unknown_runner(self, client: TestClient):
        res = client.patch(f"{API}/runner/status", json={"runner_id": "ghost", "is_online": True})
        assert res.status_code == 404

    def test_update_location(self, client: TestClient, runner):
        res = client.patch(f"{API}/runner/location", json={"runner_id": runner.id, "section": "110"})
        assert res.status_code == 200
        assert res.json()["current_section"] == "110"

    def test_unknown_location_rejected(self, client: TestClient, runner):
        res = client.patch(f"{API}/runner/location", json={"runner_id": runner.id, "section": "999"})
        assert res.status_code == 400


class TestClaimRoutes:
    def test_claim(self, client: TestClient, runner, make_order, store):
        order = make_order()
        res = client.post(f"{API}/runner/claim", json={"runner_id": runner.id, "order_id": order.id})
        assert res.status_code == 200
        assert res.json() == {"success": True, "order_id": order.id}
        assert store.get_order(order.id).runner_id == runner.id

        res = client.get(f"{API}/orders/{order.id}/messages")
        assert res.json()[-1]["sender"] == "runner"

    def test_claim_conflict(self, client: TestClient, runner, second_runner, make_order):
        order = make_order()
        client.post(f"{API}/runner/claim", json={"runner_id": runner.id, "order_id": order.id})
        res = client.post(
            f"{API}/runner/claim", json={"runner_id": second_runner.id, "order_id": order.id}
        )
        assert res.status_code == 409
        assert res.json() == {"detail": "Order already claimed or not available"}

    def test_claim_while_offline(self, client: TestClient, runner, make_order, store):
        order = make_order()
        store.update_runner(runner.id, is_online=False)
        res = client.post(f"{API}/runner/claim", json={"runner_id": runner.id, "order_id": order.id})
        assert res.status_code == 400
        assert res.json() == {"detail": "Runner not found or offline"}

    def test_claim_missing_fields(self, client: TestClient, runner):
        assert client.post(f"{API}/runner/claim", json={"runner_id": runner.id}).status_code == 422

    def test_release(self, client: TestClient, runner, make_order):
        order = make_order()
        client.post(f"{API}/runner/claim", json={"runner_id": runner.id, "order_id": order.id})
        res = client.post(f"{API}/runner/release", json={"runner_id": runner.id, "order_id": order.id})
        assert res.status_code == 200
        assert res.json() == {"success": True, "order_id": order.id}

        res = client.get(f"{API}/orders/nearby", params={"runner_id": runner.id})
        assert [o["id"] for o in res.json()] == [order.id]

    def test_release_not_held(self, client: TestClient, runner, make_order):
        order = make_order()
        res = client.post(f"{API}/runner/release", json={"runner_id": runner.id, "order_id": order.id})
        assert res.status_code == 409


class TestDeliveryProgress:
    def _claim(self, client, runner_id, order_id):
        res = client.post(f"{API}/runner/claim", json={"runner_id": runner_id, "order_id": order_id})
        assert res.status_code == 200

    def test_full_delivery(self, client: TestClient, runner, make_order, store):
        order = make_order(tip="4.00")
        self._claim(client, runner.id, order.id)

        for status in ("picked_up", "en_route", "delivered"):
            res = client.post(
                f"{API}/runner/orders/{order.id}/status",
                json={"runner_id": runner.id, "status": status},
            )
            assert res.status_code == 200
            assert res.json()["status"] == status

        updated = store.get_runner(runner.id)
        assert updated.active_order_ids == []
        assert updated.completed_deliveries == 1
        assert updated.earnings_today == Decimal("4.00")
        assert store.get_order(order.id).runner_id == runner.id

    def test_cannot_skip_steps(self, client: TestClient, runner, make_order):
        order = make_order()
        self._claim(client, runner.id, order.id)
        res = client.post(
            f"{API}/runner/orders/{order.id}/status",
            json={"runner_id": runner.id, "status": "delivered"},
        )
        assert res.status_code == 409

    def test_cannot_go_back(self, client: TestClient, runner, make_order, store):
        order = make_order()
        self._claim(client, runner.id, order.id)
        store.update_order(order.id, status=OrderStatus.EN_ROUTE)
        res = client.post(
            f"{API}/runner/orders/{order.id}/status",
            json={"runner_id": runner.id, "status": "picked_up"},
        )
        assert res.status_code == 409
        assert store.get_order(order.id).status == OrderStatus.EN_ROUTE

    def test_only_assigned_runner(self, client: TestClient, runner, second_runner, make_order):
        order = make_order()
        self._claim(client, runner.id, order.id)
        res = client.post(
            f"{API}/runner/orders/{order.id}/status",
            json={"runner_id": second_runner.id, "status": "picked_up"},
        )
        assert res.status_code == 403

    def test_runner_cannot_set_kitchen_statuses(self, client: TestClient, runner, make_order):
        order = make_order()
        self._claim(client, runner.id, order.id)
        res = client.post(
            f"{API}/runner/orders/{order.id}/status",
            json={"runner_id": runner.id, "status": "preparing"},
        )
        assert res.status_code == 400

    def test_unknown_order(self, client: TestClient, runner):
        res = client.post(
            f"{API}/runner/orders/order_404/status",
            json={"runner_id": runner.id, "status": "picked_up"},
        )
        assert res.status_code == 404

    def test_list_my_orders(self, client: TestClient, runner, make_order, clock):
        first = make_order()
        second = make_order(section="106")
        make_order(section="107")
        self._claim(client, runner.id, second.id)
        clock.advance(1000)
        self._claim(client, runner.id, first.id)

        res = client.get(f"{API}/runner/orders", params={"runner_id": runner.id})
        assert res.status_code == 200
        assert [o["id"] for o in res.json()] == [second.id, first.id]

    def test_list_orders_unknown_runner(self, client: TestClient):
        res = client.get(f"{API}/runner/orders", params={"runner_id": "ghost"})
        assert res.status_code == 404


class TestServiceEndpoints:
    def test_health(self, client: TestClient):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json()["status"] == "healthy"

    def test_metrics_report_claims(self, client: TestClient, runner, make_order):
        order = make_order()
        client.post(f"{API}/runner/claim", json={"runner_id": runner.id, "order_id": order.id})
        res = client.get("/metrics")
        assert res.status_code == 200
        assert 'runner_claims_total{result="success"}' in res.text
        assert "http_requests_total" in res.text
