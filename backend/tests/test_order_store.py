"""Tests for the in-memory order store."""

import threading
from decimal import Decimal

import pytest

from app.core.exceptions import InvalidTransition
from app.db.session import create_store
from app.models.order import MessageSender, OrderStatus
from app.models.staff import Runner


class TestOrders:
    def test_create_assigns_id_status_and_timestamp(self, store, make_order, clock):
        order = make_order(status=OrderStatus.RECEIVED)
        assert order.id == "order_1"
        assert order.status == OrderStatus.RECEIVED
        assert order.created_at == clock.now
        assert order.runner_id is None
        assert order.lock_ts is None

    def test_ids_are_sequential(self, make_order):
        assert [make_order().id for _ in range(3)] == ["order_1", "order_2", "order_3"]

    def test_create_rejects_reserved_fields(self, store):
        with pytest.raises(ValueError):
            store.create_order(id="order_99")
        with pytest.raises(ValueError):
            store.create_order(status=OrderStatus.DELIVERED)

    def test_get_unknown_order(self, store):
        assert store.get_order("order_404") is None

    def test_reads_are_copies(self, store, make_order):
        order = make_order()
        order.seat.section = "999"
        order.items.clear()
        stored = store.get_order(order.id)
        assert stored.seat.section == "105"
        assert len(stored.items) == 1

    def test_update_merges_fields(self, store, make_order):
        order = make_order()
        updated = store.update_order(order.id, eta_minutes=5)
        assert updated.eta_minutes == 5
        assert store.get_order(order.id).eta_minutes == 5

    def test_update_unknown_order_returns_none(self, store):
        assert store.update_order("order_404", eta_minutes=5) is None

    def test_update_rejects_unknown_and_reserved_fields(self, store, make_order):
        order = make_order()
        with pytest.raises(ValueError):
            store.update_order(order.id, colour="red")
        with pytest.raises(ValueError):
            store.update_order(order.id, runner_id="runner1")

    def test_status_never_moves_backwards(self, store, make_order):
        order = make_order(status=OrderStatus.EN_ROUTE)
        with pytest.raises(InvalidTransition):
            store.update_order(order.id, status=OrderStatus.PREPARING)
        assert store.get_order(order.id).status == OrderStatus.EN_ROUTE

    def test_status_update_accepts_plain_strings(self, store, make_order):
        order = make_order(status=OrderStatus.RECEIVED)
        updated = store.update_order(order.id, status="preparing")
        assert updated.status == OrderStatus.PREPARING

    def test_list_by_status_and_runner(self, store, make_order, runner):
        received = make_order(status=OrderStatus.RECEIVED)
        preparing = make_order()
        store.claim_order(preparing.id, runner.id)

        assert [o.id for o in store.list_by_status(OrderStatus.RECEIVED)] == [received.id]
        assert [o.id for o in store.list_by_runner(runner.id)] == [preparing.id]

    def test_unclaimed_lists_only_preparing_without_runner(self, store, make_order, runner):
        make_order(status=OrderStatus.RECEIVED)
        open_order = make_order()
        taken = make_order()
        make_order(status=OrderStatus.PICKED_UP)
        store.claim_order(taken.id, runner.id)

        assert [o.id for o in store.list_unclaimed_orders()] == [open_order.id]


class TestClaimOrder:
    def test_first_claim_wins(self, store, make_order, clock):
        order = make_order()
        clock.advance(500)
        assert store.claim_order(order.id, "runner1") is True
        assert store.claim_order(order.id, "runner2") is False

        stored = store.get_order(order.id)
        assert stored.runner_id == "runner1"
        assert stored.lock_ts == clock.now

    def test_claim_unknown_order(self, store):
        assert store.claim_order("order_404", "runner1") is False

    def test_release_clears_assignment(self, store, make_order):
        order = make_order()
        store.claim_order(order.id, "runner1")
        assert store.release_order(order.id) is True
        stored = store.get_order(order.id)
        assert stored.runner_id is None
        assert stored.lock_ts is None
        assert store.release_order(order.id) is False

    @pytest.mark.parametrize("contenders", [2, 8, 32])
    def test_threaded_claim_race(self, store, make_order, contenders):
        order = make_order()
        barrier = threading.Barrier(contenders)
        results = {}

        def attempt(runner_id):
            barrier.wait()
            results[runner_id] = store.claim_order(order.id, runner_id)

        threads = [
            threading.Thread(target=attempt, args=(f"runner{i}",)) for i in range(contenders)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [r for r, won in results.items() if won]
        assert len(results) == contenders
        assert len(winners) == 1
        assert store.get_order(order.id).runner_id == winners[0]


class TestRunners:
    def test_add_and_get(self, store):
        store.add_runner(Runner(id="r1", name="Pat"))
        runner = store.get_runner("r1")
        assert runner.name == "Pat"
        assert runner.is_online is False
        assert runner.active_order_ids == []

    def test_duplicate_runner_rejected(self, store, runner):
        with pytest.raises(ValueError):
            store.add_runner(Runner(id=runner.id, name="Other"))

    def test_update_runner(self, store, runner):
        updated = store.update_runner(runner.id, is_online=False, current_section="110")
        assert updated.is_online is False
        assert updated.current_section == "110"
        assert store.update_runner("nobody", is_online=True) is None
        with pytest.raises(ValueError):
            store.update_runner(runner.id, id="x")

    def test_online_runners(self, store, runner):
        store.add_runner(Runner(id="r2", name="Off", is_online=False))
        assert [r.id for r in store.list_online_runners()] == [runner.id]

    def test_active_orders_are_a_set(self, store, runner):
        store.add_active_order(runner.id, "order_1")
        store.add_active_order(runner.id, "order_1")
        store.add_active_order(runner.id, "order_2")
        assert store.get_runner(runner.id).active_order_ids == ["order_1", "order_2"]
        store.remove_active_order(runner.id, "order_1")
        assert store.get_runner(runner.id).active_order_ids == ["order_2"]

    def test_record_delivery(self, store, runner):
        store.add_active_order(runner.id, "order_1")
        updated = store.record_delivery(runner.id, "order_1", Decimal("3.50"))
        assert updated.active_order_ids == []
        assert updated.completed_deliveries == 1
        assert updated.earnings_today == Decimal("3.50")


class TestMessages:
    def test_messages_in_insertion_order(self, store, clock):
        store.add_message("order_1", MessageSender.CUSTOMER, "hello")
        clock.advance(1000)
        store.add_message("order_1", "runner", "on my way")

        messages = store.list_messages("order_1")
        assert [m.text for m in messages] == ["hello", "on my way"]
        assert [m.id for m in messages] == ["msg_1", "msg_2"]
        assert messages[1].sender == MessageSender.RUNNER
        assert messages[1].ts - messages[0].ts == 1000

    def test_no_messages(self, store):
        assert store.list_messages("order_404") == []


class TestDemoSeed:
    def test_seeded_store(self):
        store = create_store(seed=True)
        runner = store.get_runner("runner1")
        assert runner.name == "Alex Johnson"
        assert runner.is_online is True
        assert store.get_runner("runner2").is_online is False

        orders = [store.get_order(f"order_{n}") for n in (1, 2, 3)]
        assert [o.seat.section for o in orders] == ["105", "112", "108"]
        assert orders[0].total == Decimal("38.63")
        assert [o.status for o in orders] == [
            OrderStatus.PREPARING,
            OrderStatus.RECEIVED,
            OrderStatus.PREPARING,
        ]

    def test_unseeded_store_is_empty(self):
        store = create_store(seed=False)
        assert store.get_runner("runner1") is None
        assert store.list_unclaimed_orders() == []

    def test_two_seeded_stores_are_independent(self):
        first = create_store(seed=True)
        second = create_store(seed=True)
        first.claim_order("order_1", "runner1")
        assert second.get_order("order_1").runner_id is None


class TestReadsHaveNoSideEffects:
    def test_repeated_reads_are_identical(self, store, make_order, clock):
        order = make_order()
        store.add_message(order.id, MessageSender.CUSTOMER, "hello")
        clock.advance(60_000)

        assert store.get_order(order.id) == store.get_order(order.id)
        assert store.list_messages(order.id) == store.list_messages(order.id)
        assert store.get_order(order.id) == order
