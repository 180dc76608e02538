"""In-memory order/runner store.

The store is the only owner of mutable dispatch state. One instance is built
per application (see app.main) and handed to request handlers through
``app.db.session.get_store``; there is no module-level singleton.

All access goes through a single re-entrant lock. Reads return deep copies
taken under the lock, so a caller always sees a whole record and can never
mutate stored state by accident.
"""

import copy
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import fields
from decimal import Decimal
from typing import Callable, Dict, Iterator, List, Optional

from app.core.exceptions import InvalidTransition
from app.models.order import (
    Batch,
    BatchStatus,
    Message,
    MessageSender,
    Order,
    OrderStatus,
    is_forward,
)
from app.models.staff import Runner

logger = logging.getLogger(__name__)

# Set by create_order/claim_order/release_order only
_ORDER_RESERVED_FIELDS = {"id", "created_at", "runner_id", "lock_ts"}
_ORDER_FIELDS = {f.name for f in fields(Order)}
_RUNNER_FIELDS = {f.name for f in fields(Runner)} - {"id"}
_BATCH_FIELDS = {f.name for f in fields(Batch)} - {"id", "runner_id", "created_at"}


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class OrderStore:
    """Authoritative process-lifetime state for orders, runners and messages."""

    def __init__(
        self,
        lock: Optional[threading.RLock] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._lock = lock if lock is not None else threading.RLock()
        self._clock = clock or now_ms
        self._orders: Dict[str, Order] = {}
        self._runners: Dict[str, Runner] = {}
        self._messages: Dict[str, List[Message]] = {}
        self._batches: Dict[str, Batch] = {}
        self._next_order_id = 1
        self._next_message_id = 1
        self._next_batch_id = 1

    def now(self) -> int:
        return self._clock()

    @contextmanager
    def transaction(self) -> Iterator["OrderStore"]:
        """Hold the store lock across several operations.

        The lock is re-entrant, so store methods called inside the block
        simply nest.
        """
        with self._lock:
            yield self

    # ===== ORDERS =====

    def create_order(self, **data) -> Order:
        """Store a new order with a fresh id, ``received`` status and timestamp."""
        reserved = (_ORDER_RESERVED_FIELDS | {"status"}).intersection(data)
        if reserved:
            raise ValueError(f"create_order cannot set {sorted(reserved)}")
        with self._lock:
            order = Order(
                id=f"order_{self._next_order_id}",
                created_at=self._clock(),
                status=OrderStatus.RECEIVED,
                **data,
            )
            self._next_order_id += 1
            self._orders[order.id] = order
            logger.debug(f"Created {order.id} for section {order.seat.section}")
            return copy.deepcopy(order)

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return copy.deepcopy(order) if order else None

    def update_order(self, order_id: str, **changes) -> Optional[Order]:
        """Merge ``changes`` into an order. Returns None for an unknown id.

        Status may only move forward; runner assignment is changed through
        claim_order/release_order instead.
        """
        unknown = set(changes) - _ORDER_FIELDS
        if unknown:
            raise ValueError(f"Unknown order fields: {sorted(unknown)}")
        reserved = _ORDER_RESERVED_FIELDS.intersection(changes)
        if reserved:
            raise ValueError(f"update_order cannot set {sorted(reserved)}")

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            if "status" in changes:
                new_status = OrderStatus(changes["status"])
                if not is_forward(order.status, new_status):
                    raise InvalidTransition(order_id, order.status.value, new_status.value)
                changes["status"] = new_status
            updated = copy.deepcopy(order)
            for key, value in changes.items():
                setattr(updated, key, value)
            self._orders[order_id] = updated
            return copy.deepcopy(updated)

    def list_by_status(self, status: OrderStatus) -> List[Order]:
        with self._lock:
            return [copy.deepcopy(o) for o in self._orders.values() if o.status == status]

    def list_by_runner(self, runner_id: str) -> List[Order]:
        with self._lock:
            return [copy.deepcopy(o) for o in self._orders.values() if o.runner_id == runner_id]

    def list_unclaimed_orders(self) -> List[Order]:
        """Orders a runner may discover: preparing and not yet claimed."""
        with self._lock:
            return [
                copy.deepcopy(o)
                for o in self._orders.values()
                if o.status == OrderStatus.PREPARING and o.runner_id is None
            ]

    def claim_order(self, order_id: str, runner_id: str) -> bool:
        """Assign ``runner_id`` to the order if nobody holds it yet.

        Check-and-set happens inside one lock acquisition, so of any number
        of concurrent callers exactly one sees True.
        """
        with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.runner_id is not None:
                return False
            order.runner_id = runner_id
            order.lock_ts = self._clock()
            return True

    def release_order(self, order_id: str) -> bool:
        """Clear the runner assignment. False if the order is unknown or unclaimed."""
        with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.runner_id is None:
                return False
            order.runner_id = None
            order.lock_ts = None
            return True

    # ===== RUNNERS =====

    def add_runner(self, runner: Runner) -> Runner:
        with self._lock:
            if runner.id in self._runners:
                raise ValueError(f"Runner {runner.id} already exists")
            self._runners[runner.id] = copy.deepcopy(runner)
            return copy.deepcopy(runner)

    def get_runner(self, runner_id: str) -> Optional[Runner]:
        with self._lock:
            runner = self._runners.get(runner_id)
            return copy.deepcopy(runner) if runner else None

    def update_runner(self, runner_id: str, **changes) -> Optional[Runner]:
        """Merge ``changes`` into a runner. Returns None for an unknown id."""
        unknown = set(changes) - _RUNNER_FIELDS
        if unknown:
            raise ValueError(f"Unknown runner fields: {sorted(unknown)}")
        with self._lock:
            runner = self._runners.get(runner_id)
            if runner is None:
                return None
            for key, value in changes.items():
                setattr(runner, key, copy.deepcopy(value))
            return copy.deepcopy(runner)

    def list_online_runners(self) -> List[Runner]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._runners.values() if r.is_online]

    def add_active_order(self, runner_id: str, order_id: str) -> Optional[Runner]:
        with self._lock:
            runner = self._runners.get(runner_id)
            if runner is None:
                return None
            if order_id not in runner.active_order_ids:
                runner.active_order_ids.append(order_id)
            return copy.deepcopy(runner)

    def remove_active_order(self, runner_id: str, order_id: str) -> Optional[Runner]:
        with self._lock:
            runner = self._runners.get(runner_id)
            if runner is None:
                return None
            if order_id in runner.active_order_ids:
                runner.active_order_ids.remove(order_id)
            return copy.deepcopy(runner)

    def record_delivery(self, runner_id: str, order_id: str, tip: Decimal) -> Optional[Runner]:
        """Move a delivered order off the runner's list and bump their counters."""
        with self._lock:
            runner = self._runners.get(runner_id)
            if runner is None:
                return None
            if order_id in runner.active_order_ids:
                runner.active_order_ids.remove(order_id)
            runner.completed_deliveries += 1
            runner.earnings_today = runner.earnings_today + tip
            return copy.deepcopy(runner)

    # ===== MESSAGES =====

    def add_message(self, order_id: str, sender: MessageSender, text: str) -> Message:
        with self._lock:
            message = Message(
                id=f"msg_{self._next_message_id}",
                order_id=order_id,
                sender=MessageSender(sender),
                text=text,
                ts=self._clock(),
            )
            self._next_message_id += 1
            self._messages.setdefault(order_id, []).append(message)
            return message

    def list_messages(self, order_id: str) -> List[Message]:
        with self._lock:
            # Messages are frozen; a shallow list copy is enough
            return list(self._messages.get(order_id, []))

    # ===== BATCHES =====

    def create_batch(
        self,
        runner_id: str,
        order_ids: List[str],
        route: List[str],
        route_estimate_minutes: int,
        total_payout: Decimal,
    ) -> Batch:
        with self._lock:
            batch = Batch(
                id=f"batch_{self._next_batch_id}",
                runner_id=runner_id,
                order_ids=list(order_ids),
                route=list(route),
                created_at=self._clock(),
                route_estimate_minutes=route_estimate_minutes,
                total_payout=total_payout,
                status=BatchStatus.ACTIVE,
            )
            self._next_batch_id += 1
            self._batches[batch.id] = batch
            return copy.deepcopy(batch)

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        with self._lock:
            batch = self._batches.get(batch_id)
            return copy.deepcopy(batch) if batch else None

    def update_batch(self, batch_id: str, **changes) -> Optional[Batch]:
        unknown = set(changes) - _BATCH_FIELDS
        if unknown:
            raise ValueError(f"Unknown batch fields: {sorted(unknown)}")
        with self._lock:
            batch = self._batches.get(batch_id)
            if batch is None:
                return None
            for key, value in changes.items():
                setattr(batch, key, copy.deepcopy(value))
            return copy.deepcopy(batch)

    def list_batches_by_runner(self, runner_id: str) -> List[Batch]:
        with self._lock:
            return [copy.deepcopy(b) for b in self._batches.values() if b.runner_id == runner_id]
