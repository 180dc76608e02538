"""
Claim Service
Assigns exactly one runner to an order.

A claim either fully happens (runner set, order preparing, runner listed as
holding it, customer greeted) or leaves the store untouched. Callers that
lose a race should re-poll the nearby list; nothing is retried here.
"""

import logging

from app.core.exceptions import ConflictFailure, NotFoundFailure, ValidationFailure
from app.core.metrics import metrics
from app.db.store import OrderStore
from app.models.order import MessageSender, Order, OrderStatus

logger = logging.getLogger(__name__)

INTRO_TEMPLATE = (
    "Hi! I'm {name} and I'll be delivering your order. "
    "I'll let you know when I'm on my way!"
)


class ClaimService:
    def __init__(self, store: OrderStore):
        self.store = store

    def claim(self, runner_id: str, order_id: str) -> Order:
        """Claim ``order_id`` for ``runner_id``.

        Raises:
            ValidationFailure: runner unknown or offline.
            ConflictFailure: order already claimed or not available.
        """
        with self.store.transaction():
            runner = self.store.get_runner(runner_id)
            if runner is None or not runner.is_online:
                metrics.record_claim("rejected")
                raise ValidationFailure("Runner not found or offline")

            if not self.store.claim_order(order_id, runner_id):
                metrics.record_claim("conflict")
                logger.warning(f"Claim conflict: {runner_id} lost {order_id}")
                raise ConflictFailure("Order already claimed or not available")

            order = self.store.get_order(order_id)
            if order.status == OrderStatus.RECEIVED:
                # Claim raced ahead of the kitchen hand-off
                order = self.store.update_order(order_id, status=OrderStatus.PREPARING)

            self.store.add_active_order(runner_id, order_id)
            self.store.add_message(
                order_id, MessageSender.RUNNER, INTRO_TEMPLATE.format(name=runner.name)
            )

        metrics.record_claim("success")
        logger.info(f"Order {order_id} claimed by {runner_id}")
        return order

    def release(self, runner_id: str, order_id: str) -> Order:
        """Hand a not-yet-picked-up order back to the pool.

        Raises:
            NotFoundFailure: unknown order.
            ConflictFailure: order not held by this runner, or already picked up.
        """
        with self.store.transaction():
            order = self.store.get_order(order_id)
            if order is None:
                raise NotFoundFailure("Order not found")
            if order.runner_id != runner_id:
                raise ConflictFailure("Order is not claimed by this runner")
            if order.status != OrderStatus.PREPARING:
                raise ConflictFailure("Order has already been picked up")

            self.store.release_order(order_id)
            self.store.remove_active_order(runner_id, order_id)
            order = self.store.get_order(order_id)

        logger.info(f"Order {order_id} released by {runner_id}")
        return order
