"""
Batch Service
Groups a runner's claimed orders into one walking route.

The route is a greedy nearest-section walk from the runner's current
section; the estimate sums each leg's walking time, and the payout is the
customers' tips plus a flat per-order base.
"""

import logging
from decimal import Decimal
from typing import List

from app.core.config import settings
from app.core.exceptions import ConflictFailure, NotFoundFailure, ValidationFailure
from app.db.store import OrderStore
from app.models.order import Batch, BatchStatus, OrderStatus
from app.services.pricing_service import to_money
from app.services.stadium_geo_service import StadiumGeoService

logger = logging.getLogger(__name__)


class BatchService:
    def __init__(self, store: OrderStore):
        self.store = store

    def create_batch(self, runner_id: str, order_ids: List[str]) -> Batch:
        """Route ``order_ids`` for ``runner_id``.

        Raises:
            NotFoundFailure: unknown runner or order.
            ConflictFailure: an order is held by someone else or already delivered.
            ValidationFailure: duplicate ids or an unmappable seat section.
        """
        if len(set(order_ids)) != len(order_ids):
            raise ValidationFailure("Duplicate order ids in batch")

        with self.store.transaction():
            runner = self.store.get_runner(runner_id)
            if runner is None:
                raise NotFoundFailure("Runner not found")

            sections = []
            tips = Decimal("0")
            for order_id in order_ids:
                order = self.store.get_order(order_id)
                if order is None:
                    raise NotFoundFailure(f"Order {order_id} not found")
                if order.runner_id != runner_id:
                    raise ConflictFailure(f"Order {order_id} is not claimed by this runner")
                if order.status == OrderStatus.DELIVERED:
                    raise ConflictFailure(f"Order {order_id} is already delivered")
                if StadiumGeoService.get_section(order.seat.section) is None:
                    raise ValidationFailure(
                        f"Order {order_id} has unknown section '{order.seat.section}'"
                    )
                sections.append(order.seat.section)
                tips += order.tip.amount

            start = runner.current_section
            route = StadiumGeoService.nearest_route(sections, start=start)
            walk = route
            if start and (not route or route[0] != start):
                walk = [start] + route
            estimate = StadiumGeoService.route_minutes(walk)
            if not start or len(walk) == 1:
                # No walk to the first seat: count its hand-off on its own
                estimate += settings.handoff_buffer_minutes

            payout = to_money(tips + settings.batch_base_payout * len(order_ids))
            batch = self.store.create_batch(
                runner_id=runner_id,
                order_ids=order_ids,
                route=walk,
                route_estimate_minutes=int(estimate),
                total_payout=payout,
            )

        logger.info(
            f"Batch {batch.id} for {runner_id}: {len(order_ids)} orders, "
            f"~{batch.route_estimate_minutes} min, payout {batch.total_payout}"
        )
        return batch

    def get_batch(self, batch_id: str) -> Batch:
        batch = self.store.get_batch(batch_id)
        if batch is None:
            raise NotFoundFailure("Batch not found")
        return batch

    def list_batches(self, runner_id: str) -> List[Batch]:
        return self.store.list_batches_by_runner(runner_id)

    def complete_batch(self, batch_id: str, runner_id: str) -> Batch:
        return self._close(batch_id, runner_id, BatchStatus.COMPLETED)

    def cancel_batch(self, batch_id: str, runner_id: str) -> Batch:
        return self._close(batch_id, runner_id, BatchStatus.CANCELLED)

    def _close(self, batch_id: str, runner_id: str, status: BatchStatus) -> Batch:
        with self.store.transaction():
            batch = self.get_batch(batch_id)
            if batch.runner_id != runner_id:
                raise ConflictFailure("Batch belongs to another runner")
            if batch.status != BatchStatus.ACTIVE:
                raise ConflictFailure(f"Batch is already {batch.status.value}")
            return self.store.update_batch(batch_id, status=status)
