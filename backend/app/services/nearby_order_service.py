"""
Nearby Order Service
Which unclaimed orders a runner sees, and in what order.

Ranking is two-tier: an order more than ``age_priority_window_ms`` older than
another always comes first, so old orders never starve; orders of similar
age are ranked by walking distance from the runner.
"""

import logging
import math
from functools import cmp_to_key
from typing import Dict, List, Optional

from app.core.config import settings
from app.db.store import OrderStore
from app.models.order import Order
from app.services.stadium_geo_service import StadiumGeoService

logger = logging.getLogger(__name__)


class NearbyOrderService:
    def __init__(
        self,
        store: OrderStore,
        radius_meters: Optional[int] = None,
        max_results: Optional[int] = None,
        age_window_ms: Optional[int] = None,
    ):
        self.store = store
        self.radius_meters = radius_meters if radius_meters is not None else settings.nearby_radius_meters
        self.max_results = max_results if max_results is not None else settings.nearby_max_results
        self.age_window_ms = age_window_ms if age_window_ms is not None else settings.age_priority_window_ms

    def list_nearby(self, runner_id: str) -> List[Order]:
        """Up to ``max_results`` claimable orders for ``runner_id``, best first.

        Unknown or offline runners get an empty list rather than an error.
        """
        runner = self.store.get_runner(runner_id)
        if runner is None or not runner.is_online:
            return []

        section = runner.current_section
        orders = self.store.list_unclaimed_orders()

        distances: Dict[str, float] = {}
        if section:
            distances = {
                o.id: StadiumGeoService.distance(section, o.seat.section) for o in orders
            }
            # Unknown seat sections come back as inf and drop out here
            orders = [o for o in orders if distances[o.id] <= self.radius_meters]

        now = self.store.now()

        def compare(a: Order, b: Order) -> int:
            age_a = now - a.created_at
            age_b = now - b.created_at
            if abs(age_a - age_b) > self.age_window_ms:
                return -1 if age_a > age_b else 1
            if section:
                return _sign(distances[a.id] - distances[b.id])
            return 0

        ranked = sorted(orders, key=cmp_to_key(compare))[: self.max_results]
        logger.debug(
            f"Runner {runner_id} at {section or 'unknown'}: "
            f"{len(orders)} in range, returning {len(ranked)}"
        )
        return ranked


def _sign(value: float) -> int:
    if math.isnan(value) or value == 0:
        return 0
    return -1 if value < 0 else 1
