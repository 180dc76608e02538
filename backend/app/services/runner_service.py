"""
Runner Service
Mock login, presence and location for delivery runners.
"""

import logging
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import AuthFailure, NotFoundFailure, ValidationFailure
from app.db.store import OrderStore
from app.models.order import Order
from app.models.staff import Runner
from app.services.stadium_geo_service import StadiumGeoService

logger = logging.getLogger(__name__)


class RunnerService:
    def __init__(self, store: OrderStore):
        self.store = store

    def login(self, runner_code: str, demo_runner_id: Optional[str] = None) -> str:
        """Resolve a runner code to a runner id.

        Authentication is mocked: any non-empty code maps to the demo runner.
        """
        if not runner_code or not runner_code.strip():
            raise ValidationFailure("Runner code is required")
        runner_id = demo_runner_id or settings.demo_runner_id
        if self.store.get_runner(runner_id) is None:
            raise AuthFailure("Invalid runner code")
        logger.info(f"Runner {runner_id} logged in")
        return runner_id

    def get_runner(self, runner_id: str) -> Runner:
        runner = self.store.get_runner(runner_id)
        if runner is None:
            raise NotFoundFailure("Runner not found")
        return runner

    def set_online(self, runner_id: str, is_online: bool) -> Runner:
        runner = self.store.update_runner(runner_id, is_online=is_online)
        if runner is None:
            raise NotFoundFailure("Runner not found")
        logger.info(f"Runner {runner_id} is now {'online' if is_online else 'offline'}")
        return runner

    def set_section(self, runner_id: str, section: str) -> Runner:
        """Record the runner's self-reported section."""
        if StadiumGeoService.get_section(section) is None:
            raise ValidationFailure(f"Unknown section '{section}'")
        runner = self.store.update_runner(runner_id, current_section=section)
        if runner is None:
            raise NotFoundFailure("Runner not found")
        return runner

    def list_orders(self, runner_id: str) -> List[Order]:
        """Every order this runner has claimed, oldest claim first."""
        self.get_runner(runner_id)
        orders = self.store.list_by_runner(runner_id)
        return sorted(orders, key=lambda o: o.lock_ts or 0)

    def list_online(self) -> List[Runner]:
        return self.store.list_online_runners()
