"""Runner (delivery courier) record."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class Runner:
    """A courier who claims and delivers orders.

    The performance counters are display-only; nothing in dispatch reads them.
    """

    id: str
    name: str
    is_online: bool = False
    current_section: Optional[str] = None
    active_order_ids: List[str] = field(default_factory=list)
    earnings_today: Decimal = Decimal("0.00")
    completed_deliveries: int = 0
    on_time_rate: float = 1.0
    avg_delivery_time: float = 0.0
