"""Order, message and batch records held by the in-memory store."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class OrderStatus(str, Enum):
    RECEIVED = "received"
    PREPARING = "preparing"
    PICKED_UP = "picked_up"
    EN_ROUTE = "en_route"
    DELIVERED = "delivered"


# Linear lifecycle; an order never moves back down this list.
ORDER_STATUS_SEQUENCE: List[OrderStatus] = [
    OrderStatus.RECEIVED,
    OrderStatus.PREPARING,
    OrderStatus.PICKED_UP,
    OrderStatus.EN_ROUTE,
    OrderStatus.DELIVERED,
]


def status_rank(status: OrderStatus) -> int:
    return ORDER_STATUS_SEQUENCE.index(OrderStatus(status))


def is_forward(src: OrderStatus, dst: OrderStatus) -> bool:
    """Return ``True`` if ``dst`` is ``src`` or later in the lifecycle."""
    return status_rank(dst) >= status_rank(src)


def next_status(status: OrderStatus) -> Optional[OrderStatus]:
    """Return the state after ``status``, or None once delivered."""
    rank = status_rank(status)
    if rank + 1 < len(ORDER_STATUS_SEQUENCE):
        return ORDER_STATUS_SEQUENCE[rank + 1]
    return None


class ContactMethod(str, Enum):
    EMAIL = "email"
    SMS = "sms"


class DeliveryType(str, Enum):
    LEAVE_AT_SEAT = "leave_at_seat"
    HANDOFF = "handoff"


class MessageSender(str, Enum):
    RUNNER = "runner"
    CUSTOMER = "customer"


class BatchStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class OrderItem:
    id: str
    name: str
    price: Decimal
    quantity: int
    category: str


@dataclass
class Seat:
    section: str
    row: str
    seat: str


@dataclass
class Contact:
    method: ContactMethod
    value: str


@dataclass
class DeliveryPrefs:
    type: DeliveryType
    notes: Optional[str] = None


@dataclass
class Tip:
    amount: Decimal
    percentage: Optional[float] = None


@dataclass
class PaymentMethod:
    """Mocked card token; nothing is ever charged."""
    last4: str
    type: str = "card"


@dataclass
class Order:
    """A customer order.

    ``runner_id`` is set iff the order has been claimed; ``lock_ts`` records
    when. ``created_at`` and ``lock_ts`` are epoch milliseconds.
    """

    id: str
    customer_id: str
    items: List[OrderItem]
    seat: Seat
    contact: Contact
    delivery_prefs: DeliveryPrefs
    tip: Tip
    subtotal: Decimal
    tax: Decimal
    service_fee: Decimal
    total: Decimal
    eta_minutes: int
    payment_method: PaymentMethod
    created_at: int
    status: OrderStatus = OrderStatus.RECEIVED
    runner_id: Optional[str] = None
    lock_ts: Optional[int] = None

    @property
    def is_claimed(self) -> bool:
        return self.runner_id is not None


@dataclass(frozen=True)
class Message:
    id: str
    order_id: str
    sender: MessageSender
    text: str
    ts: int


@dataclass
class Batch:
    """A runner's claimed orders walked as one route."""

    id: str
    runner_id: str
    order_ids: List[str]
    route: List[str]
    created_at: int
    route_estimate_minutes: int
    total_payout: Decimal
    status: BatchStatus = BatchStatus.ACTIVE


@dataclass(frozen=True)
class MenuItem:
    id: str
    name: str
    description: str
    price: Decimal
    category: str
    available: bool = True
    image: Optional[str] = field(default=None, compare=False)
