"""
Order Service
Checkout, order lookup, lifecycle progress and order chat.
"""

import logging
import random
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import (
    ForbiddenFailure,
    InvalidTransition,
    NotFoundFailure,
    ValidationFailure,
)
from app.core.sanitize import sanitize_text
from app.db.store import OrderStore
from app.models.order import (
    Contact,
    DeliveryPrefs,
    Message,
    MessageSender,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Seat,
    Tip,
    next_status,
)
from app.schemas.order import OrderCreate
from app.services.pricing_service import PricingService, to_money

logger = logging.getLogger(__name__)

ORDER_PLACED_TEXT = "Order placed successfully! We'll start preparing your food shortly."

# Statuses a runner reports after claiming
RUNNER_STATUSES = {OrderStatus.PICKED_UP, OrderStatus.EN_ROUTE, OrderStatus.DELIVERED}


class OrderService:
    """Customer-facing order operations plus the kitchen hand-off."""

    def __init__(
        self,
        store: OrderStore,
        pricing: Optional[PricingService] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.pricing = pricing or PricingService()
        self.rng = rng or random.Random()

    def place_order(self, payload: OrderCreate) -> Order:
        """Create an order in ``received`` status and greet the customer.

        Raises:
            ValidationFailure: if the submitted totals disagree with pricing.
        """
        breakdown = self.pricing.verify(
            lines=[(item.price, item.quantity) for item in payload.items],
            tip=payload.tip.amount,
            subtotal=payload.subtotal,
            tax=payload.tax,
            service_fee=payload.service_fee,
            total=payload.total,
        )

        order = self.store.create_order(
            customer_id=f"customer_{self.store.now()}",
            items=[
                OrderItem(
                    id=item.id,
                    name=item.name,
                    price=to_money(item.price),
                    quantity=item.quantity,
                    category=item.category,
                )
                for item in payload.items
            ],
            seat=Seat(**payload.seat.model_dump()),
            contact=Contact(**payload.contact.model_dump()),
            delivery_prefs=DeliveryPrefs(**payload.delivery_prefs.model_dump()),
            tip=Tip(amount=breakdown.tip, percentage=payload.tip.percentage),
            subtotal=breakdown.subtotal,
            tax=breakdown.tax,
            service_fee=breakdown.service_fee,
            total=breakdown.total,
            eta_minutes=self.rng.randint(settings.eta_min_minutes, settings.eta_max_minutes),
            payment_method=PaymentMethod(last4=payload.payment_method.last4),
        )
        self.store.add_message(order.id, MessageSender.CUSTOMER, ORDER_PLACED_TEXT)

        logger.info(f"Order {order.id} placed for section {order.seat.section}, total {order.total}")
        return order

    def get_order(self, order_id: str) -> Order:
        order = self.store.get_order(order_id)
        if order is None:
            raise NotFoundFailure("Order not found")
        return order

    def mark_preparing(self, order_id: str) -> Order:
        """Kitchen hand-off: make a received order visible to runners.

        Idempotent for orders already preparing.
        """
        with self.store.transaction():
            order = self.get_order(order_id)
            if order.status == OrderStatus.PREPARING:
                return order
            if order.status != OrderStatus.RECEIVED:
                raise InvalidTransition(order_id, order.status.value, OrderStatus.PREPARING.value)
            updated = self.store.update_order(order_id, status=OrderStatus.PREPARING)

        logger.info(f"Order {order_id} is now preparing")
        return updated

    def advance_status(self, order_id: str, runner_id: str, status: OrderStatus) -> Order:
        """Record runner progress one step at a time.

        Only the assigned runner may move an order, and only to the next
        state in the lifecycle.
        """
        status = OrderStatus(status)
        if status not in RUNNER_STATUSES:
            raise ValidationFailure(f"Runners cannot set status '{status.value}'")

        with self.store.transaction():
            order = self.get_order(order_id)
            if order.runner_id != runner_id:
                raise ForbiddenFailure("Order is not assigned to this runner")
            if next_status(order.status) != status:
                raise InvalidTransition(order_id, order.status.value, status.value)

            updated = self.store.update_order(order_id, status=status)
            if status == OrderStatus.DELIVERED:
                self.store.record_delivery(runner_id, order_id, order.tip.amount)

        logger.info(f"Order {order_id} moved to {status.value} by {runner_id}")
        return updated

    def list_messages(self, order_id: str) -> List[Message]:
        self.get_order(order_id)
        return self.store.list_messages(order_id)

    def post_message(self, order_id: str, sender: MessageSender, text: str) -> Message:
        """Append a chat message to the order thread.

        Raises:
            ValidationFailure: if the text is empty after trimming.
            NotFoundFailure: for an unknown order.
        """
        clean = sanitize_text(text)
        if not clean:
            raise ValidationFailure("Message text and sender are required")
        self.get_order(order_id)
        return self.store.add_message(order_id, MessageSender(sender), clean)
