"""Demo runners and orders loaded into a fresh store.

Runs at startup when SEED_DEMO_DATA is on. The kitchen hand-off is fixed
rather than random: orders in 105 and 108 start ``preparing`` so the demo
runner has something to claim, the 112 order waits in ``received``.
"""

import copy
import logging
from decimal import Decimal

from app.db.store import OrderStore
from app.models.order import (
    Contact,
    ContactMethod,
    DeliveryPrefs,
    DeliveryType,
    MessageSender,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Seat,
    Tip,
)
from app.models.staff import Runner

logger = logging.getLogger(__name__)

DEMO_RUNNERS = [
    Runner(
        id="runner1",
        name="Alex Johnson",
        is_online=True,
        current_section="105",
        earnings_today=Decimal("45.50"),
        completed_deliveries=12,
        on_time_rate=0.95,
        avg_delivery_time=8.5,
    ),
    Runner(
        id="runner2",
        name="Sarah Chen",
        is_online=False,
        current_section="112",
        earnings_today=Decimal("32.75"),
        completed_deliveries=8,
        on_time_rate=0.88,
        avg_delivery_time=9.2,
    ),
]

DEMO_ORDERS = [
    dict(
        customer_id="demo_customer_1",
        items=[
            OrderItem(id="1", name="Stadium Burger", price=Decimal("12.99"), quantity=1, category="Burgers"),
            OrderItem(id="7", name="Beer", price=Decimal("8.99"), quantity=2, category="Beverages"),
        ],
        seat=Seat(section="105", row="A", seat="12"),
        contact=Contact(method=ContactMethod.EMAIL, value="demo@example.com"),
        delivery_prefs=DeliveryPrefs(type=DeliveryType.LEAVE_AT_SEAT, notes="Please leave at seat"),
        tip=Tip(amount=Decimal("3.50"), percentage=15),
        subtotal=Decimal("30.97"),
        tax=Decimal("2.17"),
        service_fee=Decimal("1.99"),
        total=Decimal("38.63"),
        eta_minutes=12,
        payment_method=PaymentMethod(last4="1234"),
    ),
    dict(
        customer_id="demo_customer_2",
        items=[
            OrderItem(id="2", name="Chicken Tenders", price=Decimal("10.99"), quantity=1, category="Chicken"),
            OrderItem(id="8", name="Soda", price=Decimal("4.99"), quantity=1, category="Beverages"),
        ],
        seat=Seat(section="112", row="B", seat="8"),
        contact=Contact(method=ContactMethod.SMS, value="+1234567890"),
        delivery_prefs=DeliveryPrefs(type=DeliveryType.HANDOFF, notes="I will meet you at the aisle"),
        tip=Tip(amount=Decimal("2.00"), percentage=10),
        subtotal=Decimal("15.98"),
        tax=Decimal("1.12"),
        service_fee=Decimal("1.99"),
        total=Decimal("21.09"),
        eta_minutes=8,
        payment_method=PaymentMethod(last4="5678"),
    ),
    dict(
        customer_id="demo_customer_3",
        items=[
            OrderItem(id="3", name="Loaded Nachos", price=Decimal("8.99"), quantity=1, category="Snacks"),
            OrderItem(id="4", name="Hot Dog", price=Decimal("6.99"), quantity=2, category="Hot Dogs"),
        ],
        seat=Seat(section="108", row="C", seat="15"),
        contact=Contact(method=ContactMethod.EMAIL, value="test@example.com"),
        delivery_prefs=DeliveryPrefs(type=DeliveryType.LEAVE_AT_SEAT),
        tip=Tip(amount=Decimal("4.00"), percentage=20),
        subtotal=Decimal("22.97"),
        tax=Decimal("1.61"),
        service_fee=Decimal("1.99"),
        total=Decimal("30.57"),
        eta_minutes=15,
        payment_method=PaymentMethod(last4="9012"),
    ),
]

PREPARING_SECTIONS = {"105", "108"}


def seed_demo_data(store: OrderStore) -> None:
    for runner in DEMO_RUNNERS:
        store.add_runner(runner)

    for data in DEMO_ORDERS:
        order = store.create_order(**copy.deepcopy(data))
        store.add_message(order.id, MessageSender.CUSTOMER, "Order placed successfully!")
        if order.seat.section in PREPARING_SECTIONS:
            store.update_order(order.id, status=OrderStatus.PREPARING)
            store.add_message(
                order.id,
                MessageSender.RUNNER,
                "Your order is being prepared. I'll pick it up shortly!",
            )

    logger.info(
        f"Demo data seeded: {len(DEMO_RUNNERS)} runners, {len(DEMO_ORDERS)} orders"
    )
