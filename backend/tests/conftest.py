"""Pytest configuration and fixtures."""

import pytest
from decimal import Decimal
from typing import Callable, Generator

from fastapi.testclient import TestClient

from app.db.session import get_store
from app.db.store import OrderStore
from app.main import app
from app.models.order import (
    Contact,
    ContactMethod,
    DeliveryPrefs,
    DeliveryType,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Seat,
    Tip,
)
from app.models.staff import Runner

API = "/api/v1"

# Fixed start time so ages in ranking tests are exact
START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when a test advances it."""

    def __init__(self, start: int = START_MS):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now

    def advance_minutes(self, minutes: float) -> int:
        return self.advance(int(minutes * 60_000))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def store(clock: FakeClock) -> OrderStore:
    """An empty store (no demo seed) driven by the fake clock."""
    return OrderStore(clock=clock)


@pytest.fixture(scope="function")
def client(store: OrderStore) -> Generator[TestClient, None, None]:
    """Create a test client with store override."""
    app.dependency_overrides[get_store] = lambda: store
    # Disable rate limiters during tests to avoid flaky failures
    from app.core.rate_limit import limiter as global_limiter
    global_limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    global_limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def runner(store: OrderStore) -> Runner:
    """An online runner standing in section 105."""
    return store.add_runner(
        Runner(id="runner1", name="Alex Johnson", is_online=True, current_section="105")
    )


@pytest.fixture
def second_runner(store: OrderStore) -> Runner:
    return store.add_runner(
        Runner(id="runner2", name="Sarah Chen", is_online=True, current_section="112")
    )


@pytest.fixture
def make_order(store: OrderStore) -> Callable[..., Order]:
    """Factory that stores an order for ``section`` in the given status."""

    def _make(
        section: str = "105",
        status: OrderStatus = OrderStatus.PREPARING,
        tip: str = "3.50",
    ) -> Order:
        order = store.create_order(
            customer_id="customer_test",
            items=[
                OrderItem(id="1", name="Stadium Burger", price=Decimal("12.99"), quantity=1, category="Burgers"),
            ],
            seat=Seat(section=section, row="A", seat="12"),
            contact=Contact(method=ContactMethod.EMAIL, value="fan@example.com"),
            delivery_prefs=DeliveryPrefs(type=DeliveryType.LEAVE_AT_SEAT),
            tip=Tip(amount=Decimal(tip)),
            subtotal=Decimal("12.99"),
            tax=Decimal("0.91"),
            service_fee=Decimal("1.99"),
            total=Decimal("12.99") + Decimal("0.91") + Decimal("1.99") + Decimal(tip),
            eta_minutes=12,
            payment_method=PaymentMethod(last4="4242"),
        )
        if status != OrderStatus.RECEIVED:
            order = store.update_order(order.id, status=status)
        return order

    return _make


@pytest.fixture
def order_payload() -> dict:
    """Checkout body for the demo burger-and-beers order (total 38.63)."""
    return {
        "items": [
            {"id": "1", "name": "Stadium Burger", "price": "12.99", "quantity": 1, "category": "Burgers"},
            {"id": "7", "name": "Beer", "price": "8.99", "quantity": 2, "category": "Beverages"},
        ],
        "seat": {"section": "105", "row": "A", "seat": "12"},
        "contact": {"method": "email", "value": "demo@example.com"},
        "delivery_prefs": {"type": "leave_at_seat", "notes": "Please leave at seat"},
        "tip": {"amount": "3.50", "percentage": 15},
        "subtotal": "30.97",
        "tax": "2.17",
        "service_fee": "1.99",
        "total": "38.63",
        "payment_method": {"type": "card", "last4": "1234"},
    }
