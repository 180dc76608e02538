"""Domain records for the in-memory store."""

from app.models.location import SectionCoord, STADIUM_SECTIONS, SECTIONS_BY_ID
from app.models.order import (
    Order,
    OrderItem,
    OrderStatus,
    ORDER_STATUS_SEQUENCE,
    Seat,
    Contact,
    ContactMethod,
    DeliveryPrefs,
    DeliveryType,
    Tip,
    PaymentMethod,
    Message,
    MessageSender,
    Batch,
    BatchStatus,
    MenuItem,
)
from app.models.staff import Runner
