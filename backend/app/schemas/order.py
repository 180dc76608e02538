"""Order and message schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, List, Literal

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.order import ContactMethod, DeliveryType, MessageSender, OrderStatus


class OrderItemSchema(BaseModel):
    """Cart line as submitted at checkout."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1, le=99)
    category: str = ""

    model_config = ConfigDict(from_attributes=True)


class SeatSchema(BaseModel):
    section: str = Field(min_length=1, max_length=10)
    row: str = Field(min_length=1, max_length=10)
    seat: str = Field(min_length=1, max_length=10)

    model_config = ConfigDict(from_attributes=True)


class ContactSchema(BaseModel):
    method: ContactMethod
    value: str = Field(min_length=3, max_length=254)

    model_config = ConfigDict(from_attributes=True)


class DeliveryPrefsSchema(BaseModel):
    type: DeliveryType = DeliveryType.LEAVE_AT_SEAT
    notes: Optional[str] = Field(default=None, max_length=500)

    model_config = ConfigDict(from_attributes=True)


class TipSchema(BaseModel):
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    percentage: Optional[float] = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(from_attributes=True)


class PaymentMethodSchema(BaseModel):
    """Mock payment token; only the last four card digits are kept."""

    type: Literal["card"] = "card"
    last4: str = Field(pattern=r"^\d{4}$")

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """Checkout payload. Totals are recomputed server-side and must agree."""

    items: List[OrderItemSchema] = Field(min_length=1)
    seat: SeatSchema
    contact: ContactSchema
    delivery_prefs: DeliveryPrefsSchema = Field(default_factory=DeliveryPrefsSchema)
    tip: TipSchema = Field(default_factory=TipSchema)
    subtotal: Decimal = Field(ge=0)
    tax: Decimal = Field(ge=0)
    service_fee: Decimal = Field(ge=0)
    total: Decimal = Field(ge=0)
    payment_method: PaymentMethodSchema


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    items: List[OrderItemSchema]
    seat: SeatSchema
    contact: ContactSchema
    delivery_prefs: DeliveryPrefsSchema
    tip: TipSchema
    subtotal: Decimal
    tax: Decimal
    service_fee: Decimal
    total: Decimal
    status: OrderStatus
    runner_id: Optional[str] = None
    lock_ts: Optional[int] = None
    created_at: int
    eta_minutes: int
    payment_method: PaymentMethodSchema

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    """Runner-side progress: picked_up, en_route, delivered."""

    runner_id: str = Field(min_length=1)
    status: OrderStatus


class MessageCreate(BaseModel):
    sender: MessageSender
    text: str = Field(min_length=1, max_length=1000)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class MessageResponse(BaseModel):
    id: str
    order_id: str
    sender: MessageSender
    text: str
    ts: int

    model_config = ConfigDict(from_attributes=True)
