"""Customer order routes: checkout, tracking, chat and runner discovery."""

from typing import List

from fastapi import APIRouter, Query, Request

from app.core.config import settings
from app.core.rate_limit import limiter
from app.db.session import StoreSession
from app.schemas.order import MessageCreate, MessageResponse, OrderCreate, OrderResponse
from app.services.nearby_order_service import NearbyOrderService
from app.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=201)
@limiter.limit(settings.rate_limit_public_writes)
def place_order(request: Request, order_data: OrderCreate, store: StoreSession):
    """Place an order (public checkout endpoint)."""
    return OrderService(store).place_order(order_data)


# Must be registered before /{order_id} so "nearby" is not taken as an id
@router.get("/nearby", response_model=List[OrderResponse])
@limiter.limit(settings.rate_limit_reads)
def list_nearby_orders(
    request: Request,
    store: StoreSession,
    runner_id: str = Query(..., min_length=1),
):
    """Claimable orders near the runner, oldest-first then closest-first."""
    return NearbyOrderService(store).list_nearby(runner_id)


@router.get("/{order_id}", response_model=OrderResponse)
@limiter.limit(settings.rate_limit_reads)
def get_order(request: Request, order_id: str, store: StoreSession):
    return OrderService(store).get_order(order_id)


@router.post("/{order_id}/preparing", response_model=OrderResponse)
@limiter.limit(settings.rate_limit_public_writes)
def mark_order_preparing(request: Request, order_id: str, store: StoreSession):
    """Kitchen hand-off: the order becomes visible to runners."""
    return OrderService(store).mark_preparing(order_id)


@router.get("/{order_id}/messages", response_model=List[MessageResponse])
@limiter.limit(settings.rate_limit_reads)
def list_messages(request: Request, order_id: str, store: StoreSession):
    return OrderService(store).list_messages(order_id)


@router.post("/{order_id}/messages", response_model=MessageResponse, status_code=201)
@limiter.limit(settings.rate_limit_public_writes)
def post_message(
    request: Request,
    order_id: str,
    message: MessageCreate,
    store: StoreSession,
):
    """Post a chat message from the customer or the runner."""
    return OrderService(store).post_message(order_id, message.sender, message.text)
