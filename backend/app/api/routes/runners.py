"""Runner routes: mock login, presence, claims, delivery progress and batches."""

from typing import List

from fastapi import APIRouter, Query, Request

from app.core.config import settings
from app.core.rate_limit import limiter
from app.db.session import StoreSession
from app.schemas.delivery import BatchAction, BatchCreate, BatchResponse
from app.schemas.order import OrderResponse, OrderStatusUpdate
from app.schemas.staff import (
    ClaimRequest,
    ClaimResponse,
    RunnerLocationUpdate,
    RunnerLogin,
    RunnerLoginResponse,
    RunnerResponse,
    RunnerStatusUpdate,
)
from app.services.batch_service import BatchService
from app.services.claim_service import ClaimService
from app.services.order_service import OrderService
from app.services.runner_service import RunnerService

router = APIRouter()


# ==================== SESSION ====================

@router.post("/login", response_model=RunnerLoginResponse)
@limiter.limit(settings.rate_limit_public_writes)
def login(request: Request, credentials: RunnerLogin, store: StoreSession):
    """Demo login: any non-empty runner code maps to the demo runner."""
    runner_id = RunnerService(store).login(credentials.runner_code)
    return {"runner_id": runner_id}


@router.get("/me", response_model=RunnerResponse)
@limiter.limit(settings.rate_limit_reads)
def get_me(request: Request, store: StoreSession, runner_id: str = Query(..., min_length=1)):
    return RunnerService(store).get_runner(runner_id)


@router.patch("/status", response_model=RunnerResponse)
@limiter.limit(settings.rate_limit_public_writes)
def update_status(request: Request, data: RunnerStatusUpdate, store: StoreSession):
    """Go online or offline."""
    return RunnerService(store).set_online(data.runner_id, data.is_online)


@router.patch("/location", response_model=RunnerResponse)
@limiter.limit(settings.rate_limit_public_writes)
def update_location(request: Request, data: RunnerLocationUpdate, store: StoreSession):
    return RunnerService(store).set_section(data.runner_id, data.section)


# ==================== CLAIMS ====================

@router.post("/claim", response_model=ClaimResponse)
@limiter.limit(settings.rate_limit_public_writes)
def claim_order(request: Request, data: ClaimRequest, store: StoreSession):
    """Claim an order. Exactly one of any set of concurrent callers wins."""
    order = ClaimService(store).claim(data.runner_id, data.order_id)
    return {"success": True, "order_id": order.id}


@router.post("/release", response_model=ClaimResponse)
@limiter.limit(settings.rate_limit_public_writes)
def release_order(request: Request, data: ClaimRequest, store: StoreSession):
    order = ClaimService(store).release(data.runner_id, data.order_id)
    return {"success": True, "order_id": order.id}


# ==================== DELIVERIES ====================

@router.get("/orders", response_model=List[OrderResponse])
@limiter.limit(settings.rate_limit_reads)
def list_my_orders(request: Request, store: StoreSession, runner_id: str = Query(..., min_length=1)):
    return RunnerService(store).list_orders(runner_id)


@router.post("/orders/{order_id}/status", response_model=OrderResponse)
@limiter.limit(settings.rate_limit_public_writes)
def advance_order_status(
    request: Request,
    order_id: str,
    data: OrderStatusUpdate,
    store: StoreSession,
):
    """Report picked_up, en_route or delivered for a claimed order."""
    return OrderService(store).advance_status(order_id, data.runner_id, data.status)


# ==================== BATCHES ====================

@router.post("/batches", response_model=BatchResponse, status_code=201)
@limiter.limit(settings.rate_limit_public_writes)
def create_batch(request: Request, data: BatchCreate, store: StoreSession):
    """Route several claimed orders as one walk."""
    return BatchService(store).create_batch(data.runner_id, data.order_ids)


@router.get("/batches", response_model=List[BatchResponse])
@limiter.limit(settings.rate_limit_reads)
def list_batches(request: Request, store: StoreSession, runner_id: str = Query(..., min_length=1)):
    return BatchService(store).list_batches(runner_id)


@router.get("/batches/{batch_id}", response_model=BatchResponse)
@limiter.limit(settings.rate_limit_reads)
def get_batch(request: Request, batch_id: str, store: StoreSession):
    return BatchService(store).get_batch(batch_id)


@router.post("/batches/{batch_id}/complete", response_model=BatchResponse)
@limiter.limit(settings.rate_limit_public_writes)
def complete_batch(request: Request, batch_id: str, data: BatchAction, store: StoreSession):
    return BatchService(store).complete_batch(batch_id, data.runner_id)


@router.post("/batches/{batch_id}/cancel", response_model=BatchResponse)
@limiter.limit(settings.rate_limit_public_writes)
def cancel_batch(request: Request, batch_id: str, data: BatchAction, store: StoreSession):
    return BatchService(store).cancel_batch(batch_id, data.runner_id)
