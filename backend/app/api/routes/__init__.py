"""API routes."""

from fastapi import APIRouter

from app.api.routes import menu, orders, runners

api_router = APIRouter()

api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders", "messages"])
api_router.include_router(runners.router, prefix="/runner", tags=["runner", "claims", "batches"])
