"""Concession menu routes."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request

from app.core.config import settings
from app.core.rate_limit import limiter
from app.schemas.product import MenuItemResponse
from app.services.menu_service import MenuService

router = APIRouter()

menu_service = MenuService()


@router.get("", response_model=List[MenuItemResponse])
@limiter.limit(settings.rate_limit_reads)
def list_menu(
    request: Request,
    category: Optional[str] = Query(None, max_length=50),
    available_only: bool = False,
):
    """List concession items, optionally filtered by category."""
    return menu_service.list_items(category=category, available_only=available_only)


@router.get("/{item_id}", response_model=MenuItemResponse)
@limiter.limit(settings.rate_limit_reads)
def get_menu_item(request: Request, item_id: str):
    item = menu_service.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item
