"""Store session management."""

from typing import Annotated, Optional

from fastapi import Depends, Request

from app.core.config import settings
from app.db.store import OrderStore


def create_store(seed: Optional[bool] = None) -> OrderStore:
    """Build a fresh store, optionally loaded with the demo runners and orders."""
    store = OrderStore()
    if settings.seed_demo_data if seed is None else seed:
        from app.db.seed import seed_demo_data
        seed_demo_data(store)
    return store


def get_store(request: Request) -> OrderStore:
    """Get the application's store dependency."""
    return request.app.state.store


# Type alias for dependency injection
StoreSession = Annotated[OrderStore, Depends(get_store)]
