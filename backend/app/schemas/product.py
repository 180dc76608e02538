"""Menu item schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    category: str
    available: bool
    image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
