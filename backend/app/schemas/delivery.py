"""Runner batch schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.models.order import BatchStatus


class BatchCreate(BaseModel):
    """Group orders the runner already holds into one walk."""

    runner_id: str = Field(min_length=1)
    order_ids: List[str] = Field(min_length=1, max_length=10)


class BatchAction(BaseModel):
    runner_id: str = Field(min_length=1)


class BatchResponse(BaseModel):
    id: str
    runner_id: str
    order_ids: List[str]
    route: List[str]
    created_at: int
    route_estimate_minutes: int
    total_payout: Decimal
    status: BatchStatus

    model_config = ConfigDict(from_attributes=True)
