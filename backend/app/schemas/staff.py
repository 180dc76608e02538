"""Runner schemas."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class RunnerLogin(BaseModel):
    runner_code: str = Field(min_length=1, max_length=64)


class RunnerLoginResponse(BaseModel):
    runner_id: str


class RunnerStatusUpdate(BaseModel):
    runner_id: str = Field(min_length=1)
    is_online: StrictBool


class RunnerLocationUpdate(BaseModel):
    runner_id: str = Field(min_length=1)
    section: str = Field(min_length=1, max_length=10)


class RunnerResponse(BaseModel):
    id: str
    name: str
    is_online: bool
    current_section: Optional[str] = None
    active_order_ids: List[str]
    earnings_today: Decimal
    completed_deliveries: int
    on_time_rate: float
    avg_delivery_time: float

    model_config = ConfigDict(from_attributes=True)


class ClaimRequest(BaseModel):
    runner_id: str = Field(min_length=1)
    order_id: str = Field(min_length=1)


class ClaimResponse(BaseModel):
    success: bool
    order_id: str
