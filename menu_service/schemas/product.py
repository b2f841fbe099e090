"""
Product pricing Pydantic schemas.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProductResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    base_price: Decimal
    category_id: Optional[UUID] = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class PriceUpdateRequest(BaseModel):
    new_price: Decimal = Field(..., gt=0)
    reason: Optional[str] = Field(None, max_length=255)


class PriceHistoryResponse(BaseModel):
    id: int
    product_id: UUID
    old_price: Decimal
    new_price: Decimal
    change_reason: Optional[str] = None
    changed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PriceHistoryListResponse(BaseModel):
    history: List[PriceHistoryResponse]
    total: int
