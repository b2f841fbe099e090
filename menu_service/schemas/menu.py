"""
Personalized menu Pydantic schemas for API request/response models.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MenuItemResponse(BaseModel):
    """Response model for a single priced product on a menu."""
    product_id: UUID
    final_price: Decimal
    discount_applied: bool
    promotion_id: Optional[UUID] = None

    model_config = ConfigDict(from_attributes=True)


class MenuResponse(BaseModel):
    """Response model for a personalized menu."""
    id: UUID
    segment_id: UUID
    generated_at: datetime
    items: List[MenuItemResponse]

    model_config = ConfigDict(from_attributes=True)


class MenuListResponse(BaseModel):
    """Response model for list of menus."""
    menus: List[MenuResponse]
    total: int


class MenuGenerateRequest(BaseModel):
    """Request model for generating a menu for a segment."""
    segment_id: UUID
    # Optional location for geo-targeted promotions
    region_code: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)


class MenuItemCreate(BaseModel):
    """Request model for adding a caller-priced item to a menu."""
    product_id: UUID
    final_price: Decimal = Field(..., ge=0)
    discount_applied: bool = False
    promotion_id: Optional[UUID] = None
