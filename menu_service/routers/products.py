"""
Product pricing router: base price changes and their history.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menu_service.db.session import get_db
from menu_service.core.deps import found_or_404
from menu_service.schemas.product import (
    PriceHistoryListResponse,
    PriceHistoryResponse,
    PriceUpdateRequest,
    ProductResponse,
)
from menu_service.services.product import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.patch("/{product_id}/price", response_model=ProductResponse)
def update_product_price(
    product_id: UUID,
    update: PriceUpdateRequest,
    db: Session = Depends(get_db),
):
    """
    Change a product's base price.

    Every change is appended to the product's price history.
    """
    service = ProductService(db)
    product = found_or_404(service.update_price(
        product_id,
        update.new_price,
        reason=update.reason or ProductService.DEFAULT_REASON,
    ))
    return ProductResponse.model_validate(product)


@router.get("/{product_id}/price-history", response_model=PriceHistoryListResponse)
def get_price_history(product_id: UUID, db: Session = Depends(get_db)):
    """Base price changes for a product, newest first."""
    history = found_or_404(ProductService(db).get_price_history(product_id))
    return PriceHistoryListResponse(
        history=[PriceHistoryResponse.model_validate(h) for h in history],
        total=len(history)
    )
