"""
Product base price changes with an append-only price history.
"""
import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from menu_service.core.errors import (
    DeadlineExceededError,
    InvalidInputError,
    PersistenceError,
    is_statement_timeout,
)
from menu_service.core.results import Found, Lookup, NotFound, utcnow
from menu_service.models.catalog import PriceHistory, Product
from menu_service.services.pricing import round_price, to_decimal

logger = logging.getLogger(__name__)


class ProductService:
    """Keeps every base price change recorded in PriceHistory."""

    DEFAULT_REASON = "Manual update"

    def __init__(self, db: Session):
        self.db = db

    def update_price(
        self,
        product_id: UUID,
        new_price: Decimal,
        reason: str = DEFAULT_REASON,
    ) -> Lookup[Product]:
        """
        Change a product's base price.

        The history row and the new price are committed together. Setting the
        current price again changes nothing and logs nothing.

        Args:
            product_id: Product UUID
            new_price: New base price (> 0)
            reason: Free-text reason stored with the history row

        Returns:
            Found(product) after the update, or NotFound
        """
        price = round_price(to_decimal(new_price, "new_price"))
        if price <= 0:
            raise InvalidInputError(f"base price must be positive, got {price}")

        product = self.db.get(Product, product_id)
        if product is None:
            return NotFound("product", product_id)

        old_price = product.base_price
        if old_price is not None and Decimal(old_price) == price:
            return Found(product)

        self.db.add(PriceHistory(
            product_id=product.id,
            old_price=old_price,
            new_price=price,
            change_reason=reason or self.DEFAULT_REASON,
            changed_at=utcnow(),
        ))
        product.base_price = price

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update price for product {product_id}: {e}", exc_info=True)
            if is_statement_timeout(e):
                raise DeadlineExceededError(f"Timed out updating price for product {product_id}") from e
            raise PersistenceError(f"Could not update price for product {product_id}") from e

        self.db.refresh(product)
        logger.info(f"Product {product_id} base price {old_price} -> {price} ({reason})")
        return Found(product)

    def get_price_history(self, product_id: UUID) -> Lookup[List[PriceHistory]]:
        if self.db.get(Product, product_id) is None:
            return NotFound("product", product_id)

        stmt = (
            select(PriceHistory)
            .where(PriceHistory.product_id == product_id)
            .order_by(PriceHistory.changed_at.desc(), PriceHistory.id.desc())
        )
        return Found(list(self.db.execute(stmt).scalars().all()))
